from .dispatcher import NotificationDispatcher, OrderNotifier, get_dispatcher, get_notifier
from .mailer import Mailer, MailMessage

__all__ = [
    "Mailer",
    "MailMessage",
    "NotificationDispatcher",
    "OrderNotifier",
    "get_dispatcher",
    "get_notifier",
]
