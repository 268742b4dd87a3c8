"""
Best-effort customer notifications.

Messages are rendered while the request still holds the committed order,
then handed to FastAPI's BackgroundTasks so delivery happens after the
response is sent. Delivery retries a bounded number of times with linear
backoff; a message that still fails is logged and dropped. Nothing here
ever raises into the request that triggered it.
"""
import asyncio

import structlog
from fastapi import BackgroundTasks, Depends, Request

from shared.config import settings
from shared.observability import ecomm_notifications_total

from . import templates
from .mailer import Mailer, MailMessage

logger = structlog.get_logger(__name__)


class NotificationDispatcher:

    def __init__(
        self,
        mailer: Mailer,
        max_attempts: int = settings.NOTIFICATION_MAX_ATTEMPTS,
        retry_delay: float = settings.NOTIFICATION_RETRY_DELAY,
    ):
        self.mailer = mailer
        self.max_attempts = max(1, max_attempts)
        self.retry_delay = retry_delay

    async def deliver(self, message: MailMessage) -> bool:
        for attempt in range(1, self.max_attempts + 1):
            try:
                sent = await self.mailer.send(message)
            except Exception as exc:
                logger.warning(
                    "notification_attempt_failed",
                    kind=message.kind,
                    to=message.to,
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error=str(exc),
                )
                if attempt < self.max_attempts:
                    await asyncio.sleep(self.retry_delay * attempt)
                continue

            ecomm_notifications_total.labels(kind=message.kind, outcome="sent" if sent else "skipped").inc()
            return sent

        logger.error("notification_dropped", kind=message.kind, to=message.to, attempts=self.max_attempts)
        ecomm_notifications_total.labels(kind=message.kind, outcome="failed").inc()
        return False


class OrderNotifier:
    """Per-request facade that renders order e-mails and queues their delivery."""

    def __init__(self, dispatcher: NotificationDispatcher, background_tasks: BackgroundTasks):
        self.dispatcher = dispatcher
        self.background_tasks = background_tasks

    def order_placed(self, order, customer) -> None:
        subject, html = templates.render_order_placed(order, getattr(customer, "name", None))
        self._schedule("order_placed", customer, subject, html)

    def status_updated(self, order, customer) -> None:
        subject, html = templates.render_status_updated(order, getattr(customer, "name", None))
        self._schedule("status_updated", customer, subject, html)

    def order_cancelled(self, order, customer, cancelled_by: str) -> None:
        subject, html = templates.render_order_cancelled(order, getattr(customer, "name", None), cancelled_by)
        self._schedule("order_cancelled", customer, subject, html)

    def _schedule(self, kind: str, customer, subject: str, html: str) -> None:
        email = getattr(customer, "email", None)
        if not email:
            logger.info("notification_skipped", kind=kind, reason="no_recipient")
            ecomm_notifications_total.labels(kind=kind, outcome="skipped").inc()
            return
        message = MailMessage(to=email, subject=subject, html=html, kind=kind)
        self.background_tasks.add_task(self.dispatcher.deliver, message)


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return request.app.state.notifications


def get_notifier(
    background_tasks: BackgroundTasks,
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> OrderNotifier:
    return OrderNotifier(dispatcher, background_tasks)
