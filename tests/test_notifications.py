from types import SimpleNamespace

import pytest
from fastapi import BackgroundTasks

from services.notification_service import Mailer, MailMessage, NotificationDispatcher, OrderNotifier
from services.notification_service import templates

from conftest import RecordingMailer


def sample_order(order_id=42, status="processing"):
    return SimpleNamespace(
        id=order_id,
        order_status=status,
        total_amount=200.0,
        items=[{"product": 1, "name": "Brass Lantern", "price": 100.0, "qty": 2, "image": ""}],
    )


MESSAGE = MailMessage(to="asha@example.com", subject="Order Placed: #000042", html="<p>hi</p>", kind="order_placed")


class TestDispatcher:
    async def test_delivers_on_first_attempt(self):
        mailer = RecordingMailer()
        dispatcher = NotificationDispatcher(mailer, max_attempts=3, retry_delay=0)

        assert await dispatcher.deliver(MESSAGE) is True
        assert mailer.sent == [MESSAGE]
        assert mailer.attempts == 1

    async def test_retries_transient_failures(self):
        mailer = RecordingMailer(failures=2)
        dispatcher = NotificationDispatcher(mailer, max_attempts=3, retry_delay=0)

        assert await dispatcher.deliver(MESSAGE) is True
        assert mailer.attempts == 3
        assert mailer.sent == [MESSAGE]

    async def test_gives_up_without_raising(self):
        mailer = RecordingMailer(failures=10)
        dispatcher = NotificationDispatcher(mailer, max_attempts=3, retry_delay=0)

        assert await dispatcher.deliver(MESSAGE) is False
        assert mailer.attempts == 3
        assert mailer.sent == []

    async def test_disabled_mailer_is_reported_as_not_sent(self):
        mailer = Mailer(host="smtp.invalid", port=465, enabled=False)
        dispatcher = NotificationDispatcher(mailer, max_attempts=3, retry_delay=0)

        assert await dispatcher.deliver(MESSAGE) is False


class TestOrderNotifier:
    async def test_delivery_runs_as_background_task(self):
        mailer = RecordingMailer()
        tasks = BackgroundTasks()
        notifier = OrderNotifier(NotificationDispatcher(mailer, retry_delay=0), tasks)

        notifier.order_placed(sample_order(), SimpleNamespace(name="Asha", email="asha@example.com"))

        assert mailer.sent == []
        await tasks()
        assert len(mailer.sent) == 1
        assert mailer.sent[0].to == "asha@example.com"
        assert mailer.sent[0].subject == "Order Placed: #000042"
        assert mailer.sent[0].kind == "order_placed"

    def test_skips_customer_without_email(self):
        tasks = BackgroundTasks()
        notifier = OrderNotifier(NotificationDispatcher(RecordingMailer()), tasks)

        notifier.status_updated(sample_order(), None)
        notifier.order_cancelled(sample_order(), SimpleNamespace(name="Asha", email=""), "user")

        assert tasks.tasks == []


class TestTemplates:
    @pytest.mark.parametrize("order_id,expected", [(42, "#000042"), (1234567, "#234567")])
    def test_order_reference(self, order_id, expected):
        assert templates.order_reference(order_id) == expected

    def test_order_placed(self):
        subject, html = templates.render_order_placed(sample_order(), "Asha")

        assert subject == "Order Placed: #000042"
        assert "Thank you for your order, Asha!" in html
        assert "Processing" in html
        assert "Brass Lantern" in html
        assert "(Qty: 2)" in html
        assert "200.00" in html

    def test_status_updated(self):
        subject, html = templates.render_status_updated(sample_order(status="shipped"), None)

        assert subject == "Your Order #000042 Status Updated"
        assert "Dear Customer," in html
        assert "<b>Shipped</b>" in html

    def test_cancelled_by_user_wording(self):
        subject, html = templates.render_order_cancelled(sample_order(status="cancelled"), "Asha", "user")

        assert subject == "Order Cancelled: #000042"
        assert "You cancelled your order." in html

    def test_cancelled_by_admin_wording(self):
        _, html = templates.render_order_cancelled(sample_order(status="cancelled"), "Asha", "admin")

        assert "cancelled your order. Please contact customer support." in html
        assert "You cancelled your order." not in html

    def test_customer_name_is_escaped(self):
        _, html = templates.render_order_placed(sample_order(), "<script>x</script>")

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
