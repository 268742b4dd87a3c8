from jinja2 import DictLoader, Environment, select_autoescape

from shared.config import settings

_BASE = """\
<div style="font-family: Arial, sans-serif; color: #222;">
  {% block body %}{% endblock %}
  <h3 style="margin-top:24px;">Order Items:</h3>
  <ul>
  {% for item in items %}
    <li><b>{{ item.name }}</b> (Qty: {{ item.qty }}) - {{ currency }}{{ item.price }} each</li>
  {% endfor %}
  </ul>
  {% block closing %}{% endblock %}
  <hr style="margin:24px 0;"/>
  <p style="font-size:12px; color:#888;">If you have any questions, reply to this email.</p>
</div>
"""

_ORDER_PLACED = """\
{% extends "base.html" %}
{% block body %}
  <h2 style="color: #B8956A;">Thank you for your order, {{ customer }}!</h2>
  <p>Your order has been placed successfully.</p>
  <table style="margin: 16px 0; border-collapse: collapse;">
    <tr><td><b>Order ID:</b></td><td>{{ reference }}</td></tr>
    <tr><td><b>Status:</b></td><td>{{ status }}</td></tr>
    <tr><td><b>Total:</b></td><td>{{ currency }}{{ total }}</td></tr>
  </table>
{% endblock %}
{% block closing %}
  <p style="margin-top:24px;">We will notify you as your order progresses.<br/>Thank you for shopping with us!</p>
{% endblock %}
"""

_STATUS_UPDATED = """\
{% extends "base.html" %}
{% block body %}
  <h2 style="color: #B8956A;">Order Status Updated</h2>
  <p>Dear {{ customer }},</p>
  <p>Your order <b>{{ reference }}</b> status has been updated to:</p>
  <p style="font-size:18px;"><b>{{ status }}</b></p>
  <table style="margin: 16px 0; border-collapse: collapse;">
    <tr><td><b>Total:</b></td><td>{{ currency }}{{ total }}</td></tr>
  </table>
{% endblock %}
"""

_ORDER_CANCELLED = """\
{% extends "base.html" %}
{% block body %}
  <h2 style="color: #B8956A;">Order Cancelled</h2>
  <p>Dear {{ customer }},</p>
  <p>{{ reason }}</p>
  <table style="margin: 16px 0; border-collapse: collapse;">
    <tr><td><b>Order ID:</b></td><td>{{ reference }}</td></tr>
    <tr><td><b>Total:</b></td><td>{{ currency }}{{ total }}</td></tr>
  </table>
{% endblock %}
{% block closing %}
  <p style="margin-top:24px;">Thank you for considering us.<br/>- {{ store }}</p>
{% endblock %}
"""

_env = Environment(
    loader=DictLoader({
        "base.html": _BASE,
        "order_placed.html": _ORDER_PLACED,
        "status_updated.html": _STATUS_UPDATED,
        "order_cancelled.html": _ORDER_CANCELLED,
    }),
    autoescape=select_autoescape(default=True, default_for_string=True),
)


def order_reference(order_id: int) -> str:
    return "#" + str(order_id).zfill(6)[-6:].upper()


def cancellation_reason(cancelled_by: str) -> str:
    if cancelled_by == "admin":
        return (
            f"The seller ({settings.STORE_NAME}) cancelled your order. "
            "Please contact customer support."
        )
    return "You cancelled your order. Your cancellation request has been accepted."


def _context(order, customer_name: str | None) -> dict:
    return {
        "customer": customer_name or "Customer",
        "reference": order_reference(order.id),
        "status": str(order.order_status).capitalize(),
        "total": f"{order.total_amount:.2f}",
        "items": order.items,
        "currency": settings.CURRENCY_SYMBOL,
        "store": settings.STORE_NAME,
    }


def render_order_placed(order, customer_name: str | None) -> tuple[str, str]:
    html = _env.get_template("order_placed.html").render(**_context(order, customer_name))
    return f"Order Placed: {order_reference(order.id)}", html


def render_status_updated(order, customer_name: str | None) -> tuple[str, str]:
    html = _env.get_template("status_updated.html").render(**_context(order, customer_name))
    return f"Your Order {order_reference(order.id)} Status Updated", html


def render_order_cancelled(order, customer_name: str | None, cancelled_by: str) -> tuple[str, str]:
    html = _env.get_template("order_cancelled.html").render(
        reason=cancellation_reason(cancelled_by), **_context(order, customer_name)
    )
    return f"Order Cancelled: {order_reference(order.id)}", html
