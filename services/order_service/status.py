"""
Order fulfillment lifecycle.

    processing ──► shipped ──► delivered
        │
        └────────► cancelled

delivered and cancelled are terminal. Every status change, whether made by
an administrator or by a cancellation, goes through ensure_transition().
"""
from enum import Enum

from .exceptions import InvalidStatusTransition


class OrderStatus(str, Enum):
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "credit-card"
    PAYPAL = "paypal"
    BANK_TRANSFER = "bank-transfer"
    COD = "cod"
    UPI = "upi"
    WALLET = "wallet"


class CancelledBy(str, Enum):
    USER = "user"
    ADMIN = "admin"


ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus | str, target: OrderStatus | str) -> bool:
    try:
        current, target = OrderStatus(current), OrderStatus(target)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: OrderStatus | str, target: OrderStatus | str) -> OrderStatus:
    """Return the target status, or raise if the move is not in the table."""
    if not can_transition(current, target):
        raise InvalidStatusTransition(str(getattr(current, "value", current)), str(getattr(target, "value", target)))
    return OrderStatus(target)


def initial_payment_status(method: PaymentMethod | str) -> PaymentStatus:
    # Cash on delivery is collected later; every other method is captured at checkout.
    return PaymentStatus.PENDING if PaymentMethod(method) is PaymentMethod.COD else PaymentStatus.PAID
