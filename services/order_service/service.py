import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import User
from services.auth_service.repository import UserRepository
from services.notification_service import OrderNotifier
from services.product_service.repository import ProductRepository
from shared.observability import (
    ecomm_checkout_duration_seconds,
    ecomm_checkout_total,
    ecomm_order_status_transitions_total,
)

from .exceptions import (
    InsufficientStock,
    OrderAccessDenied,
    OrderError,
    OrderNotCancellable,
    OrderNotFound,
    ProductNotFound,
)
from .models import Order
from .repository import OrderRepository
from .schemas import AdminOrderResponse, CheckoutRequest
from .status import (
    CancelledBy,
    OrderStatus,
    can_transition,
    ensure_transition,
    initial_payment_status,
)

logger = structlog.get_logger(__name__)

# Used when checkout arrives without a usable shipping address.
DEFAULT_SHIPPING_ADDRESS = {
    "street": "Sharma PG near ryan international school",
    "city": "Jaipur",
    "state": "Rajasthan",
    "zip": "302022",
    "country": "India",
    "tag": "home",
}


def default_shipping_address(full_name: str | None) -> dict:
    return {"full_name": full_name or "User", **DEFAULT_SHIPPING_ADDRESS}


class OrderService:

    @staticmethod
    async def checkout(db: AsyncSession, account: User, data: CheckoutRequest, notifier: OrderNotifier) -> Order:
        with ecomm_checkout_duration_seconds.time():
            try:
                order = await OrderService._place_order(db, account, data)
            except OrderError as exc:
                ecomm_checkout_total.labels(status="failed").inc()
                logger.info("checkout_rejected", user_id=account.id, reason=exc.message)
                raise
            except Exception:
                ecomm_checkout_total.labels(status="failed").inc()
                logger.exception("checkout_failed", user_id=account.id)
                raise

        ecomm_checkout_total.labels(status="success").inc()
        logger.info(
            "order_placed",
            order_id=order.id,
            user_id=account.id,
            total_amount=order.total_amount,
            payment_method=order.payment_method,
        )
        notifier.order_placed(order, account)
        return order

    @staticmethod
    async def _place_order(db: AsyncSession, account: User, data: CheckoutRequest) -> Order:
        line_items = []
        requested: dict[int, int] = {}

        # 1. Validate every product and its stock before touching anything
        for item in data.items:
            product = await ProductRepository.get_product_by_id(db, item.product)
            if not product:
                raise ProductNotFound(item.product)

            requested[product.id] = requested.get(product.id, 0) + item.qty
            if product.stock < requested[product.id]:
                raise InsufficientStock(product.name, product.stock, requested[product.id])

            line_items.append({
                "product": product.id,
                "name": product.name,
                "price": product.price,
                "qty": item.qty,
                "image": (product.images or [""])[0],
            })

        # 2. Deduct stock (plain read-modify-write, no row lock)
        for item in data.items:
            product = await ProductRepository.get_product_by_id(db, item.product)
            product.stock -= item.qty

        # 3. Persist the order; the stock changes commit with it
        if data.shipping_address is not None:
            shipping_address = data.shipping_address.model_dump(mode="json")
        else:
            shipping_address = default_shipping_address(account.name)

        order = Order(
            user_id=account.id,
            items=line_items,
            shipping_address=shipping_address,
            total_amount=sum(li["price"] * li["qty"] for li in line_items),
            payment_method=data.payment_method.value,
            payment_status=initial_payment_status(data.payment_method).value,
            order_status=OrderStatus.PROCESSING.value,
        )
        return await OrderRepository.create_order(db, order)

    @staticmethod
    async def get_order(db: AsyncSession, order_id: int) -> Order:
        order = await OrderRepository.get_order(db, order_id)
        if not order:
            raise OrderNotFound(order_id)
        return order

    @staticmethod
    async def get_order_for_user(db: AsyncSession, order_id: int, account: User) -> Order:
        order = await OrderService.get_order(db, order_id)
        if order.user_id != account.id:
            raise OrderAccessDenied(order_id)
        return order

    @staticmethod
    async def list_user_orders(db: AsyncSession, account: User):
        return await OrderRepository.list_for_user(db, account.id)

    @staticmethod
    async def list_all_orders(db: AsyncSession) -> list[AdminOrderResponse]:
        rows = await OrderRepository.list_with_owners(db)
        return [AdminOrderResponse.from_row(order, owner) for order, owner in rows]

    @staticmethod
    def cancellation_actor(order: Order, account: User) -> CancelledBy:
        """Owners cancel as 'user', administrators as 'admin'; nobody else may cancel."""
        if order.user_id == account.id:
            return CancelledBy.USER
        if account.is_admin:
            return CancelledBy.ADMIN
        raise OrderAccessDenied(order.id)

    @staticmethod
    async def cancel_order(db: AsyncSession, order: Order, actor: CancelledBy, notifier: OrderNotifier) -> Order:
        previous = order.order_status
        if not can_transition(previous, OrderStatus.CANCELLED):
            raise OrderNotCancellable(previous)

        order.order_status = OrderStatus.CANCELLED.value
        order.cancelled_by = CancelledBy(actor).value
        order = await OrderRepository.save(db, order)

        ecomm_order_status_transitions_total.labels(from_status=previous, to_status=order.order_status).inc()
        logger.info("order_cancelled", order_id=order.id, cancelled_by=order.cancelled_by)

        owner = await UserRepository.get_by_id(db, order.user_id)
        notifier.order_cancelled(order, owner, order.cancelled_by)
        return order

    @staticmethod
    async def update_status(db: AsyncSession, order_id: int, target: OrderStatus, notifier: OrderNotifier) -> Order:
        order = await OrderService.get_order(db, order_id)
        target = OrderStatus(target)
        if target is OrderStatus.CANCELLED:
            return await OrderService.cancel_order(db, order, CancelledBy.ADMIN, notifier)

        previous = order.order_status
        order.order_status = ensure_transition(previous, target).value
        order = await OrderRepository.save(db, order)

        ecomm_order_status_transitions_total.labels(from_status=previous, to_status=order.order_status).inc()
        logger.info("order_status_updated", order_id=order.id, from_status=previous, to_status=order.order_status)

        owner = await UserRepository.get_by_id(db, order.user_id)
        notifier.status_updated(order, owner)
        return order
