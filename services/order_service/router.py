from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.dependencies import get_current_account, require_admin
from services.auth_service.models import User
from services.notification_service import OrderNotifier, get_notifier
from shared.config.database import get_db
from shared.schemas import RowIdPath
from .exceptions import OrderAccessDenied, OrderError, OrderNotFound, ProductNotFound
from .schemas import AdminOrderResponse, CheckoutRequest, OrderResponse, OrderStatusUpdate
from .service import OrderService

router = APIRouter(tags=["Orders"])
admin_router = APIRouter(tags=["Admin Orders"], dependencies=[Depends(require_admin)])


def _to_http(exc: OrderError) -> HTTPException:
    if isinstance(exc, (OrderNotFound, ProductNotFound)):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, OrderAccessDenied):
        code = status.HTTP_403_FORBIDDEN
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=exc.message)


@router.post("/checkout", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def checkout(
    payload: CheckoutRequest,
    account: User = Depends(get_current_account),
    notifier: OrderNotifier = Depends(get_notifier),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await OrderService.checkout(db, account, payload, notifier)
    except OrderError as e:
        raise _to_http(e) from e


@router.get("/orders/my", response_model=list[OrderResponse])
async def my_orders(account: User = Depends(get_current_account), db: AsyncSession = Depends(get_db)):
    return await OrderService.list_user_orders(db, account)


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: RowIdPath,
    account: User = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await OrderService.get_order_for_user(db, order_id, account)
    except OrderError as e:
        raise _to_http(e) from e


@router.patch("/orders/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: RowIdPath,
    account: User = Depends(get_current_account),
    notifier: OrderNotifier = Depends(get_notifier),
    db: AsyncSession = Depends(get_db),
):
    try:
        order = await OrderService.get_order(db, order_id)
        actor = OrderService.cancellation_actor(order, account)
        return await OrderService.cancel_order(db, order, actor, notifier)
    except OrderError as e:
        raise _to_http(e) from e


@admin_router.get("/orders", response_model=list[AdminOrderResponse])
async def all_orders(db: AsyncSession = Depends(get_db)):
    return await OrderService.list_all_orders(db)


@admin_router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: RowIdPath,
    payload: OrderStatusUpdate,
    notifier: OrderNotifier = Depends(get_notifier),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await OrderService.update_status(db, order_id, payload.status, notifier)
    except OrderError as e:
        raise _to_http(e) from e
