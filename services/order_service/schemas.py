from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import ConfigDict, Field, ValidationError, field_validator

from shared.schemas import CamelModel, RowId
from .status import CancelledBy, OrderStatus, PaymentMethod, PaymentStatus


class AddressTag(str, Enum):
    HOME = "home"
    HOSTEL = "hostel"
    OFFICE = "office"
    OTHER = "other"


class ShippingAddress(CamelModel):
    full_name: str = Field(min_length=1)
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip: str = Field(min_length=1)
    country: str = Field(min_length=1)
    tag: AddressTag = AddressTag.HOME

    @field_validator("tag", mode="before")
    @classmethod
    def unknown_tag_is_home(cls, value):
        try:
            return AddressTag(value)
        except ValueError:
            return AddressTag.HOME


class CheckoutItem(CamelModel):
    model_config = ConfigDict(extra="forbid")

    product: RowId
    qty: int = Field(ge=1)


class CheckoutRequest(CamelModel):
    model_config = ConfigDict(extra="forbid")

    items: List[CheckoutItem] = Field(min_length=1)
    shipping_address: Optional[ShippingAddress] = None
    payment_method: PaymentMethod
    # Sent by the storefront's "buy now" flow; it does not change how the order is placed.
    direct_buy: bool = False

    @field_validator("shipping_address", mode="wrap")
    @classmethod
    def drop_malformed_address(cls, value, handler):
        # An incomplete address is replaced by the store default later on.
        try:
            return handler(value)
        except ValidationError:
            return None


class OrderStatusUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    status: OrderStatus


class LineItem(CamelModel):
    product: int
    name: str
    price: float
    qty: int
    image: str = ""


class OrderResponse(CamelModel):
    id: int
    user_id: int
    items: List[LineItem]
    shipping_address: ShippingAddress
    total_amount: float
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    order_status: OrderStatus
    cancelled_by: Optional[CancelledBy] = None
    is_deleted: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderOwner(CamelModel):
    id: int
    name: str
    email: str


class AdminOrderResponse(OrderResponse):
    user: Optional[OrderOwner] = None

    @classmethod
    def from_row(cls, order, owner) -> "AdminOrderResponse":
        response = cls.model_validate(order)
        return response.model_copy(
            update={"user": OrderOwner.model_validate(owner) if owner is not None else None}
        )
