class OrderError(Exception):
    """Base class for order domain failures. `message` is safe to show to shoppers."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderNotFound(OrderError):
    def __init__(self, order_id: int):
        super().__init__("Order not found")
        self.order_id = order_id


class ProductNotFound(OrderError):
    def __init__(self, product_id: int):
        super().__init__(f"Product not found: {product_id}")
        self.product_id = product_id


class InsufficientStock(OrderError):
    def __init__(self, product_name: str, available: int, requested: int):
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}, Requested: {requested}"
        )
        self.product_name = product_name
        self.available = available
        self.requested = requested


class InvalidStatusTransition(OrderError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change order status from {current} to {target}.")
        self.current = current
        self.target = target


class OrderNotCancellable(InvalidStatusTransition):
    def __init__(self, current: str):
        OrderError.__init__(self, "Order cannot be cancelled.")
        self.current = current
        self.target = "cancelled"


class OrderAccessDenied(OrderError):
    def __init__(self, order_id: int):
        super().__init__("Not authorized")
        self.order_id = order_id
