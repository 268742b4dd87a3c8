from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String
from sqlalchemy.sql import func

from shared.config.database import Base


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    # Owner reference only; users live in the auth service tables.
    user_id = Column(Integer, nullable=False, index=True)
    # Snapshot of each product at checkout: product, name, price, qty, image
    items = Column(JSON, nullable=False)
    shipping_address = Column(JSON, nullable=False)
    total_amount = Column(Float, nullable=False)  # calculated at creation
    payment_method = Column(String(32), nullable=False)
    payment_status = Column(String(16), nullable=False, default="pending")  # pending, paid, failed
    order_status = Column(String(16), nullable=False, default="processing")  # processing, shipped, delivered, cancelled
    cancelled_by = Column(String(16), nullable=True)  # user, admin
    is_deleted = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
