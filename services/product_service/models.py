from sqlalchemy import JSON, Boolean, Column, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import func

from shared.config.database import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    brand = Column(String(255), nullable=True)
    sku = Column(String(128), nullable=True)
    category = Column(String(255), nullable=True, index=True)
    images = Column(JSON, nullable=False, default=list)
    featured = Column(Boolean, nullable=False, default=False)
    status = Column(String(32), nullable=False, default="Active")  # Active, Inactive
    created_at = Column(DateTime(timezone=True), server_default=func.now())
