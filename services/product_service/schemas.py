from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import Field, field_validator

from shared.schemas import CamelModel


class ProductStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ProductCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    price: float = Field(ge=0)
    stock: int = Field(default=0, ge=0)
    brand: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    images: List[str] = []
    featured: bool = False
    status: ProductStatus = ProductStatus.ACTIVE


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    brand: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    images: Optional[List[str]] = None
    featured: Optional[bool] = None
    status: Optional[ProductStatus] = None

    @field_validator("name", "description", "price", "stock", "images", "featured", "status", mode="before")
    @classmethod
    def reject_null(cls, value):
        # Omit a field to leave it unchanged; these columns cannot be cleared.
        if value is None:
            raise ValueError("may not be null")
        return value


class ProductResponse(CamelModel):
    id: int
    name: str
    description: str
    price: float
    stock: int
    brand: Optional[str] = None
    sku: Optional[str] = None
    category: Optional[str] = None
    images: List[str] = []
    featured: bool
    status: ProductStatus
    created_at: Optional[datetime] = None
