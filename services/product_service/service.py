from typing import Optional, Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Product
from .repository import ProductRepository
from .schemas import ProductCreate, ProductStatus, ProductUpdate

logger = structlog.get_logger(__name__)


class ProductService:

    @staticmethod
    async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
        product = Product(**data.model_dump(mode="json"))
        product = await ProductRepository.create_product(db, product)
        logger.info("product_created", product_id=product.id, stock=product.stock)
        return product

    @staticmethod
    async def list_products(
        db: AsyncSession,
        query: Optional[str] = None,
        category: Optional[str] = None,
        active_only: bool = False,
    ) -> Sequence[Product]:
        status = ProductStatus.ACTIVE.value if active_only else None
        products = await ProductRepository.get_all_products(db, status=status)

        if category:
            products = [p for p in products if (p.category or "").lower() == category.lower()]

        if query:
            query_words = set(query.lower().split())
            products = [p for p in products if query_words & set(p.name.lower().split())]

        return products

    @staticmethod
    async def get_product_by_id(db: AsyncSession, product_id: int) -> Optional[Product]:
        return await ProductRepository.get_product_by_id(db, product_id)

    @staticmethod
    async def update_product(db: AsyncSession, product: Product, data: ProductUpdate) -> Product:
        for field, value in data.model_dump(mode="json", exclude_unset=True).items():
            setattr(product, field, value)
        product = await ProductRepository.update_product(db, product)
        logger.info("product_updated", product_id=product.id)
        return product

    @staticmethod
    async def delete_product(db: AsyncSession, product: Product) -> None:
        await ProductRepository.delete_product(db, product)
        logger.info("product_deleted", product_id=product.id)
