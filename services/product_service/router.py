from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.dependencies import require_admin
from shared.config.database import get_db
from shared.schemas import RowIdPath
from .schemas import ProductCreate, ProductResponse, ProductUpdate
from .service import ProductService

router = APIRouter(tags=["Products"])
admin_router = APIRouter(tags=["Admin Products"], dependencies=[Depends(require_admin)])


async def _get_or_404(db: AsyncSession, product_id: int):
    product = await ProductService.get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found.")
    return product


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    query: str | None = Query(default=None),
    category: str | None = Query(default=None),
    db: AsyncSession = Depends(get_db)
):
    return await ProductService.list_products(db, query=query, category=category, active_only=True)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: RowIdPath, db: AsyncSession = Depends(get_db)):
    return await _get_or_404(db, product_id)


@admin_router.get("/products", response_model=list[ProductResponse])
async def admin_list_products(db: AsyncSession = Depends(get_db)):
    return await ProductService.list_products(db)


@admin_router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(product: ProductCreate, db: AsyncSession = Depends(get_db)):
    return await ProductService.create_product(db, product)


@admin_router.get("/products/{product_id}", response_model=ProductResponse)
async def admin_get_product(product_id: RowIdPath, db: AsyncSession = Depends(get_db)):
    return await _get_or_404(db, product_id)


@admin_router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(product_id: RowIdPath, payload: ProductUpdate, db: AsyncSession = Depends(get_db)):
    product = await _get_or_404(db, product_id)
    return await ProductService.update_product(db, product, payload)


@admin_router.delete("/products/{product_id}")
async def delete_product(product_id: RowIdPath, db: AsyncSession = Depends(get_db)):
    product = await _get_or_404(db, product_id)
    await ProductService.delete_product(db, product)
    return {"message": "Product deleted."}
