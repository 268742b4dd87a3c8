from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.dependencies import get_current_account
from services.auth_service.models import User
from shared.config.database import get_db
from shared.schemas import RowIdPath
from .schemas import CommentCreate, CommentList, CommentResult, CommentUpdate
from .service import CommentService

router = APIRouter(tags=["Product Comments"])


@router.get("/products/{product_id}/comments", response_model=CommentList)
async def list_comments(product_id: RowIdPath, db: AsyncSession = Depends(get_db)):
    return {"comments": await CommentService.list_comments(db, product_id)}


@router.post(
    "/products/{product_id}/comments",
    response_model=CommentResult,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    product_id: RowIdPath,
    payload: CommentCreate,
    account: User = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    comment = await CommentService.add_comment(db, product_id, account, payload.text)
    return {"message": "Comment added successfully", "comment": comment}


@router.put("/products/{product_id}/comments/{comment_id}", response_model=CommentResult)
async def update_comment(
    product_id: RowIdPath,
    comment_id: RowIdPath,
    payload: CommentUpdate,
    account: User = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    comment = await CommentService.update_comment(db, product_id, comment_id, account, payload.text)
    return {"message": "Comment updated successfully", "comment": comment}


@router.delete("/products/{product_id}/comments/{comment_id}")
async def delete_comment(
    product_id: RowIdPath,
    comment_id: RowIdPath,
    account: User = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    await CommentService.delete_comment(db, product_id, comment_id, account)
    return {"message": "Comment deleted successfully"}
