from typing import Optional, Sequence

import structlog
from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from services.auth_service.models import User
from services.product_service.repository import ProductRepository

from .models import Comment
from .repository import CommentRepository

logger = structlog.get_logger(__name__)

MAX_COMMENT_LENGTH = 500


def clean_text(text: Optional[str]) -> str:
    text = (text or "").strip()
    if not text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Comment text is required")
    if len(text) > MAX_COMMENT_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Comment text must be less than {MAX_COMMENT_LENGTH} characters",
        )
    return text


class CommentService:
    """One review comment per shopper per product; only the author may edit or remove it."""

    @staticmethod
    async def _ensure_product(db: AsyncSession, product_id: int) -> None:
        if not await ProductRepository.get_product_by_id(db, product_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found.")

    @staticmethod
    async def list_comments(db: AsyncSession, product_id: int) -> Sequence[Comment]:
        await CommentService._ensure_product(db, product_id)
        return await CommentRepository.list_for_product(db, product_id)

    @staticmethod
    async def add_comment(db: AsyncSession, product_id: int, author: User, text: str) -> Comment:
        text = clean_text(text)
        await CommentService._ensure_product(db, product_id)
        if await CommentRepository.find_by_author(db, product_id, author.id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="You have already commented on this product",
            )
        comment = await CommentRepository.create(
            db, Comment(product_id=product_id, user_id=author.id, user_name=author.name, text=text)
        )
        logger.info("comment_added", comment_id=comment.id, product_id=product_id, user_id=author.id)
        return comment

    @staticmethod
    async def _authored(db: AsyncSession, product_id: int, comment_id: int, author: User, action: str) -> Comment:
        comment = await CommentRepository.get(db, comment_id)
        if not comment or comment.product_id != product_id:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
        if comment.user_id != author.id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Not authorized to {action} this comment",
            )
        return comment

    @staticmethod
    async def update_comment(
        db: AsyncSession, product_id: int, comment_id: int, author: User, text: Optional[str]
    ) -> Comment:
        comment = await CommentService._authored(db, product_id, comment_id, author, "update")
        # Omitting the text keeps the comment as it is.
        if text is not None:
            comment.text = clean_text(text)
            comment = await CommentRepository.save(db, comment)
            logger.info("comment_updated", comment_id=comment.id, user_id=author.id)
        return comment

    @staticmethod
    async def delete_comment(db: AsyncSession, product_id: int, comment_id: int, author: User) -> None:
        comment = await CommentService._authored(db, product_id, comment_id, author, "delete")
        await CommentRepository.delete(db, comment)
        logger.info("comment_deleted", comment_id=comment_id, user_id=author.id)
