from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Comment

RECENT_LIMIT = 50


class CommentRepository:

    @staticmethod
    async def create(db: AsyncSession, comment: Comment) -> Comment:
        db.add(comment)
        await db.commit()
        await db.refresh(comment)
        return comment

    @staticmethod
    async def get(db: AsyncSession, comment_id: int) -> Optional[Comment]:
        result = await db.execute(select(Comment).where(Comment.id == comment_id))
        return result.scalars().first()

    @staticmethod
    async def find_by_author(db: AsyncSession, product_id: int, user_id: int) -> Optional[Comment]:
        result = await db.execute(
            select(Comment).where(Comment.product_id == product_id, Comment.user_id == user_id)
        )
        return result.scalars().first()

    @staticmethod
    async def list_for_product(db: AsyncSession, product_id: int, limit: int = RECENT_LIMIT) -> Sequence[Comment]:
        result = await db.execute(
            select(Comment)
            .where(Comment.product_id == product_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
        )
        return result.scalars().all()

    @staticmethod
    async def save(db: AsyncSession, comment: Comment) -> Comment:
        db.add(comment)
        await db.commit()
        await db.refresh(comment)
        return comment

    @staticmethod
    async def delete(db: AsyncSession, comment: Comment) -> None:
        await db.delete(comment)
        await db.commit()
