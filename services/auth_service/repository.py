from typing import Optional, Sequence

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import User


class UserRepository:

    @staticmethod
    async def create(db: AsyncSession, user: User) -> User:
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: int) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalars().first()

    @staticmethod
    async def get_by_email(db: AsyncSession, email: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.email == email))
        return result.scalars().first()

    @staticmethod
    async def list_active(
        db: AsyncSession,
        search: Optional[str] = None,
        blocked: Optional[bool] = None,
        is_admin: Optional[bool] = None,
    ) -> Sequence[User]:
        stmt = select(User).where(User.is_deleted.is_(False))
        if blocked is not None:
            stmt = stmt.where(User.is_blocked.is_(blocked))
        if is_admin is not None:
            stmt = stmt.where(User.is_admin.is_(is_admin))
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(User.name.ilike(pattern), User.email.ilike(pattern)))
        result = await db.execute(stmt.order_by(User.created_at.desc(), User.id.desc()))
        return result.scalars().all()

    @staticmethod
    async def save(db: AsyncSession, user: User) -> User:
        db.add(user)
        await db.commit()
        await db.refresh(user)
        return user
