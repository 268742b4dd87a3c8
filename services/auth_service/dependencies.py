from fastapi import Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import MAX_ROW_ID
from shared.security.dependencies import get_current_user

from .models import User
from .repository import UserRepository


async def get_current_account(
    user_id: str = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the JWT subject to a live account row."""
    user = None
    if user_id.isdigit() and int(user_id) <= MAX_ROW_ID:
        user = await UserRepository.get_by_id(db, int(user_id))
    if not user or user.is_deleted:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no user session found.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.is_blocked:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is blocked")
    return user


async def require_admin(account: User = Depends(get_current_account)) -> User:
    if not account.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized as admin.")
    return account
