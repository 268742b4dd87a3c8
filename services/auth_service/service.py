from datetime import datetime, timezone
from typing import Optional, Sequence

import structlog
from fastapi import HTTPException, status
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from shared.security.jwt_handler import create_access_token

from .models import User
from .repository import UserRepository
from .schemas import (
    AccountStatus,
    AdminUserUpdate,
    ProfileUpdate,
    TokenResponse,
    UserCreate,
    UserLogin,
    UserResponse,
    UserRole,
)

logger = structlog.get_logger(__name__)

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AuthService:

    @staticmethod
    def hash_password(password: str) -> str:
        return _pwd_context.hash(password)

    @staticmethod
    def verify_password(plain: str, hashed: str) -> bool:
        return _pwd_context.verify(plain, hashed)

    @staticmethod
    async def register(db: AsyncSession, data: UserCreate) -> User:
        existing = await UserRepository.get_by_email(db, data.email)
        if existing:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )
        user = User(
            name=data.name,
            email=data.email,
            hashed_password=AuthService.hash_password(data.password),
        )
        user = await UserRepository.create(db, user)
        logger.info("user_registered", user_id=user.id)
        return user

    @staticmethod
    async def login(db: AsyncSession, data: UserLogin, admin_only: bool = False) -> TokenResponse:
        user = await UserRepository.get_by_email(db, data.email)
        if not user or user.is_deleted or not AuthService.verify_password(data.password, user.hashed_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Incorrect email or password",
                headers={"WWW-Authenticate": "Bearer"},
            )
        if user.is_blocked:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account is blocked",
            )
        if admin_only and not user.is_admin:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not authorized as admin.",
            )

        user.last_login = datetime.now(timezone.utc)
        user = await UserRepository.save(db, user)
        logger.info("user_logged_in", user_id=user.id, admin=admin_only)

        token = create_access_token(data={"sub": str(user.id)})
        return TokenResponse(access_token=token, user=UserResponse.model_validate(user))

    @staticmethod
    async def get_user_by_id(db: AsyncSession, user_id: int) -> User:
        user = await UserRepository.get_by_id(db, user_id)
        if not user or user.is_deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        return user

    @staticmethod
    async def list_users(
        db: AsyncSession,
        search: Optional[str] = None,
        status_filter: Optional[AccountStatus] = None,
        role: Optional[UserRole] = None,
    ) -> Sequence[User]:
        blocked = None if status_filter is None else status_filter == AccountStatus.INACTIVE
        is_admin = None if role is None else role == UserRole.ADMIN
        return await UserRepository.list_active(db, search=search, blocked=blocked, is_admin=is_admin)

    @staticmethod
    async def set_blocked(db: AsyncSession, user_id: int, blocked: bool) -> User:
        user = await AuthService.get_user_by_id(db, user_id)
        user.is_blocked = blocked
        user = await UserRepository.save(db, user)
        logger.info("user_block_changed", user_id=user.id, blocked=blocked)
        return user

    @staticmethod
    async def _ensure_email_free(db: AsyncSession, user: User, email: Optional[str]) -> None:
        if email and email != user.email and await UserRepository.get_by_email(db, email):
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email already registered")

    @staticmethod
    async def get_profile(db: AsyncSession, user_id: int, account: User) -> User:
        """Profiles are readable by their owner and by administrators."""
        if account.id != user_id and not account.is_admin:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Not authorized")
        return await AuthService.get_user_by_id(db, user_id)

    @staticmethod
    async def update_profile(db: AsyncSession, user_id: int, account: User, data: ProfileUpdate) -> User:
        user = await AuthService.get_profile(db, user_id, account)
        changes = data.changes()
        await AuthService._ensure_email_free(db, user, changes.get("email"))
        for field, value in changes.items():
            setattr(user, field, value)
        user = await UserRepository.save(db, user)
        logger.info("profile_updated", user_id=user.id, fields=sorted(changes))
        return user

    @staticmethod
    async def admin_update_user(db: AsyncSession, user_id: int, data: AdminUserUpdate) -> User:
        user = await AuthService.get_user_by_id(db, user_id)
        changes = data.model_dump(exclude_unset=True)
        await AuthService._ensure_email_free(db, user, changes.get("email"))
        role = changes.pop("role", None)
        if role is not None:
            user.is_admin = role == UserRole.ADMIN
        for field, value in changes.items():
            setattr(user, field, value)
        user = await UserRepository.save(db, user)
        logger.info("user_updated_by_admin", user_id=user.id, is_admin=user.is_admin)
        return user

    @staticmethod
    async def delete_user(db: AsyncSession, user_id: int) -> None:
        user = await AuthService.get_user_by_id(db, user_id)
        user.is_deleted = True
        await UserRepository.save(db, user)
        logger.info("user_deleted", user_id=user_id)
