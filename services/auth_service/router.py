from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from shared.config.database import get_db
from shared.schemas import RowIdPath
from shared.security.rate_limiter import AUTH_RATE_LIMIT, limiter

from .dependencies import get_current_account, require_admin
from .models import User
from .schemas import (
    AccountStatus,
    AdminUserUpdate,
    ProfileUpdate,
    TokenResponse,
    UserBlockUpdate,
    UserCreate,
    UserLogin,
    UserResponse,
    UserRole,
)
from .service import AuthService

router = APIRouter(tags=["Authentication"])
admin_auth_router = APIRouter(tags=["Admin Authentication"])
admin_router = APIRouter(tags=["Admin Users"], dependencies=[Depends(require_admin)])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new shopper account",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def register(request: Request, payload: UserCreate, db: AsyncSession = Depends(get_db)):
    return await AuthService.register(db, payload)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate and receive a JWT access token",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(request: Request, payload: UserLogin, db: AsyncSession = Depends(get_db)):
    return await AuthService.login(db, payload)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get the current authenticated user's profile",
)
async def get_me(account: User = Depends(get_current_account)):
    return account


@router.get("/profile/{user_id}", response_model=UserResponse)
async def get_profile(
    user_id: RowIdPath,
    account: User = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    return await AuthService.get_profile(db, user_id, account)


@router.patch("/profile/{user_id}", response_model=UserResponse)
async def update_profile(
    user_id: RowIdPath,
    payload: ProfileUpdate,
    account: User = Depends(get_current_account),
    db: AsyncSession = Depends(get_db),
):
    return await AuthService.update_profile(db, user_id, account, payload)


@admin_auth_router.post(
    "/login",
    response_model=TokenResponse,
    summary="Authenticate an administrator",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def admin_login(request: Request, payload: UserLogin, db: AsyncSession = Depends(get_db)):
    return await AuthService.login(db, payload, admin_only=True)


@admin_router.get("/users", response_model=list[UserResponse])
async def list_users(
    search: Optional[str] = Query(default=None),
    status_filter: Optional[AccountStatus] = Query(default=None, alias="status"),
    role: Optional[UserRole] = Query(default=None),
    db: AsyncSession = Depends(get_db),
):
    return await AuthService.list_users(db, search=search, status_filter=status_filter, role=role)


@admin_router.put("/users/{user_id}", response_model=UserResponse)
async def update_user(user_id: RowIdPath, payload: AdminUserUpdate, db: AsyncSession = Depends(get_db)):
    return await AuthService.admin_update_user(db, user_id, payload)


@admin_router.patch("/users/{user_id}/block", response_model=UserResponse)
async def block_user(user_id: RowIdPath, payload: UserBlockUpdate, db: AsyncSession = Depends(get_db)):
    return await AuthService.set_blocked(db, user_id, payload.blocked)


@admin_router.delete("/users/{user_id}")
async def delete_user(user_id: RowIdPath, db: AsyncSession = Depends(get_db)):
    await AuthService.delete_user(db, user_id)
    return {"message": f"User with ID {user_id} has been deleted."}
