from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from shared.schemas import CamelModel


class UserRole(str, Enum):
    ADMIN = "admin"
    USER = "user"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"  # blocked


class UserCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    password: str = Field(min_length=6)


class UserLogin(CamelModel):
    email: EmailStr
    password: str


class UserResponse(CamelModel):
    id: int
    name: str
    email: str
    is_admin: bool
    is_blocked: bool
    phone: Optional[str] = None
    preferred_era: Optional[str] = None
    avatar: Optional[str] = None
    address: Optional[str] = None
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None


class TokenResponse(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class UserBlockUpdate(CamelModel):
    blocked: bool


class ProfileUpdate(CamelModel):
    """Shopper edits from the profile page. Empty values leave the stored value alone."""

    name: Optional[str] = Field(default=None, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=32)
    preferred_era: Optional[str] = Field(default=None, max_length=64)
    avatar: Optional[str] = Field(default=None, max_length=512)
    address: Optional[str] = Field(default=None, max_length=512)

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_unset(cls, value):
        return value or None

    def changes(self) -> dict:
        return {field: value for field, value in self.model_dump(exclude_unset=True).items() if value}


class AdminUserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    role: Optional[UserRole] = None
    phone: Optional[str] = Field(default=None, max_length=32)
    preferred_era: Optional[str] = Field(default=None, max_length=64)
    address: Optional[str] = Field(default=None, max_length=512)

    @field_validator("name", "email", "role", mode="before")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value
