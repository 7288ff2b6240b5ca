"""
User schemas.
"""

from typing import Optional
from pydantic import Field, field_validator

from app.models.user import UserRole
from .base import CamelModel


class UserResponse(CamelModel):
    id: int
    name: str
    role: UserRole
    avatar_url: Optional[str] = None
    avatar_color: Optional[str] = None
    active: bool


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=120)
    password: Optional[str] = None
    role: UserRole = UserRole.DESIGNER
    avatar_url: Optional[str] = None
    avatar_color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v


class UserUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=120)
    password: Optional[str] = None
    active: Optional[bool] = None
    avatar_url: Optional[str] = None
    avatar_color: Optional[str] = None

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Name must not be blank")
        return v
