"""
Authentication schemas.
"""

from typing import Optional

from .base import CamelModel
from .user import UserResponse


class UserLogin(CamelModel):
    name: str
    password: str


class Token(CamelModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class PasswordChange(CamelModel):
    """Missing fields are reported as 400 by the endpoint, not 422."""
    user_id: Optional[int] = None
    old_password: Optional[str] = None
    new_password: Optional[str] = None
