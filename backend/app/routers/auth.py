"""
Authentication router for Studio Tracker.

Handles login, logout, the current-user lookup and password changes, and
provides the authentication dependencies used by every other router.
"""

from datetime import datetime, timezone
from typing import Dict, Any
from fastapi import APIRouter, Depends, HTTPException, status, Request
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import (
    verify_password,
    verify_and_upgrade_password,
    get_password_hash,
    create_access_token,
    token_user_id,
)
from app.core.config import settings
from app.models.user import User
from app.models.admin import AdminAction
from app.schemas.auth import UserLogin, Token, PasswordChange
from app.schemas.base import MessageResponse
from app.schemas.user import UserResponse
from app.services import audit


router = APIRouter()

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/token")


# Dependencies
def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Get current authenticated user from JWT token.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = token_user_id(token)
    if user_id is None:
        raise credentials_exception

    user = db.get(User, user_id)
    if user is None:
        raise credentials_exception

    if not user.active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user"
        )

    return user


def get_current_admin_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Verify that the current user has admin privileges.
    """
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user


def ensure_owner_or_admin(current_user: User, designer_id: int) -> None:
    """Designers may only touch their own records; admins may touch any."""
    if not current_user.is_admin and current_user.id != designer_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not allowed to access another designer's data"
        )


def authenticate(db: Session, request: Request, name: str, password: str) -> User:
    """
    Check credentials and record the attempt.

    Raises:
        HTTPException: 401 when the user is unknown, inactive or the password is wrong
    """
    user = db.scalar(select(User).where(User.name == name, User.active.is_(True)))
    if not user:
        audit.record(
            db, request, None, AdminAction.LOGIN, "user",
            details={"action": "failed_login_attempt", "name": name[:100]},
            success=False,
            error_message="User not found",
        )
        db.commit()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )

    matches, upgraded_hash = verify_and_upgrade_password(password, user.hashed_password)
    if not matches:
        audit.record(
            db, request, user.id, AdminAction.LOGIN, "user", user.id,
            details={"action": "failed_login_attempt"},
            success=False,
            error_message="Invalid password",
        )
        db.commit()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if upgraded_hash:
        user.hashed_password = upgraded_hash

    return user


def issue_token(db: Session, request: Request, user: User) -> Dict[str, Any]:
    access_token = create_access_token(
        subject=user.id,
        additional_claims={"role": user.role, "name": user.name}
    )

    user.last_login_at = datetime.now(timezone.utc)
    audit.record(
        db, request, user.id, AdminAction.LOGIN, "user", user.id,
        details={"action": "successful_login"},
    )
    db.commit()
    db.refresh(user)

    return {
        "access_token": access_token,
        "token_type": "bearer",
        "user": user
    }


# Endpoints
@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    request: Request,
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Log in with name and password.
    """
    user = authenticate(db, request, credentials.name, credentials.password)
    return issue_token(db, request, user)


@router.post("/token", response_model=Token, response_model_by_alias=False)
async def login_for_access_token(
    request: Request,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    OAuth2 compatible login endpoint (used by the interactive docs).
    """
    user = authenticate(db, request, form_data.username, form_data.password)
    return issue_token(db, request, user)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, str]:
    """
    Logout endpoint (mainly for logging purposes).
    """
    audit.record(
        db, request, current_user.id, AdminAction.LOGOUT, "user", current_user.id,
        details={"action": "user_logout"},
    )
    db.commit()

    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Get the authenticated user's profile.
    """
    return current_user


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    password_data: PasswordChange,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, str]:
    """
    Change a password. Admins may target any user through ``userId``.
    """
    if not password_data.old_password or not password_data.new_password or not password_data.new_password.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Old and new passwords are required"
        )

    target_id = password_data.user_id if password_data.user_id is not None else current_user.id
    ensure_owner_or_admin(current_user, target_id)

    user = db.get(User, target_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    if not verify_password(password_data.old_password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect"
        )

    user.hashed_password = get_password_hash(password_data.new_password.strip())
    audit.record(db, request, current_user.id, AdminAction.PASSWORD_CHANGE, "user", user.id)
    db.commit()

    return {"message": "Password changed successfully"}
