"""
User management router for Studio Tracker.

Admins create, edit and deactivate accounts; any signed-in user can list
designers.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_password_hash
from app.models.user import User, UserRole
from app.models.admin import AdminAction
from app.routers.auth import get_current_user, get_current_admin_user
from app.schemas.user import UserCreate, UserUpdate, UserResponse
from app.services import audit


logger = logging.getLogger(__name__)

router = APIRouter()


def _get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


def _ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    query = select(User.id).where(User.name == name)
    if exclude_id is not None:
        query = query.where(User.id != exclude_id)
    if db.scalar(query) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A user with this name already exists"
        )


@router.get("/", response_model=List[UserResponse])
async def list_users(
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> List[User]:
    """
    List every account, ordered by name.
    """
    return list(db.scalars(select(User).order_by(User.name)))


@router.get("/designers", response_model=List[UserResponse])
async def list_designers(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[User]:
    """
    List designer accounts, ordered by name.
    """
    return list(db.scalars(
        select(User).where(User.role == UserRole.DESIGNER.value).order_by(User.name)
    ))


@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_data: UserCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> User:
    """
    Create an account. The password defaults to the studio's initial password.
    """
    _ensure_unique_name(db, user_data.name)

    password = (user_data.password or "").strip() or settings.DEFAULT_USER_PASSWORD
    new_user = User(
        name=user_data.name,
        hashed_password=get_password_hash(password),
        role=user_data.role.value,
        avatar_url=user_data.avatar_url,
        avatar_color=user_data.avatar_color,
        active=True
    )
    db.add(new_user)
    db.flush()

    audit.record(
        db, request, current_admin.id, AdminAction.USER_MANAGEMENT, "user", new_user.id,
        details={"action": "create", "name": new_user.name, "role": new_user.role},
    )
    db.commit()
    db.refresh(new_user)

    logger.info(f"User created: {new_user.name} ({new_user.role})")
    return new_user


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    user_update: UserUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> User:
    """
    Partially update an account. A blank password leaves the current one.
    """
    user = _get_user_or_404(db, user_id)
    update_data = user_update.model_dump(exclude_unset=True)

    changes = {}
    password = update_data.pop("password", None)
    if password and password.strip():
        user.hashed_password = get_password_hash(password.strip())
        changes["password"] = "changed"

    if "name" in update_data and update_data["name"] != user.name:
        _ensure_unique_name(db, update_data["name"], exclude_id=user.id)

    for field, value in update_data.items():
        if value is None and field in ("name", "active"):
            continue
        old_value = getattr(user, field)
        if old_value != value:
            setattr(user, field, value)
            changes[field] = {"old": old_value, "new": value}

    if changes:
        audit.record(
            db, request, current_admin.id, AdminAction.USER_MANAGEMENT, "user", user.id,
            details={"action": "update", "changes": changes},
        )
    db.commit()
    db.refresh(user)

    return user


@router.delete("/{user_id}", response_model=UserResponse)
async def deactivate_user(
    user_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> User:
    """
    Deactivate an account (soft delete). History stays intact.
    """
    user = _get_user_or_404(db, user_id)

    if user.id == current_admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot deactivate your own account"
        )

    user.active = False
    audit.record(
        db, request, current_admin.id, AdminAction.DELETE, "user", user.id,
        details={"action": "deactivate", "name": user.name},
    )
    db.commit()
    db.refresh(user)

    logger.info(f"User deactivated: {user.name}")
    return user
