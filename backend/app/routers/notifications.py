"""
Designer notifications router: dashboard banners set by admins.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.database import get_db
from app.models.admin import AdminAction
from app.models.notification import DesignerNotification
from app.models.user import User
from app.routers.auth import get_current_user, get_current_admin_user, ensure_owner_or_admin
from app.schemas.base import MessageResponse
from app.schemas.notification import (
    NotificationCreate,
    NotificationUpdate,
    NotificationToggle,
    NotificationResponse,
)
from app.services import audit


router = APIRouter()


def _get_notification_or_404(db: Session, notification_id: int) -> DesignerNotification:
    notification = db.get(DesignerNotification, notification_id)
    if not notification:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found"
        )
    return notification


def _ensure_designer(db: Session, designer_id: int) -> User:
    designer = db.get(User, designer_id)
    if not designer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Designer not found"
        )
    return designer


def _ensure_content(notification: DesignerNotification) -> None:
    if not notification.has_content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="At least one of h1, h2 or h3 must be filled in"
        )


@router.get("/", response_model=List[NotificationResponse])
async def list_notifications(
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> List[DesignerNotification]:
    return list(db.scalars(
        select(DesignerNotification)
        .options(selectinload(DesignerNotification.designer))
        .order_by(DesignerNotification.created_at.desc(), DesignerNotification.id.desc())
    ))


@router.get("/designer/{designer_id}", response_model=NotificationResponse)
async def get_designer_notification(
    designer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> DesignerNotification:
    """
    Latest enabled notification for a designer.
    """
    ensure_owner_or_admin(current_user, designer_id)

    notification = db.scalars(
        select(DesignerNotification)
        .where(
            DesignerNotification.designer_id == designer_id,
            DesignerNotification.enabled.is_(True),
        )
        .order_by(DesignerNotification.created_at.desc(), DesignerNotification.id.desc())
        .limit(1)
    ).first()
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active notification"
        )
    return notification


@router.post("/", response_model=NotificationResponse, status_code=status.HTTP_201_CREATED)
async def create_notification(
    notification_data: NotificationCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> DesignerNotification:
    _ensure_designer(db, notification_data.designer_id)

    data = notification_data.model_dump()
    data["type"] = notification_data.type.value
    notification = DesignerNotification(**data)
    _ensure_content(notification)

    db.add(notification)
    db.flush()

    audit.record(
        db, request, current_admin.id, AdminAction.CREATE, "designer_notification", notification.id,
        details={"designer_id": notification.designer_id, "type": notification.type},
    )
    db.commit()
    db.refresh(notification)
    return notification


@router.put("/{notification_id}", response_model=NotificationResponse)
async def update_notification(
    notification_id: int,
    notification_update: NotificationUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> DesignerNotification:
    notification = _get_notification_or_404(db, notification_id)
    update_data = notification_update.model_dump(exclude_unset=True)

    if update_data.get("designer_id") is not None:
        _ensure_designer(db, update_data["designer_id"])

    for field, value in update_data.items():
        if value is None and field in ("designer_id", "type", "enabled"):
            continue
        if field == "type":
            value = value.value
        setattr(notification, field, value)
    _ensure_content(notification)

    audit.record(
        db, request, current_admin.id, AdminAction.UPDATE, "designer_notification", notification.id,
        details={"fields": sorted(update_data)},
    )
    db.commit()
    db.refresh(notification)
    return notification


@router.patch("/{notification_id}/toggle", response_model=NotificationResponse)
async def toggle_notification(
    notification_id: int,
    toggle: NotificationToggle,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> DesignerNotification:
    notification = _get_notification_or_404(db, notification_id)
    notification.enabled = toggle.enabled

    audit.record(
        db, request, current_admin.id, AdminAction.UPDATE, "designer_notification", notification.id,
        details={"enabled": toggle.enabled},
    )
    db.commit()
    db.refresh(notification)
    return notification


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    notification = _get_notification_or_404(db, notification_id)

    audit.record(db, request, current_admin.id, AdminAction.DELETE, "designer_notification", notification.id)
    db.delete(notification)
    db.commit()
    return {"message": "Notification deleted"}
