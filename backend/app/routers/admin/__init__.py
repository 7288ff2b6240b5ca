"""
Admin routers for Studio Tracker.

Overview counts for the admin home screen and the audit log.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.admin import AdminLog
from app.models.art_type import ArtType
from app.models.demand import Demand
from app.models.feedback import Feedback
from app.models.lesson import Lesson
from app.models.user import User, UserRole
from app.routers.auth import get_current_admin_user
from app.services.periods import resolve_period, Period


# Create admin router
admin_router = APIRouter()


def _count(db: Session, query) -> int:
    return db.scalar(select(func.count()).select_from(query.subquery())) or 0


# Admin dashboard endpoint
@admin_router.get("/dashboard")
async def get_admin_dashboard(
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    """
    Get admin dashboard overview with entity counts.
    """
    today_range = resolve_period(Period.TODAY)

    active_designers = _count(db, select(User.id).where(
        User.role == UserRole.DESIGNER.value,
        User.active.is_(True),
    ))
    art_types = _count(db, select(ArtType.id))
    demands_today = _count(db, select(Demand.id).where(
        Demand.timestamp >= today_range.start_ms,
        Demand.timestamp <= today_range.end_ms,
    ))
    unviewed_feedbacks = _count(db, select(Feedback.id).where(Feedback.viewed.is_(False)))
    lessons = _count(db, select(Lesson.id))

    return {
        "statistics": {
            "activeDesigners": active_designers,
            "artTypes": art_types,
            "demandsToday": demands_today,
            "unviewedFeedbacks": unviewed_feedbacks,
            "lessons": lessons,
        },
        "recentActivity": {
            "lastLogin": admin_user.last_login_at.isoformat() if admin_user.last_login_at else None,
        },
    }


# Admin logs endpoint
@admin_router.get("/logs")
async def get_admin_logs(
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    action: Optional[str] = None,
    entity_type: Optional[str] = Query(None, alias="entityType"),
    admin_user: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    """
    Get admin action logs with filtering, newest first.
    """
    query = select(AdminLog)

    # Apply filters
    if action:
        query = query.where(AdminLog.action == action)
    if entity_type:
        query = query.where(AdminLog.entity_type == entity_type)

    total = _count(db, query)

    logs = db.scalars(
        query.order_by(AdminLog.created_at.desc(), AdminLog.id.desc()).offset(skip).limit(limit)
    )

    return {
        "total": total,
        "skip": skip,
        "limit": limit,
        "logs": [
            {
                "id": log.id,
                "userId": log.user_id,
                "action": log.action,
                "entityType": log.entity_type,
                "entityId": log.entity_id,
                "details": log.details,
                "success": log.success,
                "errorMessage": log.error_message,
                "method": log.method,
                "path": log.path,
                "ipAddress": log.ip_address,
                "createdAt": log.created_at,
            }
            for log in logs
        ],
    }


# Export all routers
__all__ = ["admin_router"]
