"""
Work sessions router: the designers' daily clock-in.
"""

from datetime import datetime, time
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Response
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import get_db
from app.core.timeutils import local_now, to_ms
from app.models.user import User
from app.models.work_session import WorkSession
from app.routers.auth import get_current_user, ensure_owner_or_admin
from app.schemas.work_session import WorkSessionCreate, WorkSessionResponse


router = APIRouter()


@router.get("/", response_model=List[WorkSessionResponse])
async def list_work_sessions(
    user_id: Optional[int] = Query(None, alias="userId"),
    start_date: Optional[int] = Query(None, alias="startDate"),
    end_date: Optional[int] = Query(None, alias="endDate"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[WorkSession]:
    """
    List sessions, newest first. Designers only see their own.
    """
    if not current_user.is_admin:
        if user_id is not None:
            ensure_owner_or_admin(current_user, user_id)
        user_id = current_user.id

    query = select(WorkSession)
    if user_id is not None:
        query = query.where(WorkSession.user_id == user_id)
    if start_date is not None:
        query = query.where(WorkSession.timestamp >= start_date)
    if end_date is not None:
        query = query.where(WorkSession.timestamp <= end_date)

    return list(db.scalars(query.order_by(WorkSession.timestamp.desc())))


@router.post("/", response_model=WorkSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_work_session(
    session_data: WorkSessionCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> WorkSession:
    """
    Clock in for today.

    Idempotent: a second call on the same workday returns the existing
    session with 200. Clocking in before the workday starts is refused.
    """
    ensure_owner_or_admin(current_user, session_data.user_id)
    if not db.get(User, session_data.user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    now = local_now()
    if now.hour < settings.WORKDAY_START_HOUR:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "BEFORE_WORKDAY_START",
                "message": f"Work sessions can only start after {settings.WORKDAY_START_HOUR:02d}:00",
            }
        )

    workday_start = to_ms(datetime.combine(now.date(), time(hour=settings.WORKDAY_START_HOUR)))
    existing = db.scalar(
        select(WorkSession)
        .where(
            WorkSession.user_id == session_data.user_id,
            WorkSession.timestamp >= workday_start,
        )
        .order_by(WorkSession.timestamp.asc())
        .limit(1)
    )
    if existing:
        response.status_code = status.HTTP_200_OK
        return existing

    work_session = WorkSession(user_id=session_data.user_id, timestamp=to_ms(now))
    db.add(work_session)
    db.commit()
    db.refresh(work_session)
    return work_session
