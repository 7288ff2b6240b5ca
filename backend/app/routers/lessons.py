"""
Lessons router for Studio Tracker.

Admins curate the training videos; designers mark them as watched.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.timeutils import now_ms
from app.models.admin import AdminAction
from app.models.lesson import Lesson, LessonProgress
from app.models.user import User
from app.routers.auth import get_current_user, get_current_admin_user, ensure_owner_or_admin
from app.schemas.base import MessageResponse
from app.schemas.lesson import (
    LessonCreate,
    LessonUpdate,
    LessonResponse,
    LessonProgressMark,
    LessonProgressResponse,
)
from app.services import audit


router = APIRouter()
progress_router = APIRouter()


def _get_lesson_or_404(db: Session, lesson_id: int) -> Lesson:
    lesson = db.get(Lesson, lesson_id)
    if not lesson:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Lesson not found"
        )
    return lesson


@router.get("/", response_model=List[LessonResponse])
async def list_lessons(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[Lesson]:
    return list(db.scalars(select(Lesson).order_by(Lesson.order_index, Lesson.id)))


@router.post("/", response_model=LessonResponse, status_code=status.HTTP_201_CREATED)
async def create_lesson(
    lesson_data: LessonCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Lesson:
    """
    Append a lesson after the current last one.
    """
    max_index = db.scalar(select(func.max(Lesson.order_index)))
    lesson = Lesson(
        **lesson_data.model_dump(),
        order_index=0 if max_index is None else max_index + 1
    )
    db.add(lesson)
    db.flush()

    audit.record(
        db, request, current_admin.id, AdminAction.CREATE, "lesson", lesson.id,
        details={"title": lesson.title},
    )
    db.commit()
    db.refresh(lesson)
    return lesson


@router.put("/{lesson_id}", response_model=LessonResponse)
async def update_lesson(
    lesson_id: int,
    lesson_update: LessonUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Lesson:
    lesson = _get_lesson_or_404(db, lesson_id)

    changes = {}
    for field, value in lesson_update.model_dump(exclude_unset=True).items():
        if value is None and field != "description":
            continue
        old_value = getattr(lesson, field)
        if old_value != value:
            setattr(lesson, field, value)
            changes[field] = {"old": old_value, "new": value}

    if changes:
        audit.record(
            db, request, current_admin.id, AdminAction.UPDATE, "lesson", lesson.id,
            details={"changes": changes},
        )
    db.commit()
    db.refresh(lesson)
    return lesson


@router.delete("/{lesson_id}", response_model=MessageResponse)
async def delete_lesson(
    lesson_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    lesson = _get_lesson_or_404(db, lesson_id)

    audit.record(
        db, request, current_admin.id, AdminAction.DELETE, "lesson", lesson.id,
        details={"title": lesson.title},
    )
    db.delete(lesson)
    db.commit()
    return {"message": "Lesson deleted"}


@progress_router.get("/{designer_id}", response_model=List[LessonProgressResponse])
async def get_lesson_progress(
    designer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[LessonProgress]:
    ensure_owner_or_admin(current_user, designer_id)
    return list(db.scalars(
        select(LessonProgress)
        .where(LessonProgress.designer_id == designer_id)
        .order_by(LessonProgress.lesson_id)
    ))


@progress_router.post("/", response_model=LessonProgressResponse)
async def mark_lesson_viewed(
    mark: LessonProgressMark,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> LessonProgress:
    """
    Mark a lesson as watched. Calling it again refreshes ``viewedAt``.
    """
    ensure_owner_or_admin(current_user, mark.designer_id)
    _get_lesson_or_404(db, mark.lesson_id)

    progress = db.scalar(
        select(LessonProgress).where(
            LessonProgress.lesson_id == mark.lesson_id,
            LessonProgress.designer_id == mark.designer_id,
        )
    )
    if progress is None:
        progress = LessonProgress(lesson_id=mark.lesson_id, designer_id=mark.designer_id)
        db.add(progress)

    progress.viewed = True
    progress.viewed_at = now_ms()
    db.commit()
    db.refresh(progress)
    return progress


@progress_router.delete("/{lesson_id}/{designer_id}", response_model=MessageResponse)
async def unmark_lesson_viewed(
    lesson_id: int,
    designer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> dict:
    ensure_owner_or_admin(current_user, designer_id)

    progress = db.scalar(
        select(LessonProgress).where(
            LessonProgress.lesson_id == lesson_id,
            LessonProgress.designer_id == designer_id,
        )
    )
    # Unmarking a lesson that was never viewed is a no-op
    if progress is not None:
        db.delete(progress)
        db.commit()
    return {"message": "Lesson marked as not viewed"}
