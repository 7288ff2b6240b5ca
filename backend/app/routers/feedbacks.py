"""
Feedback router: admins review designers' work, designers read and reply.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.admin import AdminAction
from app.models.feedback import Feedback
from app.models.user import User
from app.routers.auth import get_current_user, get_current_admin_user, ensure_owner_or_admin
from app.schemas.base import MessageResponse
from app.schemas.feedback import FeedbackCreate, FeedbackReply, FeedbackResponse
from app.services import audit


router = APIRouter()


def _get_feedback_or_404(db: Session, feedback_id: int) -> Feedback:
    feedback = db.get(Feedback, feedback_id)
    if not feedback:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Feedback not found"
        )
    return feedback


@router.get("/", response_model=List[FeedbackResponse])
async def list_feedbacks(
    designer_id: Optional[int] = Query(None, alias="designerId"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[Feedback]:
    if not current_user.is_admin:
        if designer_id is not None:
            ensure_owner_or_admin(current_user, designer_id)
        designer_id = current_user.id

    query = select(Feedback)
    if designer_id is not None:
        query = query.where(Feedback.designer_id == designer_id)
    return list(db.scalars(query.order_by(Feedback.created_at.desc(), Feedback.id.desc())))


@router.post("/", response_model=FeedbackResponse, status_code=status.HTTP_201_CREATED)
async def create_feedback(
    feedback_data: FeedbackCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Feedback:
    designer = db.get(User, feedback_data.designer_id)
    if not designer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Designer not found"
        )

    feedback = Feedback(
        designer_id=designer.id,
        designer_name=designer.name,
        admin_name=current_admin.name,
        image_urls=feedback_data.image_urls,
        comment=feedback_data.comment,
    )
    db.add(feedback)
    db.flush()

    audit.record(
        db, request, current_admin.id, AdminAction.CREATE, "feedback", feedback.id,
        details={"designer_id": designer.id, "images": len(feedback_data.image_urls)},
    )
    db.commit()
    db.refresh(feedback)
    return feedback


@router.put("/{feedback_id}/view", response_model=FeedbackResponse)
async def mark_feedback_viewed(
    feedback_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Feedback:
    feedback = _get_feedback_or_404(db, feedback_id)
    ensure_owner_or_admin(current_user, feedback.designer_id)

    if not feedback.viewed:
        feedback.mark_viewed()
        db.commit()
        db.refresh(feedback)
    return feedback


@router.put("/{feedback_id}/response", response_model=FeedbackResponse)
async def respond_to_feedback(
    feedback_id: int,
    reply: FeedbackReply,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Feedback:
    feedback = _get_feedback_or_404(db, feedback_id)
    ensure_owner_or_admin(current_user, feedback.designer_id)

    feedback.respond(reply.response.strip())
    db.commit()
    db.refresh(feedback)
    return feedback


@router.delete("/{feedback_id}", response_model=MessageResponse)
async def delete_feedback(
    feedback_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    feedback = _get_feedback_or_404(db, feedback_id)

    audit.record(db, request, current_admin.id, AdminAction.DELETE, "feedback", feedback.id)
    db.delete(feedback)
    db.commit()
    return {"message": "Feedback deleted"}
