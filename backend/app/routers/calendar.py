"""
Calendar observations router (absences, events and notes per designer and day).
"""

import re
from datetime import date as date_type
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.database import get_db
from app.models.admin import AdminAction
from app.models.notification import CalendarObservation
from app.models.user import User
from app.routers.auth import get_current_admin_user
from app.schemas.base import MessageResponse
from app.schemas.notification import ObservationCreate, ObservationUpdate, ObservationResponse
from app.services import audit


router = APIRouter()

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _validate_date(value: str) -> str:
    if not DATE_PATTERN.match(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date must be in YYYY-MM-DD format"
        )
    try:
        date_type.fromisoformat(value)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Date must be in YYYY-MM-DD format"
        )
    return value


def _ensure_free_day(
    db: Session,
    designer_id: int,
    day: str,
    exclude_id: Optional[int] = None
) -> None:
    query = select(CalendarObservation.id).where(
        CalendarObservation.designer_id == designer_id,
        CalendarObservation.date == day,
    )
    if exclude_id is not None:
        query = query.where(CalendarObservation.id != exclude_id)
    if db.scalar(query) is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="An observation already exists for this designer on this date"
        )


@router.get("/", response_model=List[ObservationResponse])
async def list_observations(
    day: Optional[str] = Query(None, alias="date"),
    designer_id: Optional[int] = Query(None, alias="designerId"),
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> List[CalendarObservation]:
    query = select(CalendarObservation).options(selectinload(CalendarObservation.designer))
    if day:
        query = query.where(CalendarObservation.date == _validate_date(day))
    if designer_id is not None:
        query = query.where(CalendarObservation.designer_id == designer_id)
    return list(db.scalars(
        query.order_by(CalendarObservation.date.desc(), CalendarObservation.created_at.desc())
    ))


@router.get("/{observation_id}", response_model=ObservationResponse)
async def get_observation(
    observation_id: int,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> CalendarObservation:
    observation = db.get(CalendarObservation, observation_id)
    if not observation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Observation not found"
        )
    return observation


@router.post("/", response_model=ObservationResponse, status_code=status.HTTP_201_CREATED)
async def create_observation(
    observation_data: ObservationCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> CalendarObservation:
    note = (observation_data.note or "").strip()
    if observation_data.designer_id is None or not observation_data.date or not note:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="designerId, date and note are required"
        )
    day = _validate_date(observation_data.date)

    if not db.get(User, observation_data.designer_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Designer not found"
        )
    _ensure_free_day(db, observation_data.designer_id, day)

    observation = CalendarObservation(
        designer_id=observation_data.designer_id,
        date=day,
        note=note,
        type=observation_data.type.value,
    )
    db.add(observation)
    db.flush()

    audit.record(
        db, request, current_admin.id, AdminAction.CREATE, "calendar_observation", observation.id,
        details={"designer_id": observation.designer_id, "date": day, "type": observation.type},
    )
    db.commit()
    db.refresh(observation)
    return observation


@router.put("/{observation_id}", response_model=ObservationResponse)
async def update_observation(
    observation_id: int,
    observation_update: ObservationUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> CalendarObservation:
    """
    Partially update an observation; moving it onto a taken day is rejected.
    """
    observation = db.get(CalendarObservation, observation_id)
    if not observation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Observation not found"
        )

    update_data = {k: v for k, v in observation_update.model_dump(exclude_unset=True).items() if v is not None}
    if not update_data:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No fields to update"
        )

    if "date" in update_data:
        _validate_date(update_data["date"])
    if "note" in update_data:
        update_data["note"] = update_data["note"].strip()
        if not update_data["note"]:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Note cannot be empty"
            )
    if "designer_id" in update_data and not db.get(User, update_data["designer_id"]):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Designer not found"
        )
    if "type" in update_data:
        update_data["type"] = update_data["type"].value

    _ensure_free_day(
        db,
        update_data.get("designer_id", observation.designer_id),
        update_data.get("date", observation.date),
        exclude_id=observation.id,
    )

    for field, value in update_data.items():
        setattr(observation, field, value)

    audit.record(
        db, request, current_admin.id, AdminAction.UPDATE, "calendar_observation", observation.id,
        details={"fields": sorted(update_data)},
    )
    db.commit()
    db.refresh(observation)
    return observation


@router.delete("/{observation_id}", response_model=MessageResponse)
async def delete_observation(
    observation_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    observation = db.get(CalendarObservation, observation_id)
    if not observation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Observation not found"
        )

    audit.record(db, request, current_admin.id, AdminAction.DELETE, "calendar_observation", observation.id)
    db.delete(observation)
    db.commit()
    return {"message": "Observation deleted"}
