"""
Awards router: monthly recognitions and the data behind the awards page.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.admin import AdminAction
from app.models.award import Award
from app.models.settings import SystemSettings
from app.models.user import User
from app.routers.auth import get_current_user, get_current_admin_user
from app.schemas.award import AwardCreate, AwardResponse, AwardChartEntry, AwardRankingEntry
from app.schemas.base import MessageResponse
from app.services import analytics, audit
from app.services.periods import today


router = APIRouter()


def _flag_awards_updated(db: Session) -> None:
    SystemSettings.get_instance(db).awards_has_updates = True


@router.get("/", response_model=List[AwardResponse])
async def list_awards(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[Award]:
    return list(db.scalars(select(Award).order_by(Award.created_at.desc(), Award.id.desc())))


@router.get("/chart-data", response_model=List[AwardChartEntry])
async def get_awards_chart_data(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> list:
    """
    Points per active designer for the current month, best first.
    """
    return analytics.awards_chart_data(db, today())


@router.get("/ranking", response_model=List[AwardRankingEntry])
async def get_awards_ranking(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> list:
    """
    Top five designers by number of awards.
    """
    return analytics.awards_ranking(db)


@router.put("/reset-updates", response_model=MessageResponse)
async def reset_award_updates(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> dict:
    """
    Clear the "news on the awards page" flag once it has been seen.
    """
    SystemSettings.get_instance(db).awards_has_updates = False
    db.commit()
    return {"message": "Award updates cleared"}


@router.post("/", response_model=AwardResponse, status_code=status.HTTP_201_CREATED)
async def create_award(
    award_data: AwardCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Award:
    designer = db.get(User, award_data.designer_id)
    if not designer:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Designer does not exist"
        )

    award = Award(
        designer_id=designer.id,
        designer_name=designer.name,
        month=award_data.month.strip(),
        description=award_data.description,
        image_url=award_data.image_url,
    )
    db.add(award)
    _flag_awards_updated(db)
    db.flush()

    audit.record(
        db, request, current_admin.id, AdminAction.CREATE, "award", award.id,
        details={"designer_id": designer.id, "month": award.month},
    )
    db.commit()
    db.refresh(award)
    return award


@router.delete("/{award_id}", response_model=MessageResponse)
async def delete_award(
    award_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    award = db.get(Award, award_id)
    if not award:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Award not found"
        )

    audit.record(db, request, current_admin.id, AdminAction.DELETE, "award", award.id)
    db.delete(award)
    _flag_awards_updated(db)
    db.commit()
    return {"message": "Award deleted"}
