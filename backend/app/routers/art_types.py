"""
Art type catalogue router.
"""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy import select, func, update
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.art_type import ArtType
from app.models.demand import DemandItem
from app.models.user import User
from app.models.admin import AdminAction
from app.routers.auth import get_current_user, get_current_admin_user
from app.schemas.art_type import ArtTypeCreate, ArtTypeUpdate, ArtTypeResponse, ArtTypeReorder
from app.schemas.base import MessageResponse
from app.services import audit


router = APIRouter()


def _get_art_type_or_404(db: Session, art_type_id: int) -> ArtType:
    art_type = db.get(ArtType, art_type_id)
    if not art_type:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Art type not found"
        )
    return art_type


@router.get("/", response_model=List[ArtTypeResponse])
async def list_art_types(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[ArtType]:
    return list(db.scalars(select(ArtType).order_by(ArtType.order, ArtType.id)))


@router.post("/", response_model=ArtTypeResponse, status_code=status.HTTP_201_CREATED)
async def create_art_type(
    art_type_data: ArtTypeCreate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> ArtType:
    """
    Add an art type at the end of the catalogue.
    """
    max_order = db.scalar(select(func.max(ArtType.order)))
    art_type = ArtType(
        label=art_type_data.label.strip(),
        points=art_type_data.points,
        order=0 if max_order is None else max_order + 1
    )
    db.add(art_type)
    db.flush()

    audit.record(
        db, request, current_admin.id, AdminAction.CREATE, "art_type", art_type.id,
        details={"label": art_type.label, "points": art_type.points},
    )
    db.commit()
    db.refresh(art_type)
    return art_type


@router.put("/reorder", response_model=MessageResponse)
async def reorder_art_types(
    reorder: ArtTypeReorder,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    """
    Apply a new ordering in one transaction. Nothing changes if any id is unknown.
    """
    ids = [entry.id for entry in reorder.art_types]
    art_types = {a.id: a for a in db.scalars(select(ArtType).where(ArtType.id.in_(ids)))}
    missing = [art_type_id for art_type_id in ids if art_type_id not in art_types]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Art type(s) not found: {', '.join(map(str, missing))}"
        )

    for entry in reorder.art_types:
        art_types[entry.id].order = entry.order

    audit.record(
        db, request, current_admin.id, AdminAction.REORDER, "art_type",
        details={"order": {str(e.id): e.order for e in reorder.art_types}},
    )
    db.commit()
    return {"message": "Art types reordered"}


@router.put("/{art_type_id}", response_model=ArtTypeResponse)
async def update_art_type(
    art_type_id: int,
    art_type_update: ArtTypeUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> ArtType:
    art_type = _get_art_type_or_404(db, art_type_id)

    changes = {}
    for field, value in art_type_update.model_dump(exclude_unset=True).items():
        if value is None:
            continue
        old_value = getattr(art_type, field)
        if old_value != value:
            setattr(art_type, field, value)
            changes[field] = {"old": old_value, "new": value}

    if changes:
        audit.record(
            db, request, current_admin.id, AdminAction.UPDATE, "art_type", art_type.id,
            details={"changes": changes},
        )
    db.commit()
    db.refresh(art_type)
    return art_type


@router.delete("/{art_type_id}", response_model=MessageResponse)
async def delete_art_type(
    art_type_id: int,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> dict:
    """
    Remove an art type. Past demands keep their snapshot of it.
    """
    art_type = _get_art_type_or_404(db, art_type_id)

    audit.record(
        db, request, current_admin.id, AdminAction.DELETE, "art_type", art_type.id,
        details={"label": art_type.label},
    )
    db.execute(
        update(DemandItem).where(DemandItem.art_type_id == art_type.id).values(art_type_id=None)
    )
    db.delete(art_type)
    db.commit()
    return {"message": "Art type deleted"}
