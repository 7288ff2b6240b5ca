"""
Demands router for Studio Tracker.

Designers log finished work here. The server prices every item, totals the
demand and keeps each designer's daily execution codes in sequence.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from app.core.database import get_db
from app.core.timeutils import local_date, now_ms
from app.models.admin import AdminAction
from app.models.demand import Demand
from app.models.settings import SystemSettings
from app.models.user import User
from app.routers.auth import get_current_user, ensure_owner_or_admin
from app.schemas.base import MessageResponse
from app.schemas.demand import DemandCreate, DemandUpdate, DemandResponse
from app.services import audit
from app.services.demands import InvalidDemand, build_items, execution_code_for, renumber_day


logger = logging.getLogger(__name__)

router = APIRouter()


def _get_demand_or_404(db: Session, demand_id: int) -> Demand:
    demand = db.get(Demand, demand_id, options=[selectinload(Demand.items)])
    if not demand:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Demand not found"
        )
    return demand


def _price(db: Session, items_in) -> tuple:
    variation_points = SystemSettings.get_instance(db).variation_points
    try:
        return build_items(db, items_in, variation_points)
    except InvalidDemand as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )


@router.get("/", response_model=List[DemandResponse])
async def list_demands(
    user_id: Optional[int] = Query(None, alias="userId"),
    start_date: Optional[int] = Query(None, alias="startDate", description="Epoch milliseconds, inclusive"),
    end_date: Optional[int] = Query(None, alias="endDate", description="Epoch milliseconds, inclusive"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> List[Demand]:
    """
    List demands, newest first. Designers only see their own.
    """
    if not current_user.is_admin:
        if user_id is not None:
            ensure_owner_or_admin(current_user, user_id)
        user_id = current_user.id

    query = select(Demand).options(selectinload(Demand.items))
    if user_id is not None:
        query = query.where(Demand.user_id == user_id)
    if start_date is not None:
        query = query.where(Demand.timestamp >= start_date)
    if end_date is not None:
        query = query.where(Demand.timestamp <= end_date)

    return list(db.scalars(query.order_by(Demand.timestamp.desc(), Demand.id.desc())))


@router.get("/{demand_id}", response_model=DemandResponse)
async def get_demand(
    demand_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Demand:
    demand = _get_demand_or_404(db, demand_id)
    ensure_owner_or_admin(current_user, demand.user_id)
    return demand


@router.post("/", response_model=DemandResponse, status_code=status.HTTP_201_CREATED)
async def create_demand(
    demand_data: DemandCreate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Demand:
    """
    Log a demand. Totals and the execution code are computed here.
    """
    ensure_owner_or_admin(current_user, demand_data.user_id)

    designer = db.get(User, demand_data.user_id)
    if not designer:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    items, total_quantity, total_points = _price(db, demand_data.items)
    timestamp = demand_data.timestamp if demand_data.timestamp is not None else now_ms()

    demand = Demand(
        user_id=designer.id,
        user_name=designer.name,
        items=items,
        total_quantity=total_quantity,
        total_points=total_points,
        timestamp=timestamp,
        execution_code=execution_code_for(db, designer.id, timestamp),
    )
    db.add(demand)
    db.flush()
    renumber_day(db, designer.id, local_date(timestamp))

    if current_user.is_admin:
        audit.record(
            db, request, current_user.id, AdminAction.CREATE, "demand", demand.id,
            details={"user_id": designer.id, "total_points": total_points},
        )
    db.commit()
    db.refresh(demand)

    logger.info(
        f"Demand {demand.id} logged for {designer.name}: "
        f"{total_quantity} arts, {total_points} points, code {demand.execution_code}"
    )
    return demand


@router.put("/{demand_id}", response_model=DemandResponse)
async def update_demand(
    demand_id: int,
    demand_update: DemandUpdate,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Demand:
    """
    Replace a demand's items and recompute its totals.
    """
    demand = _get_demand_or_404(db, demand_id)
    ensure_owner_or_admin(current_user, demand.user_id)

    items, total_quantity, total_points = _price(db, demand_update.items)
    old_day = local_date(demand.timestamp)

    demand.items = items
    demand.total_quantity = total_quantity
    demand.total_points = total_points
    if demand_update.timestamp is not None:
        demand.timestamp = demand_update.timestamp
    db.flush()

    new_day = local_date(demand.timestamp)
    renumber_day(db, demand.user_id, new_day)
    if new_day != old_day:
        renumber_day(db, demand.user_id, old_day)

    if current_user.is_admin:
        audit.record(
            db, request, current_user.id, AdminAction.UPDATE, "demand", demand.id,
            details={"total_points": total_points, "total_quantity": total_quantity},
        )
    db.commit()
    db.refresh(demand)
    return demand


@router.delete("/{demand_id}", response_model=MessageResponse)
async def delete_demand(
    demand_id: int,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> dict:
    """
    Delete a demand and close the gap in that day's execution codes.
    """
    demand = _get_demand_or_404(db, demand_id)
    ensure_owner_or_admin(current_user, demand.user_id)

    user_id, day = demand.user_id, local_date(demand.timestamp)
    db.delete(demand)
    db.flush()
    renumber_day(db, user_id, day)

    if current_user.is_admin:
        audit.record(db, request, current_user.id, AdminAction.DELETE, "demand", demand_id)
    db.commit()

    logger.info(f"Demand {demand_id} deleted for user {user_id}")
    return {"message": "Demand deleted"}
