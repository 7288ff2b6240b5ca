"""
Analytics router: dashboard numbers, history and productivity charts.

Everything is computed server-side from demands and work sessions.
"""

from datetime import date
from typing import Optional, Dict, Any, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.user import User
from app.routers.auth import get_current_user, get_current_admin_user, ensure_owner_or_admin
from app.services import analytics
from app.services.periods import Period, resolve_period, today


router = APIRouter()


@router.get("/dashboard")
async def get_dashboard(
    period: Period = Query(Period.TODAY),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    designer_id: Optional[int] = Query(None, alias="designerId"),
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    rng = resolve_period(period, start_date, end_date)
    return analytics.dashboard_stats(db, rng, designer_id)


@router.get("/daily-performance/{designer_id}")
async def get_daily_performance(
    designer_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    Today's arts for a designer against the daily goal.
    """
    ensure_owner_or_admin(current_user, designer_id)
    return analytics.daily_performance(db, designer_id, today())


@router.get("/daily-goal-chart")
async def get_daily_goal_chart(
    day: Optional[date] = Query(None, alias="date"),
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    return analytics.daily_goal_chart(db, day or today())


@router.get("/history")
async def get_history(
    period: Period = Query(Period.TODAY),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    designer_id: Optional[int] = Query(None, alias="designerId"),
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    """
    First clock-in per designer per day, with that day's production.
    """
    rng = resolve_period(period, start_date, end_date)
    return analytics.session_history(db, rng, designer_id)


@router.get("/productivity/monthly")
async def get_monthly_productivity(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    designer_id: Optional[int] = Query(None, alias="designerId"),
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> List[Dict[str, Any]]:
    return analytics.monthly_productivity(db, year or today().year, designer_id)


@router.get("/productivity/yearly")
async def get_yearly_productivity(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    designer_id: Optional[int] = Query(None, alias="designerId"),
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> Dict[str, Any]:
    return analytics.yearly_productivity(db, year or today().year, designer_id)


@router.get("/weekly")
async def get_weekly_productivity(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    designer_id: Optional[int] = Query(None, alias="designerId"),
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> List[Dict[str, Any]]:
    """
    Monday to Saturday buckets of a month; defaults to the current month.
    """
    current = today()
    return analytics.weekly_productivity(db, year or current.year, month or current.month, designer_id)
