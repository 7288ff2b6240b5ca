"""
Aggregations behind the admin dashboard, history, charts and awards pages.

Demands are summed per designer with SQL. Anything grouped by local
calendar day is folded in Python, because the day boundary depends on the
studio timezone rather than the database's.
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.timeutils import local_date, to_local
from app.models.award import Award
from app.models.demand import Demand
from app.models.settings import SystemSettings
from app.models.user import User, UserRole
from app.models.work_session import WorkSession
from app.services.periods import (
    DateRange,
    SUNDAY,
    month_range,
    week_range,
    weekly_buckets,
    working_days,
    year_range,
)


CHART_PALETTE = ["#4F46E5", "#06b6d4", "#ec4899", "#f59e0b", "#10b981", "#8b5cf6"]

MONTH_LABELS = ["Jan", "Fev", "Mar", "Abr", "Mai", "Jun", "Jul", "Ago", "Set", "Out", "Nov", "Dez"]

WEEKDAY_LABELS = ["Segunda", "Terça", "Quarta", "Quinta", "Sexta", "Sab", "Dom"]


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round .5 away from zero, unlike the built-in banker's rounding."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


@dataclass
class Totals:
    points: int = 0
    arts: int = 0
    demands: int = 0

    def add(self, points: int, arts: int, demands: int = 1) -> None:
        self.points += points
        self.arts += arts
        self.demands += demands


def list_designers(db: Session, active_only: bool = True) -> List[User]:
    query = select(User).where(User.role == UserRole.DESIGNER.value)
    if active_only:
        query = query.where(User.active.is_(True))
    return list(db.scalars(query.order_by(User.name)))


def designer_colors(designers: List[User]) -> Dict[int, str]:
    """Chart colour per designer id, falling back to the palette by position."""
    return {
        designer.id: designer.chart_color(CHART_PALETTE[index % len(CHART_PALETTE)])
        for index, designer in enumerate(designers)
    }


def _totals_by_designer(db: Session, rng: DateRange, designer_id: Optional[int] = None) -> Dict[int, Totals]:
    query = (
        select(
            Demand.user_id,
            func.coalesce(func.sum(Demand.total_points), 0),
            func.coalesce(func.sum(Demand.total_quantity), 0),
            func.count(Demand.id),
        )
        .where(Demand.timestamp >= rng.start_ms, Demand.timestamp <= rng.end_ms)
        .group_by(Demand.user_id)
    )
    if designer_id is not None:
        query = query.where(Demand.user_id == designer_id)
    return {
        user_id: Totals(int(points), int(arts), int(count))
        for user_id, points, arts, count in db.execute(query)
    }


def _demand_rows(db: Session, rng: DateRange, designer_id: Optional[int] = None):
    query = select(
        Demand.user_id, Demand.timestamp, Demand.total_points, Demand.total_quantity
    ).where(Demand.timestamp >= rng.start_ms, Demand.timestamp <= rng.end_ms)
    if designer_id is not None:
        query = query.where(Demand.user_id == designer_id)
    return db.execute(query).all()


def _totals_by_day_and_designer(db: Session, rng: DateRange, designer_id: Optional[int] = None):
    totals: Dict[date, Dict[int, Totals]] = defaultdict(lambda: defaultdict(Totals))
    for user_id, timestamp, points, arts in _demand_rows(db, rng, designer_id):
        totals[local_date(timestamp)][user_id].add(points, arts)
    return totals


def dashboard_name(name: str) -> str:
    """Person part of a "Studio - Person" account name, else the whole name."""
    if " - " in name:
        person = name.split(" - ", 1)[1].strip()
        if person:
            return person
    return name


def _top_performer(db: Session, by_designer: Dict[int, Totals]) -> Dict[str, Any]:
    """
    Highest scorer among everyone with demands in range, inactive accounts
    included. Ties go to the lowest user id.
    """
    top = {"name": "-", "points": 0}
    for user_id in sorted(by_designer):
        points = by_designer[user_id].points
        if points > top["points"]:
            user = db.get(User, user_id)
            top = {"name": dashboard_name(user.name) if user else "Designer", "points": points}
    return top


def dashboard_stats(
db: Session, rng: DateRange, designer_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Headline numbers and per-designer rows for a range.

    Args:
        db: Database session
        rng: Range to aggregate
        designer_id: Restrict to one designer

    Returns:
        Dict[str, Any]: Totals, top performer and per-designer averages
        over the working days of the range
    """
    designers = list_designers(db)
    colors = designer_colors(designers)
    by_designer = _totals_by_designer(db, rng, designer_id)
    days = working_days(rng)

    rows = []
    for designer in designers:
        if designer_id is not None and designer.id != designer_id:
            continue
        totals = by_designer.get(designer.id, Totals())
        if totals.points == 0 and totals.arts == 0:
            continue
        rows.append({
            "id": designer.id,
            "name": dashboard_name(designer.name),
            "fullName": designer.name,
            "points": totals.points,
            "arts": totals.arts,
            "demands": totals.demands,
            "avgPoints": int(round_half_up(totals.points / days)),
            "avgArts": round_half_up(totals.arts / days, 1),
            "color": colors[designer.id],
        })

    return {
        "range": rng.to_dict(),
        "workingDays": days,
        "totalPoints": sum(t.points for t in by_designer.values()),
        "totalArts": sum(t.arts for t in by_designer.values()),
        "totalDemands": sum(t.demands for t in by_designer.values()),
        "topPerformer": _top_performer(db, by_designer),
        "designers": rows,
    }


def performance_status(arts_today: int, daily_goal: int) -> Dict[str, Any]:
    """Classify a designer's day against the goal."""
    goal = daily_goal or settings.DASHBOARD_DAILY_GOAL_FALLBACK
    percentage = int(round_half_up(arts_today / goal * 100))
    if percentage >= 100:
        status, message = "success", "Meta alcançada! Excelente trabalho!"
    elif percentage >= 70:
        status, message = "warning", "Você está quase lá, continue!"
    else:
        status, message = "neutral", "Continue produzindo!"
    return {
        "status": status,
        "percentage": percentage,
        "message": message,
        "artsToday": arts_today,
        "goal": goal,
    }


def daily_performance(db: Session, designer_id: int, day: date) -> Dict[str, Any]:
    totals = _totals_by_designer(db, DateRange(day, day), designer_id).get(designer_id, Totals())
    system = SystemSettings.get_instance(db)
    return performance_status(totals.arts, system.daily_art_goal)


def daily_goal_chart(db: Session, day: date) -> Dict[str, Any]:
    """Designers who met the daily art goal on each working day of ``day``'s week."""
    rng = week_range(day, include_sunday=False)
    system = SystemSettings.get_instance(db)
    goal = system.daily_art_goal or settings.DEFAULT_DAILY_ART_GOAL

    designers = list_designers(db, active_only=False)
    names = {d.id: d.short_name for d in designers}
    colors = designer_colors(designers)
    per_day = _totals_by_day_and_designer(db, rng)

    days = []
    for current in rng.days():
        achievers = [
            {
                "designerId": user_id,
                "designerName": names.get(user_id, "Designer"),
                "arts": totals.arts,
                "color": colors.get(user_id, CHART_PALETTE[0]),
            }
            for user_id, totals in per_day.get(current, {}).items()
            if totals.arts >= goal
        ]
        achievers.sort(key=lambda entry: entry["arts"], reverse=True)
        days.append({
            "date": current.isoformat(),
            "label": WEEKDAY_LABELS[current.weekday()],
            "designers": achievers,
        })

    return {"range": rng.to_dict(), "dailyGoal": goal, "days": days}


def session_history(db: Session, rng: DateRange, designer_id: Optional[int] = None) -> Dict[str, Any]:
    """
    One row per designer per day: first clock-in plus that day's output.

    Returns:
        Dict[str, Any]: Rows sorted by clock-in time, newest first, and range totals
    """
    query = select(WorkSession).where(
        WorkSession.timestamp >= rng.start_ms,
        WorkSession.timestamp <= rng.end_ms,
    )
    if designer_id is not None:
        query = query.where(WorkSession.user_id == designer_id)

    first_sessions: Dict[tuple, WorkSession] = {}
    for session in db.scalars(query):
        key = (session.user_id, local_date(session.timestamp))
        current = first_sessions.get(key)
        if current is None or session.timestamp < current.timestamp:
            first_sessions[key] = session

    names = {u.id: u.name for u in db.scalars(select(User))}
    per_day = _totals_by_day_and_designer(db, rng, designer_id)

    rows = []
    for (user_id, day), session in first_sessions.items():
        totals = per_day.get(day, {}).get(user_id, Totals())
        rows.append({
            "id": session.id,
            "userId": user_id,
            "userName": names.get(user_id, ""),
            "date": day.isoformat(),
            "startTime": to_local(session.timestamp).strftime("%H:%M"),
            "totalArts": totals.arts,
            "totalPoints": totals.points,
            "timestamp": session.timestamp,
        })
    rows.sort(key=lambda row: row["timestamp"], reverse=True)

    range_totals = Totals()
    for totals in _totals_by_designer(db, rng, designer_id).values():
        range_totals.add(totals.points, totals.arts, totals.demands)

    return {
        "range": rng.to_dict(),
        "rows": rows,
        "totalArts": range_totals.arts,
        "totalPoints": range_totals.points,
        "totalDemands": range_totals.demands,
    }


def _designer_breakdown(designers: List[User], totals: Dict[int, Totals]) -> List[Dict[str, Any]]:
    return [
        {"designerId": d.id, "name": d.short_name, "arts": totals[d.id].arts, "points": totals[d.id].points}
        for d in designers
        if d.id in totals
    ]


def monthly_productivity(db: Session, year: int, designer_id: Optional[int] = None) -> List[Dict[str, Any]]:
    """Twelve monthly buckets for ``year``."""
    designers = list_designers(db, active_only=False)
    months: List[Dict[int, Totals]] = [defaultdict(Totals) for _ in range(12)]
    for user_id, timestamp, points, arts in _demand_rows(db, year_range(year), designer_id):
        months[to_local(timestamp).month - 1][user_id].add(points, arts)

    result = []
    for index, per_designer in enumerate(months):
        result.append({
            "month": index + 1,
            "label": MONTH_LABELS[index],
            "arts": sum(t.arts for t in per_designer.values()),
            "points": sum(t.points for t in per_designer.values()),
            "demands": sum(t.demands for t in per_designer.values()),
            "designers": _designer_breakdown(designers, per_designer),
        })
    return result


def yearly_productivity(db: Session, year: int, designer_id: Optional[int] = None) -> Dict[str, Any]:
    """Year totals, overall and per designer, with the average arts per month."""
    designers = list_designers(db, active_only=False)
    colors = designer_colors(designers)
    by_designer = _totals_by_designer(db, year_range(year), designer_id)

    rows = []
    for designer in designers:
        totals = by_designer.get(designer.id)
        if totals is None or (totals.arts == 0 and totals.points == 0):
            continue
        rows.append({
            "designerId": designer.id,
            "name": designer.short_name,
            "fullName": designer.name,
            "arts": totals.arts,
            "points": totals.points,
            "demands": totals.demands,
            "avgMonthlyArts": int(round_half_up(totals.arts / 12)),
            "color": colors[designer.id],
        })

    arts = sum(t.arts for t in by_designer.values())
    return {
        "year": year,
        "arts": arts,
        "points": sum(t.points for t in by_designer.values()),
        "demands": sum(t.demands for t in by_designer.values()),
        "avgMonthlyArts": int(round_half_up(arts / 12)),
        "designers": rows,
    }


def weekly_productivity(db: Session, year: int, month: int, designer_id: Optional[int] = None) -> List[Dict[str, Any]]:
    """Monday to Saturday buckets of a month; Sunday work is not counted."""
    designers = list_designers(db, active_only=False)
    buckets = weekly_buckets(year, month)
    per_day = _totals_by_day_and_designer(db, month_range(year, month), designer_id)

    result = []
    for bucket in buckets:
        per_designer: Dict[int, Totals] = defaultdict(Totals)
        for day in bucket.range.days():
            if day.weekday() == SUNDAY:
                continue
            for user_id, totals in per_day.get(day, {}).items():
                per_designer[user_id].add(totals.points, totals.arts, totals.demands)
        result.append({
            "week": bucket.number,
            "label": bucket.label,
            "startDate": bucket.range.first_day.isoformat(),
            "endDate": bucket.range.last_day.isoformat(),
            "arts": sum(t.arts for t in per_designer.values()),
            "points": sum(t.points for t in per_designer.values()),
            "designers": _designer_breakdown(designers, per_designer),
        })
    return result


def awards_chart_data(db: Session, reference: date) -> List[Dict[str, Any]]:
    """Points per active designer for the month of ``reference``, best first."""
    designers = list_designers(db)
    colors = designer_colors(designers)
    by_designer = _totals_by_designer(db, month_range(reference.year, reference.month))

    entries = [
        {
            "designerId": designer.id,
            "name": designer.short_name,
            "points": by_designer[designer.id].points,
            "color": colors[designer.id],
        }
        for designer in designers
        if designer.id in by_designer and by_designer[designer.id].points > 0
    ]
    entries.sort(key=lambda entry: entry["points"], reverse=True)
    return entries


def awards_ranking(db: Session, limit: int = 5) -> List[Dict[str, Any]]:
    """Designers with the most awards."""
    count = func.count(Award.id).label("awards")
    query = (
        select(Award.designer_id, func.max(Award.designer_name), count)
        .group_by(Award.designer_id)
        .order_by(count.desc(), func.max(Award.designer_name))
        .limit(limit)
    )
    return [
        {"designerId": designer_id, "designerName": name, "awards": awards}
        for designer_id, name, awards in db.execute(query)
    ]
