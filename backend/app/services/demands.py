"""
Demand bookkeeping: point totals and per-day execution codes.
"""

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.core.timeutils import day_end_ms, day_start_ms, local_date
from app.models.art_type import ArtType
from app.models.demand import Demand, DemandItem
from app.schemas.demand import DemandItemIn


logger = logging.getLogger(__name__)


# Keyed by date.weekday(): Monday is 0
DAY_CODES = {
    0: "S",   # segunda
    1: "T",   # terça
    2: "QA",  # quarta
    3: "QI",  # quinta
    4: "SX",  # sexta
    5: "SB",  # sábado
    6: "D",   # domingo
}


class InvalidDemand(ValueError):
    """Raised when a demand cannot be built from the submitted items."""


def day_code(day: date) -> str:
    return DAY_CODES[day.weekday()]


def build_items(
    db: Session,
    items_in: Iterable[DemandItemIn],
    variation_points: int,
) -> Tuple[List[DemandItem], int, int]:
    """
    Price the submitted items against the current art type catalogue.

    Args:
        db: Database session
        items_in: Items as sent by the client
        variation_points: Points granted per variation (from system settings)

    Returns:
        Tuple of (items, total quantity, total points). Variation art types
        add points but are left out of the quantity.

    Raises:
        InvalidDemand: If the list is empty, a quantity is out of range or
            an art type does not exist
    """
    items_in = list(items_in)
    if not items_in:
        raise InvalidDemand("A demand needs at least one item")
    if any(item.quantity < 1 or item.variation_quantity < 0 for item in items_in):
        raise InvalidDemand("Quantities must be at least 1 and variations cannot be negative")

    ids = {item.art_type_id for item in items_in}
    art_types: Dict[int, ArtType] = {
        a.id: a for a in db.scalars(select(ArtType).where(ArtType.id.in_(ids)))
    }
    missing = sorted(ids - art_types.keys())
    if missing:
        raise InvalidDemand(f"Unknown art type(s): {', '.join(map(str, missing))}")

    items: List[DemandItem] = []
    total_quantity = 0
    total_points = 0
    for item_in in items_in:
        art_type = art_types[item_in.art_type_id]
        item_variation_points = item_in.variation_quantity * variation_points
        item_total = art_type.points * item_in.quantity + item_variation_points
        items.append(DemandItem(
            art_type_id=art_type.id,
            art_type_label=art_type.label,
            points_per_unit=art_type.points,
            quantity=item_in.quantity,
            variation_quantity=item_in.variation_quantity,
            variation_points=item_variation_points,
            total_points=item_total,
        ))
        total_points += item_total
        if not art_type.is_variation:
            total_quantity += item_in.quantity

    return items, total_quantity, total_points


def execution_code_for(
    db: Session,
    user_id: int,
    timestamp: int,
    exclude_id: Optional[int] = None,
) -> str:
    """Day code plus one more than the designer's demands earlier that day."""
    day = local_date(timestamp)
    query = select(func.count(Demand.id)).where(
        Demand.user_id == user_id,
        Demand.timestamp >= day_start_ms(day),
        Demand.timestamp < timestamp,
    )
    if exclude_id is not None:
        query = query.where(Demand.id != exclude_id)
    earlier = db.scalar(query) or 0
    return f"{day_code(day)}{earlier + 1}"


def renumber_day(db: Session, user_id: int, day: date) -> int:
    """
    Rewrite a designer's execution codes for one day as 1..n by timestamp.

    Pending changes must be flushed first.

    Returns:
        int: Number of demands whose code changed
    """
    demands = db.scalars(
        select(Demand)
        .where(
            Demand.user_id == user_id,
            Demand.timestamp >= day_start_ms(day),
            Demand.timestamp <= day_end_ms(day),
        )
        .order_by(Demand.timestamp.asc(), Demand.id.asc())
    ).all()

    code = day_code(day)
    changed = 0
    for position, demand in enumerate(demands, start=1):
        expected = f"{code}{position}"
        if demand.execution_code != expected:
            demand.execution_code = expected
            changed += 1

    if changed:
        logger.info(f"Renumbered {changed} execution code(s) for user {user_id} on {day.isoformat()}")
    return changed
