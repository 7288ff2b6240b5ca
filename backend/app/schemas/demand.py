"""
Demand schemas.

Clients send art type ids and quantities only; labels, unit points and all
totals are filled in by the server.
"""

from typing import List, Optional
from pydantic import Field

from .base import CamelModel


class DemandItemIn(CamelModel):
    art_type_id: int
    # Bounds are checked when pricing so they answer 400 like other demand errors
    quantity: int = 1
    variation_quantity: int = 0


class DemandItemResponse(CamelModel):
    art_type_id: Optional[int] = None
    art_type_label: str
    points_per_unit: int
    quantity: int
    variation_quantity: int
    variation_points: int
    total_points: int


class DemandCreate(CamelModel):
    user_id: int
    items: List[DemandItemIn]
    timestamp: Optional[int] = Field(None, ge=0)


class DemandUpdate(CamelModel):
    items: List[DemandItemIn]
    timestamp: Optional[int] = Field(None, ge=0)


class DemandResponse(CamelModel):
    id: int
    user_id: int
    user_name: str
    items: List[DemandItemResponse]
    total_quantity: int
    total_points: int
    timestamp: int
    execution_code: Optional[str] = None
