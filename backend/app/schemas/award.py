"""
Award schemas.
"""

from typing import Optional
from pydantic import Field

from .base import CamelModel


class AwardCreate(CamelModel):
    designer_id: int
    month: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    image_url: Optional[str] = None


class AwardResponse(CamelModel):
    id: int
    designer_id: int
    designer_name: str
    month: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    created_at: int


class AwardChartEntry(CamelModel):
    designer_id: int
    name: str
    points: int
    color: str


class AwardRankingEntry(CamelModel):
    designer_id: int
    designer_name: str
    awards: int
