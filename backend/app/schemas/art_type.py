"""
Art type schemas.
"""

from typing import List, Optional
from pydantic import Field

from .base import CamelModel


class ArtTypeResponse(CamelModel):
    id: int
    label: str
    points: int
    order: int


class ArtTypeCreate(CamelModel):
    label: str = Field(..., min_length=1, max_length=120)
    points: int = Field(..., ge=0)


class ArtTypeUpdate(CamelModel):
    label: Optional[str] = Field(None, min_length=1, max_length=120)
    points: Optional[int] = Field(None, ge=0)
    order: Optional[int] = Field(None, ge=0)


class ArtTypeOrder(CamelModel):
    id: int
    order: int = Field(..., ge=0)


class ArtTypeReorder(CamelModel):
    art_types: List[ArtTypeOrder]
