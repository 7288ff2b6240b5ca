"""
Work session schemas.
"""

from .base import CamelModel


class WorkSessionCreate(CamelModel):
    user_id: int


class WorkSessionResponse(CamelModel):
    id: int
    user_id: int
    timestamp: int
