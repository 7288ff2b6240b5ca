"""
Designer notification and calendar observation schemas.
"""

from typing import Optional

from app.models.notification import NotificationType, ObservationType
from .base import CamelModel


class NotificationCreate(CamelModel):
    designer_id: int
    type: NotificationType = NotificationType.COMMON
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    enabled: bool = True


class NotificationUpdate(CamelModel):
    designer_id: Optional[int] = None
    type: Optional[NotificationType] = None
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    enabled: Optional[bool] = None


class NotificationToggle(CamelModel):
    enabled: bool


class NotificationResponse(CamelModel):
    id: int
    designer_id: int
    designer_name: Optional[str] = None
    type: NotificationType
    h1: Optional[str] = None
    h2: Optional[str] = None
    h3: Optional[str] = None
    enabled: bool
    created_at: int
    updated_at: int


class ObservationCreate(CamelModel):
    # Missing values are reported as 400 by the endpoint
    designer_id: Optional[int] = None
    date: Optional[str] = None
    note: Optional[str] = None
    type: ObservationType = ObservationType.NOTE


class ObservationUpdate(CamelModel):
    designer_id: Optional[int] = None
    date: Optional[str] = None
    note: Optional[str] = None
    type: Optional[ObservationType] = None


class ObservationResponse(CamelModel):
    id: int
    designer_id: int
    designer_name: Optional[str] = None
    date: str
    note: str
    type: ObservationType
    created_at: int
    updated_at: int
