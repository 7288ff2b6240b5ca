"""
Database models for Studio Tracker.

Importing this package registers every table on ``Base.metadata``.
"""

from .user import User, UserRole
from .admin import AdminLog, AdminAction
from .art_type import ArtType
from .demand import Demand, DemandItem
from .work_session import WorkSession
from .feedback import Feedback
from .lesson import Lesson, LessonProgress
from .award import Award
from .link import UsefulLink, Tag, link_tags
from .settings import SystemSettings
from .notification import (
    DesignerNotification,
    NotificationType,
    CalendarObservation,
    ObservationType,
)

__all__ = [
    "User",
    "UserRole",
    "AdminLog",
    "AdminAction",
    "ArtType",
    "Demand",
    "DemandItem",
    "WorkSession",
    "Feedback",
    "Lesson",
    "LessonProgress",
    "Award",
    "UsefulLink",
    "Tag",
    "link_tags",
    "SystemSettings",
    "DesignerNotification",
    "NotificationType",
    "CalendarObservation",
    "ObservationType",
]
