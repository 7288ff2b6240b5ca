"""
Per-designer messages: banner notifications and calendar observations.
"""

from enum import Enum
from typing import Optional
from sqlalchemy import BigInteger, Boolean, Integer, String, Text, ForeignKey, UniqueConstraint, Index, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


class NotificationType(str, Enum):
    """Banner severity."""
    COMMON = "common"
    IMPORTANT = "important"
    URGENT = "urgent"


class ObservationType(str, Enum):
    """Kinds of calendar observations."""
    ABSENCE = "absence"
    EVENT = "event"
    NOTE = "note"


class DesignerNotification(Base):
    """
    Banner shown on a designer's dashboard, with up to three heading lines.
    """
    __tablename__ = "designer_notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    designer_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    type: Mapped[str] = mapped_column(String(20), default=NotificationType.COMMON.value, nullable=False)
    h1: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    h2: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    h3: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, onupdate=now_ms, nullable=False)

    designer = relationship("User")

    __table_args__ = (
        CheckConstraint("type IN ('common', 'important', 'urgent')", name="check_notification_type"),
        Index("idx_designer_notification_lookup", "designer_id", "enabled", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<DesignerNotification(id={self.id}, designer_id={self.designer_id}, type='{self.type}')>"

    @property
    def designer_name(self) -> Optional[str]:
        return self.designer.name if self.designer else None

    @property
    def has_content(self) -> bool:
        return any((line or "").strip() for line in (self.h1, self.h2, self.h3))


class CalendarObservation(Base):
    """
    One note per designer per day (absence, event or free note).
    """
    __tablename__ = "calendar_observations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    designer_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)  # YYYY-MM-DD
    note: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(20), default=ObservationType.NOTE.value, nullable=False)
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)
    updated_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, onupdate=now_ms, nullable=False)

    designer = relationship("User")

    __table_args__ = (
        UniqueConstraint("designer_id", "date", name="uq_calendar_observation_designer_date"),
        CheckConstraint("type IN ('absence', 'event', 'note')", name="check_observation_type"),
        Index("idx_calendar_observation_date", "date"),
    )

    def __repr__(self) -> str:
        return f"<CalendarObservation(designer_id={self.designer_id}, date='{self.date}', type='{self.type}')>"

    @property
    def designer_name(self) -> Optional[str]:
        return self.designer.name if self.designer else None
