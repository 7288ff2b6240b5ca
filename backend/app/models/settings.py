"""
System settings model for Studio Tracker.

Branding, scoring and awards-page switches live in a single row (id 1).
"""

from datetime import datetime
from typing import Optional, Dict, Any
from sqlalchemy import Boolean, Integer, String, Text, DateTime, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, Session
from sqlalchemy.sql import func

from app.core.config import settings as app_settings
from app.core.database import Base


SINGLETON_ID = 1

# Changing any of these announces news on the awards page
AWARD_FIELDS = (
    "motivational_message",
    "motivational_message_enabled",
    "next_award_image",
    "chart_enabled",
    "show_awards_chart",
)


class SystemSettings(Base):
    """
    System-wide settings and configuration.
    """
    __tablename__ = "system_settings"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)

    # Branding
    logo_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    brand_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    login_subtitle: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    favicon_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Scoring
    variation_points: Mapped[int] = mapped_column(
        Integer, default=lambda: app_settings.DEFAULT_VARIATION_POINTS, nullable=False
    )
    daily_art_goal: Mapped[int] = mapped_column(
        Integer, default=lambda: app_settings.DEFAULT_DAILY_ART_GOAL, nullable=False
    )

    # Awards page
    motivational_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    motivational_message_enabled: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    next_award_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    chart_enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    show_awards_chart: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    awards_has_updates: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True
    )

    __table_args__ = (
        CheckConstraint("id = 1", name="check_singleton"),
        CheckConstraint("variation_points >= 0", name="check_variation_points_positive"),
        CheckConstraint("daily_art_goal >= 0", name="check_daily_art_goal_positive"),
    )

    def __repr__(self) -> str:
        return f"<SystemSettings(brand_title='{self.brand_title}', daily_art_goal={self.daily_art_goal})>"

    @classmethod
    def get_instance(cls, db: Session) -> "SystemSettings":
        """Return the settings row, creating it with defaults if missing."""
        instance = db.get(cls, SINGLETON_ID)
        if instance is None:
            instance = cls(id=SINGLETON_ID)
            db.add(instance)
            db.flush()
        return instance

    def apply_changes(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update and raise the awards flag when needed.

        ``awards_has_updates`` is set whenever an award-related field is sent,
        even with its current value, unless the caller explicitly sent
        ``awards_has_updates=False``.

        Args:
            changes: Column name -> new value, only for fields sent by the client

        Returns:
            Dict[str, Any]: Column name -> {"old", "new"} for fields that changed
        """
        changed: Dict[str, Any] = {}
        for field, value in changes.items():
            if field == "awards_has_updates":
                continue
            old = getattr(self, field)
            if old != value:
                setattr(self, field, value)
                changed[field] = {"old": old, "new": value}

        explicit_flag = changes.get("awards_has_updates")
        if explicit_flag is not None:
            if self.awards_has_updates != explicit_flag:
                changed["awards_has_updates"] = {"old": self.awards_has_updates, "new": explicit_flag}
            self.awards_has_updates = explicit_flag
        elif any(field in changes for field in AWARD_FIELDS) and not self.awards_has_updates:
            self.awards_has_updates = True
            changed["awards_has_updates"] = {"old": False, "new": True}

        return changed
