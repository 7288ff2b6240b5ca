"""
User model for Studio Tracker.

Defines the User table with authentication fields and the two studio roles:
administrators and designers.
"""

import re
from datetime import datetime
from enum import Enum
from typing import Optional
from sqlalchemy import Boolean, Integer, String, DateTime, Index, CheckConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column
from sqlalchemy.sql import func

from app.core.database import Base


class UserRole(str, Enum):
    """Studio roles."""
    ADMIN = "ADM"
    DESIGNER = "DESIGNER"


AVATAR_BACKGROUND_RE = re.compile(r"background=([a-fA-F0-9]{6})")


class User(Base):
    """
    User model for authentication and profile management.
    """
    __tablename__ = "users"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)

    # Authentication fields
    name: Mapped[str] = mapped_column(
        String(120),
        unique=True,
        index=True,
        nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(String(20), default=UserRole.DESIGNER.value, nullable=False)

    # Profile fields
    avatar_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    avatar_color: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    # Status fields
    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
    last_login_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Relationships
    demands = relationship("Demand", back_populates="user")
    work_sessions = relationship("WorkSession", back_populates="user")
    admin_logs = relationship("AdminLog", back_populates="user", cascade="all, delete-orphan")

    # Table constraints
    __table_args__ = (
        CheckConstraint("role IN ('ADM', 'DESIGNER')", name="check_role_valid"),
        Index("idx_user_role_active", "role", "active"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name='{self.name}', role='{self.role}')>"

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @property
    def is_designer(self) -> bool:
        return self.role == UserRole.DESIGNER.value

    @property
    def short_name(self) -> str:
        """
        Name shown on charts.

        Studio accounts are named like "Studio - Ana Souza"; the part after
        the dash is the person. Otherwise the first word is used.
        """
        if " - " in self.name:
            short = self.name.split(" - ", 1)[1].strip()
            if short:
                return short
        return self.name.split()[0] if self.name.strip() else self.name

    def chart_color(self, fallback: str) -> str:
        """Avatar colour, else the background encoded in the avatar URL, else ``fallback``."""
        if self.avatar_color:
            return self.avatar_color
        match = AVATAR_BACKGROUND_RE.search(self.avatar_url or "")
        if match:
            return f"#{match.group(1)}"
        return fallback
