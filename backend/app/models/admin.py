"""
Audit log model for Studio Tracker.

Every administrative write and every login attempt leaves an AdminLog row.
"""

from typing import Optional, Dict, Any, Union
from enum import Enum
from sqlalchemy import BigInteger, Boolean, Integer, String, Text, ForeignKey, Index, JSON
from sqlalchemy.orm import relationship, Mapped, mapped_column

from app.core.database import Base
from app.core.timeutils import now_ms


class AdminAction(str, Enum):
    """What an audit entry records."""
    LOGIN = "login"
    LOGOUT = "logout"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    REORDER = "reorder"
    PASSWORD_CHANGE = "password_change"
    SETTINGS_CHANGE = "settings_change"
    USER_MANAGEMENT = "user_management"


class AdminLog(Base):
    """
    One audited request: who did what to which record, from where.
    """
    __tablename__ = "admin_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    # Null for failed logins under a name that matches no active user
    user_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)

    action: Mapped[str] = mapped_column(String(50), nullable=False)
    entity_type: Mapped[str] = mapped_column(String(50), nullable=False)  # user, demand, art_type, award, ...
    entity_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    details: Mapped[Dict[str, Any]] = mapped_column(JSON, default=dict, nullable=False)

    # Request context
    method: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    path: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(45), nullable=True)  # fits IPv6
    user_agent: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    success: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    error_message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Epoch milliseconds, like every other domain timestamp
    created_at: Mapped[int] = mapped_column(BigInteger, default=now_ms, nullable=False)

    user = relationship("User", back_populates="admin_logs")

    __table_args__ = (
        Index("idx_admin_log_user_action", "user_id", "action"),
        Index("idx_admin_log_entity", "entity_type", "entity_id"),
        Index("idx_admin_log_created", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<AdminLog(id={self.id}, user_id={self.user_id}, action='{self.action}', entity='{self.entity_type}')>"

    @classmethod
    def log_action(
        cls,
        user_id: Optional[int],
        action: Union[AdminAction, str],
        entity_type: str,
        entity_id: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        success: bool = True,
        error_message: Optional[str] = None,
        **request_context: Optional[str],
    ) -> "AdminLog":
        """
        Build an entry. ``request_context`` takes ``method``, ``path``,
        ``ip_address`` and ``user_agent``.
        """
        return cls(
            user_id=user_id,
            action=action.value if isinstance(action, AdminAction) else action,
            entity_type=entity_type,
            entity_id=entity_id,
            details=details or {},
            success=success,
            error_message=error_message,
            **request_context,
        )
