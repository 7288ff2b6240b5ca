"""
Helpers for writing audit log entries from request handlers.
"""

from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from app.models.admin import AdminAction, AdminLog


def record(
    db: Session,
    request: Request,
    user_id: Optional[int],
    action: AdminAction,
    entity_type: str,
    entity_id: Optional[int] = None,
    details: Optional[Dict[str, Any]] = None,
    success: bool = True,
    error_message: Optional[str] = None,
) -> AdminLog:
    """Add an AdminLog row for ``request`` to the session; the caller commits."""
    entry = AdminLog.log_action(
        user_id=user_id,
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        details=details,
        method=request.method,
        path=request.url.path,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        success=success,
        error_message=error_message,
    )
    db.add(entry)
    return entry
