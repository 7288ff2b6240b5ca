"""
Core module for Studio Tracker backend.

Settings, the database session, password/token helpers, logging setup and
the clock helpers every calendar computation goes through.
"""

from .config import settings
from .database import get_db, engine, SessionLocal
from .security import (
    create_access_token,
    get_password_hash,
    token_user_id,
    verify_password,
)
from .timeutils import now_ms, local_now, to_local, to_ms

__all__ = [
    "settings",
    "get_db",
    "engine",
    "SessionLocal",
    "create_access_token",
    "get_password_hash",
    "token_user_id",
    "verify_password",
    "now_ms",
    "local_now",
    "to_local",
    "to_ms",
]
