"""
API routers for Studio Tracker.

This module contains all API endpoint routers:
- auth: Login, logout, current user and password changes
- users, art_types, demands, work_sessions: Core production tracking
- feedbacks, lessons, awards, links: Designer-facing content
- notifications, calendar: Per-designer messages and observations
- settings, analytics: Studio configuration and computed reports
- admin: Administrative overview and audit log
"""

from fastapi import APIRouter

# Import individual routers
from .auth import router as auth_router
from .users import router as users_router
from .art_types import router as art_types_router
from .demands import router as demands_router
from .work_sessions import router as work_sessions_router
from .feedbacks import router as feedbacks_router
from .lessons import router as lessons_router, progress_router as lesson_progress_router
from .settings import router as settings_router
from .awards import router as awards_router
from .links import tags_router, links_router
from .notifications import router as notifications_router
from .calendar import router as calendar_router
from .analytics import router as analytics_router

# Import admin sub-routers
from .admin import admin_router

# Create main API router
api_router = APIRouter()

# Include all routers with their prefixes
for router, prefix, tag in (
    (auth_router, "/auth", "authentication"),
    (users_router, "/users", "users"),
    (art_types_router, "/art-types", "art-types"),
    (demands_router, "/demands", "demands"),
    (work_sessions_router, "/work-sessions", "work-sessions"),
    (feedbacks_router, "/feedbacks", "feedbacks"),
    (lessons_router, "/lessons", "lessons"),
    (lesson_progress_router, "/lesson-progress", "lessons"),
    (settings_router, "/settings", "settings"),
    (awards_router, "/awards", "awards"),
    (tags_router, "/tags", "links"),
    (links_router, "/useful-links", "links"),
    (notifications_router, "/designer-notifications", "notifications"),
    (calendar_router, "/calendar-observations", "calendar"),
    (analytics_router, "/analytics", "analytics"),
    (admin_router, "/admin", "admin"),
):
    api_router.include_router(router, prefix=prefix, tags=[tag])

# Export all routers
__all__ = [
    "api_router",
    "auth_router",
    "admin_router",
]
