"""
System settings router.

Reading is public because the login screen shows the studio branding.
"""

import logging
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models.admin import AdminAction
from app.models.settings import SystemSettings
from app.models.user import User
from app.routers.auth import get_current_admin_user
from app.schemas.settings import SettingsResponse, SettingsUpdate
from app.services import audit


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=SettingsResponse)
async def get_settings(db: Session = Depends(get_db)) -> SystemSettings:
    system = SystemSettings.get_instance(db)
    db.commit()
    return system


@router.put("/", response_model=SettingsResponse)
async def update_settings(
    settings_update: SettingsUpdate,
    request: Request,
    current_admin: User = Depends(get_current_admin_user),
    db: Session = Depends(get_db)
) -> SystemSettings:
    """
    Partially update settings.

    Sending any field shown on the awards page flags it as updated for
    designers, unless ``awardsHasUpdates: false`` is sent explicitly.
    """
    system = SystemSettings.get_instance(db)

    update_data = settings_update.model_dump(exclude_unset=True)
    for field in ("variation_points", "daily_art_goal", "motivational_message_enabled",
                  "chart_enabled", "show_awards_chart"):
        if update_data.get(field, 0) is None:
            update_data.pop(field)

    changes = system.apply_changes(update_data)
    if changes:
        audit.record(
            db, request, current_admin.id, AdminAction.SETTINGS_CHANGE, "settings", system.id,
            details={"changes": {k: v for k, v in changes.items() if not k.endswith(("_url", "_image"))}},
        )
        logger.info(f"Settings updated by {current_admin.name}: {', '.join(sorted(changes))}")

    db.commit()
    db.refresh(system)
    return system
