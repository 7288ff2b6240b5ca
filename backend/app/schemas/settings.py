"""
System settings schemas.
"""

from typing import Optional
from pydantic import Field

from .base import CamelModel


class SettingsResponse(CamelModel):
    logo_url: Optional[str] = None
    brand_title: Optional[str] = None
    login_subtitle: Optional[str] = None
    favicon_url: Optional[str] = None
    variation_points: int
    daily_art_goal: int
    motivational_message: Optional[str] = None
    motivational_message_enabled: bool
    next_award_image: Optional[str] = None
    chart_enabled: bool
    show_awards_chart: bool
    awards_has_updates: bool


class SettingsUpdate(CamelModel):
    logo_url: Optional[str] = None
    brand_title: Optional[str] = None
    login_subtitle: Optional[str] = None
    favicon_url: Optional[str] = None
    variation_points: Optional[int] = Field(None, ge=0)
    daily_art_goal: Optional[int] = Field(None, ge=0)
    motivational_message: Optional[str] = None
    motivational_message_enabled: Optional[bool] = None
    next_award_image: Optional[str] = None
    chart_enabled: Optional[bool] = None
    show_awards_chart: Optional[bool] = None
    awards_has_updates: Optional[bool] = None
