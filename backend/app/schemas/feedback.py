"""
Feedback schemas.
"""

from typing import List, Optional
from pydantic import Field

from .base import CamelModel


class FeedbackCreate(CamelModel):
    designer_id: int
    image_urls: List[str] = Field(default_factory=list)
    comment: str = ""


class FeedbackReply(CamelModel):
    response: str = Field(..., min_length=1)


class FeedbackResponse(CamelModel):
    id: int
    designer_id: int
    designer_name: str
    admin_name: str
    image_urls: List[str]
    comment: str
    created_at: int
    viewed: bool
    viewed_at: Optional[int] = None
    response: Optional[str] = None
    response_at: Optional[int] = None
