"""
Lesson and lesson progress schemas.
"""

from typing import Optional
from pydantic import Field

from .base import CamelModel


class LessonCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    video_url: str = Field(..., min_length=1)


class LessonUpdate(CamelModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    video_url: Optional[str] = Field(None, min_length=1)
    order_index: Optional[int] = Field(None, ge=0)


class LessonResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    video_url: str
    order_index: int
    created_at: int


class LessonProgressMark(CamelModel):
    lesson_id: int
    designer_id: int


class LessonProgressResponse(CamelModel):
    id: int
    lesson_id: int
    designer_id: int
    viewed: bool
    viewed_at: Optional[int] = None
