"""
Useful link and tag schemas.
"""

from typing import List, Optional
from pydantic import Field

from .base import CamelModel


class TagCreate(CamelModel):
    name: str = Field(..., max_length=80)
    color: Optional[str] = None


class TagUpdate(CamelModel):
    name: Optional[str] = Field(None, max_length=80)
    color: Optional[str] = None


class TagResponse(CamelModel):
    id: int
    name: str
    color: Optional[str] = None
    created_at: int


class UsefulLinkCreate(CamelModel):
    # Blank values are rejected with 400 by the endpoint
    title: str = ""
    url: str = ""
    image_url: Optional[str] = None
    tag_ids: List[int] = Field(default_factory=list)


class UsefulLinkUpdate(CamelModel):
    title: Optional[str] = None
    url: Optional[str] = None
    image_url: Optional[str] = None
    tag_ids: Optional[List[int]] = None


class UsefulLinkResponse(CamelModel):
    id: int
    title: str
    url: str
    image_url: Optional[str] = None
    created_at: int
    tags: List[TagResponse]
