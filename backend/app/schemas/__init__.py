"""
Pydantic request/response schemas for Studio Tracker.

All schemas derive from ``CamelModel`` so JSON uses camelCase keys.
"""

from .base import CamelModel, MessageResponse

__all__ = ["CamelModel", "MessageResponse"]
