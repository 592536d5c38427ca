"""
Listen-event record inserted into the backend when a track starts.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class TrackType(str, Enum):
    """Audio channel a listen event refers to."""

    TRADITIONAL = "traditional"
    VIBE = "vibe"


class ListenEvent(BaseModel):
    """One row of the listen log."""

    user_id: str = Field(..., min_length=1)
    chapter: int = Field(..., ge=1)
    verse: int = Field(..., ge=1)
    track_type: TrackType = Field(...)
