"""
Request and response Pydantic models for the REST API.

Page and index views live in gita_study.schemas.page_output; the models
here are the thin API-only envelopes.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from gita_study.config.constants import API_VERSION
from gita_study.schemas.listen_event import TrackType


# ---------- Request ----------


class ListenRequest(BaseModel):
    """POST /api/v1/listens request body."""

    user_id: str = Field(..., min_length=1, description="Authenticated user id")
    chapter: int = Field(..., ge=1)
    verse: int = Field(..., ge=1)
    track_type: TrackType = Field(..., description="traditional or vibe")


# ---------- Response ----------


class HealthResponse(BaseModel):
    """GET /api/v1/health response."""

    status: str = "ok"
    version: str = API_VERSION
    backend_configured: bool = False


class ListenResponse(BaseModel):
    """POST /api/v1/listens response. False when debounced or not stored."""

    logged: bool


class PlaylistEntryModel(BaseModel):
    chapter: int
    verse: int
    route: str
    vibe_src: str


class PlaylistResponse(BaseModel):
    """GET /api/v1/playlist response."""

    total: int
    entries: list[PlaylistEntryModel]


class LetterCardModel(BaseModel):
    devanagari: str
    transliteration: str


class GrammarConceptsResponse(BaseModel):
    concepts: list[str]
