"""
Runtime settings loaded from the environment (and a .env file if present).

Backend credentials are only required when a backend client is built,
so importing the application never fails on a bare environment.
"""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from gita_study.config.constants import (
    BACKEND_TIMEOUT,
    DEFAULT_LINE_POLICY,
    TRADITIONAL_AUDIO_BASE_URL,
    VIBE_AUDIO_BASE_URL,
)
from gita_study.exceptions import ConfigurationError

_LINE_POLICIES = ("word_groups", "pause_marks")


class Settings(BaseModel):
    """Deployment settings for the study app."""

    supabase_url: Optional[str] = Field(None, description="Managed backend project URL")
    supabase_anon_key: Optional[str] = Field(None, description="Public (anon) API key")
    backend_timeout: float = Field(default=BACKEND_TIMEOUT, gt=0)
    vibe_audio_base_url: str = Field(default=VIBE_AUDIO_BASE_URL)
    traditional_audio_base_url: str = Field(
        default=TRADITIONAL_AUDIO_BASE_URL,
        description="Empty until traditional chant audio is hosted",
    )
    verse_line_policy: str = Field(default=DEFAULT_LINE_POLICY)

    @field_validator("verse_line_policy")
    @classmethod
    def validate_policy(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in _LINE_POLICIES:
            raise ValueError(
                f"verse_line_policy must be one of {', '.join(_LINE_POLICIES)}"
            )
        return value

    @property
    def backend_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    def require_backend(self) -> tuple[str, str]:
        """Return (url, key) or raise ConfigurationError."""
        if not self.backend_configured:
            raise ConfigurationError(
                "SUPABASE_URL and SUPABASE_ANON_KEY must be set to reach the backend"
            )
        return self.supabase_url.rstrip("/"), self.supabase_anon_key  # type: ignore[union-attr]


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from environment variables, loading .env first."""
    load_dotenv(env_file)

    values: dict = {
        "supabase_url": os.environ.get("SUPABASE_URL") or None,
        "supabase_anon_key": os.environ.get("SUPABASE_ANON_KEY") or None,
    }
    optional = {
        "backend_timeout": "BACKEND_TIMEOUT",
        "vibe_audio_base_url": "VIBE_AUDIO_BASE_URL",
        "traditional_audio_base_url": "TRADITIONAL_AUDIO_BASE_URL",
        "verse_line_policy": "VERSE_LINE_POLICY",
    }
    for field_name, env_name in optional.items():
        raw = os.environ.get(env_name)
        if raw is not None:
            values[field_name] = raw

    try:
        return Settings(**values)
    except ValueError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
