"""
Utility functions for Gita Study.

Provides route and audio-file naming helpers shared by the page assembly,
the playlist, and the audio probe.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlencode

from gita_study.config.constants import SOURCE_GITA


def verse_route(chapter: int, verse: int, source_text: Optional[str] = None) -> str:
    """
    Build the front-end route for a verse page.

    Gita verses need no query; other source texts add ``?source=`` so
    same-numbered verses from different texts stay distinct.

    Example:
        (18, 66)        -> "/verse/18/66"
        (1, 3, "noi")   -> "/verse/1/3?source=noi"
    """
    path = f"/verse/{chapter}/{verse}"
    if source_text and source_text != SOURCE_GITA:
        return f"{path}?{urlencode({'source': source_text})}"
    return path


def audio_file_name(chapter: int, verse: int, extension: str) -> str:
    """File name of a verse's audio asset: ``{chapter}_{verse}.{extension}``."""
    return f"{chapter}_{verse}.{extension.lstrip('.')}"


def join_url(base: str, name: str) -> str:
    """Join a base URL (or path) and a file name with exactly one slash."""
    if not base:
        return name
    return f"{base.rstrip('/')}/{name.lstrip('/')}"
