"""
Audio Tool: Locate verse audio assets and probe whether they exist.

Vibe audio lives at ``{VIBE_AUDIO_BASE_URL}/{chapter}_{verse}.mp3``. The
probe is an HTTP HEAD request; it fails closed: any transport error,
timeout, or non-2xx status means "unavailable".
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from gita_study.config.constants import (
    AUDIO_EXTENSION,
    AUDIO_PROBE_TIMEOUT,
    TRADITIONAL_AUDIO_BASE_URL,
    VIBE_AUDIO_BASE_URL,
)
from gita_study.exceptions import AudioProbeError
from gita_study.utils import audio_file_name, join_url

logger = logging.getLogger(__name__)


def vibe_audio_url(
    chapter: int,
    verse: int,
    base_url: str = VIBE_AUDIO_BASE_URL,
) -> str:
    """
    Build the vibe-channel asset location.

    Examples:
        (18, 66)                         -> "/audio/vibe/18_66.mp3"
        (2, 47, "https://cdn.example/v") -> "https://cdn.example/v/2_47.mp3"
    """
    return join_url(base_url, audio_file_name(chapter, verse, AUDIO_EXTENSION))


def traditional_audio_url(
    chapter: int,
    verse: int,
    base_url: str = TRADITIONAL_AUDIO_BASE_URL,
) -> Optional[str]:
    """Traditional chant location, or None while hosting is unconfigured."""
    if not base_url:
        return None
    return join_url(base_url, audio_file_name(chapter, verse, AUDIO_EXTENSION))


async def head_status(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = AUDIO_PROBE_TIMEOUT,
) -> int:
    """
    HEAD an audio asset without downloading it and return the status code.

    Raises:
        AudioProbeError: the request timed out or never got a response.
    """
    try:
        if client is None:
            async with httpx.AsyncClient(follow_redirects=True, timeout=timeout) as c:
                response = await c.head(url)
        else:
            response = await client.head(url, timeout=timeout)
    except httpx.TimeoutException as e:
        raise AudioProbeError(f"Audio probe timed out after {timeout}s: {url}", "PROBE_TIMEOUT") from e
    except httpx.HTTPError as e:
        raise AudioProbeError(f"Audio probe failed: {url}: {e}", "PROBE_TRANSPORT") from e
    return response.status_code


async def audio_asset_exists(
    url: str,
    client: Optional[httpx.AsyncClient] = None,
    timeout: float = AUDIO_PROBE_TIMEOUT,
) -> bool:
    """
    Fail-closed existence check for an audio asset.

    Args:
        url: Absolute asset URL.
        client: Shared client; a short-lived one is created when omitted.
        timeout: Seconds before the probe counts as failed.

    Returns:
        True only for a 2xx response.
    """
    try:
        status = await head_status(url, client=client, timeout=timeout)
    except AudioProbeError as e:
        logger.warning("%s", e.message)
        return False

    if 200 <= status < 300:
        return True
    logger.info("Audio not available (HTTP %d): %s", status, url)
    return False
