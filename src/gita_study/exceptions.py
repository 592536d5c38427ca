"""
Exception hierarchy for Gita Study.

All application-specific exceptions inherit from GitaStudyException.
Each failure domain (backend, audio, quiz, configuration) has its own
class so callers can convert failures into local state transitions.
"""

from __future__ import annotations

from typing import Optional


class GitaStudyException(Exception):
    """Base exception for Gita Study."""

    def __init__(self, message: str, error_code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__


class VerseNotFoundError(GitaStudyException):
    """Raised when no verse record matches the requested identifiers."""

    def __init__(self, chapter: int, verse: int, source_text: Optional[str] = None):
        ref = f"{chapter}.{verse}" if not source_text else f"{source_text} {chapter}.{verse}"
        super().__init__(f"Verse not found: {ref}")
        self.chapter = chapter
        self.verse = verse
        self.source_text = source_text


class BackendError(GitaStudyException):
    """Raised when a query against the managed backend fails."""


class AudioProbeError(GitaStudyException):
    """Raised when an audio existence check cannot be completed."""


class PlaybackRejectedError(GitaStudyException):
    """Raised by a media channel when the runtime declines to start playback."""


class ListenLogError(BackendError):
    """Raised when a listen-event insert fails."""


class QuizStateError(GitaStudyException):
    """Raised for an illegal flashcard deck transition."""


class ConfigurationError(GitaStudyException):
    """Raised for missing or invalid configuration."""
