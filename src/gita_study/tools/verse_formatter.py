"""
Display Tool: Format a verse string into a stable set of display lines.

A verse stored with explicit newlines is authoritative and is returned
line for line. Otherwise the text is re-segmented by one of two policies:

    word_groups: up to four roughly equal word groups (default)
    pause_marks: break after each danda / double danda, bisecting a
                   lone long segment into two lines

Only one policy is active per deployment, and every rendering of a verse
(hero display, chant mode) goes through format_verse() so the same verse
always segments the same way. Pure functions, no state.
"""

from __future__ import annotations

import math
import re
from enum import Enum

from gita_study.config.constants import (
    PAUSE_MARK_BISECT_THRESHOLD,
    PAUSE_MARKS,
    VERSE_LINE_TARGET,
)

_PAUSE_MARK_RE = re.compile(f"([{PAUSE_MARKS}])\\s*")


class LinePolicy(str, Enum):
    """Re-segmentation policy for verses without stored line breaks."""

    WORD_GROUPS = "word_groups"
    PAUSE_MARKS = "pause_marks"


def split_stored_lines(text: str) -> list[str]:
    """Split on newline, trim each segment, and drop empty segments."""
    return [line.strip() for line in text.split("\n") if line.strip()]


def format_verse_lines(text: str, target_lines: int = VERSE_LINE_TARGET) -> list[str]:
    """
    Format a verse into at most ``target_lines`` display lines.

    Example for BG 18.66 stored as a single line:
        sarva-dharmān parityajya mām
        ekaṁ śaraṇaṁ vraja
        ...

    Rules:
        1. Two or more stored lines are returned verbatim.
        2. ``target_lines`` words or fewer stay on one line.
        3. Otherwise words are chunked ceil(n / target_lines) per line;
           the last line may be shorter.
    """
    lines = split_stored_lines(text)
    if len(lines) >= 2:
        return lines

    words = text.split()
    if not words:
        return []
    if len(words) <= target_lines:
        return [" ".join(words)]

    per_line = math.ceil(len(words) / target_lines)
    return [
        " ".join(words[i:i + per_line])
        for i in range(0, len(words), per_line)
    ]


def split_at_pause_marks(
    text: str,
    bisect_threshold: int = PAUSE_MARK_BISECT_THRESHOLD,
) -> list[str]:
    """
    Format Devanagari by breaking the line after each pause mark.

    A single remaining segment longer than ``bisect_threshold`` characters
    is split into two lines at the middle word (first half gets the extra
    word for odd counts).
    """
    lines = split_stored_lines(text)
    if len(lines) >= 2:
        return lines

    parts = split_stored_lines(_PAUSE_MARK_RE.sub(r"\1\n", text))

    if len(parts) == 1 and len(parts[0]) > bisect_threshold:
        words = parts[0].split()
        if len(words) < 2:
            return parts
        mid = math.ceil(len(words) / 2)
        return [" ".join(words[:mid]), " ".join(words[mid:])]

    return parts


def format_verse(text: str, policy: LinePolicy | str = LinePolicy.WORD_GROUPS) -> list[str]:
    """Format verse text with the deployment's line policy."""
    if LinePolicy(policy) == LinePolicy.PAUSE_MARKS:
        return split_at_pause_marks(text)
    return format_verse_lines(text)
