"""
Audio Tool: Fixed, ordered playlist of verses that have vibe audio.

The playlist is immutable constant data built once at import time and
injected into controllers. Lookups are a linear scan over a few dozen
entries.
"""

from __future__ import annotations

from typing import Iterator, NamedTuple, Optional, Sequence

from gita_study.config.constants import VIBE_PLAYLIST
from gita_study.schemas.page_output import PlaylistPosition


class PlaylistEntry(NamedTuple):
    chapter: int
    verse: int


class Playlist:
    """Read-only ordered list of (chapter, verse) entries."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Sequence[tuple[int, int]]):
        self._entries: tuple[PlaylistEntry, ...] = tuple(
            PlaylistEntry(int(c), int(v)) for c, v in entries
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PlaylistEntry]:
        return iter(self._entries)

    def __contains__(self, item: object) -> bool:
        return item in self._entries

    @property
    def entries(self) -> tuple[PlaylistEntry, ...]:
        return self._entries

    def at(self, index: int) -> Optional[PlaylistEntry]:
        """Entry at ``index``, or None when out of bounds (no negative wrap)."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None

    def index_of(self, chapter: int, verse: int) -> Optional[int]:
        for i, entry in enumerate(self._entries):
            if entry.chapter == chapter and entry.verse == verse:
                return i
        return None

    def previous(self, chapter: int, verse: int) -> Optional[PlaylistEntry]:
        i = self.index_of(chapter, verse)
        return None if i is None else self.at(i - 1)

    def next(self, chapter: int, verse: int) -> Optional[PlaylistEntry]:
        i = self.index_of(chapter, verse)
        return None if i is None else self.at(i + 1)

    def position(self, chapter: int, verse: int) -> PlaylistPosition:
        """Where (chapter, verse) sits, with bounds-checked neighbours."""
        prev_entry = self.previous(chapter, verse)
        next_entry = self.next(chapter, verse)
        return PlaylistPosition(
            chapter=chapter,
            verse=verse,
            index=self.index_of(chapter, verse),
            total=len(self._entries),
            previous=tuple(prev_entry) if prev_entry else None,
            next=tuple(next_entry) if next_entry else None,
        )


VIBE = Playlist(VIBE_PLAYLIST)
