"""
Page assembly: turn backend records into the views the front end renders.

The verse is required; words and commentaries are optional sections and
a failure to load either one degrades to an empty section. Devanagari line
formatting goes through the single configured policy so the hero display
and chant mode always agree.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from gita_study.audio.playlist import VIBE, Playlist
from gita_study.audio.probe import traditional_audio_url, vibe_audio_url
from gita_study.config.settings import Settings
from gita_study.exceptions import BackendError
from gita_study.schemas.listen_event import ListenEvent
from gita_study.schemas.page_output import (
    AudioView,
    VerseIndexView,
    VersePageView,
    WordView,
)
from gita_study.schemas.verse import Commentary, Verse, Word
from gita_study.tools.flashcard_deck import build_questions
from gita_study.tools.grammar_explainer import grammar_rows, plain_explanation
from gita_study.tools.verse_formatter import format_verse, format_verse_lines
from gita_study.tools.verse_index import filter_verses, group_verses
from gita_study.tools.word_matcher import annotate_tokens

logger = logging.getLogger(__name__)


class VerseSource(Protocol):
    """The read side of the backend that page assembly needs."""

    async def fetch_verse(
        self, chapter: int, verse: int, source_text: Optional[str] = None,
    ) -> Verse: ...

    async def fetch_words(self, verse_id: str) -> list[Word]: ...

    async def fetch_commentaries(self, verse_id: str) -> list[Commentary]: ...

    async def list_verses(self) -> list[Verse]: ...

    async def insert_listen_event(self, event: ListenEvent) -> None: ...


async def _optional_section(label: str, verse: Verse, fetch) -> list:
    try:
        return await fetch(verse.id)
    except BackendError as e:
        logger.warning("Could not load %s for %s: %s", label, verse.ref(), e)
        return []


async def load_verse_page(
    backend: VerseSource,
    chapter: int,
    verse: int,
    source_text: Optional[str] = None,
    settings: Optional[Settings] = None,
    playlist: Playlist = VIBE,
) -> VersePageView:
    """
    Assemble the full verse page.

    Raises:
        VerseNotFoundError: no verse with these identifiers.
        BackendError: the verse query itself failed.
    """
    settings = settings or Settings()
    record = await backend.fetch_verse(chapter, verse, source_text)

    words, commentaries = await asyncio.gather(
        _optional_section("words", record, backend.fetch_words),
        _optional_section("commentaries", record, backend.fetch_commentaries),
    )

    policy = settings.verse_line_policy
    devanagari_lines = format_verse(record.devanagari, policy)

    audio = AudioView(
        traditional_src=traditional_audio_url(
            record.chapter, record.verse, settings.traditional_audio_base_url,
        ),
        vibe_src=vibe_audio_url(record.chapter, record.verse, settings.vibe_audio_base_url),
        playlist=playlist.position(record.chapter, record.verse),
    )

    logger.info("Assembled %s: %d words, %d commentaries",
                record.ref(), len(words), len(commentaries))

    return VersePageView(
        verse=record,
        reference=record.ref(),
        devanagari_lines=devanagari_lines,
        # Pause marks are Devanagari; romanized text is always word-grouped
        transliteration_lines=format_verse_lines(record.transliteration),
        chant_lines=devanagari_lines,
        tokens=annotate_tokens(record.transliteration, words),
        words=[
            WordView(word=w, rows=grammar_rows(w), explanation=plain_explanation(w))
            for w in words
        ],
        commentaries=commentaries,
        audio=audio,
        flashcard_count=len(build_questions(words)),
    )


async def load_verse_index(
    backend: VerseSource,
    text_filter: str = "all",
    grammar_focus: Optional[str] = None,
) -> VerseIndexView:
    """List, filter, and group every verse for the library page."""
    verses = await backend.list_verses()
    selected = filter_verses(verses, text_filter, grammar_focus)
    return VerseIndexView(
        total=len(verses),
        text_filter=text_filter,
        grammar_focus=grammar_focus,
        groups=group_verses(selected),
    )
