"""
Index Tool: Label, sort, filter, and group verses for the verse library.

Gita verses are grouped by chapter; Nectar of Instruction verses form one
trailing group.
"""

from __future__ import annotations

from typing import Optional, Sequence

from gita_study.config.constants import (
    NOI_SORT_OFFSET,
    SOURCE_GITA,
    SOURCE_NOI,
    SOURCE_TEXT_LABELS,
    TRANSLATION_PREVIEW_CHARS,
)
from gita_study.schemas.page_output import VerseCard, VerseGroup
from gita_study.schemas.verse import SourceText, Verse
from gita_study.utils import verse_route

TEXT_FILTERS = ("all", SOURCE_GITA, SOURCE_NOI)


def _source(v: Verse) -> str:
    return v.source_text.value if v.source_text else SOURCE_GITA


def verse_label(v: Verse) -> str:
    """'BG 2.47' for Gita verses, 'NOI 3' for Nectar of Instruction."""
    return v.ref()


def verse_sort_key(v: Verse) -> int:
    if v.source_text == SourceText.NOI:
        return NOI_SORT_OFFSET + v.verse
    return v.chapter * 100 + v.verse


def sort_verses(verses: Sequence[Verse]) -> list[Verse]:
    return sorted(verses, key=verse_sort_key)


def filter_verses(
    verses: Sequence[Verse],
    text_filter: str = "all",
    grammar_focus: Optional[str] = None,
) -> list[Verse]:
    """Keep verses matching the source-text filter and grammar focus."""
    if text_filter not in TEXT_FILTERS:
        raise ValueError(f"Unknown text filter: {text_filter!r}")
    result = []
    for v in verses:
        if text_filter != "all" and _source(v) != text_filter:
            continue
        if grammar_focus and v.grammar_focus != grammar_focus:
            continue
        result.append(v)
    return result


def gita_chapters(verses: Sequence[Verse]) -> list[int]:
    return sorted({v.chapter for v in verses if _source(v) == SOURCE_GITA})


def verse_card(v: Verse) -> VerseCard:
    preview = v.translation[:TRANSLATION_PREVIEW_CHARS]
    if len(v.translation) > TRANSLATION_PREVIEW_CHARS:
        preview += "..."
    source = _source(v)
    return VerseCard(
        id=v.id,
        label=verse_label(v),
        route=verse_route(v.chapter, v.verse, source),
        grammar_focus=v.grammar_focus,
        preview=preview,
    )


def group_verses(verses: Sequence[Verse]) -> list[VerseGroup]:
    """Group sorted verses: one group per Gita chapter, then NOI."""
    ordered = sort_verses(verses)
    groups: list[VerseGroup] = []

    for chapter in gita_chapters(ordered):
        cards = [
            verse_card(v) for v in ordered
            if _source(v) == SOURCE_GITA and v.chapter == chapter
        ]
        groups.append(VerseGroup(title=f"Chapter {chapter}", cards=cards))

    noi = [verse_card(v) for v in ordered if _source(v) == SOURCE_NOI]
    if noi:
        groups.append(VerseGroup(title=SOURCE_TEXT_LABELS[SOURCE_NOI], cards=noi))

    return groups
