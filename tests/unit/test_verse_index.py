"""Unit tests for gita_study.tools.verse_index."""

from __future__ import annotations

import pytest

from gita_study.schemas.verse import SourceText
from gita_study.tools.verse_index import (
    filter_verses,
    gita_chapters,
    group_verses,
    sort_verses,
    verse_card,
    verse_label,
)
from tests.fixtures.conftest import _make_verse


def _verses():
    return [
        _make_verse(chapter=18, verse=66, grammar_focus="imperative verbs"),
        _make_verse(chapter=2, verse=47, grammar_focus="locative case"),
        _make_verse(chapter=1, verse=3, source_text=SourceText.NOI, grammar_focus="locative case"),
        _make_verse(chapter=2, verse=13, grammar_focus="genitive plural",
                    source_text=SourceText.GITA),
    ]


@pytest.mark.tool
class TestLabelsAndSorting:

    def test_labels(self):
        assert verse_label(_make_verse(chapter=2, verse=47)) == "BG 2.47"
        assert verse_label(_make_verse(chapter=1, verse=3, source_text=SourceText.NOI)) == "NOI 3"

    def test_sort_keys_noi_by_verse_gita_by_chapter(self):
        labels = [verse_label(v) for v in sort_verses(_verses())]
        assert labels == ["NOI 3", "BG 2.13", "BG 2.47", "BG 18.66"]

    def test_gita_chapters(self):
        assert gita_chapters(_verses()) == [2, 18]


@pytest.mark.tool
class TestFilterVerses:

    def test_all(self):
        assert len(filter_verses(_verses())) == 4

    def test_null_source_counts_as_gita(self):
        labels = {verse_label(v) for v in filter_verses(_verses(), "gita")}
        assert labels == {"BG 18.66", "BG 2.47", "BG 2.13"}

    def test_noi_only(self):
        assert [verse_label(v) for v in filter_verses(_verses(), "noi")] == ["NOI 3"]

    def test_grammar_focus(self):
        labels = [verse_label(v) for v in filter_verses(_verses(), "all", "locative case")]
        assert labels == ["BG 2.47", "NOI 3"]

    def test_unknown_filter(self):
        with pytest.raises(ValueError):
            filter_verses(_verses(), "vedas")


@pytest.mark.tool
class TestGrouping:

    def test_chapter_groups_then_noi(self):
        groups = group_verses(_verses())
        assert [g.title for g in groups] == ["Chapter 2", "Chapter 18", "Nectar of Instruction"]
        assert [c.label for c in groups[0].cards] == ["BG 2.13", "BG 2.47"]

    def test_empty(self):
        assert group_verses([]) == []

    def test_card_preview_truncated(self):
        card = verse_card(_make_verse(translation="x" * 100))
        assert card.preview == "x" * 80 + "..."
        assert card.route == "/verse/18/66"

    def test_short_preview_untouched(self):
        assert verse_card(_make_verse(translation="Do not fear.")).preview == "Do not fear."

    def test_noi_card_route(self):
        card = verse_card(_make_verse(chapter=1, verse=3, source_text=SourceText.NOI))
        assert card.route == "/verse/1/3?source=noi"
