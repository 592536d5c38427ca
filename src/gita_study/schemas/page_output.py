"""
Page assembly output schema.

View models returned to the front end: the verse page (formatted lines,
matched tokens, word grammar, audio availability, playlist position) and
the grouped verse index.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator

from gita_study.schemas.verse import Commentary, Verse, Word


class TokenView(BaseModel):
    """One transliteration token, optionally linked to a word entry."""

    text: str = Field(..., min_length=1)
    is_line_break: bool = Field(default=False)
    word_id: Optional[str] = Field(None, description="Matched word entry, if any")

    @property
    def clickable(self) -> bool:
        return self.word_id is not None


class GrammarRow(BaseModel):
    label: str
    value: str


class WordView(BaseModel):
    """A word entry with its plain-English grammar explanation."""

    word: Word
    rows: list[GrammarRow] = Field(default_factory=list)
    explanation: Optional[str] = Field(None)


class PlaylistPosition(BaseModel):
    """Position of a verse within the vibe playlist."""

    chapter: int = Field(..., ge=1)
    verse: int = Field(..., ge=1)
    index: Optional[int] = Field(None, ge=0, description="None when the verse has no vibe audio")
    total: int = Field(..., ge=0)
    previous: Optional[tuple[int, int]] = Field(None)
    next: Optional[tuple[int, int]] = Field(None)

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    @property
    def has_next(self) -> bool:
        return self.next is not None


class AudioView(BaseModel):
    """Audio sources for both channels; None means "coming soon"."""

    traditional_src: Optional[str] = Field(None)
    vibe_src: str = Field(..., min_length=1, description="Probed by the client before playing")
    playlist: PlaylistPosition


class VersePageView(BaseModel):
    """Everything the verse page renders."""

    verse: Verse
    reference: str = Field(..., min_length=1)
    devanagari_lines: list[str] = Field(default_factory=list)
    transliteration_lines: list[str] = Field(default_factory=list)
    chant_lines: list[str] = Field(default_factory=list)
    tokens: list[TokenView] = Field(default_factory=list)
    words: list[WordView] = Field(default_factory=list)
    commentaries: list[Commentary] = Field(default_factory=list)
    audio: AudioView
    has_words: bool = Field(default=False)
    has_commentaries: bool = Field(default=False)
    flashcard_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def compute_section_flags(self) -> VersePageView:
        """Section flags always reflect the attached records."""
        self.has_words = bool(self.words)
        self.has_commentaries = bool(self.commentaries)
        return self


class VerseCard(BaseModel):
    """Compact verse entry for the index grid."""

    id: str
    label: str
    route: str
    grammar_focus: Optional[str] = None
    preview: str = ""


class VerseGroup(BaseModel):
    """A heading (chapter or source text) and its verses."""

    title: str
    cards: list[VerseCard]


class VerseIndexView(BaseModel):
    """GET /api/v1/verses response."""

    total: int = Field(default=0, ge=0, description="Verses before filtering")
    text_filter: str = "all"
    grammar_focus: Optional[str] = None
    groups: list[VerseGroup] = Field(default_factory=list)
