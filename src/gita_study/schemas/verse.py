"""
Backend records: verses, words, roots, and acharya commentaries.

These mirror the rows of the managed backend's tables. They are read-only
inputs to formatting, matching, and page assembly.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SourceText(str, Enum):
    """Scripture a verse belongs to."""

    GITA = "gita"
    NOI = "noi"


class Verse(BaseModel):
    """A single verse row."""

    id: str = Field(..., min_length=1)
    chapter: int = Field(..., ge=1)
    verse: int = Field(..., ge=1)
    devanagari: str = Field(default="", description="Sanskrit in Devanagari script")
    transliteration: str = Field(default="", description="IAST transliteration")
    translation: str = Field(default="")
    grammar_focus: Optional[str] = Field(None, description="Grammar concept this verse teaches")
    source_text: Optional[SourceText] = Field(None, description="None is treated as the Gita")

    def ref(self) -> str:
        if self.source_text == SourceText.NOI:
            return f"NOI {self.verse}"
        return f"BG {self.chapter}.{self.verse}"


class Word(BaseModel):
    """Word-by-word grammar entry belonging to one verse."""

    id: str = Field(..., min_length=1)
    verse_id: str = Field(..., min_length=1)
    word: str = Field(..., min_length=1, description="Primary display form")
    meaning: str = Field(default="")
    root: Optional[str] = Field(None, description="Verb root (dhatu) or stem")
    grammatical_case: Optional[str] = Field(None)
    number: Optional[str] = Field(None, description="singular, dual, plural")
    tense: Optional[str] = Field(None, description="Tense or mood")
    grammar_note: Optional[str] = Field(None)
    root_id: Optional[str] = Field(None)
    spiritual_insight: Optional[str] = Field(None)


class Root(BaseModel):
    """Sanskrit verb root."""

    id: str = Field(..., min_length=1)
    dhatu: str = Field(..., min_length=1)
    meaning: str = Field(default="")
    verb_class: Optional[str] = Field(None)
    pada: Optional[str] = Field(None, description="parasmaipada / atmanepada")
    example_form: Optional[str] = Field(None)


class Commentary(BaseModel):
    """An acharya's commentary summary on one verse."""

    id: str = Field(..., min_length=1)
    verse_id: str = Field(..., min_length=1)
    acharya: str = Field(..., min_length=1)
    summary: str = Field(default="")
    key_phrases: list[str] = Field(default_factory=list)
