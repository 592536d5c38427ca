"""
Flashcard quiz schema.

Defines Question (one card of the deck) and QuizProgress (a snapshot of
the deck's state for display).
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class Question(BaseModel):
    """A single flashcard built from a word entry."""

    word_id: str = Field(..., min_length=1)
    word: str = Field(..., min_length=1)
    type: Literal["meaning", "case"] = Field(...)
    prompt: str = Field(..., min_length=1)
    answer: str = Field(default="")
    why_matters: Optional[str] = Field(None, description="Spiritual insight or grammar note")


class QuizProgress(BaseModel):
    """Display snapshot of a flashcard deck."""

    position: int = Field(..., ge=0, description="1-based card number, 0 when the deck is empty")
    deck_size: int = Field(..., ge=0)
    revealed: bool = Field(default=False)
    score: int = Field(default=0, ge=0)
    answered: int = Field(default=0, ge=0)
    finished: bool = Field(default=False)
    current: Optional[Question] = Field(None)
