"""
Study Tool: Devanagari alphabet trainer.

A circular deck of letter cards; each card shows the Devanagari letter
and flips to its transliteration.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from gita_study.config.constants import DEVANAGARI_CARDS


@dataclass(frozen=True)
class LetterCard:
    devanagari: str
    transliteration: str


ALPHABET: tuple[LetterCard, ...] = tuple(
    LetterCard(devanagari=d, transliteration=t) for d, t in DEVANAGARI_CARDS
)


class DevanagariTrainer:
    """Flip-card walk through the alphabet with wrap-around navigation."""

    def __init__(self, cards: Sequence[LetterCard] = ALPHABET):
        if not cards:
            raise ValueError("Trainer needs at least one card")
        self.cards = tuple(cards)
        self.index = 0
        self.flipped = False

    @property
    def card(self) -> LetterCard:
        return self.cards[self.index]

    @property
    def face(self) -> str:
        """Text currently showing on the card."""
        return self.card.transliteration if self.flipped else self.card.devanagari

    @property
    def counter(self) -> str:
        return f"{self.index + 1} / {len(self.cards)}"

    def flip(self) -> None:
        self.flipped = not self.flipped

    def next(self) -> LetterCard:
        self.flipped = False
        self.index = (self.index + 1) % len(self.cards)
        return self.card

    def previous(self) -> LetterCard:
        self.flipped = False
        self.index = (self.index - 1) % len(self.cards)
        return self.card
