"""
Study Tool: Flashcard quiz built from a verse's word entries.

build_questions() derives a meaning card for every word and a grammatical
form card for words with a case or tense. FlashcardDeck draws a shuffled
deck of at most FLASHCARD_DECK_SIZE cards and walks it:

    reveal() -> mark(correct) -> next card ... -> finished

restart() reshuffles and resets the score.
"""

from __future__ import annotations

import logging
import random
from typing import Optional, Sequence

from gita_study.config.constants import FLASHCARD_DECK_SIZE
from gita_study.exceptions import QuizStateError
from gita_study.schemas.quiz_output import Question, QuizProgress
from gita_study.schemas.verse import Word

logger = logging.getLogger(__name__)


def build_questions(words: Sequence[Word]) -> list[Question]:
    """Build flashcard questions in word order."""
    questions: list[Question] = []
    for w in words:
        questions.append(Question(
            word_id=w.id,
            word=w.word,
            type="meaning",
            prompt=f'What does "{w.word}" mean?',
            answer=w.meaning,
            why_matters=w.spiritual_insight or None,
        ))
        if w.grammatical_case or w.tense:
            form = [part for part in (w.grammatical_case, w.number, w.tense) if part]
            questions.append(Question(
                word_id=w.id,
                word=w.word,
                type="case",
                prompt=f'What is the grammatical form of "{w.word}"?',
                answer=", ".join(form),
                why_matters=w.grammar_note or None,
            ))
    return questions


class FlashcardDeck:
    """Progression through one shuffled flashcard deck."""

    def __init__(
        self,
        questions: Sequence[Question],
        size: int = FLASHCARD_DECK_SIZE,
        rng: Optional[random.Random] = None,
    ):
        if size < 1:
            raise QuizStateError(f"Deck size must be at least 1, got {size}")
        self._questions = list(questions)
        self._size = size
        self._rng = rng or random.Random()
        self.restart()

    def restart(self) -> None:
        """Draw a fresh deck and reset all progress."""
        shuffled = list(self._questions)
        self._rng.shuffle(shuffled)
        self.deck: list[Question] = shuffled[:self._size]
        self.index = 0
        self.revealed = False
        self.score = 0
        self.answered = 0
        self.finished = not self.deck
        logger.debug("Dealt flashcard deck of %d from %d questions",
                     len(self.deck), len(self._questions))

    @property
    def empty(self) -> bool:
        return not self._questions

    @property
    def current(self) -> Optional[Question]:
        if self.finished or not self.deck:
            return None
        return self.deck[self.index]

    def reveal(self) -> Question:
        """Show the answer of the current card."""
        card = self.current
        if card is None:
            raise QuizStateError("No card to reveal: the deck is finished")
        self.revealed = True
        return card

    def mark(self, correct: bool) -> None:
        """Record the self-graded answer and advance to the next card."""
        if self.current is None:
            raise QuizStateError("Quiz is already finished")
        if not self.revealed:
            raise QuizStateError("Reveal the answer before marking it")

        if correct:
            self.score += 1
        self.answered += 1
        self.revealed = False

        if self.index + 1 >= len(self.deck):
            self.finished = True
        else:
            self.index += 1

    def progress(self) -> QuizProgress:
        return QuizProgress(
            position=self.index + 1 if self.deck else 0,
            deck_size=len(self.deck),
            revealed=self.revealed,
            score=self.score,
            answered=self.answered,
            finished=self.finished,
            current=self.current,
        )
