"""Unit tests for gita_study.tools.flashcard_deck and devanagari_trainer."""

from __future__ import annotations

import random

import pytest

from gita_study.exceptions import QuizStateError
from gita_study.tools.devanagari_trainer import ALPHABET, DevanagariTrainer, LetterCard
from gita_study.tools.flashcard_deck import FlashcardDeck, build_questions
from tests.fixtures.conftest import _make_sample_words, _make_word


@pytest.mark.tool
class TestBuildQuestions:

    def test_meaning_question_for_every_word(self):
        questions = build_questions([_make_word("ca", "and")])
        assert len(questions) == 1
        q = questions[0]
        assert q.type == "meaning"
        assert q.answer == "and"
        assert "ca" in q.prompt

    def test_form_question_when_case_present(self):
        word = _make_word(
            "mām", "unto Me", grammatical_case="accusative", number="singular",
            grammar_note="Object of surrender.",
        )
        meaning, form = build_questions([word])
        assert form.type == "case"
        assert form.answer == "accusative, singular"
        assert form.why_matters == "Object of surrender."

    def test_form_question_with_tense_only(self):
        word = _make_word("vraja", "go", number="singular", tense="imperative")
        form = build_questions([word])[1]
        assert form.answer == "singular, imperative"

    def test_spiritual_insight_on_meaning_card(self):
        word = _make_word("mām", "unto Me", spiritual_insight="Surrender is personal.")
        assert build_questions([word])[0].why_matters == "Surrender is personal."

    def test_empty(self):
        assert build_questions([]) == []


@pytest.mark.tool
class TestFlashcardDeck:

    def _deck(self, size=5, seed=1):
        return FlashcardDeck(build_questions(_make_sample_words()), size=size, rng=random.Random(seed))

    def test_deck_capped_at_size(self):
        deck = self._deck()
        assert len(deck.deck) == 5
        assert deck.progress().position == 1

    def test_small_pool_uses_all_questions(self):
        deck = FlashcardDeck(build_questions([_make_word("ca", "and")]))
        assert len(deck.deck) == 1

    def test_reveal_then_mark_advances(self):
        deck = self._deck()
        first = deck.current
        deck.reveal()
        assert deck.revealed
        deck.mark(True)
        assert deck.score == 1
        assert not deck.revealed
        assert deck.current is not first

    def test_mark_before_reveal_rejected(self):
        with pytest.raises(QuizStateError):
            self._deck().mark(True)

    def test_finishes_with_score(self):
        deck = self._deck(size=3)
        for correct in (True, False, True):
            deck.reveal()
            deck.mark(correct)
        progress = deck.progress()
        assert progress.finished
        assert progress.score == 2
        assert progress.answered == 3
        assert progress.current is None
        with pytest.raises(QuizStateError):
            deck.reveal()
        with pytest.raises(QuizStateError):
            deck.mark(True)

    def test_restart_resets_progress(self):
        deck = self._deck(size=1)
        deck.reveal()
        deck.mark(True)
        deck.restart()
        assert not deck.finished
        assert deck.score == 0

    def test_same_seed_same_deck(self):
        assert [q.prompt for q in self._deck(seed=3).deck] == [q.prompt for q in self._deck(seed=3).deck]

    def test_empty_deck_is_finished(self):
        deck = FlashcardDeck([])
        assert deck.empty
        assert deck.finished
        assert deck.progress().position == 0

    def test_invalid_size(self):
        with pytest.raises(QuizStateError):
            FlashcardDeck([], size=0)


@pytest.mark.tool
class TestDevanagariTrainer:

    def test_alphabet_has_38_cards(self):
        assert len(ALPHABET) == 38
        assert ALPHABET[0] == LetterCard("अ", "a")

    def test_flip_shows_transliteration(self):
        trainer = DevanagariTrainer()
        assert trainer.face == "अ"
        trainer.flip()
        assert trainer.face == "a"

    def test_previous_wraps_to_last(self):
        trainer = DevanagariTrainer()
        trainer.previous()
        assert trainer.card == ALPHABET[-1]
        assert trainer.counter == "38 / 38"

    def test_next_wraps_to_first_and_unflips(self):
        trainer = DevanagariTrainer(ALPHABET[:2])
        trainer.flip()
        trainer.next()
        assert not trainer.flipped
        trainer.next()
        assert trainer.card == ALPHABET[0]
        assert trainer.counter == "1 / 2"

    def test_requires_cards(self):
        with pytest.raises(ValueError):
            DevanagariTrainer([])
