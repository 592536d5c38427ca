"""
Shared test fixtures for Gita Study tests.

Provides factory functions, sample data (BG 18.66 and friends), and fake
collaborators for the audio controller and page assembly.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from gita_study.exceptions import BackendError, PlaybackRejectedError, VerseNotFoundError
from gita_study.schemas.listen_event import ListenEvent
from gita_study.schemas.verse import Commentary, SourceText, Verse, Word

# ---------------------------------------------------------------------------
# Sample data for tests
# ---------------------------------------------------------------------------

BG_18_66_DEVANAGARI = (
    "सर्वधर्मान्परित्यज्य मामेकं शरणं व्रज ।\n"
    "अहं त्वां सर्वपापेभ्यो मोक्षयिष्यामि मा शुचः ॥"
)

BG_18_66_TRANSLITERATION = (
    "sarva-dharmān parityajya mām ekaṁ śaraṇaṁ vraja\n"
    "ahaṁ tvāṁ sarva-pāpebhyo mokṣayiṣyāmi mā śucaḥ"
)

BG_18_66_TRANSLATION = (
    "Abandon all varieties of religion and just surrender unto Me. I shall "
    "deliver you from all sinful reactions. Do not fear."
)

# Single stored line, no pause marks: twelve words
TWELVE_WORDS = "one two three four five six seven eight nine ten eleven twelve"

SAMPLE_WORDS = [
    # (word, meaning, root, case, number, tense)
    ("sarva-dharmān", "all varieties of religion", None, "accusative", "plural", None),
    ("parityajya", "abandoning", "tyaj", None, None, "absolutive"),
    ("mām", "unto Me", None, "accusative", "singular", None),
    ("ekam", "only", None, "accusative", "singular", None),
    ("śaraṇam", "for surrender", None, "accusative", "singular", None),
    ("vraja", "go", "vraj", None, "singular", "imperative"),
    ("aham", "I", None, "nominative", "singular", None),
    ("mokṣayiṣyāmi", "will deliver", "muc", None, "singular", "causative future"),
]


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def _make_verse(
    chapter: int = 18,
    verse: int = 66,
    devanagari: str = BG_18_66_DEVANAGARI,
    transliteration: str = BG_18_66_TRANSLITERATION,
    translation: str = BG_18_66_TRANSLATION,
    grammar_focus: Optional[str] = "imperative verbs",
    source_text: Optional[SourceText] = None,
    id: Optional[str] = None,
) -> Verse:
    prefix = "noi" if source_text == SourceText.NOI else "bg"
    return Verse(
        id=id or f"{prefix}-{chapter}-{verse}",
        chapter=chapter,
        verse=verse,
        devanagari=devanagari,
        transliteration=transliteration,
        translation=translation,
        grammar_focus=grammar_focus,
        source_text=source_text,
    )


def _make_word(
    word: str,
    meaning: str = "",
    root: Optional[str] = None,
    grammatical_case: Optional[str] = None,
    number: Optional[str] = None,
    tense: Optional[str] = None,
    verse_id: str = "bg-18-66",
    id: Optional[str] = None,
    **extra,
) -> Word:
    return Word(
        id=id or f"w-{word}",
        verse_id=verse_id,
        word=word,
        meaning=meaning,
        root=root,
        grammatical_case=grammatical_case,
        number=number,
        tense=tense,
        **extra,
    )


def _make_sample_words(verse_id: str = "bg-18-66") -> list[Word]:
    return [
        _make_word(w, m, root=r, grammatical_case=c, number=n, tense=t, verse_id=verse_id)
        for w, m, r, c, n, t in SAMPLE_WORDS
    ]


def _make_commentary(
    acharya: str = "Srila Prabhupada",
    verse_id: str = "bg-18-66",
    summary: str = "The essence of all religion is surrender to Krishna.",
) -> Commentary:
    return Commentary(
        id=f"c-{verse_id}-{acharya.split()[-1].lower()}",
        verse_id=verse_id,
        acharya=acharya,
        summary=summary,
        key_phrases=["surrender", "fearlessness"],
    )


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakeChannel:
    """In-memory media channel.

    Set ``gate`` to hold play() pending until the event is set, and
    ``reject`` to make play() raise like a blocked autoplay.
    """

    def __init__(self, reject: bool = False):
        self.src: Optional[str] = None
        self.playing = False
        self.volume: Optional[float] = None
        self.muted: Optional[bool] = None
        self.reject = reject
        self.gate: Optional[asyncio.Event] = None
        self.play_calls = 0
        self.pause_calls = 0

    def load(self, src):
        self.src = src
        self.playing = False

    async def play(self):
        self.play_calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.reject:
            raise PlaybackRejectedError("play() request was denied")
        self.playing = True

    def pause(self):
        self.pause_calls += 1
        self.playing = False

    def set_volume(self, volume):
        self.volume = volume

    def set_muted(self, muted):
        self.muted = muted


class FakeBackend:
    """In-memory stand-in for BackendClient."""

    def __init__(
        self,
        verses: Optional[list[Verse]] = None,
        words: Optional[dict[str, list[Word]]] = None,
        commentaries: Optional[dict[str, list[Commentary]]] = None,
        fail_words: bool = False,
        fail_commentaries: bool = False,
        fail_verses: bool = False,
        fail_listens: bool = False,
    ):
        self.verses = list(verses or [])
        self.words = words or {}
        self.commentaries = commentaries or {}
        self.fail_words = fail_words
        self.fail_commentaries = fail_commentaries
        self.fail_verses = fail_verses
        self.fail_listens = fail_listens
        self.listens: list[ListenEvent] = []
        self.closed = False

    async def fetch_verse(self, chapter, verse, source_text=None):
        if self.fail_verses:
            raise BackendError("verses unavailable")
        wanted = source_text or "gita"
        for v in self.verses:
            source = v.source_text.value if v.source_text else "gita"
            if v.chapter == chapter and v.verse == verse and source == wanted:
                return v
        raise VerseNotFoundError(chapter, verse, source_text)

    async def fetch_words(self, verse_id):
        if self.fail_words:
            raise BackendError("words unavailable")
        return list(self.words.get(verse_id, []))

    async def fetch_commentaries(self, verse_id):
        if self.fail_commentaries:
            raise BackendError("commentaries unavailable")
        return list(self.commentaries.get(verse_id, []))

    async def list_verses(self):
        if self.fail_verses:
            raise BackendError("verses unavailable")
        return list(self.verses)

    async def insert_listen_event(self, event):
        if self.fail_listens:
            raise BackendError("insert failed")
        self.listens.append(event)

    async def aclose(self):
        self.closed = True


def _make_backend(**kwargs) -> FakeBackend:
    """Backend holding BG 18.66 with words and one commentary, plus BG 2.47 and NOI 1."""
    bg_18_66 = _make_verse()
    bg_2_47 = _make_verse(
        chapter=2, verse=47,
        devanagari="कर्मण्येवाधिकारस्ते मा फलेषु कदाचन",
        transliteration="karmaṇy evādhikāras te mā phaleṣu kadācana",
        translation="You have a right to perform your prescribed duty.",
        grammar_focus="locative case",
    )
    noi_1 = _make_verse(
        chapter=1, verse=1,
        devanagari="वाचो वेगं मनसः क्रोधवेगं",
        transliteration="vāco vegaṁ manasaḥ krodha-vegaṁ",
        translation="A sober person who can tolerate the urge to speak...",
        grammar_focus="genitive plural",
        source_text=SourceText.NOI,
    )
    defaults = dict(
        verses=[bg_18_66, bg_2_47, noi_1],
        words={bg_18_66.id: _make_sample_words()},
        commentaries={bg_18_66.id: [_make_commentary()]},
    )
    defaults.update(kwargs)
    return FakeBackend(**defaults)
