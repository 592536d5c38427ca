"""
Centralized configuration constants for Gita Study.

All magic numbers, static tables, and configuration defaults live here.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Verse Line Formatter
# ---------------------------------------------------------------------------

VERSE_LINE_TARGET: int = 4                # A sloka is displayed as four padas
PAUSE_MARK_BISECT_THRESHOLD: int = 20     # Chars before a lone segment is bisected
PAUSE_MARKS: str = "।॥"                   # danda, double danda
DEFAULT_LINE_POLICY: str = "word_groups"

# ---------------------------------------------------------------------------
# Word Matcher
# ---------------------------------------------------------------------------

LINE_BREAK_TOKEN: str = "/"

# Stripped from a transliteration token before it is compared to a word entry
TOKEN_PUNCTUATION: str = (
    "/"
    "\"'“”‘’"
    ".,;:!?"
    "|"
    "।॥"
)

# ---------------------------------------------------------------------------
# Audio
# ---------------------------------------------------------------------------

DEFAULT_VOLUME: float = 1.0
VIBE_AUDIO_BASE_URL: str = "/audio/vibe"
AUDIO_EXTENSION: str = "mp3"
TRADITIONAL_AUDIO_BASE_URL: str = ""      # Unconfigured until hosting is decided
AUDIO_PROBE_TIMEOUT: float = 5.0          # Seconds for the HEAD existence check

LISTEN_LOG_DEBOUNCE_SECONDS: float = 5.0
LISTEN_LOG_MAX_ENTRIES: int = 256

# Verses with a recorded "vibe" rendition, in playback order
VIBE_PLAYLIST: tuple[tuple[int, int], ...] = (
    (1, 1),
    (2, 7),
    (2, 13),
    (2, 14),
    (2, 20),
    (2, 47),
    (3, 27),
    (4, 7),
    (4, 8),
    (4, 34),
    (6, 47),
    (7, 14),
    (9, 22),
    (9, 26),
    (9, 34),
    (10, 8),
    (12, 13),
    (15, 7),
    (18, 66),
)

# ---------------------------------------------------------------------------
# Backend (Supabase PostgREST)
# ---------------------------------------------------------------------------

BACKEND_REST_PATH: str = "/rest/v1"
BACKEND_TIMEOUT: float = 15.0
VERSES_TABLE: str = "verses"
WORDS_TABLE: str = "words"
COMMENTARIES_TABLE: str = "commentaries"
LISTENS_TABLE: str = "user_listens"

# ---------------------------------------------------------------------------
# Source texts and verse index
# ---------------------------------------------------------------------------

SOURCE_GITA: str = "gita"
SOURCE_NOI: str = "noi"

SOURCE_TEXT_LABELS: dict[str, str] = {
    SOURCE_GITA: "Bhagavad-gita",
    SOURCE_NOI: "Nectar of Instruction",
}

# NOI verses sort after every Gita chapter
NOI_SORT_OFFSET: int = 100
TRANSLATION_PREVIEW_CHARS: int = 80

GRAMMAR_CONCEPTS: list[str] = [
    "present tense verbs",
    "compound nouns (samāsa)",
    "instrumental case",
    "nominative masculine",
    "dative case",
    "imperative verbs",
    "accusative singular",
    "genitive plural",
    "pronouns + indeclinables",
    "particles (eva, ca)",
    "present participle",
    "past passive participle",
    "compound + genitive",
    "verb root recognition",
    "locative case",
    "indeclinable usage",
    "causative future tense",
]

# ---------------------------------------------------------------------------
# Flashcards and Devanagari trainer
# ---------------------------------------------------------------------------

FLASHCARD_DECK_SIZE: int = 5

DEVANAGARI_CARDS: list[tuple[str, str]] = [
    ("अ", "a"), ("आ", "ā"), ("इ", "i"), ("ई", "ī"),
    ("उ", "u"), ("ऊ", "ū"), ("ए", "e"), ("ऐ", "ai"),
    ("ओ", "o"), ("औ", "au"),
    ("क", "ka"), ("ख", "kha"), ("ग", "ga"), ("घ", "gha"),
    ("च", "ca"), ("छ", "cha"), ("ज", "ja"), ("झ", "jha"),
    ("ट", "ṭa"), ("ड", "ḍa"),
    ("त", "ta"), ("थ", "tha"), ("द", "da"), ("ध", "dha"), ("न", "na"),
    ("प", "pa"), ("फ", "pha"), ("ब", "ba"), ("भ", "bha"), ("म", "ma"),
    ("य", "ya"), ("र", "ra"), ("ल", "la"), ("व", "va"),
    ("श", "śa"), ("ष", "ṣa"), ("स", "sa"), ("ह", "ha"),
]

# ---------------------------------------------------------------------------
# API
# ---------------------------------------------------------------------------

API_VERSION: str = "0.1.0"
CORS_ORIGINS: list[str] = [
    "http://localhost:5173",
    "http://localhost:5174",
    "http://localhost:5175",
    "http://localhost:5176",
]
