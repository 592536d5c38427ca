"""
Display Tool: Link transliteration tokens to word-by-word grammar entries.

Each whitespace-delimited token of the transliteration is cleaned of
punctuation and compared against the verse's word entries. A token
matches an entry when, case- and diacritic-insensitively, the two are
equal or either is a prefix of the other. The first matching entry in
list order wins.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import Optional, Sequence

from gita_study.config.constants import LINE_BREAK_TOKEN, TOKEN_PUNCTUATION
from gita_study.schemas.page_output import TokenView
from gita_study.schemas.verse import Word

logger = logging.getLogger(__name__)

_PUNCTUATION_TABLE = str.maketrans("", "", TOKEN_PUNCTUATION)

# Combining Diacritical Marks block; Devanagari signs live elsewhere and are kept
_LATIN_MARKS = range(0x0300, 0x0370)


def fold(text: str) -> str:
    """Lowercase and drop Latin diacritics (ā -> a, ṁ -> m, ś -> s)."""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if ord(ch) not in _LATIN_MARKS)
    return unicodedata.normalize("NFC", stripped).casefold()


def clean_token(token: str) -> str:
    """Remove punctuation and surrounding whitespace from a token."""
    return token.translate(_PUNCTUATION_TABLE).strip()


def tokenize_transliteration(text: str) -> list[str]:
    """Split transliteration into tokens, marking stored line breaks with '/'."""
    return text.replace("\n", f" {LINE_BREAK_TOKEN} ").split()


def find_matching_word(token: str, words: Sequence[Word]) -> Optional[Word]:
    """Return the first word entry matching ``token``, or None."""
    clean = fold(clean_token(token))
    if not clean:
        return None

    for entry in words:
        candidate = fold(entry.word)
        if not candidate:
            continue
        if clean == candidate or clean.startswith(candidate) or candidate.startswith(clean):
            return entry
    return None


def annotate_tokens(text: str, words: Sequence[Word]) -> list[TokenView]:
    """Tokenize a transliteration and attach each token's matching word id."""
    views: list[TokenView] = []
    matched = 0
    for token in tokenize_transliteration(text):
        if token == LINE_BREAK_TOKEN:
            views.append(TokenView(text=token, is_line_break=True))
            continue
        entry = find_matching_word(token, words)
        if entry is not None:
            matched += 1
        views.append(TokenView(text=token, word_id=entry.id if entry else None))

    logger.debug("Matched %d of %d tokens against %d word entries",
                 matched, sum(1 for v in views if not v.is_line_break), len(words))
    return views
