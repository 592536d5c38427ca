"""
Display Tool: Plain-English grammar explanations for word entries.

Turns the terse grammatical attributes of a word (tense, case, root) into
beginner-friendly sentences, plus the label/value rows of the grammar table.
"""

from __future__ import annotations

from typing import Optional

from gita_study.schemas.page_output import GrammarRow
from gita_study.schemas.verse import Word

# Checked in order; the first keyword found in the tense wins
_TENSE_EXPLANATIONS: list[tuple[tuple[str, ...], str]] = [
    (("imperative",),
     "This is a command form: someone is directly telling someone else to do something."),
    (("future",),
     "This is future tense: it describes something that will happen."),
    (("present",),
     "This is present tense: it describes an action happening now."),
    (("past", "participle"),
     "This is a past form: it describes an action that has already been done."),
]

_CASE_EXPLANATIONS: list[tuple[str, str]] = [
    ("accusative",
     "The accusative case means this word is the object, the one receiving the action."),
    ("nominative",
     "The nominative case means this word is the subject, the one doing the action."),
    ("instrumental",
     'The instrumental case means "by" or "with": it tells how the action is done.'),
    ("dative",
     'The dative case means "to" or "for": it tells who benefits from the action.'),
    ("ablative",
     'The ablative case means "from": it shows the source or origin.'),
    ("genitive",
     'The genitive case means "of": it shows possession or belonging.'),
    ("locative",
     'The locative case means "in" or "at": it tells where something happens.'),
    ("vocative",
     "The vocative case is used for direct address, calling out to someone."),
]


def plain_explanation(word: Word) -> Optional[str]:
    """Build a plain-English explanation, or None if nothing applies."""
    parts: list[str] = []

    if word.tense:
        tense = word.tense.lower()
        for keywords, sentence in _TENSE_EXPLANATIONS:
            if any(k in tense for k in keywords):
                parts.append(sentence)
                break

    if word.grammatical_case:
        case = word.grammatical_case.lower()
        for keyword, sentence in _CASE_EXPLANATIONS:
            if keyword in case:
                parts.append(sentence)
                break

    if word.root:
        parts.append(f'This word comes from the root "{word.root}".')

    return " ".join(parts) if parts else None


def grammar_rows(word: Word) -> list[GrammarRow]:
    """Label/value rows for the grammar table; meaning is always present."""
    rows: list[GrammarRow] = []
    for label, value in (
        ("Root", word.root),
        ("Case", word.grammatical_case),
        ("Number", word.number),
        ("Tense / Mood", word.tense),
    ):
        if value:
            rows.append(GrammarRow(label=label, value=value))
    rows.append(GrammarRow(label="Meaning", value=word.meaning))
    return rows
