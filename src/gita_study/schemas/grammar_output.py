"""
Grammar reference output schema.

Static reference content for the grammar explorer: paradigm tables
(noun declension, verb conjugation), short notes, and the beginner primer.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, model_validator


class ParadigmRow(BaseModel):
    """One row of a paradigm table: a case or a person across three numbers."""

    label: str = Field(..., min_length=1, description="Case or person, e.g. 'Locative'")
    singular: str
    dual: str
    plural: str
    usage: Optional[str] = Field(None, description="Plain-English example of the row's use")


class ParadigmTable(BaseModel):
    title: str
    lakara: Optional[str] = Field(None, description="Traditional tense/mood name, e.g. 'Laṭ'")
    rows: list[ParadigmRow] = Field(default_factory=list)

    def row(self, label: str) -> Optional[ParadigmRow]:
        wanted = label.lower()
        for r in self.rows:
            if r.label.lower().startswith(wanted):
                return r
        return None


class ReferenceNote(BaseModel):
    title: str
    body: str


class PrimerConcept(BaseModel):
    """A beginner primer entry, optionally tied to an example from BG 18.66."""

    term: str = Field(..., min_length=1)
    sanskrit: Optional[str] = Field(None, description="Sanskrit grammatical term in Devanagari")
    explanation: str
    verse_example: Optional[str] = Field(None)


class GrammarExplorer(BaseModel):
    """Everything the grammar explorer page shows, grouped by tab."""

    declension_stem: str
    declension_note: str
    declension: ParadigmTable
    conjugation_root: str
    conjugation_note: str
    conjugations: list[ParadigmTable] = Field(default_factory=list)
    participle: ReferenceNote
    key_concepts: list[ReferenceNote] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_paradigm_shapes(self) -> "GrammarExplorer":
        if len(self.declension.rows) != 8:
            raise ValueError("declension table must list all eight cases")
        for table in self.conjugations:
            if len(table.rows) != 3:
                raise ValueError(f"conjugation table {table.title!r} must list three persons")
        return self
