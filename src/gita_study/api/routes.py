"""
FastAPI route handlers for the Gita Study API.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request

from gita_study.api.models import (
    GrammarConceptsResponse,
    HealthResponse,
    LetterCardModel,
    ListenRequest,
    ListenResponse,
    PlaylistEntryModel,
    PlaylistResponse,
)
from gita_study.audio.probe import vibe_audio_url
from gita_study.backend.client import BackendClient
from gita_study.config.constants import FLASHCARD_DECK_SIZE, GRAMMAR_CONCEPTS
from gita_study.exceptions import BackendError, ConfigurationError, VerseNotFoundError
from gita_study.page import VerseSource, load_verse_index, load_verse_page
from gita_study.schemas.grammar_output import GrammarExplorer, PrimerConcept
from gita_study.schemas.listen_event import ListenEvent
from gita_study.schemas.page_output import PlaylistPosition, VerseIndexView, VersePageView
from gita_study.schemas.quiz_output import Question
from gita_study.tools.devanagari_trainer import ALPHABET
from gita_study.tools.flashcard_deck import FlashcardDeck, build_questions
from gita_study.tools.grammar_reference import grammar_explorer, grammar_primer
from gita_study.tools.verse_index import TEXT_FILTERS
from gita_study.utils import verse_route

logger = logging.getLogger(__name__)

router = APIRouter()


def _backend(request: Request) -> VerseSource:
    """Return the app's backend, building it from settings on first use."""
    state = request.app.state
    if state.backend is None:
        try:
            state.backend = BackendClient.from_settings(state.settings)
        except ConfigurationError as e:
            raise HTTPException(status_code=503, detail=e.message)
        state.owns_backend = True
    return state.backend


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    state = request.app.state
    configured = state.backend is not None or state.settings.backend_configured
    return HealthResponse(backend_configured=configured)


@router.get("/verses", response_model=VerseIndexView)
async def list_verses(
    request: Request,
    text: str = Query("all", description="all, gita, or noi"),
    grammar_focus: Optional[str] = Query(None),
):
    if text not in TEXT_FILTERS:
        raise HTTPException(
            status_code=422,
            detail=f"text must be one of {', '.join(TEXT_FILTERS)}",
        )
    backend = _backend(request)
    try:
        return await load_verse_index(backend, text, grammar_focus)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=f"Backend error: {e.message}")


@router.get("/verse/{chapter}/{verse}", response_model=VersePageView)
async def get_verse(
    chapter: int,
    verse: int,
    request: Request,
    source: Optional[str] = Query(None, description="Source text; omit for the Gita"),
):
    backend = _backend(request)
    try:
        return await load_verse_page(
            backend, chapter, verse, source, settings=request.app.state.settings,
        )
    except VerseNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=f"Backend error: {e.message}")


@router.get("/verse/{chapter}/{verse}/flashcards", response_model=list[Question])
async def get_flashcards(
    chapter: int,
    verse: int,
    request: Request,
    source: Optional[str] = Query(None),
    size: int = Query(FLASHCARD_DECK_SIZE, ge=1, le=50),
    seed: Optional[int] = Query(None, description="Fixed shuffle for reproducible decks"),
):
    backend = _backend(request)
    try:
        record = await backend.fetch_verse(chapter, verse, source)
        words = await backend.fetch_words(record.id)
    except VerseNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=f"Backend error: {e.message}")

    deck = FlashcardDeck(build_questions(words), size=size, rng=random.Random(seed))
    return deck.deck


@router.get("/playlist", response_model=PlaylistResponse)
async def get_playlist(request: Request):
    playlist = request.app.state.playlist
    base_url = request.app.state.settings.vibe_audio_base_url
    return PlaylistResponse(
        total=len(playlist),
        entries=[
            PlaylistEntryModel(
                chapter=e.chapter,
                verse=e.verse,
                route=verse_route(e.chapter, e.verse),
                vibe_src=vibe_audio_url(e.chapter, e.verse, base_url),
            )
            for e in playlist
        ],
    )


@router.get("/playlist/position", response_model=PlaylistPosition)
async def get_playlist_position(
    request: Request,
    chapter: int = Query(..., ge=1),
    verse: int = Query(..., ge=1),
):
    return request.app.state.playlist.position(chapter, verse)


@router.get("/devanagari/cards", response_model=list[LetterCardModel])
async def get_devanagari_cards():
    return [
        LetterCardModel(devanagari=c.devanagari, transliteration=c.transliteration)
        for c in ALPHABET
    ]


@router.get("/grammar/concepts", response_model=GrammarConceptsResponse)
async def get_grammar_concepts():
    return GrammarConceptsResponse(concepts=list(GRAMMAR_CONCEPTS))


@router.get("/grammar/conjugations", response_model=GrammarExplorer)
async def get_grammar_explorer():
    """Declension and conjugation tables with the key concepts."""
    return grammar_explorer()


@router.get("/grammar/primer", response_model=list[PrimerConcept])
async def get_grammar_primer():
    return grammar_primer()


@router.post("/listens", response_model=ListenResponse, status_code=202)
async def log_listen(body: ListenRequest, request: Request):
    """Record a listen. Never fails the caller: errors only show as logged=false."""
    debouncer = request.app.state.listen_debouncer
    if not debouncer.should_log((body.user_id, body.chapter, body.verse, body.track_type.value)):
        return ListenResponse(logged=False)

    event = ListenEvent(**body.model_dump())
    try:
        backend = _backend(request)
        await backend.insert_listen_event(event)
    except (BackendError, HTTPException) as e:
        logger.warning("Listen event not stored for %d.%d: %s", body.chapter, body.verse, e)
        return ListenResponse(logged=False)
    return ListenResponse(logged=True)
