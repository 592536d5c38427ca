"""
FastAPI application factory for the Gita Study API.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # Load .env (SUPABASE_URL, etc.) before anything else

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gita_study.api.routes import router
from gita_study.audio.listen_log import ListenLogDebouncer
from gita_study.audio.playlist import VIBE, Playlist
from gita_study.config.constants import API_VERSION, CORS_ORIGINS
from gita_study.config.settings import Settings, load_settings
from gita_study.page import VerseSource


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Only close a client the app built itself
    if app.state.owns_backend and app.state.backend is not None:
        await app.state.backend.aclose()


def create_app(
    backend: Optional[VerseSource] = None,
    settings: Optional[Settings] = None,
    playlist: Playlist = VIBE,
) -> FastAPI:
    app = FastAPI(
        title="Gita Study API",
        description=(
            "REST API for studying Bhagavad-gita verses: formatted verse "
            "pages, word-by-word grammar, audio playlist, and flashcards."
        ),
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = settings or load_settings()
    app.state.backend = backend
    app.state.owns_backend = False
    app.state.playlist = playlist
    app.state.listen_debouncer = ListenLogDebouncer()
    app.include_router(router, prefix="/api/v1")
    return app


app = create_app()
