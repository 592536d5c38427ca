"""
Backend client for the managed Postgres/REST backend (Supabase PostgREST).

Read paths: verses, words, commentaries. Write path: listen events.
Every transport or HTTP failure is raised as BackendError so callers can
decide whether it is fatal (the verse itself) or degradable (words,
commentaries, listen logging).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from gita_study.config.constants import (
    BACKEND_REST_PATH,
    BACKEND_TIMEOUT,
    COMMENTARIES_TABLE,
    LISTENS_TABLE,
    SOURCE_GITA,
    VERSES_TABLE,
    WORDS_TABLE,
)
from gita_study.config.settings import Settings, load_settings
from gita_study.exceptions import BackendError, ListenLogError, VerseNotFoundError
from gita_study.schemas.listen_event import ListenEvent
from gita_study.schemas.verse import Commentary, Verse, Word

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class BackendClient:
    """Async PostgREST client authenticated with the public anon key."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = BACKEND_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + BACKEND_REST_PATH,
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "BackendClient":
        """Build a client from Settings; raises ConfigurationError without credentials."""
        settings = settings or load_settings()
        url, key = settings.require_backend()
        return cls(url, key, timeout=settings.backend_timeout, transport=transport)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "BackendClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ------------------------------------------------------------------

    async def _select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        query = {"select": "*", **params}
        try:
            response = await self._client.get(f"/{table}", params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise BackendError(
                f"Query on {table} failed with HTTP {e.response.status_code}",
                error_code="BACKEND_HTTP",
            ) from e
        except httpx.RequestError as e:
            raise BackendError(f"Query on {table} failed: {e}", error_code="BACKEND_UNREACHABLE") from e

        try:
            rows = response.json()
        except ValueError as e:
            raise BackendError(f"Undecodable response from {table}: {e}", error_code="BACKEND_PAYLOAD") from e
        if not isinstance(rows, list):
            raise BackendError(f"Unexpected response shape from {table}", error_code="BACKEND_PAYLOAD")
        logger.debug("Fetched %d row(s) from %s", len(rows), table)
        return rows

    @staticmethod
    def _parse(model: type[ModelT], table: str, rows: list[dict[str, Any]]) -> list[ModelT]:
        try:
            return [model.model_validate(r) for r in rows]
        except ValidationError as e:
            raise BackendError(
                f"Malformed {model.__name__} row from {table}: {e.error_count()} error(s)",
                error_code="BACKEND_PAYLOAD",
            ) from e

    async def fetch_verse(
        self,
        chapter: int,
        verse: int,
        source_text: Optional[str] = None,
    ) -> Verse:
        """
        Fetch one verse by chapter and verse number.

        Gita verses are stored with source_text null or "gita"; any other
        source is matched exactly.

        Raises:
            VerseNotFoundError: no row matches.
            BackendError: the query failed.
        """
        params = {"chapter": f"eq.{chapter}", "verse": f"eq.{verse}", "limit": "1"}
        if source_text and source_text != SOURCE_GITA:
            params["source_text"] = f"eq.{source_text}"
        else:
            params["or"] = f"(source_text.is.null,source_text.eq.{SOURCE_GITA})"

        rows = await self._select(VERSES_TABLE, params)
        if not rows:
            raise VerseNotFoundError(chapter, verse, source_text)
        return self._parse(Verse, VERSES_TABLE, rows[:1])[0]

    async def fetch_words(self, verse_id: str) -> list[Word]:
        rows = await self._select(WORDS_TABLE, {"verse_id": f"eq.{verse_id}"})
        return self._parse(Word, WORDS_TABLE, rows)

    async def fetch_commentaries(self, verse_id: str) -> list[Commentary]:
        rows = await self._select(COMMENTARIES_TABLE, {"verse_id": f"eq.{verse_id}"})
        return self._parse(Commentary, COMMENTARIES_TABLE, rows)

    async def list_verses(self) -> list[Verse]:
        rows = await self._select(VERSES_TABLE, {})
        return self._parse(Verse, VERSES_TABLE, rows)

    async def insert_listen_event(self, event: ListenEvent) -> None:
        """Insert one listen row without reading it back."""
        try:
            response = await self._client.post(
                f"/{LISTENS_TABLE}",
                json=event.model_dump(mode="json"),
                headers={"Prefer": "return=minimal"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ListenLogError(
                f"Listen insert failed with HTTP {e.response.status_code}",
                error_code="BACKEND_HTTP",
            ) from e
        except httpx.RequestError as e:
            raise ListenLogError(f"Listen insert failed: {e}", error_code="BACKEND_UNREACHABLE") from e
