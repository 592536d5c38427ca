"""BackendClient tests against an httpx.MockTransport PostgREST stand-in."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from gita_study.backend.client import BackendClient
from gita_study.config.settings import Settings
from gita_study.exceptions import (
    BackendError,
    ConfigurationError,
    ListenLogError,
    VerseNotFoundError,
)
from gita_study.schemas.listen_event import ListenEvent, TrackType
from gita_study.schemas.verse import SourceText

VERSE_ROW = {
    "id": "bg-2-47",
    "chapter": 2,
    "verse": 47,
    "devanagari": "कर्मण्येवाधिकारस्ते मा फलेषु कदाचन",
    "transliteration": "karmaṇy evādhikāras te mā phaleṣu kadācana",
    "translation": "You have a right to perform your prescribed duty.",
    "grammar_focus": "locative case",
    "source_text": None,
}


def _run(handler, call):
    async def run():
        client = BackendClient(
            "https://project.supabase.co/",
            "anon-key",
            transport=httpx.MockTransport(handler),
        )
        async with client:
            return await call(client)
    return asyncio.run(run())


@pytest.mark.tool
class TestFetchVerse:

    def test_returns_verse_and_sends_auth(self):
        seen = {}

        def handler(request):
            seen["url"] = request.url
            seen["apikey"] = request.headers["apikey"]
            seen["auth"] = request.headers["authorization"]
            return httpx.Response(200, json=[VERSE_ROW])

        verse = _run(handler, lambda c: c.fetch_verse(2, 47))
        assert verse.id == "bg-2-47"
        assert verse.source_text is None
        assert seen["url"].path == "/rest/v1/verses"
        assert seen["url"].params["chapter"] == "eq.2"
        assert seen["url"].params["verse"] == "eq.47"
        assert "source_text.is.null" in seen["url"].params["or"]
        assert seen["apikey"] == "anon-key"
        assert seen["auth"] == "Bearer anon-key"

    def test_noi_source_filtered_exactly(self):
        seen = {}

        def handler(request):
            seen["params"] = request.url.params
            return httpx.Response(200, json=[dict(VERSE_ROW, id="noi-1-1", chapter=1, verse=1, source_text="noi")])

        verse = _run(handler, lambda c: c.fetch_verse(1, 1, "noi"))
        assert verse.source_text == SourceText.NOI
        assert seen["params"]["source_text"] == "eq.noi"
        assert "or" not in seen["params"]

    def test_empty_result_is_not_found(self):
        with pytest.raises(VerseNotFoundError) as exc_info:
            _run(lambda r: httpx.Response(200, json=[]), lambda c: c.fetch_verse(9, 99))
        assert exc_info.value.chapter == 9
        assert exc_info.value.verse == 99

    def test_http_error_is_backend_error(self):
        with pytest.raises(BackendError) as exc_info:
            _run(lambda r: httpx.Response(500, json={"message": "boom"}), lambda c: c.fetch_verse(2, 47))
        assert exc_info.value.error_code == "BACKEND_HTTP"

    def test_transport_error_is_backend_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(BackendError):
            _run(handler, lambda c: c.fetch_verse(2, 47))


@pytest.mark.tool
class TestFetchRelated:

    def test_fetch_words(self):
        rows = [
            {"id": "w1", "verse_id": "bg-2-47", "word": "karmaṇi", "meaning": "in prescribed duties",
             "grammatical_case": "locative", "number": "singular"},
        ]

        def handler(request):
            assert request.url.path == "/rest/v1/words"
            assert request.url.params["verse_id"] == "eq.bg-2-47"
            return httpx.Response(200, json=rows)

        words = _run(handler, lambda c: c.fetch_words("bg-2-47"))
        assert [w.word for w in words] == ["karmaṇi"]
        assert words[0].grammatical_case == "locative"

    def test_fetch_commentaries(self):
        rows = [{"id": "c1", "verse_id": "bg-2-47", "acharya": "Srila Prabhupada",
                 "summary": "Work without attachment.", "key_phrases": ["duty"]}]
        commentaries = _run(lambda r: httpx.Response(200, json=rows), lambda c: c.fetch_commentaries("bg-2-47"))
        assert commentaries[0].acharya == "Srila Prabhupada"

    def test_list_verses(self):
        verses = _run(lambda r: httpx.Response(200, json=[VERSE_ROW]), lambda c: c.list_verses())
        assert len(verses) == 1

    def test_non_list_payload_rejected(self):
        with pytest.raises(BackendError):
            _run(lambda r: httpx.Response(200, json={"oops": True}), lambda c: c.list_verses())

    def test_undecodable_body_is_backend_error(self):
        def handler(request):
            return httpx.Response(200, content=b"<html>gateway</html>")

        with pytest.raises(BackendError) as exc_info:
            _run(handler, lambda c: c.fetch_words("bg-2-47"))
        assert exc_info.value.error_code == "BACKEND_PAYLOAD"

    def test_malformed_row_is_backend_error(self):
        rows = [{"id": "w1", "verse_id": "bg-2-47", "word": ""}]
        with pytest.raises(BackendError) as exc_info:
            _run(lambda r: httpx.Response(200, json=rows), lambda c: c.fetch_words("bg-2-47"))
        assert exc_info.value.error_code == "BACKEND_PAYLOAD"

    def test_malformed_verse_row_is_backend_error(self):
        row = dict(VERSE_ROW, chapter="two")
        with pytest.raises(BackendError):
            _run(lambda r: httpx.Response(200, json=[row]), lambda c: c.fetch_verse(2, 47))

    def test_malformed_words_degrade_page_section(self):
        from gita_study.page import load_verse_page

        def handler(request):
            if request.url.path.endswith("/words"):
                return httpx.Response(200, json=[{"id": "w1", "word": "mā"}])
            if request.url.path.endswith("/commentaries"):
                return httpx.Response(200, content=b"not json")
            return httpx.Response(200, json=[VERSE_ROW])

        page = _run(handler, lambda c: load_verse_page(c, 2, 47))
        assert page.reference == "BG 2.47"
        assert page.words == []
        assert page.commentaries == []
        assert page.has_words is False


@pytest.mark.tool
class TestInsertListenEvent:

    def test_posts_minimal_row(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["prefer"] = request.headers.get("prefer")
            seen["body"] = json.loads(request.content)
            return httpx.Response(201)

        event = ListenEvent(user_id="u1", chapter=2, verse=47, track_type=TrackType.VIBE)
        _run(handler, lambda c: c.insert_listen_event(event))
        assert seen["method"] == "POST"
        assert seen["path"] == "/rest/v1/user_listens"
        assert seen["prefer"] == "return=minimal"
        assert seen["body"] == {"user_id": "u1", "chapter": 2, "verse": 47, "track_type": "vibe"}

    def test_rejected_insert_is_listen_log_error(self):
        event = ListenEvent(user_id="u1", chapter=2, verse=47, track_type=TrackType.VIBE)
        with pytest.raises(ListenLogError):
            _run(lambda r: httpx.Response(401), lambda c: c.insert_listen_event(event))


@pytest.mark.tool
class TestFromSettings:

    def test_missing_credentials(self):
        with pytest.raises(ConfigurationError):
            BackendClient.from_settings(Settings())

    def test_builds_with_credentials(self):
        async def run():
            client = BackendClient.from_settings(
                Settings(supabase_url="https://p.supabase.co", supabase_anon_key="k"),
                transport=httpx.MockTransport(lambda r: httpx.Response(200, json=[])),
            )
            async with client:
                return await client.list_verses()

        assert asyncio.run(run()) == []
