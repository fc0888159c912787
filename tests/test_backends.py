"""
Tests for completion backends and reply parsing.

The OpenAI backend is exercised against httpx.MockTransport, so no
network access is needed.
"""

import json

import httpx
import pytest

from chuk_mcp_melody.backends import (
    OpenAIBackend,
    extract_json_array,
    generate_note_records,
    parse_note_records,
)
from chuk_mcp_melody.backends.openai import build_url
from chuk_mcp_melody.backends.parsing import summarize_text
from chuk_mcp_melody.composer import MELODY_SYSTEM_PROMPT
from chuk_mcp_melody.config import Settings
from chuk_mcp_melody.errors import GenerationError, MalformedOutputError


def _chat_reply(content: str | None) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class TestExtractJsonArray:
    """Tests for array extraction from free text."""

    def test_bare_array(self) -> None:
        """A bare array is returned whole."""
        assert extract_json_array("[1, 2]") == "[1, 2]"

    def test_surrounding_prose(self) -> None:
        """Text around the array is dropped."""
        text = 'Here you go:\n```json\n[{"pitch": 60}]\n```\nEnjoy!'
        assert extract_json_array(text) == '[{"pitch": 60}]'

    @pytest.mark.parametrize("text", ["", "no array here", "] backwards [", "{ }"])
    def test_missing_array(self, text: str) -> None:
        """Text without a bracketed span is malformed."""
        with pytest.raises(MalformedOutputError, match="AI did not return valid JSON"):
            extract_json_array(text)


class TestParseNoteRecords:
    """Tests for parse_note_records."""

    def test_parses_records(self) -> None:
        """Records are returned unvalidated."""
        records = parse_note_records('[{"pitch": 60, "duration": 1}, {"pitch": "x"}]')
        assert records == [{"pitch": 60, "duration": 1}, {"pitch": "x"}]

    def test_empty_array(self) -> None:
        """An empty array parses to an empty list."""
        assert parse_note_records("[]") == []

    def test_invalid_json(self) -> None:
        """Bracketed but undecodable text is malformed."""
        with pytest.raises(MalformedOutputError):
            parse_note_records("[pitch: 60]")

    def test_non_object_items(self) -> None:
        """Items must be objects."""
        with pytest.raises(MalformedOutputError, match=r"note\[1\]"):
            parse_note_records('[{"pitch": 60}, 62]')


class TestSummarizeText:
    """Tests for log summaries."""

    def test_short_text_unchanged(self) -> None:
        assert summarize_text("abc") == "abc"

    def test_long_text_truncated(self) -> None:
        summary = summarize_text("x" * 500, limit=10)
        assert summary == "x" * 10 + "...(truncated)"


class TestBuildUrl:
    """Tests for endpoint URL joining."""

    def test_joins_without_double_slash(self) -> None:
        assert build_url("https://api.example.com/v1/", "/chat/completions") == (
            "https://api.example.com/v1/chat/completions"
        )
        assert build_url("https://api.example.com/v1", "chat/completions") == (
            "https://api.example.com/v1/chat/completions"
        )


class TestOpenAIBackend:
    """Tests for the OpenAI chat-completions backend."""

    @pytest.fixture
    def backend_settings(self) -> Settings:
        return Settings(
            _env_file=None,
            openai_api_key="sk-test",
            openai_base_url="https://llm.test/v1",
            llm_model="test-model",
        )

    def _backend(self, settings: Settings, handler) -> OpenAIBackend:
        return OpenAIBackend(settings=settings, transport=httpx.MockTransport(handler))

    @pytest.mark.asyncio
    async def test_success(self, backend_settings: Settings) -> None:
        """The reply content is returned and the request is well formed."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_chat_reply('[{"pitch": 60}]'))

        backend = self._backend(backend_settings, handler)
        messages = [{"role": "user", "content": "hi"}]
        try:
            reply = await backend.complete(messages, temperature=1.0)
        finally:
            await backend.aclose()

        assert reply == '[{"pitch": 60}]'
        assert len(seen) == 1
        request = seen[0]
        assert str(request.url) == "https://llm.test/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(request.content)
        assert body == {"model": "test-model", "messages": messages, "temperature": 1.0}

    @pytest.mark.asyncio
    async def test_missing_api_key(self) -> None:
        """No request is made without an API key."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_chat_reply("[]"))

        settings = Settings(_env_file=None, openai_api_key="")
        backend = self._backend(settings, handler)
        with pytest.raises(GenerationError, match="API key not configured"):
            await backend.complete([], temperature=1.0)
        assert calls == []

    @pytest.mark.asyncio
    async def test_http_error(self, backend_settings: Settings) -> None:
        """Non-2xx responses become GenerationError."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(429, text="rate limited")

        backend = self._backend(backend_settings, handler)
        with pytest.raises(GenerationError, match="429 rate limited"):
            await backend.complete([], temperature=1.0)
        await backend.aclose()

    @pytest.mark.asyncio
    async def test_connection_error(self, backend_settings: Settings) -> None:
        """Transport failures become GenerationError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        backend = self._backend(backend_settings, handler)
        with pytest.raises(GenerationError, match="connection error"):
            await backend.complete([], temperature=1.0)
        await backend.aclose()

    @pytest.mark.asyncio
    async def test_missing_content(self, backend_settings: Settings) -> None:
        """A reply with no choices is an error."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"choices": []})

        backend = self._backend(backend_settings, handler)
        with pytest.raises(GenerationError, match="missing content"):
            await backend.complete([], temperature=1.0)
        await backend.aclose()

    @pytest.mark.asyncio
    async def test_null_content(self, backend_settings: Settings) -> None:
        """A null content field reads as an empty melody."""

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=_chat_reply(None))

        backend = self._backend(backend_settings, handler)
        assert await backend.complete([], temperature=1.0) == "[]"
        await backend.aclose()

    def test_explicit_arguments_override_settings(self, backend_settings: Settings) -> None:
        """Constructor arguments win over settings."""
        backend = OpenAIBackend(api_key="other", model="m2", timeout=5.0, settings=backend_settings)
        assert backend.api_key == "other"
        assert backend.model == "m2"
        assert backend.timeout == 5.0
        assert backend.base_url == "https://llm.test/v1"


class TestGenerateNoteRecords:
    """Tests for one generation round trip."""

    @pytest.mark.asyncio
    async def test_sends_system_and_user(self, make_backend) -> None:
        """The backend gets the system prompt, the user prompt and the temperature."""
        backend = make_backend(reply='Sure! [{"pitch": 60, "duration": 1, "velocity": 80}]')
        records = await generate_note_records(backend, "compose please", temperature=0.7)

        assert records == [{"pitch": 60, "duration": 1, "velocity": 80}]
        assert len(backend.calls) == 1
        call = backend.calls[0]
        assert call["temperature"] == 0.7
        assert call["messages"][0] == {"role": "system", "content": MELODY_SYSTEM_PROMPT}
        assert call["messages"][1] == {"role": "user", "content": "compose please"}

    @pytest.mark.asyncio
    async def test_malformed_reply(self, make_backend) -> None:
        """Replies without an array raise MalformedOutputError."""
        backend = make_backend(reply="I cannot do that.")
        with pytest.raises(MalformedOutputError):
            await generate_note_records(backend, "compose")

    @pytest.mark.asyncio
    async def test_backend_error_propagates(self, make_backend) -> None:
        """Backend failures are not swallowed."""
        backend = make_backend(error=GenerationError("boom"))
        with pytest.raises(GenerationError, match="boom"):
            await generate_note_records(backend, "compose")
