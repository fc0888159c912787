"""
OpenAI chat-completions backend.

Talks to any OpenAI-compatible /chat/completions endpoint over httpx.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from chuk_mcp_melody.backends.base import CompletionBackend
from chuk_mcp_melody.config import Settings, get_settings
from chuk_mcp_melody.constants import ErrorMessages
from chuk_mcp_melody.errors import GenerationError

logger = logging.getLogger(__name__)


def build_url(base_url: str, path: str) -> str:
    base = base_url[:-1] if base_url.endswith("/") else base_url
    if not path.startswith("/"):
        path = "/" + path
    return base + path


class OpenAIBackend(CompletionBackend):
    """
    Completion backend for the OpenAI API.

    The HTTP client is created on first use and reused until aclose().
    A transport can be injected for tests.
    """

    name = "openai"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = settings or get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.llm_model
        self.base_url = base_url or settings.openai_base_url
        self.timeout = timeout if timeout is not None else settings.llm_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers={"Authorization": f"Bearer {self.api_key}"},
                transport=self._transport,
            )
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def complete(self, messages: list[dict[str, str]], temperature: float) -> str:
        if not self.api_key:
            raise GenerationError(ErrorMessages.MISSING_API_KEY)

        url = build_url(self.base_url, "/chat/completions")
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": temperature,
        }
        logger.info("OpenAI request: model=%s temperature=%s", self.model, temperature)

        try:
            response = await self.client.post(url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as exc:
            body = exc.response.text
            logger.error("OpenAI HTTP error: %s %s", exc.response.status_code, body)
            raise GenerationError(
                f"OpenAI HTTP error: {exc.response.status_code} {body}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("OpenAI connection error: %s", exc)
            raise GenerationError(f"OpenAI connection error: {exc}") from exc
        except json.JSONDecodeError as exc:
            logger.error("OpenAI returned invalid JSON: %s", exc)
            raise GenerationError(f"OpenAI returned invalid JSON: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            logger.error("OpenAI response missing content: %s", data)
            raise GenerationError("OpenAI response missing content") from exc

        return content if content is not None else "[]"
