"""
Melody generation - one round trip to the completion backend.
"""

from __future__ import annotations

import logging
from typing import Any

from chuk_mcp_melody.backends.base import CompletionBackend
from chuk_mcp_melody.backends.parsing import parse_note_records, summarize_text
from chuk_mcp_melody.composer.prompt import MELODY_SYSTEM_PROMPT, build_messages
from chuk_mcp_melody.constants import DEFAULT_LLM_TEMPERATURE

logger = logging.getLogger(__name__)


async def generate_note_records(
    backend: CompletionBackend,
    prompt: str,
    temperature: float = DEFAULT_LLM_TEMPERATURE,
    system_prompt: str = MELODY_SYSTEM_PROMPT,
) -> list[dict[str, Any]]:
    """
    Ask the backend for a melody and parse the reply.

    Args:
        backend: Completion backend to call
        prompt: User prompt from build_melody_prompt
        temperature: Sampling temperature
        system_prompt: System message

    Returns:
        Raw note records, unvalidated

    Raises:
        GenerationError: If the backend call fails
        MalformedOutputError: If the reply holds no note array
    """
    messages = build_messages(prompt, system_prompt)
    logger.info("Submitting melody request to %s backend (%d prompt chars)", backend.name, len(prompt))

    reply = await backend.complete(messages, temperature)
    logger.info("Melody reply received: %d chars: %s", len(reply), summarize_text(reply))

    records = parse_note_records(reply)
    logger.info("Parsed %d note records", len(records))
    return records
