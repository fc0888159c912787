"""
Prompt composition - turns a melody request into chat messages.
"""

from chuk_mcp_melody.composer.prompt import (
    MELODY_SYSTEM_PROMPT,
    SCALE_CHARACTERS,
    build_melody_prompt,
    build_messages,
    get_scale_character,
    note_count_range,
)

__all__ = [
    "MELODY_SYSTEM_PROMPT",
    "SCALE_CHARACTERS",
    "build_melody_prompt",
    "build_messages",
    "get_scale_character",
    "note_count_range",
]
