"""
CHUK Melody - scale-constrained AI melody composition.

A command like "compose C minor" is turned into a prompt, sent to a
language model, repaired until every note is valid, and written out as a
MIDI file.
"""

from chuk_mcp_melody.composition import (
    CompositionService,
    compose_from_command,
    parse_compose_command,
)
from chuk_mcp_melody.models import CompositionRequest, CompositionResult, NoteEvent

__version__ = "0.1.0"

__all__ = [
    "CompositionRequest",
    "CompositionResult",
    "CompositionService",
    "NoteEvent",
    "compose_from_command",
    "parse_compose_command",
]
