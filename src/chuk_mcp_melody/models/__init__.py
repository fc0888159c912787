"""
Pydantic models for the melody system.

This module provides:
- NoteEvent: One note of a melody
- CompositionRequest: Root, scale and bars parsed from a command
- CompositionResult: Outcome of a compose command
- CompositionDetails: Summary attached to successful results
- MidiFileOptions: Filename, tempo and time signature for export
"""

from chuk_mcp_melody.models.melody import (
    CompositionDetails,
    CompositionRequest,
    CompositionResult,
    MidiFileOptions,
    NoteEvent,
)

__all__ = [
    "CompositionDetails",
    "CompositionRequest",
    "CompositionResult",
    "MidiFileOptions",
    "NoteEvent",
]
