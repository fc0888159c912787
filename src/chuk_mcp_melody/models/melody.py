"""
Melody models - note events, composition requests and results.

A melody is a flat, ordered list of NoteEvents played back to back.
A CompositionRequest is parsed once from the user's command; a
CompositionResult is the terminal output of one request.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_melody.constants import (
    DEFAULT_BARS,
    DEFAULT_TEMPO,
    DEFAULT_TIME_SIGNATURE,
    ScaleName,
)
from chuk_mcp_melody.core.rhythm import TimeSignature


class NoteEvent(BaseModel):
    """
    A single melody note.

    Duration is in beats (1 = quarter note). Notes carry no start time;
    each one starts where the previous one ends.
    """

    pitch: int = Field(..., ge=0, le=127, description="MIDI note number")
    duration: float = Field(..., gt=0, description="Length in beats")
    velocity: int = Field(..., ge=0, le=127, description="MIDI velocity")


class CompositionRequest(BaseModel):
    """
    What to compose: a root, a scale and a length in bars.

    The root is kept as the command spelled it (lower-cased), so it can
    be echoed back in the result and the filename.
    """

    root: str = Field(..., min_length=1, description="Root note token (e.g., 'c', 'f#')")
    scale: ScaleName = Field(..., description="Scale name")
    bars: int = Field(DEFAULT_BARS, gt=0, description="Length in bars")

    model_config = {"frozen": True, "use_enum_values": True}


class CompositionDetails(BaseModel):
    """Summary of a successful composition."""

    root: str
    scale: str
    bars: int
    tempo: int
    note_count: int = Field(..., ge=0, alias="noteCount")

    model_config = {"populate_by_name": True}


class CompositionResult(BaseModel):
    """
    Result of one compose command.

    Failures carry only a message; filepath and details are set only
    when a file was actually written.
    """

    success: bool
    message: str
    filepath: str | None = None
    filename: str | None = None
    details: CompositionDetails | None = None

    @classmethod
    def failure(cls, message: str) -> CompositionResult:
        return cls(success=False, message=message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase detail keys, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)


class MidiFileOptions(BaseModel):
    """How a melody is rendered to a MIDI file."""

    filename: str = Field(..., min_length=1, description="Output filename (with .mid)")
    tempo: int = Field(DEFAULT_TEMPO, gt=0, le=300, description="Tempo in BPM")
    time_signature: tuple[int, int] = Field(
        DEFAULT_TIME_SIGNATURE, description="(numerator, denominator)"
    )

    model_config = {"frozen": True}

    @field_validator("time_signature")
    @classmethod
    def validate_time_signature(cls, v: tuple[int, int]) -> tuple[int, int]:
        """Validate the time signature."""
        TimeSignature(*v)
        return v

    def get_time_signature(self) -> TimeSignature:
        """Get parsed TimeSignature object."""
        return TimeSignature(*self.time_signature)
