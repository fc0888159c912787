"""
Melody Validator - repairs generated notes so they are musically valid.

Two passes:
1. repair_melody: snaps pitches into the scale, anchors the first and
   last note on the root, and clamps duration/velocity to the ranges the
   prompt asked for.
2. clamp_to_piano_range: a last-mile clamp applied to every note before
   export, independent of the scale.

Repairs are never fatal; each one is recorded as an info issue.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from chuk_mcp_melody.constants import (
    DEFAULT_DURATION,
    DEFAULT_FINAL_PITCH,
    DEFAULT_FINAL_VELOCITY,
    DEFAULT_REPAIR_VELOCITY,
    DURATION_RANGE,
    FINAL_VELOCITY_RANGE,
    PIANO_RANGE,
    REPAIR_VELOCITY_RANGE,
    RepairCode,
)
from chuk_mcp_melody.models.melody import NoteEvent

logger = logging.getLogger(__name__)


@dataclass
class RepairIssue:
    """A single repair applied to a note."""

    code: RepairCode
    message: str
    location: str | None = None

    def __str__(self) -> str:
        location = f" at {self.location}" if self.location else ""
        return f"[INFO] {self.code}: {self.message}{location}"


@dataclass
class RepairResult:
    """Repaired notes plus the repairs that were made."""

    notes: list[NoteEvent] = field(default_factory=list)
    issues: list[RepairIssue] = field(default_factory=list)

    def add(self, code: RepairCode, message: str, location: str | None = None) -> None:
        self.issues.append(RepairIssue(code, message, location))

    @property
    def repaired_count(self) -> int:
        """Number of distinct notes with at least one issue of any code."""
        return len({i.location for i in self.issues})

    def __str__(self) -> str:
        if not self.issues:
            return "Repair passed: no issues found"
        return "\n".join(str(issue) for issue in self.issues)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _as_number(value: Any) -> float | None:
    """Coerce a record value to a finite number, or None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _field(note: NoteEvent | Mapping[str, Any], name: str) -> Any:
    if isinstance(note, Mapping):
        return note.get(name)
    return getattr(note, name, None)


def nearest_scale_pitch(pitch: float, scale_notes: Sequence[int]) -> int:
    """
    Get the scale member closest to a pitch.

    Ties go to the member found first in a left-to-right scan.

    Raises:
        ValueError: If scale_notes is empty
    """
    if not scale_notes:
        raise ValueError("scale_notes must not be empty")
    best = scale_notes[0]
    for candidate in scale_notes[1:]:
        if abs(candidate - pitch) < abs(best - pitch):
            best = candidate
    return best


def repair_melody(
    records: Sequence[Mapping[str, Any]],
    scale_notes: Sequence[int],
    root_pitch: int,
) -> RepairResult:
    """
    Repair raw note records against a scale.

    For each record, in order:
    1. An out-of-scale pitch is replaced by the nearest scale member.
       A missing pitch becomes the root.
    2. The first and last note are forced to the root pitch.
    3. Duration defaults to 1 when missing or zero, then is clamped.
    4. Velocity defaults to 75 when missing or zero, then is clamped.

    Args:
        records: Raw note records from the backend
        scale_notes: The permitted MIDI pitches
        root_pitch: Pitch the melody must start and end on

    Returns:
        RepairResult with one NoteEvent per record
    """
    result = RepairResult()
    allowed = set(scale_notes)
    last_index = len(records) - 1
    min_dur, max_dur = DURATION_RANGE
    min_vel, max_vel = REPAIR_VELOCITY_RANGE

    for index, record in enumerate(records):
        location = f"note[{index}]"
        raw_pitch = _as_number(record.get("pitch"))

        if raw_pitch is None:
            pitch = root_pitch
            result.add("MISSING_PITCH", f"No usable pitch, using root {root_pitch}", location)
        elif raw_pitch in allowed:
            pitch = int(raw_pitch)
        else:
            pitch = nearest_scale_pitch(raw_pitch, scale_notes)
            logger.info("Fixed note %g -> %d (not in scale)", raw_pitch, pitch)
            result.add("OUT_OF_SCALE", f"Pitch {raw_pitch:g} not in scale, using {pitch}", location)

        if index in (0, last_index) and pitch != root_pitch:
            result.add("ROOT_ANCHOR", f"Boundary pitch {pitch} moved to root {root_pitch}", location)
            pitch = root_pitch

        duration = _as_number(record.get("duration")) or DEFAULT_DURATION
        velocity = _as_number(record.get("velocity")) or DEFAULT_REPAIR_VELOCITY

        result.notes.append(
            NoteEvent(
                pitch=pitch,
                duration=clamp(duration, min_dur, max_dur),
                velocity=round(clamp(velocity, min_vel, max_vel)),
            )
        )

    return result


def clamp_to_piano_range(notes: Sequence[NoteEvent | Mapping[str, Any]]) -> list[NoteEvent]:
    """
    Final range enforcement applied to every note before export.

    Pitch is clamped to the piano keyboard (21-108), duration to 0.25-4
    beats and velocity to 40-127. Missing or zero values default to
    pitch 60, duration 1 and velocity 80.
    """
    low_pitch, high_pitch = PIANO_RANGE
    min_dur, max_dur = DURATION_RANGE
    min_vel, max_vel = FINAL_VELOCITY_RANGE

    clamped: list[NoteEvent] = []
    for note in notes:
        pitch = _as_number(_field(note, "pitch")) or DEFAULT_FINAL_PITCH
        duration = _as_number(_field(note, "duration")) or DEFAULT_DURATION
        velocity = _as_number(_field(note, "velocity")) or DEFAULT_FINAL_VELOCITY
        clamped.append(
            NoteEvent(
                pitch=round(clamp(pitch, low_pitch, high_pitch)),
                duration=clamp(duration, min_dur, max_dur),
                velocity=round(clamp(velocity, min_vel, max_vel)),
            )
        )
    return clamped
