"""
Core music primitives.

These are the invariants the melody pipeline composes on:
- Note names: normalization and semitone lookup
- PitchClass: The 12 chromatic pitch classes (0-11)
- Interval: Distance between pitches in semitones
- ScaleType: Interval pattern defining a scale
- Key: Root + scale type, enumerates the scale-note set
- Duration: Symbolic note lengths
- TimeSignature: Beats per bar and beat unit
"""

from chuk_mcp_melody.core.pitch import (
    CANONICAL_NAMES,
    NOTE_TO_SEMITONE,
    Interval,
    PitchClass,
    midi_to_note_name,
    normalize_note_name,
    note_name_of,
    note_to_midi,
    semitone_of,
)
from chuk_mcp_melody.core.rhythm import Duration, TimeSignature
from chuk_mcp_melody.core.scale import (
    SCALE_TYPES,
    Key,
    ScaleType,
    enumerate_scale,
    get_scale_type,
    is_known_scale,
)

__all__ = [
    # Pitch
    "CANONICAL_NAMES",
    "NOTE_TO_SEMITONE",
    "Interval",
    "PitchClass",
    "midi_to_note_name",
    "normalize_note_name",
    "note_name_of",
    "note_to_midi",
    "semitone_of",
    # Scale
    "SCALE_TYPES",
    "Key",
    "ScaleType",
    "enumerate_scale",
    "get_scale_type",
    "is_known_scale",
    # Rhythm
    "Duration",
    "TimeSignature",
]
