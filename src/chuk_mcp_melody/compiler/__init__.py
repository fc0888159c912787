"""
Compilation pipeline - turns generated notes into a MIDI file.

The pipeline:
    raw note records
    → repair_melody (scale, root anchoring, ranges)
    → clamp_to_piano_range (last-mile safety net)
    → MidiEvents (back-to-back, symbolic lengths)
    → MIDI File
"""

from chuk_mcp_melody.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    generate_filename,
    melody_to_bytes,
    notes_to_events,
    render_melody,
    write_melody_file,
)
from chuk_mcp_melody.compiler.validator import (
    RepairIssue,
    RepairResult,
    clamp_to_piano_range,
    nearest_scale_pitch,
    repair_melody,
)

__all__ = [
    # MIDI
    "TICKS_PER_BEAT",
    "MidiEvent",
    "events_to_midi",
    "generate_filename",
    "melody_to_bytes",
    "notes_to_events",
    "render_melody",
    "write_melody_file",
    # Validator
    "RepairIssue",
    "RepairResult",
    "clamp_to_piano_range",
    "nearest_scale_pitch",
    "repair_melody",
]
