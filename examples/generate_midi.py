#!/usr/bin/env python3
"""
Example: Generate MIDI files without a language model.

This demonstrates the back half of the pipeline - repair and MIDI export.
A hand-written "generated" melody with mistakes in it is repaired against
its scale and written out, next to a plain scale run for each scale.

Usage:
    python examples/generate_midi.py
    # Creates: examples/output/*.mid
"""

from pathlib import Path

from chuk_mcp_melody.compiler import (
    clamp_to_piano_range,
    generate_filename,
    repair_melody,
    write_melody_file,
)
from chuk_mcp_melody.constants import SCALE_NAMES
from chuk_mcp_melody.core import enumerate_scale
from chuk_mcp_melody.models import MidiFileOptions, NoteEvent


def main() -> None:
    """Generate example MIDI files."""
    output_dir = Path(__file__).parent / "output"

    # Example 1: One scale run per scale, in A
    for scale in SCALE_NAMES:
        path = write_melody_file(
            create_scale_run("a", scale),
            MidiFileOptions(filename=f"scale_run_a_{scale}.mid"),
            output_dir,
        )
        print(f"  Created: {path}")

    # Example 2: Repair a sloppy melody in D minor
    print("\nRepairing a melody in d minor...")
    notes = repair_sloppy_melody("d", "minor")
    path = write_melody_file(
        notes,
        MidiFileOptions(filename=generate_filename("d", "minor"), tempo=96),
        output_dir,
    )
    print(f"  Created: {path}")

    print("\nDone! Open the MIDI files in your DAW to hear them.")


def create_scale_run(root: str, scale: str) -> list[NoteEvent]:
    """Ascend two octaves in eighths and land on a whole-note root."""
    pitches = enumerate_scale(root, scale)
    run = [NoteEvent(pitch=p, duration=0.5, velocity=70 + i) for i, p in enumerate(pitches)]
    run.append(NoteEvent(pitch=pitches[0], duration=4, velocity=60))
    return run


def repair_sloppy_melody(root: str, scale: str) -> list[NoteEvent]:
    """
    Repair the kind of output a language model gets wrong.

    This demonstrates:
    - Out-of-scale pitches snapping to the nearest scale note
    - First and last notes forced onto the root
    - Missing fields and wild values being defaulted and clamped
    """
    scale_notes = enumerate_scale(root, scale)
    records = [
        {"pitch": 65, "duration": 1, "velocity": 80},
        {"pitch": 66, "duration": 0.5},
        {"pitch": 69, "duration": 0.5, "velocity": 140},
        {"pitch": "high", "duration": 2, "velocity": 90},
        {"pitch": 73, "duration": 12, "velocity": 85},
        {"pitch": 71, "duration": 0, "velocity": 70},
        {"pitch": 64, "duration": 4, "velocity": 55},
    ]
    result = repair_melody(records, scale_notes, scale_notes[0])
    print(result)
    return clamp_to_piano_range(result.notes)


if __name__ == "__main__":
    main()
