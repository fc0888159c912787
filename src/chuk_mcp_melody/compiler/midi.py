"""
MIDI export - the end of the pipeline.

This module handles conversion from a melody (an ordered list of
NoteEvents) to a Standard MIDI File using mido, and persisting it.
All rendering is deterministic: same input -> same output.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_melody.constants import DEFAULT_FINAL_VELOCITY, FILENAME_TAG
from chuk_mcp_melody.core.rhythm import Duration, TimeSignature
from chuk_mcp_melody.errors import WriteError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chuk_mcp_melody.models.melody import MidiFileOptions, NoteEvent

logger = logging.getLogger(__name__)

# Standard ticks per beat (quarter note) - industry standard
TICKS_PER_BEAT = 480

MELODY_CHANNEL = 0


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    This is the lowest-level representation before writing to MIDI.
    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int  # Absolute start time in ticks
    duration_ticks: int  # Duration in ticks
    velocity: int  # 0-127
    channel: int = MELODY_CHANNEL  # 0-15

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = 120,
    ticks_per_beat: int = TICKS_PER_BEAT,
    time_signature: TimeSignature = TimeSignature.COMMON_TIME,
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a single-track MidiFile.

    Args:
        events: Sequence of MidiEvent objects
        tempo_bpm: Tempo in beats per minute
        ticks_per_beat: Resolution (default 480)
        time_signature: Time signature meta event

    Returns:
        A mido MidiFile ready to be saved

    The tempo meta event is always the first message in the track.
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    # Set tempo (microseconds per beat)
    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))
    track.append(
        MetaMessage(
            "time_signature",
            numerator=time_signature.numerator,
            denominator=time_signature.denominator,
            time=0,
        )
    )

    messages: list[tuple[int, Message]] = []

    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,  # Will be converted to delta
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message(
                    "note_off",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=0,
                    time=0,  # Will be converted to delta
                ),
            )
        )

    # Sort by absolute time, then by message type (note_off before note_on at same time)
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    # Convert to delta times
    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))

    return mid


def notes_to_events(
    notes: Sequence[NoteEvent],
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> list[MidiEvent]:
    """
    Lay notes out back to back.

    Each note's length is its symbolic Duration (see Duration.from_beats),
    so a 3-beat note is written as a half note.
    """
    events: list[MidiEvent] = []
    cursor = 0
    for note in notes:
        length = Duration.from_beats(note.duration).to_ticks(ticks_per_beat)
        events.append(
            MidiEvent(
                pitch=note.pitch,
                start_ticks=cursor,
                duration_ticks=length,
                velocity=note.velocity or DEFAULT_FINAL_VELOCITY,
            )
        )
        cursor += length
    return events


def render_melody(notes: Sequence[NoteEvent], options: MidiFileOptions) -> MidiFile:
    """Render a melody to a MidiFile using the options' tempo and meter."""
    return events_to_midi(
        notes_to_events(notes),
        tempo_bpm=options.tempo,
        time_signature=options.get_time_signature(),
    )


def melody_to_bytes(notes: Sequence[NoteEvent], options: MidiFileOptions) -> bytes:
    """Render a melody to Standard MIDI File bytes."""
    buffer = io.BytesIO()
    render_melody(notes, options).save(file=buffer)
    return buffer.getvalue()


def write_melody_file(
    notes: Sequence[NoteEvent],
    options: MidiFileOptions,
    output_dir: Path,
) -> Path:
    """
    Render a melody and write it to output_dir / options.filename.

    The output directory is created if missing.

    Returns:
        Path of the written file

    Raises:
        WriteError: If the directory or file cannot be written
    """
    data = melody_to_bytes(notes, options)
    output_path = output_dir / options.filename
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(data)
    except OSError as exc:
        raise WriteError(f"Could not write {output_path}: {exc}") from exc

    logger.info("Wrote %d notes to %s (%d bytes)", len(notes), output_path, len(data))
    return output_path


def generate_filename(root: str, scale: str, now: datetime | None = None) -> str:
    """
    Build the output filename for a melody.

    The UTC timestamp has minute resolution, so two melodies in the same
    key within one minute share a name.

    Example:
        melody_c_minor_AI_2026-10-19T14-05.mid
    """
    moment = now or datetime.now(UTC)
    timestamp = moment.strftime("%Y-%m-%dT%H:%M").replace(":", "-").replace(".", "-")
    return f"melody_{root}_{scale}_{FILENAME_TAG}_{timestamp}.mid"
