"""
Tests for MIDI export.

Tests cover:
- MidiEvent validation
- events_to_midi conversion
- Back-to-back note layout with symbolic lengths
- Writing files and filenames
"""

import re
from datetime import UTC, datetime
from pathlib import Path

import mido
import pytest
from pydantic import ValidationError

from chuk_mcp_melody.compiler import (
    TICKS_PER_BEAT,
    MidiEvent,
    events_to_midi,
    generate_filename,
    melody_to_bytes,
    notes_to_events,
    render_melody,
    write_melody_file,
)
from chuk_mcp_melody.core import TimeSignature
from chuk_mcp_melody.errors import WriteError
from chuk_mcp_melody.models import MidiFileOptions, NoteEvent

MELODY = [
    NoteEvent(pitch=60, duration=1, velocity=80),
    NoteEvent(pitch=62, duration=3, velocity=90),
    NoteEvent(pitch=64, duration=0.3, velocity=70),
]


@pytest.fixture
def options() -> MidiFileOptions:
    return MidiFileOptions(filename="melody.mid")


class TestMidiEvent:
    """Tests for MidiEvent dataclass."""

    def test_create_event(self) -> None:
        """Create a basic MIDI event."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100)
        assert event.pitch == 60
        assert event.channel == 0

    def test_invalid_pitch(self) -> None:
        """Pitch must be 0-127."""
        with pytest.raises(ValueError, match="Pitch"):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=480, velocity=100)

    def test_invalid_velocity(self) -> None:
        """Velocity must be 0-127."""
        with pytest.raises(ValueError, match="Velocity"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=128)

    def test_negative_start(self) -> None:
        """Start ticks must be non-negative."""
        with pytest.raises(ValueError, match="Start ticks"):
            MidiEvent(pitch=60, start_ticks=-1, duration_ticks=480, velocity=100)


class TestEventsToMidi:
    """Tests for events_to_midi conversion."""

    def test_tempo_first(self) -> None:
        """The tempo meta event leads the track."""
        mid = events_to_midi([], tempo_bpm=120)
        track = mid.tracks[0]
        assert track[0].type == "set_tempo"
        assert track[0].tempo == 500_000
        assert track[1].type == "time_signature"
        assert (track[1].numerator, track[1].denominator) == (4, 4)
        assert track[-1].type == "end_of_track"

    def test_single_track(self) -> None:
        """Melodies are written to one track."""
        mid = events_to_midi([MidiEvent(60, 0, 480, 100)])
        assert len(mid.tracks) == 1
        assert mid.ticks_per_beat == TICKS_PER_BEAT

    def test_other_time_signature(self) -> None:
        """The time signature meta event follows the argument."""
        mid = events_to_midi([], time_signature=TimeSignature(3, 4))
        assert mid.tracks[0][1].numerator == 3

    def test_note_off_before_note_on_at_same_tick(self) -> None:
        """Adjacent notes release before the next attack."""
        events = [MidiEvent(60, 0, 480, 100), MidiEvent(62, 480, 480, 100)]
        notes = [m for m in events_to_midi(events).tracks[0] if not m.is_meta]
        assert [m.type for m in notes] == ["note_on", "note_off", "note_on", "note_off"]
        assert [m.time for m in notes] == [0, 480, 0, 480]


class TestNotesToEvents:
    """Tests for back-to-back layout."""

    def test_back_to_back_symbolic_lengths(self) -> None:
        """Lengths are the symbolic durations; starts are cumulative."""
        events = notes_to_events(MELODY)
        assert [e.start_ticks for e in events] == [0, 480, 1440]
        # 3 beats is written as a half note, 0.3 as a sixteenth
        assert [e.duration_ticks for e in events] == [480, 960, 120]
        assert [e.velocity for e in events] == [80, 90, 70]

    def test_zero_velocity_defaults(self) -> None:
        """A zero velocity is written as 80."""
        events = notes_to_events([NoteEvent(pitch=60, duration=1, velocity=0)])
        assert events[0].velocity == 80


class TestRenderMelody:
    """Tests for melody rendering and writing."""

    def test_render_and_read_back(self, options: MidiFileOptions, temp_midi_path: Path) -> None:
        """A written melody reads back with the same notes."""
        render_melody(MELODY, options).save(str(temp_midi_path))
        loaded = mido.MidiFile(str(temp_midi_path))

        assert loaded.ticks_per_beat == 480
        note_ons = [m for m in loaded.tracks[0] if m.type == "note_on"]
        assert [m.note for m in note_ons] == [60, 62, 64]
        assert loaded.tracks[0][0].type == "set_tempo"

    def test_tempo_option(self) -> None:
        """The tempo option sets the tempo meta event."""
        options = MidiFileOptions(filename="x.mid", tempo=90)
        mid = render_melody(MELODY, options)
        assert mido.tempo2bpm(mid.tracks[0][0].tempo) == pytest.approx(90)

    def test_bytes_are_midi(self, options: MidiFileOptions) -> None:
        """Rendered bytes carry the SMF header."""
        data = melody_to_bytes(MELODY, options)
        assert data[:4] == b"MThd"

    def test_deterministic(self, options: MidiFileOptions) -> None:
        """Same input gives identical bytes."""
        assert melody_to_bytes(MELODY, options) == melody_to_bytes(MELODY, options)

    def test_write_creates_directories(self, options: MidiFileOptions, temp_dir: Path) -> None:
        """Missing output directories are created."""
        output_dir = temp_dir / "nested" / "output"
        path = write_melody_file(MELODY, options, output_dir)

        assert path == output_dir / "melody.mid"
        assert path.exists()
        assert len(mido.MidiFile(str(path)).tracks) == 1

    def test_write_error(self, options: MidiFileOptions, temp_dir: Path) -> None:
        """An unwritable location raises WriteError."""
        blocker = temp_dir / "blocker"
        blocker.write_text("not a directory")
        with pytest.raises(WriteError):
            write_melody_file(MELODY, options, blocker / "sub")


class TestMidiFileOptions:
    """Tests for export options."""

    def test_defaults(self) -> None:
        options = MidiFileOptions(filename="a.mid")
        assert options.tempo == 120
        assert options.get_time_signature() == TimeSignature.COMMON_TIME

    def test_invalid_time_signature(self) -> None:
        with pytest.raises(ValidationError):
            MidiFileOptions(filename="a.mid", time_signature=(4, 3))

    def test_invalid_tempo(self) -> None:
        with pytest.raises(ValidationError):
            MidiFileOptions(filename="a.mid", tempo=0)


class TestGenerateFilename:
    """Tests for output filenames."""

    def test_format(self) -> None:
        """Root, scale, tag and a minute-resolution UTC timestamp."""
        now = datetime(2026, 10, 19, 14, 5, 33, tzinfo=UTC)
        assert generate_filename("c", "minor", now) == "melody_c_minor_AI_2026-10-19T14-05.mid"

    def test_sharp_root_and_hyphenated_scale(self) -> None:
        now = datetime(2026, 1, 2, 3, 4, tzinfo=UTC)
        assert generate_filename("f#", "harmonic-minor", now) == (
            "melody_f#_harmonic-minor_AI_2026-01-02T03-04.mid"
        )

    def test_default_now(self) -> None:
        """Without a timestamp the current UTC time is used."""
        name = generate_filename("d", "blues")
        assert re.fullmatch(r"melody_d_blues_AI_\d{4}-\d{2}-\d{2}T\d{2}-\d{2}\.mid", name)
