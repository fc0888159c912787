"""
Pitch primitives - note names, PitchClass and Interval.

These are the foundational types for all pitch-related operations.
Note names are normalized before lookup, so "c#", "C♯" and "C#" all
resolve to the same semitone. PitchClass represents the 12 chromatic
pitches (octave-independent). Interval is a distance in semitones.
"""

from __future__ import annotations

from enum import IntEnum
from functools import total_ordering
from types import MappingProxyType

from chuk_mcp_melody.constants import BASE_OCTAVE, ErrorMessages
from chuk_mcp_melody.errors import UnknownNoteOrScaleError

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: tuple[str, ...] = (
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
)
_FLAT_NAMES: tuple[str, ...] = (
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
)

# Spelling -> semitone. Both enharmonic spellings are accepted.
NOTE_TO_SEMITONE: MappingProxyType[str, int] = MappingProxyType(
    {
        **{name: i for i, name in enumerate(_SHARP_NAMES)},
        **{name: i for i, name in enumerate(_FLAT_NAMES)},
    }
)

# Semitone -> spelling. One name per semitone; sharps win.
CANONICAL_NAMES: tuple[str, ...] = _SHARP_NAMES

_ACCIDENTAL_GLYPHS = {"♯": "#", "♭": "b"}


def normalize_note_name(name: str) -> str:
    """
    Normalize a note name for table lookup.

    Strips whitespace, uppercases the first character only and maps the
    ♯/♭ glyphs to ASCII. Empty input is returned unchanged, so callers see
    the lookup fail downstream.

    Examples:
        normalize_note_name("c#") == "C#"
        normalize_note_name(" e♭ ") == "Eb"
    """
    stripped = name.strip()
    if not stripped:
        return name
    result = stripped[0].upper() + stripped[1:]
    for glyph, ascii_char in _ACCIDENTAL_GLYPHS.items():
        result = result.replace(glyph, ascii_char)
    return result


def semitone_of(name: str) -> int:
    """
    Get the semitone (0-11) for a note name.

    Raises:
        UnknownNoteOrScaleError: If the name is not a known spelling
    """
    normalized = normalize_note_name(name)
    try:
        return NOTE_TO_SEMITONE[normalized]
    except KeyError:
        raise UnknownNoteOrScaleError(ErrorMessages.UNKNOWN_NOTE.format(note=name)) from None


def note_name_of(semitone: int) -> str:
    """Canonical (sharp) spelling for a semitone, wrapping at the octave."""
    return CANONICAL_NAMES[semitone % 12]


def note_to_midi(name: str, octave: int = BASE_OCTAVE) -> int:
    """Convert a note name to a MIDI note number. C4 = 60."""
    return semitone_of(name) + (octave + 1) * 12


def midi_to_note_name(midi_note: int) -> str:
    """Spell a MIDI note number with its octave, e.g. 61 -> 'C#4'."""
    return f"{note_name_of(midi_note)}{midi_note // 12 - 1}"


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    Enharmonic equivalents share the same value (C# == Db == 1).

    Spelling is a display concern, handled at serialization.
    Internally, we use sharp names (Cs, Ds, etc.).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def to_midi(self, octave: int = BASE_OCTAVE) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self, prefer_flats: bool = False) -> str:
        """Get human-readable name."""
        names = _FLAT_NAMES if prefer_flats else _SHARP_NAMES
        return names[self.value]

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'c#', 'Db', 'E♭'."""
        return cls(semitone_of(name))


@total_ordering
class Interval:
    """
    Distance between pitches in semitones.

    Scales are built from step intervals, so this is the unit the
    scale tables are written in.

    Immutable and hashable.
    """

    __slots__ = ("_semitones",)
    _semitones: int

    def __init__(self, semitones: int) -> None:
        """Create an interval with the given number of semitones."""
        object.__setattr__(self, "_semitones", semitones)

    @property
    def semitones(self) -> int:
        """Number of semitones in this interval."""
        return self._semitones

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self._semitones == other._semitones)

    def __lt__(self, other: Interval) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self._semitones < other._semitones)

    def __hash__(self) -> int:
        return hash(self._semitones)

    def __repr__(self) -> str:
        return f"Interval({self._semitones})"

    def __str__(self) -> str:
        """Human-readable interval name."""
        names = {
            0: "P1",
            1: "m2",
            2: "M2",
            3: "m3",
            4: "M3",
            5: "P4",
            6: "TT",
            7: "P5",
            8: "m6",
            9: "M6",
            10: "m7",
            11: "M7",
            12: "P8",
        }
        return names.get(self._semitones, f"{self._semitones}st")
