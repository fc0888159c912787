"""
Scale primitives - ScaleType, Key and scale-note enumeration.

Scales are interval patterns from a root. Keys are scale types applied to
a root pitch. The scale-note set of a key is the list of absolute MIDI
pitches a melody is allowed to use.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar

from chuk_mcp_melody.constants import BASE_OCTAVE, SCALE_OCTAVES, ScaleName
from chuk_mcp_melody.core.pitch import Interval, PitchClass


@dataclass(frozen=True)
class ScaleType:
    """
    A scale defined by its interval pattern.

    The intervals are from one degree to the next (not cumulative).
    A major scale is: W W H W W W H (2 2 1 2 2 2 1 semitones)

    Immutable and hashable.
    """

    intervals: tuple[Interval, ...]
    name: str = ""

    # Supported scale types (defined after class)
    MAJOR: ClassVar[ScaleType]
    MINOR: ClassVar[ScaleType]
    HARMONIC_MINOR: ClassVar[ScaleType]
    MELODIC_MINOR: ClassVar[ScaleType]
    PENTATONIC: ClassVar[ScaleType]
    BLUES: ClassVar[ScaleType]

    def __post_init__(self) -> None:
        # Validate that intervals sum to an octave (12 semitones)
        total = sum(i.semitones for i in self.intervals)
        if total != 12:
            raise ValueError(f"Scale intervals must sum to 12 semitones, got {total}")
        if not 5 <= len(self.intervals) <= 7:
            raise ValueError(f"Scale must have 5-7 degrees, got {len(self.intervals)}")

    @property
    def offsets(self) -> tuple[int, ...]:
        """
        Semitone offsets of each degree from the root.

        Always starts at 0; the octave return is not included.
        """
        offsets = [0]
        for interval in self.intervals[:-1]:
            offsets.append(offsets[-1] + interval.semitones)
        return tuple(offsets)

    def get_pitches(self, root: PitchClass) -> list[PitchClass]:
        """Get all pitch classes in this scale starting from root."""
        return [root.transpose(offset) for offset in self.offsets]

    def __len__(self) -> int:
        return len(self.intervals)

    def __str__(self) -> str:
        return self.name or f"ScaleType({self.intervals})"

    def __repr__(self) -> str:
        if self.name:
            return f"ScaleType.{self.name.upper().replace('-', '_')}"
        return f"ScaleType({self.intervals!r})"


# Define scale types using interval shorthand
_m2 = Interval(1)  # Minor second (half step)
_M2 = Interval(2)  # Major second (whole step)
_m3 = Interval(3)  # Minor third / augmented second

ScaleType.MAJOR = ScaleType((_M2, _M2, _m2, _M2, _M2, _M2, _m2), ScaleName.MAJOR.value)
ScaleType.MINOR = ScaleType((_M2, _m2, _M2, _M2, _m2, _M2, _M2), ScaleName.MINOR.value)
ScaleType.HARMONIC_MINOR = ScaleType(
    (_M2, _m2, _M2, _M2, _m2, _m3, _m2), ScaleName.HARMONIC_MINOR.value
)
ScaleType.MELODIC_MINOR = ScaleType(
    (_M2, _m2, _M2, _M2, _M2, _M2, _m2), ScaleName.MELODIC_MINOR.value
)
ScaleType.PENTATONIC = ScaleType((_M2, _M2, _m3, _M2, _m3), ScaleName.PENTATONIC.value)
ScaleType.BLUES = ScaleType((_m3, _M2, _m2, _m2, _m3, _M2), ScaleName.BLUES.value)

SCALE_TYPES: MappingProxyType[str, ScaleType] = MappingProxyType(
    {
        ScaleName.MAJOR.value: ScaleType.MAJOR,
        ScaleName.MINOR.value: ScaleType.MINOR,
        ScaleName.HARMONIC_MINOR.value: ScaleType.HARMONIC_MINOR,
        ScaleName.MELODIC_MINOR.value: ScaleType.MELODIC_MINOR,
        ScaleName.PENTATONIC.value: ScaleType.PENTATONIC,
        ScaleName.BLUES.value: ScaleType.BLUES,
    }
)


def is_known_scale(name: str) -> bool:
    """Return True if the scale name is in the supported set."""
    return name.strip().lower() in SCALE_TYPES


def get_scale_type(name: str) -> ScaleType:
    """
    Look up a scale type by name.

    Unknown names fall back to major.
    """
    return SCALE_TYPES.get(name.strip().lower(), ScaleType.MAJOR)


@dataclass(frozen=True)
class Key:
    """
    A key is a root pitch class plus a scale type.

    This is the context for resolving the scale-note set.

    Examples:
        Key(PitchClass.C, ScaleType.MAJOR) = C major
        Key(PitchClass.D, ScaleType.MINOR) = D minor
    """

    root: PitchClass
    scale: ScaleType

    def root_midi(self, octave: int = BASE_OCTAVE) -> int:
        """MIDI note number of the root in the given octave."""
        return self.root.to_midi(octave)

    def scale_pitches(self, octaves: int = SCALE_OCTAVES, octave: int = BASE_OCTAVE) -> list[int]:
        """
        Enumerate absolute MIDI pitches of this key.

        Emits each octave's offsets in pattern order, lowest octave first,
        so the result is ascending and starts on the root.

        Args:
            octaves: Number of octaves to span
            octave: Octave of the root (default 4, where C4 = 60)

        Returns:
            len(scale) * octaves MIDI note numbers
        """
        base = self.root_midi(octave)
        return [base + offset + 12 * n for n in range(octaves) for offset in self.scale.offsets]

    def get_pitches(self) -> list[PitchClass]:
        """Get all pitch classes in this key."""
        return self.scale.get_pitches(self.root)

    def __str__(self) -> str:
        return f"{self.root.spell()} {self.scale}"

    def __repr__(self) -> str:
        return f"Key({self.root!r}, {self.scale!r})"

    @classmethod
    def from_names(cls, root: str, scale: str) -> Key:
        """
        Build a key from a note name and a scale name.

        Raises:
            UnknownNoteOrScaleError: If the root is not a known note
        """
        return cls(PitchClass.parse(root), get_scale_type(scale))


def enumerate_scale(root: str, scale: str, octaves: int = SCALE_OCTAVES) -> list[int]:
    """
    Get the scale-note set for a root name and scale name.

    Example:
        enumerate_scale("c", "pentatonic") == [60, 62, 64, 67, 69, 72, 74, 76, 79, 81]
    """
    return Key.from_names(root, scale).scale_pitches(octaves=octaves)
