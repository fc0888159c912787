"""
Rhythm primitives - Duration and TimeSignature.

Durations are the symbolic note lengths a melody is written in
(whole, half, quarter, eighth, sixteenth). Uses Fraction for exact
representation.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import ClassVar

_NAMES = {
    Fraction(4): "whole",
    Fraction(2): "half",
    Fraction(1): "quarter",
    Fraction(1, 2): "eighth",
    Fraction(1, 4): "sixteenth",
}


@dataclass(frozen=True)
class Duration:
    """
    A rhythmic duration expressed in beats.

    A quarter note in 4/4 time is 1 beat (Fraction(1)).

    Immutable and hashable.
    """

    beats: Fraction

    WHOLE: ClassVar[Duration]
    HALF: ClassVar[Duration]
    QUARTER: ClassVar[Duration]
    EIGHTH: ClassVar[Duration]
    SIXTEENTH: ClassVar[Duration]

    def __post_init__(self) -> None:
        if self.beats <= 0:
            raise ValueError(f"Duration must be positive, got {self.beats}")

    def to_ticks(self, ticks_per_beat: int) -> int:
        """
        Convert to MIDI ticks.

        Args:
            ticks_per_beat: MIDI resolution (typically 480)

        Returns:
            Number of ticks
        """
        return int(self.beats * ticks_per_beat)

    @property
    def name(self) -> str:
        """Symbolic name, e.g. 'quarter'."""
        return _NAMES.get(self.beats, f"{self.beats} beats")

    @classmethod
    def from_beats(cls, beats: float) -> Duration:
        """
        Map a length in beats onto the symbolic note-length vocabulary.

        Thresholds are checked longest first and the first match wins.
        Anything shorter than a sixteenth falls back to an eighth.

        Examples:
            Duration.from_beats(3.9) == Duration.HALF
            Duration.from_beats(0.3) == Duration.SIXTEENTH
            Duration.from_beats(0.1) == Duration.EIGHTH
        """
        if beats >= 4:
            return cls.WHOLE
        if beats >= 2:
            return cls.HALF
        if beats >= 1:
            return cls.QUARTER
        if beats >= 0.5:
            return cls.EIGHTH
        if beats >= 0.25:
            return cls.SIXTEENTH
        return cls.EIGHTH

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        if self.beats in _NAMES:
            return f"Duration.{_NAMES[self.beats].upper()}"
        return f"Duration(Fraction({self.beats.numerator}, {self.beats.denominator}))"


Duration.WHOLE = Duration(Fraction(4))
Duration.HALF = Duration(Fraction(2))
Duration.QUARTER = Duration(Fraction(1))
Duration.EIGHTH = Duration(Fraction(1, 2))
Duration.SIXTEENTH = Duration(Fraction(1, 4))


@dataclass(frozen=True)
class TimeSignature:
    """
    A time signature defining beats per bar and beat unit.

    Examples:
        TimeSignature(4, 4) = 4/4
        TimeSignature(3, 4) = 3/4
        TimeSignature(6, 8) = 6/8
    """

    numerator: int
    denominator: int

    COMMON_TIME: ClassVar[TimeSignature]  # 4/4

    def __post_init__(self) -> None:
        if self.numerator <= 0:
            raise ValueError(f"Beats per bar must be positive, got {self.numerator}")
        if self.denominator <= 0 or self.denominator & (self.denominator - 1):
            raise ValueError(f"Denominator must be a power of two, got {self.denominator}")

    @property
    def bar_beats(self) -> Fraction:
        """Length of one bar in quarter-note beats."""
        return Fraction(self.numerator * 4, self.denominator)

    def bar_to_ticks(self, ticks_per_beat: int) -> int:
        """Get the number of ticks in one bar."""
        return int(self.bar_beats * ticks_per_beat)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


TimeSignature.COMMON_TIME = TimeSignature(4, 4)
