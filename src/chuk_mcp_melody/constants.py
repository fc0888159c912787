"""
Constants and enums for the melody system.

No magic strings - use enums and Literal types for constrained values.
"""

from enum import Enum
from typing import Literal


class ScaleName(str, Enum):
    """
    The scales a melody can be composed in.

    Values are the tokens accepted by the compose command.
    """

    MAJOR = "major"
    MINOR = "minor"
    HARMONIC_MINOR = "harmonic-minor"
    MELODIC_MINOR = "melodic-minor"
    PENTATONIC = "pentatonic"
    BLUES = "blues"


SCALE_NAMES: tuple[str, ...] = tuple(s.value for s in ScaleName)

# Root pitches are resolved in the octave where C = 60
BASE_OCTAVE = 4
SCALE_OCTAVES = 2

# Composition defaults - bars are not parsed from the command
DEFAULT_BARS = 8
DEFAULT_TEMPO = 120
DEFAULT_TIME_SIGNATURE: tuple[int, int] = (4, 4)

# Repair ranges applied against the scale
DURATION_RANGE: tuple[float, float] = (0.25, 4.0)
REPAIR_VELOCITY_RANGE: tuple[int, int] = (50, 100)
DEFAULT_DURATION = 1.0
DEFAULT_REPAIR_VELOCITY = 75

# Final safety net applied to every note before writing
PIANO_RANGE: tuple[int, int] = (21, 108)  # A0-C8
FINAL_VELOCITY_RANGE: tuple[int, int] = (40, 127)
DEFAULT_FINAL_PITCH = 60
DEFAULT_FINAL_VELOCITY = 80

# Completion service defaults
DEFAULT_LLM_MODEL = "gpt-4o-mini"
DEFAULT_LLM_TEMPERATURE = 1.0
DEFAULT_OPENAI_BASE_URL = "https://api.openai.com/v1"

OUTPUT_DIR_NAME = "output"
FILENAME_TAG = "AI"

RepairCode = Literal["OUT_OF_SCALE", "MISSING_PITCH", "ROOT_ANCHOR"]


class ErrorMessages:
    """Standardized error messages."""

    USAGE = (
        'Invalid command. Use format: "compose [note] [major/minor]"\n'
        'Example: "compose C minor" or "compose D major"\n\n'
        "Available scales: " + ", ".join(SCALE_NAMES)
    )
    UNKNOWN_NOTE = "Unknown note: {note}"
    UNKNOWN_SCALE = "Unknown scale: {scale}"
    MALFORMED_OUTPUT = "AI did not return valid JSON"
    EMPTY_GENERATION = "AI failed to generate a melody"
    MISSING_API_KEY = "OpenAI API key not configured"
    COMPOSITION_FAILED = "Error composing melody: {error}"


class SuccessMessages:
    """Standardized success messages."""

    MELODY_COMPOSED = "Successfully composed a {bars}-bar AI-generated melody in {root} {scale}!"
