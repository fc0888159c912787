"""
Exceptions raised by the composition pipeline.

Every stage raises a subclass of CompositionError. The composition
service is the only place these are turned into failure results.
"""

from __future__ import annotations


class CompositionError(Exception):
    """Base class for all pipeline failures."""


class CommandSyntaxError(CompositionError):
    """The command does not match the compose grammar."""


class UnknownNoteOrScaleError(CompositionError, ValueError):
    """A note name or scale name is not in the theory tables."""


class GenerationError(CompositionError):
    """The completion service call failed."""


class MalformedOutputError(CompositionError):
    """The completion text holds no parseable note array."""


class EmptyGenerationError(CompositionError):
    """The completion service returned zero notes."""


class WriteError(CompositionError):
    """The MIDI file could not be written."""
