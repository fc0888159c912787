"""
Composition service - runs one compose command end to end.

    command
    → parse_compose_command
    → enumerate_scale (theory lookup)
    → build_melody_prompt
    → generate_note_records (the only await)
    → repair_melody → clamp_to_piano_range
    → write_melody_file

Every failure is turned into a CompositionResult with success=False;
nothing is raised to the caller.
"""

from __future__ import annotations

import logging
from pathlib import Path

from chuk_mcp_melody.backends.base import CompletionBackend
from chuk_mcp_melody.backends.generation import generate_note_records
from chuk_mcp_melody.backends.openai import OpenAIBackend
from chuk_mcp_melody.compiler.midi import generate_filename, write_melody_file
from chuk_mcp_melody.compiler.validator import clamp_to_piano_range, repair_melody
from chuk_mcp_melody.composer.prompt import build_melody_prompt
from chuk_mcp_melody.composition.parser import parse_compose_command
from chuk_mcp_melody.config import Settings, get_settings
from chuk_mcp_melody.constants import (
    DEFAULT_TEMPO,
    DEFAULT_TIME_SIGNATURE,
    ErrorMessages,
    SuccessMessages,
)
from chuk_mcp_melody.core.scale import enumerate_scale
from chuk_mcp_melody.errors import (
    CommandSyntaxError,
    CompositionError,
    EmptyGenerationError,
)
from chuk_mcp_melody.models.melody import (
    CompositionDetails,
    CompositionResult,
    MidiFileOptions,
)

logger = logging.getLogger(__name__)


class CompositionService:
    """
    Turns compose commands into MIDI files.

    Holds no per-request state; one instance can serve concurrent
    requests. The backend and output directory can be injected for tests.
    """

    def __init__(
        self,
        backend: CompletionBackend | None = None,
        output_dir: Path | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the composition service.

        Args:
            backend: Completion backend (default: OpenAIBackend from settings)
            output_dir: Where MIDI files are written (default: settings)
            settings: Settings to read defaults from
        """
        self.settings = settings or get_settings()
        self.backend = backend or OpenAIBackend(settings=self.settings)
        self.output_dir = output_dir or self.settings.resolved_output_dir()
        self.tempo = DEFAULT_TEMPO
        self.time_signature = DEFAULT_TIME_SIGNATURE

    async def compose(self, command: str) -> CompositionResult:
        """
        Compose a melody from a command like "compose C minor".

        Returns:
            CompositionResult; on success it names the written file
        """
        try:
            return await self._compose(command)
        except CommandSyntaxError as e:
            logger.warning("Rejected command %r", command)
            return CompositionResult.failure(str(e))
        except CompositionError as e:
            logger.warning("Composition failed: %s", e)
            return CompositionResult.failure(ErrorMessages.COMPOSITION_FAILED.format(error=e))
        except Exception as e:
            logger.exception("Unexpected composition error")
            return CompositionResult.failure(ErrorMessages.COMPOSITION_FAILED.format(error=e))

    async def _compose(self, command: str) -> CompositionResult:
        request = parse_compose_command(command)
        root, scale, bars = request.root, request.scale, request.bars

        scale_notes = enumerate_scale(root, scale)
        root_pitch = scale_notes[0]

        logger.info("Asking AI to compose %d-bar melody in %s %s...", bars, root, scale)
        prompt = build_melody_prompt(root, scale, bars, scale_notes)
        records = await generate_note_records(
            self.backend, prompt, temperature=self.settings.llm_temperature
        )
        if not records:
            raise EmptyGenerationError(ErrorMessages.EMPTY_GENERATION)

        repaired = repair_melody(records, scale_notes, root_pitch)
        if repaired.issues:
            logger.info("Repaired %d of %d notes", repaired.repaired_count, len(records))
        notes = clamp_to_piano_range(repaired.notes)
        logger.info("AI generated %d notes", len(notes))

        options = MidiFileOptions(
            filename=generate_filename(root, scale),
            tempo=self.tempo,
            time_signature=self.time_signature,
        )
        filepath = write_melody_file(notes, options, self.output_dir)

        return CompositionResult(
            success=True,
            filepath=str(filepath),
            filename=options.filename,
            message=SuccessMessages.MELODY_COMPOSED.format(bars=bars, root=root, scale=scale),
            details=CompositionDetails(
                root=root,
                scale=scale,
                bars=bars,
                tempo=self.tempo,
                note_count=len(notes),
            ),
        )


_default_service: CompositionService | None = None


def get_default_service() -> CompositionService:
    """Lazily build the process-wide service from settings."""
    global _default_service
    if _default_service is None:
        _default_service = CompositionService()
    return _default_service


async def compose_from_command(
    command: str,
    service: CompositionService | None = None,
) -> CompositionResult:
    """
    Compose a melody from a command.

    This is the single entry point for outer layers.
    """
    return await (service or get_default_service()).compose(command)
