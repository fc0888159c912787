"""
Composition tools - MCP tools for AI melody composition.

Tools for composing melodies from commands and inspecting the scales a
melody can be written in.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_melody.composer.prompt import get_scale_character
from chuk_mcp_melody.composition.service import CompositionService
from chuk_mcp_melody.constants import ErrorMessages
from chuk_mcp_melody.core.pitch import midi_to_note_name
from chuk_mcp_melody.core.scale import SCALE_TYPES, enumerate_scale, is_known_scale
from chuk_mcp_melody.errors import UnknownNoteOrScaleError

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_composition_tools(
    mcp: ChukMCPServer,
    service: CompositionService,
) -> dict[str, Any]:
    """
    Register composition tools with the MCP server.

    Args:
        mcp: The MCP server instance
        service: The composition service

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def music_compose_melody(command: str) -> str:
        """
        Compose an AI-generated melody from a short command.

        The melody stays in the requested scale, starts and ends on the
        root, and is saved as a MIDI file.

        Args:
            command: Command like "compose C minor" or "compose F# blues"

        Returns:
            JSON string with the file path and composition details

        Example:
            music_compose_melody(command="compose D harmonic-minor")
        """
        result = await service.compose(command)
        if not result.success:
            return json.dumps({"status": "error", "message": result.message})

        payload = result.to_dict()
        return json.dumps(
            {
                "status": "success",
                "path": payload["filepath"],
                "filename": payload["filename"],
                "details": payload["details"],
                "message": payload["message"],
            }
        )

    tools["music_compose_melody"] = music_compose_melody

    @mcp.tool  # type: ignore[arg-type]
    async def music_list_scales() -> str:
        """
        List the scales melodies can be composed in.

        Returns:
            JSON string with each scale's offsets and character
        """
        scales = [
            {
                "name": name,
                "offsets": list(scale_type.offsets),
                "character": get_scale_character(name),
            }
            for name, scale_type in SCALE_TYPES.items()
        ]
        return json.dumps({"status": "success", "scales": scales})

    tools["music_list_scales"] = music_list_scales

    @mcp.tool  # type: ignore[arg-type]
    async def music_scale_notes(root: str, scale: str, octaves: int = 2) -> str:
        """
        Get the MIDI notes a melody in this key may use.

        Args:
            root: Root note (e.g., "C", "f#", "Bb")
            scale: Scale name (major, minor, harmonic-minor, ...)
            octaves: Number of octaves to span (default 2)

        Returns:
            JSON string with pitches and their note names

        Example:
            music_scale_notes(root="A", scale="pentatonic")
        """
        if not is_known_scale(scale):
            return json.dumps(
                {"status": "error", "message": ErrorMessages.UNKNOWN_SCALE.format(scale=scale)}
            )
        if octaves < 1:
            return json.dumps({"status": "error", "message": "octaves must be at least 1"})
        try:
            pitches = enumerate_scale(root, scale, octaves=octaves)
        except UnknownNoteOrScaleError as e:
            return json.dumps({"status": "error", "message": str(e)})

        return json.dumps(
            {
                "status": "success",
                "root": root,
                "scale": scale,
                "pitches": pitches,
                "names": [midi_to_note_name(p) for p in pitches],
            }
        )

    tools["music_scale_notes"] = music_scale_notes

    return tools
