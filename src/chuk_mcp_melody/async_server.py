#!/usr/bin/env python3
"""
Async Melody MCP Server using chuk-mcp-server

This server provides MCP tools for composing melodies with a language
model. A command like "compose C minor" yields a MIDI file whose notes
are guaranteed to be in the scale and to start and end on the root.

The server provides tools for:
- Composing a melody from a command
- Listing supported scales
- Inspecting the notes of a key
"""

import logging

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_melody.composition import CompositionService
from chuk_mcp_melody.config import get_settings
from chuk_mcp_melody.tools import register_composition_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-melody")

settings = get_settings()
OUTPUT_DIR = settings.resolved_output_dir()

composition_service = CompositionService(output_dir=OUTPUT_DIR, settings=settings)

composition_tools = register_composition_tools(mcp, composition_service)

# Export tool functions for direct access
music_compose_melody = composition_tools["music_compose_melody"]
music_list_scales = composition_tools["music_list_scales"]
music_scale_notes = composition_tools["music_scale_notes"]

logger.info("CHUK Melody MCP Server initialized")
logger.info(f"  Model: {settings.llm_model}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
