#!/usr/bin/env python3
"""
Entry point for the CHUK Melody MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http). Command-line
overrides for the output directory and model are applied through the
environment before the server module reads its settings.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from collections.abc import MutableMapping

from chuk_mcp_melody.config import Settings, get_settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="CHUK Melody MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory MIDI files are written to (overrides MELODY_OUTPUT_DIR)",
    )
    parser.add_argument(
        "--model",
        help="Completion model name (overrides MELODY_LLM_MODEL)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def apply_overrides(
    args: argparse.Namespace,
    environ: MutableMapping[str, str] = os.environ,
) -> None:
    """Push command-line settings into the environment and drop cached settings."""
    if args.output_dir:
        environ["MELODY_OUTPUT_DIR"] = args.output_dir
    if args.model:
        environ["MELODY_LLM_MODEL"] = args.model
    get_settings.cache_clear()


def check_api_key(settings: Settings) -> bool:
    """Warn when compositions cannot reach the completion service."""
    if settings.openai_api_key:
        return True
    logger.warning(
        "OPENAI_API_KEY is not set; music_compose_melody will fail until it is configured"
    )
    return False


def main() -> None:
    """Main entry point with transport detection."""
    args = build_parser().parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    apply_overrides(args)

    # Import after overrides so the server builds from the final settings
    from chuk_mcp_melody.async_server import mcp, settings

    check_api_key(settings)

    if args.transport == "stdio":
        logger.info("Starting CHUK Melody MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Melody MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
