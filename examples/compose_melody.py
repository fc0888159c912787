#!/usr/bin/env python3
"""
Example: Compose a melody with a language model.

Needs OPENAI_API_KEY in the environment or in a .env file.

Usage:
    python examples/compose_melody.py "compose F# blues"
"""

import asyncio
import sys

from chuk_mcp_melody import compose_from_command


async def main(command: str) -> int:
    result = await compose_from_command(command)
    print(result.message)
    if not result.success:
        return 1
    print(f"  File: {result.filepath}")
    print(f"  Notes: {result.details.note_count}")
    return 0


if __name__ == "__main__":
    command = " ".join(sys.argv[1:]) or "compose C minor"
    sys.exit(asyncio.run(main(command)))
