"""
Compose command parser.

Grammar (case-insensitive, searched anywhere in the text):
    compose <note> <scale>
where <note> is a letter A-G with an optional '#' or 'b', and <scale> is
one of the supported scale names. Bar count is not part of the grammar.
"""

from __future__ import annotations

import re

from chuk_mcp_melody.constants import DEFAULT_BARS, SCALE_NAMES, ErrorMessages
from chuk_mcp_melody.errors import CommandSyntaxError
from chuk_mcp_melody.models.melody import CompositionRequest

COMPOSE_PATTERN = re.compile(
    r"compose\s+([a-g][#b]?)\s+(" + "|".join(re.escape(s) for s in SCALE_NAMES) + r")",
    re.IGNORECASE,
)

USAGE_MESSAGE = ErrorMessages.USAGE


def parse_compose_command(command: str) -> CompositionRequest:
    """
    Parse a compose command.

    Args:
        command: Text like "compose C minor"

    Returns:
        CompositionRequest with the lower-cased root token, the scale and
        the fixed bar count

    Raises:
        CommandSyntaxError: If the command does not match; the message is
            the usage hint
    """
    match = COMPOSE_PATTERN.search(command.lower().strip())
    if match is None:
        raise CommandSyntaxError(USAGE_MESSAGE)

    root, scale = match.groups()
    return CompositionRequest(root=root, scale=scale, bars=DEFAULT_BARS)
