"""
Composition - command parsing and the end-to-end melody pipeline.
"""

from chuk_mcp_melody.composition.parser import (
    COMPOSE_PATTERN,
    USAGE_MESSAGE,
    parse_compose_command,
)
from chuk_mcp_melody.composition.service import (
    CompositionService,
    compose_from_command,
    get_default_service,
)

__all__ = [
    "COMPOSE_PATTERN",
    "USAGE_MESSAGE",
    "CompositionService",
    "compose_from_command",
    "get_default_service",
    "parse_compose_command",
]
