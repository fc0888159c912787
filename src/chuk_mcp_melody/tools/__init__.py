"""
MCP tool implementations.

- composition - Melody composition and scale inspection
"""

from chuk_mcp_melody.tools.composition import register_composition_tools

__all__ = [
    "register_composition_tools",
]
