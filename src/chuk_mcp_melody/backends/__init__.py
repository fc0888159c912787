"""
Generative backends - completion services and reply parsing.
"""

from chuk_mcp_melody.backends.base import CompletionBackend
from chuk_mcp_melody.backends.generation import generate_note_records
from chuk_mcp_melody.backends.openai import OpenAIBackend
from chuk_mcp_melody.backends.parsing import extract_json_array, parse_note_records

__all__ = [
    "CompletionBackend",
    "OpenAIBackend",
    "extract_json_array",
    "generate_note_records",
    "parse_note_records",
]
