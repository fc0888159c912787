"""
Pytest configuration and shared fixtures.
"""

import tempfile
from collections.abc import Callable
from pathlib import Path

import pytest

from chuk_mcp_melody.backends.base import CompletionBackend
from chuk_mcp_melody.composition import CompositionService
from chuk_mcp_melody.config import Settings


class StubBackend(CompletionBackend):
    """Completion backend that returns a canned reply and records calls."""

    name = "stub"

    def __init__(self, reply: str = "[]", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[dict] = []

    async def complete(self, messages: list[dict[str, str]], temperature: float) -> str:
        self.calls.append({"messages": messages, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def settings(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Settings isolated from the environment and any .env file."""
    for name in ("OPENAI_API_KEY", "MELODY_LLM_MODEL", "MELODY_LLM_TEMPERATURE", "MELODY_OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)
    return Settings(_env_file=None, openai_api_key="test-key", output_dir=temp_dir / "output")


@pytest.fixture
def make_backend() -> Callable[..., StubBackend]:
    """Factory for stub completion backends."""
    return StubBackend


@pytest.fixture
def make_service(temp_dir: Path, settings: Settings) -> Callable[[StubBackend], CompositionService]:
    """Factory for a composition service writing into the temp dir."""

    def _make(backend: StubBackend) -> CompositionService:
        return CompositionService(
            backend=backend, output_dir=temp_dir / "output", settings=settings
        )

    return _make

