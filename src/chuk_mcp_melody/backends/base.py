"""
Completion backend interface.

A backend sends chat messages to a text-generation service and returns
the raw reply text. Parsing the reply is not its concern.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class CompletionBackend(ABC):
    """Abstract chat-completion service."""

    name: str = "base"

    @abstractmethod
    async def complete(self, messages: list[dict[str, str]], temperature: float) -> str:
        """
        Run one completion.

        Args:
            messages: Chat messages (role/content dicts)
            temperature: Sampling temperature

        Returns:
            The reply text

        Raises:
            GenerationError: If the service call fails
        """

    async def aclose(self) -> None:
        """Release any held connections."""
        return None
