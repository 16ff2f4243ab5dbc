"""Completion service interface.

Hides which hosted model answers the chat. Callers hand over one prompt
and get one completion back; there is no streaming and no retry.
"""

from abc import ABC, abstractmethod
from typing import Any

from .models import CompletionResponse


class CompletionService(ABC):
    """Turns a prompt into a single completion.

    Usable as an async context manager that closes the service on exit:
        async with service:
            response = await service.complete(prompt)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model name used when the caller does not pick one."""

    @abstractmethod
    async def complete(self, prompt: str, **kwargs: Any) -> CompletionResponse:
        """Complete ``prompt``.

        Args:
            prompt: Full prompt text, conversation context included
            **kwargs: Provider-specific generation options

        Returns:
            CompletionResponse; its content may be empty

        Raises:
            Exception: Whatever the provider raises on network, quota or
                response errors. Nothing is retried.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release provider resources."""

    async def __aenter__(self) -> "CompletionService":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
