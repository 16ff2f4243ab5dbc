"""Abstract base class for conversation history backends.

This module defines the interface for history storage.
The abstraction hides:
- Storage format (JSON file, in-memory list)
- Persistence mechanism and its failure modes
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .models import ChatMessage


class HistoryStore(ABC):
    """Abstract history backend.

    Persistence is best-effort: implementations log failures and never
    raise them to the caller.
    """

    @abstractmethod
    async def load(self) -> list[ChatMessage]:
        """Return the persisted turns, or an empty list if none can be read."""

    @abstractmethod
    async def save(self, history: Sequence[ChatMessage]) -> None:
        """Overwrite the persisted turns with ``history``."""

    @property
    @abstractmethod
    def backend_type(self) -> str:
        """Get the backend type identifier."""
