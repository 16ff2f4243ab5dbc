"""In-memory history backend.

Simple list-based storage for session-only history.
Data is lost when the process exits.
"""

from collections.abc import Sequence

from .base import HistoryStore
from .models import ChatMessage


class InMemoryHistoryStore(HistoryStore):
    """In-memory history (session-only).

    Suitable for tests and for running a server without a data directory.
    """

    def __init__(self, initial: Sequence[ChatMessage] | None = None):
        self._history: list[ChatMessage] = list(initial or [])
        self.save_count = 0

    async def load(self) -> list[ChatMessage]:
        """Return a copy so callers cannot mutate the stored list."""
        return list(self._history)

    async def save(self, history: Sequence[ChatMessage]) -> None:
        self._history = list(history)
        self.save_count += 1

    @property
    def backend_type(self) -> str:
        return "memory"
