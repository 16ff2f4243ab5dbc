"""JSON file history backend.

The whole history lives in one pretty-printed JSON array. Every load
reads the entire file and every save rewrites it; there is no locking
and no partial-write protection, so only one process may own the file.
"""

import asyncio
import json
import logging
from collections.abc import Sequence
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from .base import HistoryStore
from .models import ChatMessage

logger = logging.getLogger(__name__)

_HISTORY_ADAPTER = TypeAdapter(list[ChatMessage])


class JsonFileHistoryStore(HistoryStore):
    """History stored as a JSON array of ``{text, isUser, timestamp}``.

    A missing file is an empty history.
    """

    def __init__(self, path: str | Path = "./data/chatHistory.json"):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> list[ChatMessage]:
        """Load the history, returning [] if the file is absent or unreadable."""
        return await asyncio.to_thread(self._read)

    async def save(self, history: Sequence[ChatMessage]) -> None:
        """Overwrite the history file. Errors are logged, not raised."""
        await asyncio.to_thread(self._write, list(history))

    def _read(self) -> list[ChatMessage]:
        try:
            data = self._path.read_text(encoding="utf-8")
            return _HISTORY_ADAPTER.validate_json(data)
        except FileNotFoundError:
            return []
        except (OSError, ValueError, ValidationError):
            logger.exception("Error reading chat history from %s", self._path)
        return []

    def _write(self, history: list[ChatMessage]) -> None:
        payload = [message.to_json_dict() for message in history]
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(payload, indent=2, ensure_ascii=False),
                encoding="utf-8",
            )
        except (OSError, TypeError):
            logger.exception("Error saving chat history to %s", self._path)

    @property
    def backend_type(self) -> str:
        return "json"
