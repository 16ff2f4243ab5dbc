"""Data models for the conversation history.

These models define the shape of a single chat turn, independent of
the storage backend used to persist it.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

MAX_MESSAGES = 50


class ChatMessage(BaseModel):
    """One turn of the conversation, authored by the user or the bot.

    Serialized with the camelCase ``isUser`` key so the persisted file
    stays readable by any frontend speaking the same JSON layout.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(description="Message text")
    is_user: bool = Field(alias="isUser", description="True if authored by the user")
    timestamp: str = Field(description="Creation time as a display string")

    def with_text(self, text: str) -> "ChatMessage":
        """Return a copy of this message carrying different text."""
        return self.model_copy(update={"text": text})

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True)


def clock_time(now: datetime | None = None) -> str:
    """Format a wall-clock time the way turns are stamped server-side."""
    return (now or datetime.now()).strftime("%H:%M")


def trim_history(history: list[ChatMessage], max_messages: int = MAX_MESSAGES) -> list[ChatMessage]:
    """Drop the oldest entries so at most ``max_messages`` remain.

    Args:
        history: Turns in insertion order
        max_messages: Maximum number of turns to keep

    Returns:
        The most recent ``max_messages`` turns, in original order
    """
    if len(history) <= max_messages:
        return list(history)
    return list(history[len(history) - max_messages:])
