"""UI strings and log panel settings."""

import logging

EMPTY_STATE_TEXT = (
    "Type a message below to start chatting\n"
    "I'm here to help answer your questions"
)

TYPING_TEXT = "Assistant is typing..."

LOG_TIMESTAMP_FORMAT = "%H:%M:%S"

LEVEL_COLORS = {
    logging.DEBUG: "dim white",
    logging.INFO: "cyan",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
}


def parse_level(name: str) -> int:
    """Map a level name such as ``"info"`` to its ``logging`` value, DEBUG if unknown."""
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.DEBUG
