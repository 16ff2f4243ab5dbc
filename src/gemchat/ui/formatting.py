"""Text formatting utilities for the chat TUI."""

from datetime import datetime


def display_time(timestamp: str) -> str:
    """Render a stored timestamp as HH:MM.

    Client turns carry ISO timestamps, server turns already carry HH:MM;
    anything unparseable is shown as-is.
    """
    try:
        return datetime.fromisoformat(timestamp).strftime("%H:%M")
    except ValueError:
        return timestamp


def message_header(is_user: bool, timestamp: str) -> str:
    """Header line shown above a chat bubble."""
    if is_user:
        return f"You [{display_time(timestamp)}] >"
    return f"< Assistant [{display_time(timestamp)}]"
