"""Provider factory functions for CLI.

Centralizes creation of the history store and the client controller
from settings. Hides configuration details from command implementations.
"""

from pathlib import Path

import typer
from rich.console import Console

from ..client import ChatTransport, ConversationController
from ..history import HistoryStore, create_history_store
from ..settings import get_settings

# Default console for output
_console = Console()


def get_history_store(path: Path | None = None) -> HistoryStore:
    """Create the JSON history store.

    Args:
        path: History file, defaults to CHAT_HISTORY_PATH

    Returns:
        JSON file history store
    """
    return create_history_store("json", path=path or get_settings().history_path)


def require_api_key(console: Console | None = None) -> str:
    """Get the Gemini API key, exiting if it is not configured.

    Raises:
        SystemExit: If GOOGLE_API_KEY is not set

    Environment variables:
        GOOGLE_API_KEY: Gemini API key (GEMINI_API_KEY accepted as fallback)
    """
    con = console or _console
    api_key = get_settings().google_api_key
    if not api_key:
        con.print("[red]Error: GOOGLE_API_KEY not set in environment[/red]")
        raise typer.Exit(code=1)
    return api_key


def get_controller(server_url: str | None = None, reveal_delay: float | None = None) -> ConversationController:
    """Create a conversation controller talking to the server.

    Args:
        server_url: Server root, defaults to CHAT_SERVER_URL
        reveal_delay: Seconds between revealed words, None for the default

    Returns:
        Controller owning a fresh transport
    """
    transport = ChatTransport(server_url or get_settings().server_url)
    if reveal_delay is None:
        return ConversationController(transport)
    return ConversationController(transport, reveal_delay=reveal_delay)
