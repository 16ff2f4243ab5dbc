"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from ..logging_setup import configure_logging
from ..settings import get_settings
from .providers import get_controller, get_history_store, require_api_key

app = typer.Typer(
    name="gemchat",
    help="Chat with a hosted Gemini model through a small HTTP gateway",
    no_args_is_help=True,
    add_completion=True,
)

console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, "--host", "-h", help="Bind address (default: HOST or 127.0.0.1)"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port (default: PORT or 5000)"),
    log_level: str | None = typer.Option(None, "--log-level", "-l", help="debug, info, warning or error"),
):
    """Run the chat HTTP server."""
    from ..server import run_server

    settings = get_settings()
    level = log_level or settings.log_level
    configure_logging(level)
    require_api_key(console)

    run_server(
        host=host or settings.host,
        port=port or settings.port,
        log_level=level,
    )


@app.command()
def chat(
    server_url: str | None = typer.Option(None, "--server-url", "-s", help="Server root URL"),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show the log panel at this level (debug/info/warning/error)"
    ),
):
    """Open the terminal chat client."""
    from ..ui import run_chat_tui

    asyncio.run(run_chat_tui(server_url or get_settings().server_url, log_level=log_level))


@app.command()
def ask(
    message: str = typer.Argument(..., help="Message to send"),
    server_url: str | None = typer.Option(None, "--server-url", "-s", help="Server root URL"),
    no_reveal: bool = typer.Option(False, "--no-reveal", help="Print the reply at once"),
):
    """Send one message and print the reply."""
    async def _ask() -> int:
        controller = get_controller(server_url, reveal_delay=0.0 if no_reveal else None)
        try:
            with Live(Text(""), console=console, refresh_per_second=20) as live:
                def render() -> None:
                    messages = controller.messages
                    if messages and not messages[-1].is_user:
                        live.update(Text(messages[-1].text))

                controller.add_listener(render)
                if not await controller.submit(message):
                    console.print("[yellow]Nothing to send.[/yellow]")
                    return 1
        finally:
            await controller.transport.close()

        if controller.error:
            console.print(f"[red]Error: {controller.error}[/red]")
            return 1
        return 0

    code = asyncio.run(_ask())
    if code:
        raise typer.Exit(code=code)


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", "-n", min=1, help="Number of most recent turns to show"),
    path: Path | None = typer.Option(None, "--path", help="History file (default: CHAT_HISTORY_PATH)"),
):
    """Show the persisted conversation history."""
    store = get_history_store(path)
    turns = asyncio.run(store.load())

    if not turns:
        console.print("[dim]No chat history yet.[/dim]")
        return

    table = Table(title=f"Chat history ({len(turns)} turns)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Time", style="cyan")
    table.add_column("From", style="bold")
    table.add_column("Text", overflow="fold")

    offset = max(len(turns) - limit, 0)
    for index, turn in enumerate(turns[offset:], start=offset + 1):
        author = "[green]You[/green]" if turn.is_user else "[magenta]Bot[/magenta]"
        table.add_row(str(index), turn.timestamp, author, Text(turn.text))

    console.print(table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
