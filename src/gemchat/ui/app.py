"""Main Textual TUI application.

Orchestrates the UI components and forwards user actions to the
conversation controller. The view holds no conversation state of its
own; it re-renders from the controller whenever notified.
"""

import asyncio
import logging

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header

from ..client import ChatTransport, ConversationController, ConversationState
from .config import parse_level
from .styles import APP_CSS
from .themes import GEMCHAT_NIGHT, THEME_NAME
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ErrorBanner, TypingIndicator


class ChatApp(App):
    """Textual chat client for the gemchat server."""

    CSS = APP_CSS
    TITLE = "gemchat"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit"),
        Binding("escape", "stop_generation", "Stop"),
        Binding("ctrl+r", "copy_last_response", "Copy Response"),
        Binding("ctrl+d", "toggle_debug", "Debug"),
    ]

    def __init__(
        self,
        controller: ConversationController,
        server_url: str = "",
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self._controller = controller
        self._server_url = server_url
        self._log_level = log_level
        self._last_state = controller.state

    @property
    def controller(self) -> ConversationController:
        return self._controller

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        yield ErrorBanner(id="error-banner")
        yield ChatHistoryWidget(id="chat-history")
        yield TypingIndicator(id="typing")
        yield DebugPanel(id="debug-panel")
        yield ChatInputBar(id="chat-input-bar")
        yield Footer()

    def on_mount(self) -> None:
        """Apply the theme and start listening to the controller."""
        self.register_theme(GEMCHAT_NIGHT)
        self.theme = THEME_NAME
        self.sub_title = self._server_url

        if self._log_level is not None:
            panel = self.query_one("#debug-panel", DebugPanel)
            panel.log_level = parse_level(self._log_level)
            panel.display = True

        self._controller.add_listener(self._refresh_view)
        self._refresh_view()

    def on_unmount(self) -> None:
        self._controller.remove_listener(self._refresh_view)

    def _refresh_view(self) -> None:
        """Re-render every widget from the controller's current snapshot."""
        controller = self._controller
        self.query_one("#chat-history", ChatHistoryWidget).sync(controller.messages)
        self.query_one("#error-banner", ErrorBanner).show_error(controller.error)
        self.query_one("#typing", TypingIndicator).display = controller.is_typing
        self.query_one("#chat-input-bar", ChatInputBar).set_generating(controller.is_generating)

        if controller.state != self._last_state:
            level = logging.ERROR if controller.state is ConversationState.ERROR else logging.DEBUG
            self.query_one("#debug-panel", DebugPanel).log_event(
                "Controller",
                f"{self._last_state.value} -> {controller.state.value}",
                level,
            )
            self._last_state = controller.state

    def on_chat_input_bar_submitted(self, event: ChatInputBar.Submitted) -> None:
        """Forward the input bar text to the controller."""
        self._submit(event.value)

    def on_chat_input_bar_stopped(self, event: ChatInputBar.Stopped) -> None:
        self.action_stop_generation()

    @work(group="submit")
    async def _submit(self, text: str) -> None:
        """Run one submission as a background async worker."""
        await self._controller.submit(text)

    def action_stop_generation(self) -> None:
        """Cancel the in-flight request or reveal."""
        if self._controller.is_generating:
            self._controller.cancel()
            self.notify("Generation stopped", severity="warning", timeout=2)

    def action_copy_last_response(self) -> None:
        """Copy the latest bot reply."""
        response = self.query_one("#chat-history", ChatHistoryWidget).get_last_response()
        if response:
            self.copy_to_clipboard(response)
            self.notify("Response copied")
        else:
            self.notify("No response to copy", severity="warning")

    def action_toggle_debug(self) -> None:
        """Show or hide the log panel."""
        visible = self.query_one("#debug-panel", DebugPanel).toggle()
        self.notify(f"Log panel {'shown' if visible else 'hidden'}", timeout=2)


async def run_chat_tui(server_url: str, log_level: str | None = None) -> None:
    """Run the chat TUI against a gemchat server.

    Args:
        server_url: Server root, e.g. http://localhost:5000
        log_level: Log panel level (debug/info/warning/error), None to hide
    """
    transport = ChatTransport(server_url)
    controller = ConversationController(transport)
    app = ChatApp(controller, server_url=server_url, log_level=log_level)
    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        await transport.close()
