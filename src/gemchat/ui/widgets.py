"""Custom Textual widgets for the chat TUI.

Hides widget implementation details:
- Incremental rendering of the message list during reveal
- Input history management
- Send/Stop affordance while a reply is generating
- Error banner and typing indicator visibility
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from rich.markup import escape
from textual.containers import Horizontal, Vertical, VerticalScroll
from textual.events import Click
from textual.message import Message
from textual.widgets import Button, RichLog, Static, TextArea

from ..history import ChatMessage
from .config import EMPTY_STATE_TEXT, LEVEL_COLORS, LOG_TIMESTAMP_FORMAT, TYPING_TEXT
from .formatting import message_header


class MessageBubble(Vertical):
    """One rendered chat turn. Clicking copies its text."""

    def __init__(self, message: ChatMessage, *args, **kwargs) -> None:
        border_class = "user-message" if message.is_user else "assistant-message"
        super().__init__(*args, classes=f"chat-message {border_class}", **kwargs)
        self._text = message.text
        self._header = Static(message_header(message.is_user, message.timestamp), classes="message-header")
        self._content = Static(message.text, classes="message-content", markup=False)

    @property
    def text(self) -> str:
        return self._text

    def compose(self):
        yield self._header
        yield self._content

    def set_text(self, text: str) -> None:
        """Replace the displayed text (used while a reply is revealed)."""
        if text != self._text:
            self._text = text
            self._content.update(text)

    def on_click(self, event: Click) -> None:
        event.stop()
        self.app.copy_to_clipboard(self._text)
        self.app.notify("Copied to clipboard", timeout=2)


class ChatHistoryWidget(VerticalScroll):
    """Scrollable message list kept in step with the controller."""

    BORDER_TITLE = "AI Assistant"
    BORDER_SUBTITLE = "Available 24/7 to help you"

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._bubbles: list[MessageBubble] = []

    def compose(self):
        yield Static(EMPTY_STATE_TEXT, id="empty-state", classes="empty-state")

    @property
    def bubble_count(self) -> int:
        return len(self._bubbles)

    def sync(self, messages: Sequence[ChatMessage]) -> None:
        """Render ``messages``, mounting new bubbles and updating changed text.

        Messages are never removed, so existing bubbles map to the same
        positions in ``messages``.
        """
        if messages and not self._bubbles:
            for placeholder in self.query("#empty-state"):
                placeholder.remove()

        changed = False
        for index, message in enumerate(messages):
            if index < len(self._bubbles):
                bubble = self._bubbles[index]
                if bubble.text != message.text:
                    bubble.set_text(message.text)
                    changed = True
            else:
                bubble = MessageBubble(message)
                self._bubbles.append(bubble)
                self.mount(bubble)
                changed = True

        if changed:
            self.border_subtitle = f"{len(self._bubbles)} messages"
            self.scroll_end(animate=False)

    def get_last_response(self) -> str | None:
        """Get the text of the last bot bubble."""
        for bubble in reversed(self._bubbles):
            if bubble.has_class("assistant-message"):
                return bubble.text
        return None


class ErrorBanner(Static):
    """Banner shown while the last submission's error is set."""

    def on_mount(self) -> None:
        self.display = False

    def show_error(self, error: str | None) -> None:
        if error:
            self.update(f"! {error}")
            self.display = True
        else:
            self.display = False


class TypingIndicator(Static):
    """Shown while the client waits for the server's reply."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(TYPING_TEXT, *args, **kwargs)

    def on_mount(self) -> None:
        self.display = False


class InputRecall:
    """Previously sent inputs, browsed newest first with Up and Down."""

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._cursor: int | None = None

    def record(self, value: str) -> None:
        if not self._entries or self._entries[-1] != value:
            self._entries.append(value)
        self._cursor = None

    def older(self) -> str | None:
        """Step back one entry; None when there is nothing to recall."""
        if not self._entries:
            return None
        if self._cursor is None:
            self._cursor = len(self._entries) - 1
        else:
            self._cursor = max(self._cursor - 1, 0)
        return self._entries[self._cursor]

    def newer(self) -> str | None:
        """Step forward one entry; "" once past the newest, None when not browsing."""
        if self._cursor is None:
            return None
        if self._cursor + 1 < len(self._entries):
            self._cursor += 1
            return self._entries[self._cursor]
        self._cursor = None
        return ""


class ChatInputBar(Horizontal):
    """Message box with Send, swapped for Stop while a reply is generating.

    Ctrl+J sends (terminals do not report modifiers on Enter). Up at the
    start of the box and Down at its end browse earlier inputs.
    """

    class Submitted(Message):
        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    class Stopped(Message):
        pass

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._recall = InputRecall()

    @property
    def _box(self) -> TextArea:
        return self.query_one("#chat-input", TextArea)

    def compose(self):
        box = TextArea(id="chat-input", show_line_numbers=False)
        box.cursor_blink = False
        box.highlight_cursor_line = False
        yield box
        yield Button("Send", id="send-btn", variant="success").with_tooltip("Send message (Ctrl+J)")
        yield Button("Stop", id="stop-btn", variant="error").with_tooltip("Stop generation (Esc)")

    def on_mount(self) -> None:
        self.focus_input()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        if event.button.id == "send-btn":
            self._submit()
        else:
            self.post_message(self.Stopped())

    def on_key(self, event) -> None:
        box = self._box
        if event.key == "ctrl+j":
            self._submit()
        elif event.key == "up" and box.cursor_location == (0, 0):
            self._show(self._recall.older())
        elif event.key == "down" and box.cursor_location == box.document.end:
            self._show(self._recall.newer())
        else:
            return
        event.prevent_default()
        event.stop()

    def _show(self, value: str | None) -> None:
        if value is not None:
            self._box.text = value

    def _submit(self) -> None:
        if self.has_class("-generating"):
            return
        box = self._box
        value = box.text
        if not value.strip():
            return
        self._recall.record(value)
        box.text = ""
        self.post_message(self.Submitted(value))

    def set_generating(self, generating: bool) -> None:
        """Lock the box and show Stop instead of Send while generating."""
        self.set_class(generating, "-generating")
        self._box.disabled = generating
        self.query_one("#send-btn", Button).disabled = generating
        if not generating:
            self.focus_input()

    def focus_input(self) -> None:
        self._box.focus()


class DebugPanel(RichLog):
    """Trace of controller state changes, filtered by level.

    Hidden until --log-level is given or Ctrl+D is pressed.
    """

    BORDER_TITLE = "Log"

    def __init__(self, *args, log_level: int = logging.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=True, highlight=False, auto_scroll=True, wrap=True, **kwargs)
        self._log_level = log_level

    @property
    def log_level(self) -> int:
        return self._log_level

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._log_level = level
        self.border_subtitle = logging.getLevelName(level)

    def on_mount(self) -> None:
        self.display = False

    def log_event(self, source: str, text: str, level: int = logging.DEBUG) -> None:
        if level < self._log_level:
            return
        stamp = datetime.now().strftime(LOG_TIMESTAMP_FORMAT)
        color = LEVEL_COLORS.get(level, "white")
        name = logging.getLevelName(level)
        self.write(f"[dim]{stamp}[/] [{color}]{name:<7}[/] [bold]{escape(source)}[/] {escape(text)}")

    def toggle(self) -> bool:
        """Flip visibility and return whether the panel is now shown."""
        self.display = not self.display
        return self.display
