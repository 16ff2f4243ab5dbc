"""Terminal UI module for gemchat.

Provides a Textual-based chat client.

Module structure (each module hides a design decision):
- widgets.py: Custom widgets (message list, input bar, banner, typing indicator)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- formatting.py: Timestamp and header rendering
- app.py: Application orchestration (user interaction flow)
"""

from .app import ChatApp, run_chat_tui
from .widgets import ChatHistoryWidget, ChatInputBar, DebugPanel, ErrorBanner, MessageBubble, TypingIndicator

__all__ = [
    "ChatApp",
    "ChatHistoryWidget",
    "ChatInputBar",
    "DebugPanel",
    "ErrorBanner",
    "MessageBubble",
    "TypingIndicator",
    "run_chat_tui",
]
