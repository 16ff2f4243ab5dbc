"""Textual CSS for the chat TUI.

Top to bottom: error banner, message list, typing line, log panel,
input bar. Colors come from the active theme's variables.
"""

APP_CSS = """
Screen {
    layout: vertical;
    background: $background;
}

/* hidden unless the last submission failed */
ErrorBanner {
    height: auto;
    padding: 0 2;
    background: $error 20%;
    border-left: tall $error;
    color: $text-error;
}

#chat-history {
    height: 1fr;
    padding: 0 1;
    background: $panel;
    border: round $primary 60%;
    border-title-align: left;
    border-title-color: $primary;
    border-subtitle-align: right;
    border-subtitle-color: $text-muted;
    scrollbar-gutter: stable;
}

#chat-history:focus-within {
    border: round $primary;
}

#empty-state {
    width: 100%;
    height: 100%;
    color: $text-muted;
    content-align: center middle;
}

MessageBubble {
    height: auto;
    margin-bottom: 1;
    padding: 0 2;
}

MessageBubble .message-header {
    text-style: bold;
}

/* user on the right, bot on the left */
MessageBubble.user-message {
    margin-left: 8;
    background: $success 8%;
    border-right: tall $success;
}

MessageBubble.user-message .message-header {
    color: $success;
    text-align: right;
}

MessageBubble.user-message .message-content {
    text-align: right;
}

MessageBubble.assistant-message {
    margin-right: 8;
    background: $secondary 8%;
    border-left: tall $secondary;
}

MessageBubble.assistant-message .message-header {
    color: $secondary;
}

TypingIndicator {
    height: 1;
    padding: 0 2;
    color: $text-muted;
    text-style: italic;
}

#debug-panel {
    height: 8;
    background: $surface;
    border: round $border;
    border-title-color: $accent;
}

ChatInputBar {
    height: 5;
    padding: 0 1;
    background: $surface;
    border: tall $border;
}

ChatInputBar:focus-within {
    border: tall $primary;
}

#chat-input {
    width: 1fr;
    height: 100%;
    padding: 0 1;
    border: none;
    background: transparent;
}

ChatInputBar Button {
    width: 10;
    min-width: 8;
    height: 100%;
    margin-left: 1;
    text-style: bold;
    color: $background;
}

#send-btn {
    background: $success;
    border: tall $success;
}

#send-btn:disabled {
    background: $surface;
    border: tall $border;
    color: $text-disabled;
}

#stop-btn {
    display: none;
    background: $error;
    border: tall $error;
}

ChatInputBar.-generating #send-btn {
    display: none;
}

ChatInputBar.-generating #stop-btn {
    display: block;
}
"""
