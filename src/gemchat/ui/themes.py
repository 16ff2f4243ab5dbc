"""Color theme for the chat TUI."""

from textual.theme import Theme

THEME_NAME = "gemchat-night"

# Dark slate with a blue/violet accent pair for the two speakers
GEMCHAT_NIGHT = Theme(
    name=THEME_NAME,
    primary="#7aa2f7",
    secondary="#bb9af7",    # bot bubbles
    accent="#e0af68",
    foreground="#c0caf5",
    background="#16161e",
    success="#9ece6a",      # user bubbles, Send
    warning="#ff9e64",
    error="#f7768e",        # banner, Stop
    surface="#1f2335",
    panel="#1a1b26",
    dark=True,
    variables={
        "border": "#3b4261",
        "border-blurred": "#292e42",
        "scrollbar": "#292e42",
        "scrollbar-background": "#1a1b26",
        "footer-key-foreground": "#e0af68",
        "input-selection-background": "#7aa2f7 30%",
        "text-muted": "#565f89",
        "text-disabled": "#3b4261",
        "text-error": "#f7768e",
    },
)
