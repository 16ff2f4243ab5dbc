"""
gemchat: a chat client and HTTP gateway for a hosted Gemini model.

Each module hides one design decision: how history is persisted, which
model answers, how the gateway builds its prompt, how the client paces
the reveal of a reply.
"""

__version__ = "0.1.0"

from .gateway import ChatGateway, GatewayError, UpstreamError, ValidationError
from .history import MAX_MESSAGES, ChatMessage, HistoryStore, create_history_store

__all__ = [
    "MAX_MESSAGES",
    "ChatGateway",
    "ChatMessage",
    "GatewayError",
    "HistoryStore",
    "UpstreamError",
    "ValidationError",
    "create_history_store",
]
