"""Chat client: transport, conversation controller and reveal pacing."""

from .cancellation import CancellationToken
from .controller import (
    CONNECTION_ERROR,
    ERROR_REPLY,
    ConversationController,
    ConversationState,
)
from .reveal import REVEAL_DELAY_SECONDS, reveal
from .transport import ChatTransport, RequestCancelled, TransportError

__all__ = [
    "CONNECTION_ERROR",
    "ERROR_REPLY",
    "REVEAL_DELAY_SECONDS",
    "CancellationToken",
    "ChatTransport",
    "ConversationController",
    "ConversationState",
    "RequestCancelled",
    "TransportError",
    "reveal",
]
