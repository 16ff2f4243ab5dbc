"""Chat gateway module for gemchat.

Validates a user message, derives the prompt from stored history, calls
the completion service once and records both turns.
"""

from .errors import GatewayError, UpstreamError, ValidationError
from .service import CONTEXT_SIZE, FALLBACK_REPLY, ChatGateway, build_prompt

__all__ = [
    "CONTEXT_SIZE",
    "FALLBACK_REPLY",
    "ChatGateway",
    "GatewayError",
    "UpstreamError",
    "ValidationError",
    "build_prompt",
]
