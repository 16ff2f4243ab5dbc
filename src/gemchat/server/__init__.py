"""HTTP surface for the chat gateway."""

from .app import ChatRequest, ChatResponse, build_gateway, create_app, run_server

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "build_gateway",
    "create_app",
    "run_server",
]
