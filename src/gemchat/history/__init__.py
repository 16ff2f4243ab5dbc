"""Conversation history module for gemchat.

Provides the bounded, flat-file conversation log kept by the server.
"""

from .base import HistoryStore
from .factory import create_history_store
from .in_memory import InMemoryHistoryStore
from .json_file import JsonFileHistoryStore
from .models import MAX_MESSAGES, ChatMessage, clock_time, trim_history

__all__ = [
    "MAX_MESSAGES",
    "ChatMessage",
    "HistoryStore",
    "InMemoryHistoryStore",
    "JsonFileHistoryStore",
    "clock_time",
    "create_history_store",
    "trim_history",
]
