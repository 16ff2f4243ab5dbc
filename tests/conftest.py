"""Pytest configuration and shared fixtures."""
import os
from typing import Any

import pytest

from gemchat.gateway import ChatGateway
from gemchat.history import ChatMessage, InMemoryHistoryStore, JsonFileHistoryStore
from gemchat.llm import CompletionResponse, CompletionService


class StubCompletionService(CompletionService):
    """Completion service returning a fixed reply and recording prompts."""

    def __init__(self, reply: str = "stub reply") -> None:
        self.reply = reply
        self.prompts: list[str] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "stub-model"

    async def complete(self, prompt: str, **kwargs: Any) -> CompletionResponse:
        self.prompts.append(prompt)
        return CompletionResponse(content=self.reply, model="stub-model")

    async def close(self) -> None:
        self.closed = True


class FailingCompletionService(StubCompletionService):
    """Completion service that always raises."""

    async def complete(self, prompt: str, **kwargs: Any) -> CompletionResponse:
        self.prompts.append(prompt)
        raise ConnectionError("quota exceeded")


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def history_path(tmp_path):
    """Path to a history file that does not exist yet."""
    return tmp_path / "data" / "chatHistory.json"


@pytest.fixture
def json_store(history_path):
    return JsonFileHistoryStore(history_path)


@pytest.fixture
def memory_store():
    return InMemoryHistoryStore()


@pytest.fixture
def stub_completion():
    return StubCompletionService("hello world foo")


@pytest.fixture
def failing_completion():
    return FailingCompletionService()


@pytest.fixture
def gateway(json_store, stub_completion):
    """Gateway over a temp JSON file with a fixed clock."""
    return ChatGateway(json_store, stub_completion, clock=lambda: "12:00")


@pytest.fixture
def sample_turns():
    """Return a short alternating conversation."""
    return [
        ChatMessage(text="hi", is_user=True, timestamp="09:00"),
        ChatMessage(text="Hello! How can I help?", is_user=False, timestamp="09:00"),
        ChatMessage(text="what's the weather?", is_user=True, timestamp="09:01"),
    ]
