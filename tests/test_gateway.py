"""Unit tests for the chat gateway."""
import asyncio
from typing import Any

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gemchat.gateway import (
    FALLBACK_REPLY,
    ChatGateway,
    UpstreamError,
    ValidationError,
    build_prompt,
)
from gemchat.history import MAX_MESSAGES, ChatMessage, InMemoryHistoryStore
from gemchat.llm import CompletionResponse

from .conftest import FailingCompletionService, StubCompletionService


class TestBuildPrompt:
    """Tests for prompt assembly."""

    def test_new_message_appears_twice(self, sample_turns):
        """Test that the trailing turn and the appended message both appear."""
        prompt = build_prompt(sample_turns, "what's the weather?")

        assert prompt == "hi\nHello! How can I help?\nwhat's the weather?\nwhat's the weather?"

    def test_uses_last_ten_turns(self):
        """Test that only the context window is included."""
        turns = [ChatMessage(text=f"m{i}", is_user=True, timestamp="00:00") for i in range(15)]

        prompt = build_prompt(turns, "m14")

        assert prompt.split("\n") == [f"m{i}" for i in range(5, 15)] + ["m14"]


class TestValidation:
    """Tests for rejected messages."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", None, 42, ["hi"]])
    async def test_invalid_message_has_no_side_effects(self, json_store, stub_completion, message: Any):
        """Test that a missing or empty message touches neither history nor the model."""
        await json_store.save([ChatMessage(text="before", is_user=True, timestamp="08:00")])
        before = await json_store.load()
        gateway = ChatGateway(json_store, stub_completion)

        with pytest.raises(ValidationError) as exc_info:
            await gateway.handle_chat(message)

        assert exc_info.value.status_code == 400
        assert str(exc_info.value) == "Message is required"
        assert await json_store.load() == before
        assert stub_completion.prompts == []

    @pytest.mark.asyncio
    async def test_whitespace_message_is_accepted(self, gateway, stub_completion):
        """Test that whitespace counts as a non-empty message server-side."""
        reply = await gateway.handle_chat("   ")

        assert reply == "hello world foo"
        assert len(stub_completion.prompts) == 1


class TestHandleChat:
    """Tests for the successful request path."""

    @pytest.mark.asyncio
    async def test_returns_reply_and_appends_two_turns(self, gateway, json_store):
        """Test that user then bot turns are appended and persisted."""
        reply = await gateway.handle_chat("hi there")

        history = await json_store.load()
        assert reply == "hello world foo"
        assert [(t.text, t.is_user) for t in history[-2:]] == [
            ("hi there", True),
            ("hello world foo", False),
        ]
        assert all(t.timestamp == "12:00" for t in history)

    @pytest.mark.asyncio
    async def test_prompt_built_from_stored_history(self, json_store, sample_turns, stub_completion):
        """Test that the model sees stored turns plus the duplicated message."""
        await json_store.save(sample_turns)
        gateway = ChatGateway(json_store, stub_completion)

        await gateway.handle_chat("and tomorrow?")

        assert stub_completion.prompts == [
            "hi\nHello! How can I help?\nwhat's the weather?\nand tomorrow?\nand tomorrow?"
        ]

    @pytest.mark.asyncio
    async def test_empty_completion_uses_fallback(self, memory_store):
        """Test the placeholder reply for an empty completion."""
        gateway = ChatGateway(memory_store, StubCompletionService(""))

        reply = await gateway.handle_chat("hi")

        assert reply == FALLBACK_REPLY == "I'm not sure how to respond."
        assert (await memory_store.load())[-1].text == FALLBACK_REPLY

    @pytest.mark.asyncio
    async def test_saves_once_per_request(self, memory_store, stub_completion):
        gateway = ChatGateway(memory_store, stub_completion)

        await gateway.handle_chat("one")
        await gateway.handle_chat("two")

        assert memory_store.save_count == 2

    @settings(max_examples=20, deadline=None)
    @given(st.integers(min_value=MAX_MESSAGES // 2 + 1, max_value=60))
    def test_history_capped_to_most_recent(self, requests: int):
        """Property test: after N > cap turns only the newest cap turns remain, in order."""
        store = InMemoryHistoryStore()
        gateway = ChatGateway(store, StubCompletionService("ok"))

        async def _run():
            for i in range(requests):
                await gateway.handle_chat(f"msg {i}")
            return await store.load()

        history = asyncio.run(_run())

        expected = []
        for i in range(requests):
            expected += [(f"msg {i}", True), ("ok", False)]
        assert len(history) == MAX_MESSAGES
        assert [(t.text, t.is_user) for t in history] == expected[-MAX_MESSAGES:]


class TestUpstreamFailure:
    """Tests for completion service failures."""

    @pytest.mark.asyncio
    async def test_failure_raises_generic_error(self, json_store, failing_completion):
        gateway = ChatGateway(json_store, failing_completion)

        with pytest.raises(UpstreamError) as exc_info:
            await gateway.handle_chat("hello?")

        assert exc_info.value.status_code == 500
        assert exc_info.value.public_message == "Failed to get a response from AI"
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    @pytest.mark.asyncio
    async def test_user_turn_persisted_without_reply(self, json_store, sample_turns, failing_completion):
        """Test that the user turn stays without a bot turn (no rollback)."""
        await json_store.save(sample_turns)
        gateway = ChatGateway(json_store, failing_completion)

        with pytest.raises(UpstreamError):
            await gateway.handle_chat("hello?")

        history = await json_store.load()
        assert len(history) == len(sample_turns) + 1
        assert history[-1].text == "hello?"
        assert history[-1].is_user is True

    @pytest.mark.asyncio
    async def test_no_retry(self, memory_store, failing_completion):
        gateway = ChatGateway(memory_store, failing_completion)

        with pytest.raises(UpstreamError):
            await gateway.handle_chat("hello?")

        assert len(failing_completion.prompts) == 1
        assert memory_store.save_count == 1


class SlowCompletionService(StubCompletionService):
    """Completion that yields to the event loop before answering."""

    async def complete(self, prompt: str, **kwargs: Any) -> CompletionResponse:
        self.prompts.append(prompt)
        await asyncio.sleep(0.01)
        return CompletionResponse(content=self.reply, model="stub-model")


class TestSerialization:
    """Tests for concurrent requests."""

    @pytest.mark.asyncio
    async def test_concurrent_requests_do_not_lose_turns(self, memory_store):
        """Test that the lock serializes read-modify-write cycles."""
        gateway = ChatGateway(memory_store, SlowCompletionService("ok"))

        await asyncio.gather(*(gateway.handle_chat(f"m{i}") for i in range(5)))

        assert len(await memory_store.load()) == 10

    @pytest.mark.asyncio
    async def test_unserialized_gateway_can_lose_updates(self, memory_store):
        """Test the known race when serialization is disabled."""
        gateway = ChatGateway(memory_store, SlowCompletionService("ok"), serialize=False)

        await asyncio.gather(*(gateway.handle_chat(f"m{i}") for i in range(5)))

        assert len(await memory_store.load()) < 10
