"""Chat gateway: one user message in, one reply out.

The gateway owns the read-modify-write cycle on the history store:

    load -> append user turn -> build prompt -> complete -> append bot turn
         -> trim -> save

The store is saved exactly once per completion attempt. When the
completion service fails, the user turn is still persisted and no bot
turn is added; nothing is rolled back.
"""

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable, Sequence
from typing import Any

from ..history import MAX_MESSAGES, ChatMessage, HistoryStore, clock_time, trim_history
from ..llm import CompletionService
from .errors import UpstreamError, ValidationError

logger = logging.getLogger(__name__)

CONTEXT_SIZE = 10
FALLBACK_REPLY = "I'm not sure how to respond."


def build_prompt(
    history: Sequence[ChatMessage],
    message: str,
    context_size: int = CONTEXT_SIZE
) -> str:
    """Build the prompt sent to the completion service.

    The last ``context_size`` turns are joined by newlines and the new
    message is appended once more. Since ``history`` already ends with
    that message, it appears twice in the prompt.

    Args:
        history: Turns including the just-appended user message
        message: The new user message
        context_size: Number of trailing turns used as context

    Returns:
        Prompt text
    """
    context = "\n".join(turn.text for turn in history[-context_size:]) if context_size > 0 else ""
    return f"{context}\n{message}"


class ChatGateway:
    """Handles chat requests against a history store and a completion service.

    Args:
        store: History backend, loaded and saved on every request
        completion: Completion service invoked once per request
        max_messages: Cap on persisted turns
        context_size: Trailing turns included in the prompt
        fallback_reply: Reply used when the completion is empty
        clock: Returns the timestamp string for new turns
        serialize: Serialize requests with an in-process lock so concurrent
            read-modify-write cycles cannot lose updates
    """

    def __init__(
        self,
        store: HistoryStore,
        completion: CompletionService,
        max_messages: int = MAX_MESSAGES,
        context_size: int = CONTEXT_SIZE,
        fallback_reply: str = FALLBACK_REPLY,
        clock: Callable[[], str] | None = None,
        serialize: bool = True,
    ) -> None:
        self._store = store
        self._completion = completion
        self._max_messages = max_messages
        self._context_size = context_size
        self._fallback_reply = fallback_reply
        self._clock = clock or clock_time
        self._lock = asyncio.Lock() if serialize else None

    @property
    def store(self) -> HistoryStore:
        return self._store

    @property
    def completion(self) -> CompletionService:
        return self._completion

    async def handle_chat(self, message: Any) -> str:
        """Answer one user message.

        Args:
            message: The user's message; must be a non-empty string

        Returns:
            The reply text

        Raises:
            ValidationError: If message is missing, empty or not a string
            UpstreamError: If the completion service fails
        """
        if not isinstance(message, str) or not message:
            raise ValidationError()

        guard = self._lock if self._lock is not None else contextlib.nullcontext()
        async with guard:
            return await self._handle(message)

    async def _handle(self, message: str) -> str:
        history = await self._store.load()
        history.append(ChatMessage(text=message, is_user=True, timestamp=self._clock()))

        prompt = build_prompt(history, message, self._context_size)
        logger.debug("Prompt built from %d turns (%d chars)", min(len(history), self._context_size), len(prompt))

        start = time.perf_counter()
        try:
            response = await self._completion.complete(prompt)
        except Exception as e:
            logger.exception("Error from completion service: %s", e)
            await self._store.save(trim_history(history, self._max_messages))
            raise UpstreamError() from e

        elapsed = time.perf_counter() - start
        reply = response.content or self._fallback_reply
        logger.info(
            "Completion from %s in %.2fs: %d chars, usage=%s",
            response.model,
            elapsed,
            len(reply),
            response.usage,
        )

        history.append(ChatMessage(text=reply, is_user=False, timestamp=self._clock()))
        await self._store.save(trim_history(history, self._max_messages))
        return reply
