"""Client-side conversation controller.

Owns the session's message list and drives one submission at a time
through its lifecycle:

    IDLE -> SENDING -> AWAITING_REPLY -> REVEALING -> IDLE
    IDLE -> SENDING -> AWAITING_REPLY -> ERROR -> IDLE

Views subscribe with ``add_listener`` and re-render from the snapshot
properties whenever they are notified.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from enum import Enum

from ..history import ChatMessage
from .cancellation import CancellationToken
from .reveal import REVEAL_DELAY_SECONDS, reveal
from .transport import ChatTransport, TransportError

logger = logging.getLogger(__name__)

CLIENT_CONTEXT_SIZE = 10
CONNECTION_ERROR = "Connection error. Please try again later."
ERROR_REPLY = "⚠️ Error connecting to the server. Please try again later."

Listener = Callable[[], None]


class ConversationState(str, Enum):
    """Lifecycle state of the current submission."""

    IDLE = "idle"
    SENDING = "sending"
    AWAITING_REPLY = "awaiting_reply"
    REVEALING = "revealing"
    ERROR = "error"


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


class ConversationController:
    """Drives submissions from a chat view to the gateway.

    Args:
        transport: Sends messages to the server
        reveal_delay: Pause between revealed words, in seconds
        sleep: Awaitable sleep used by the reveal
        clock: Timestamp factory for new messages
    """

    def __init__(
        self,
        transport: ChatTransport,
        reveal_delay: float = REVEAL_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], str] = _now,
    ) -> None:
        self._transport = transport
        self._reveal_delay = reveal_delay
        self._sleep = sleep
        self._clock = clock
        self._messages: list[ChatMessage] = []
        self._state = ConversationState.IDLE
        self._error: str | None = None
        self._active_token: CancellationToken | None = None
        self._listeners: list[Listener] = []

    @property
    def transport(self) -> ChatTransport:
        return self._transport

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def state(self) -> ConversationState:
        return self._state

    @property
    def error(self) -> str | None:
        """User-visible error from the last failed submission."""
        return self._error

    @property
    def is_generating(self) -> bool:
        """True while a submission is in flight or being revealed."""
        return self._state in (
            ConversationState.SENDING,
            ConversationState.AWAITING_REPLY,
            ConversationState.REVEALING,
        )

    @property
    def is_typing(self) -> bool:
        """True while waiting for the server's reply."""
        return self._state in (ConversationState.SENDING, ConversationState.AWAITING_REPLY)

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()

    def _set_state(self, state: ConversationState) -> None:
        self._state = state
        self._notify()

    def _append(self, message: ChatMessage) -> None:
        self._messages.append(message)
        self._notify()

    def _replace_text(self, index: int, text: str) -> None:
        self._messages[index] = self._messages[index].with_text(text)
        self._notify()

    def _superseded(self, token: CancellationToken) -> bool:
        """True once a newer submission owns the conversation."""
        return self._active_token is not None and self._active_token is not token

    async def submit(self, text: str) -> bool:
        """Send a user message and reveal the reply.

        Args:
            text: Raw input text

        Returns:
            False if nothing was sent (blank input or a submission already
            in flight), True otherwise, whether or not it succeeded
        """
        if not text.strip():
            return False
        if self.is_generating:
            logger.warning("Submission ignored: a reply is still being generated")
            return False

        context = self._messages[-CLIENT_CONTEXT_SIZE:]
        self._messages.append(ChatMessage(text=text, is_user=True, timestamp=self._clock()))
        self._error = None

        token = CancellationToken()
        self._active_token = token
        self._set_state(ConversationState.SENDING)

        try:
            self._set_state(ConversationState.AWAITING_REPLY)
            reply = await self._transport.send(text, context, token)

            # Stopped between the response and the first word: no empty bubble
            if token.cancelled:
                return True

            self._state = ConversationState.REVEALING
            placeholder = len(self._messages)
            self._append(ChatMessage(text="", is_user=False, timestamp=self._clock()))
            await reveal(
                reply,
                lambda partial: self._replace_text(placeholder, partial),
                token,
                delay=self._reveal_delay,
                sleep=self._sleep,
            )
        except TransportError as e:
            logger.error("Error fetching response: %s", e)
            self._messages.append(ChatMessage(text=ERROR_REPLY, is_user=False, timestamp=self._clock()))
            if self._superseded(token):
                self._notify()
            else:
                self._error = CONNECTION_ERROR
                if self._active_token is token:
                    self._set_state(ConversationState.ERROR)
                else:
                    self._notify()
        finally:
            if self._active_token is token:
                self._active_token = None
                self._set_state(ConversationState.IDLE)

        return True

    def cancel(self) -> None:
        """Stop the active submission.

        The network call is aborted or the reveal stops at its next
        checkpoint. Text already revealed stays in the transcript.
        """
        token = self._active_token
        if token is None:
            return
        token.cancel()
        self._active_token = None
        self._set_state(ConversationState.IDLE)
