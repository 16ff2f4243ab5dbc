"""HTTP transport from the chat client to the gateway.

Hides httpx details and turns every failure, including a user abort,
into a ``TransportError``.
"""

import asyncio
import contextlib
import logging
from collections.abc import Sequence
from typing import Any

import httpx

from ..history import ChatMessage
from .cancellation import CancellationToken

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


class TransportError(Exception):
    """The request did not produce a reply."""


class RequestCancelled(TransportError):
    """The request was aborted through its cancellation token."""


class ChatTransport:
    """Sends chat messages to the gateway's HTTP endpoint.

    Supports async context manager protocol:
        async with ChatTransport("http://localhost:5000") as transport:
            reply = await transport.send("hi", [], CancellationToken())
    """

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Server root, e.g. http://localhost:5000
            client: Pre-built client (tests inject one with a MockTransport)
            timeout: Request timeout in seconds, None to wait indefinitely
        """
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def url(self) -> str:
        return f"{self._base_url}{CHAT_PATH}"

    async def send(
        self,
        message: str,
        history: Sequence[ChatMessage],
        token: CancellationToken,
    ) -> str:
        """Post one message and return the reply text.

        Args:
            message: User message
            history: Recent client-side turns sent as context metadata
            token: Aborts the request when cancelled

        Returns:
            Reply text from the server

        Raises:
            RequestCancelled: If the token was cancelled first
            TransportError: On network failure, non-2xx status or malformed body
        """
        if token.cancelled:
            raise RequestCancelled("Request cancelled before sending")

        payload = {
            "message": message,
            "history": [turn.to_json_dict() for turn in history],
        }
        request = asyncio.ensure_future(self._client.post(self.url, json=payload))
        cancelled = asyncio.ensure_future(token.wait())
        try:
            await asyncio.wait({request, cancelled}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            request.cancel()
            raise
        finally:
            cancelled.cancel()

        if not request.done():
            request.cancel()
            with contextlib.suppress(asyncio.CancelledError, httpx.HTTPError):
                await request
            logger.info("Chat request aborted")
            raise RequestCancelled("Request cancelled")

        try:
            response = request.result()
        except httpx.HTTPError as e:
            raise TransportError(f"Request failed: {e}") from e

        return self._parse(response)

    def _parse(self, response: httpx.Response) -> str:
        if not response.is_success:
            raise TransportError(f"Server responded with status: {response.status_code}")
        try:
            data: Any = response.json()
        except ValueError as e:
            raise TransportError("Server sent a malformed response") from e
        reply = data.get("reply") if isinstance(data, dict) else None
        if not isinstance(reply, str):
            raise TransportError("Server response has no reply")
        return reply

    async def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ChatTransport":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
