"""Cancellation token shared by one submission's network call and reveal."""

import asyncio


class CancellationToken:
    """One-shot cancellation signal.

    A fresh token is created for every submission and passed explicitly
    to whatever must stop when the user cancels. Once cancelled it stays
    cancelled.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        """Suspend until the token is cancelled."""
        await self._event.wait()

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
