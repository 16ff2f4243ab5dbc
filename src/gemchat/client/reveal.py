"""Word-by-word reveal of an already complete reply.

This is display pacing only: the full text is known before the first
word is shown.
"""

import asyncio
from collections.abc import Awaitable, Callable

from .cancellation import CancellationToken

REVEAL_DELAY_SECONDS = 0.2


async def reveal(
    text: str,
    on_partial: Callable[[str], None],
    token: CancellationToken,
    delay: float = REVEAL_DELAY_SECONDS,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> str:
    """Reveal ``text`` one space-separated word at a time.

    ``on_partial`` receives the accumulated text after each word. The
    token is checked before and after every word; once it is cancelled
    no further callback fires. A token cancelled before the call shows
    nothing at all.

    ``delay`` separates consecutive words only. There is no pause after
    the final word, so the reveal finishes as soon as the full text is
    shown.

    Args:
        text: Complete reply text
        on_partial: Called with the text revealed so far
        token: Cancellation signal for this reveal
        delay: Pause between words, in seconds
        sleep: Awaitable sleep used for pacing

    Returns:
        The text revealed when the loop stopped
    """
    words = text.split(" ")
    revealed = ""

    for index, word in enumerate(words):
        if token.cancelled:
            break
        revealed = word if index == 0 else f"{revealed} {word}"
        on_partial(revealed)
        if token.cancelled or index == len(words) - 1:
            break
        await sleep(delay)

    return revealed
