"""Poll-interval sleep for the Mailosaur client."""

import asyncio


async def sleep(ms: float) -> None:
    """Suspend the calling task between poll attempts.

    Non-positive delays still yield once to the event loop.

    Args:
        ms: Delay in milliseconds, as advertised by the delay header.
    """
    await asyncio.sleep(max(ms, 0) / 1000)
