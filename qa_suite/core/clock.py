"""Millisecond clock and sleep primitives shared by the wait utilities."""

import asyncio
import time


def monotonic_ms() -> float:
    """Current monotonic time in milliseconds."""
    return time.monotonic() * 1000


async def sleep_ms(milliseconds: float) -> None:
    """Suspend the calling task for the given number of milliseconds."""
    await asyncio.sleep(max(milliseconds, 0) / 1000)
