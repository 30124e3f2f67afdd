"""Test helpers for code that runs on the real event loop (bus dispatch)."""

from __future__ import annotations

import asyncio
from typing import Callable


async def wait_for(
    condition: Callable[[], bool],
    timeout: float = 5.0,
    interval: float = 0.02,
    what: str = "condition",
) -> None:
    """Poll *condition* until it is truthy or *timeout* loop-seconds pass.

    Raises:
        TimeoutError: naming *what* was awaited.
    """
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not condition():
        if loop.time() >= deadline:
            raise TimeoutError(f"{what} not met within {timeout}s")
        await asyncio.sleep(interval)
