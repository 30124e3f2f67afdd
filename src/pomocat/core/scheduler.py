"""Timer scheduler — one phase timer and one ticker on the event loop."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

_log = logging.getLogger(__name__)

Action = Callable[[], Any]


class TimerScheduler:
    """Owns at most one one-shot *phase* timer and one repeating *ticker*.

    Scheduling always cancels the previous handle of the same kind first, so
    two calls to :meth:`schedule_once` in a row leave exactly one live timer
    (the second).  Callbacks run on the asyncio loop; an exception raised by
    an action is logged and never escapes into the loop.

    Args:
        loop: Event loop to schedule on.  Defaults to the running loop at the
            time of the first call, which lets the scheduler be built before
            NiceGUI starts its loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop
        self._once: asyncio.TimerHandle | None = None
        self._once_due: float | None = None
        self._repeating: asyncio.TimerHandle | None = None
        self._repeat_period: float = 0.0
        self._repeat_action: Action | None = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def has_once(self) -> bool:
        return self._once is not None

    @property
    def has_repeating(self) -> bool:
        return self._repeating is not None

    def once_remaining(self) -> float | None:
        """Seconds until the phase timer fires, or ``None`` if none is armed."""
        if self._once_due is None:
            return None
        return max(0.0, self._once_due - self._get_loop().time())

    # ------------------------------------------------------------------
    # Phase timer
    # ------------------------------------------------------------------

    def schedule_once(self, delay: float, action: Action) -> None:
        """Replace the phase timer with *action* firing after *delay* seconds."""
        self.cancel_once()
        loop = self._get_loop()
        delay = max(0.0, delay)
        self._once_due = loop.time() + delay
        self._once = loop.call_later(delay, self._fire_once, action)
        _log.debug("Phase timer armed for %.1fs", delay)

    def cancel_once(self) -> None:
        """Cancel the phase timer, if any."""
        if self._once is not None:
            self._once.cancel()
            self._once = None
        self._once_due = None

    def _fire_once(self, action: Action) -> None:
        # Cleared first so the action may arm the next phase.
        self._once = None
        self._once_due = None
        self._invoke("phase timer", action)

    # ------------------------------------------------------------------
    # Ticker
    # ------------------------------------------------------------------

    def schedule_repeating(self, period: float, action: Action) -> None:
        """Replace the ticker with *action* firing every *period* seconds."""
        if period <= 0:
            raise ValueError("period must be positive")
        self.cancel_repeating()
        self._repeat_period = period
        self._repeat_action = action
        self._arm_repeating()

    def cancel_repeating(self) -> None:
        """Cancel the ticker, if any."""
        if self._repeating is not None:
            self._repeating.cancel()
            self._repeating = None
        self._repeat_action = None

    def _arm_repeating(self) -> None:
        self._repeating = self._get_loop().call_later(self._repeat_period, self._fire_repeating)

    def _fire_repeating(self) -> None:
        token = self._repeating
        action = self._repeat_action
        if action is not None:
            self._invoke("ticker", action)
        # Re-arm only if the action did not cancel or replace the ticker.
        if self._repeating is token and self._repeat_action is action:
            self._arm_repeating()

    # ------------------------------------------------------------------
    # Shared
    # ------------------------------------------------------------------

    def cancel_all(self) -> None:
        self.cancel_once()
        self.cancel_repeating()

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    @staticmethod
    def _invoke(kind: str, action: Action) -> None:
        try:
            action()
        except Exception:
            _log.exception("%s callback %r raised", kind.capitalize(), action)
