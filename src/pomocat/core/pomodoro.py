"""PomodoroStateMachine — the work/break lifecycle.

States::

    IDLE ──start──▶ WORKING ──work timer──▶ ON_BREAK ──break timer──▶ WORKING …
                       ▲                      │  │
                       └──────stop_break──────┘  └─delay_break─▶ DELAY_WINDOW
                                                                  │
                                         ON_BREAK ◀──delay timer──┘

``stop()`` returns to IDLE from anywhere.  With ``timer.auto_break`` off the
work timer restarts work instead of entering a break, and breaks only begin
through :meth:`PomodoroStateMachine.request_break`.

Every command returns its user-facing report and publishes it as a
``pomodoro.report`` event.
"""

from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable

from pomocat.config.resolver import resolve_delay, resolve_positive_integer
from pomocat.core import events
from pomocat.core.display_coordinator import DisplayCoordinator
from pomocat.core.errors import InvalidCommandError
from pomocat.core.event_bus import EventBus
from pomocat.core.models.config import TimerConfig
from pomocat.core.models.session import BreakType, Session, SessionPhase
from pomocat.core.scheduler import TimerScheduler
from pomocat.log_config.logger import ContextualLogger

TICK_SECONDS = 1.0

_DEFAULTS = {
    "work_duration_seconds": 1500,
    "break_duration_seconds": 300,
    "long_break_duration_seconds": 1200,
    "delay_break_seconds": 60,
    "cycles_before_long_break": 4,
}


def format_mmss(seconds: float) -> str:
    minutes, secs = divmod(max(0, math.ceil(seconds)), 60)
    return f"{minutes:02d}:{secs:02d}"


def choose_break_type(cycle_count: int, cycles_before_long_break: int) -> BreakType:
    """Every *cycles_before_long_break*-th completed session earns a long break."""
    if cycle_count > 0 and cycle_count % cycles_before_long_break == 0:
        return BreakType.LONG
    return BreakType.SHORT


class PomodoroStateMachine:
    """Drives one :class:`Session` through work and break phases.

    Args:
        config: Timer settings; numeric values are resolved on every use.
        scheduler: Owner of the phase timer and the countdown ticker.
        display: Coordinator for the break notification.
        event_bus: Optional bus for lifecycle and report events.
        clock: Wall-clock source used for phase end times.
    """

    def __init__(
        self,
        config: TimerConfig,
        scheduler: TimerScheduler,
        display: DisplayCoordinator,
        event_bus: EventBus | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config
        self._scheduler = scheduler
        self._display = display
        self._bus = event_bus
        self._clock = clock
        self._session = Session()
        self._log = ContextualLogger(logging.getLogger(__name__), component="pomodoro")

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def session(self) -> Session:
        return self._session

    @property
    def phase(self) -> SessionPhase:
        return self._session.phase

    def remaining_seconds(self) -> float | None:
        """Seconds left in the current phase, or ``None`` when not counting down."""
        end = self._session.phase_end_time
        if end is None:
            return None
        return max(0.0, end - self._clock())

    def status(self) -> str:
        """Describe the session; has no side effects."""
        s = self._session
        if s.phase is SessionPhase.IDLE:
            return "Not running"
        if s.phase is SessionPhase.WORKING:
            return f"Cycle #{s.cycle_count + 1}, working"
        if s.phase is SessionPhase.DELAY_WINDOW:
            return f"Cycle #{s.cycle_count}, break delayed"
        return f"Cycle #{s.cycle_count}, in {s.break_type.value} break"

    def countdown_text(self) -> str:
        """The live countdown line shown under the break notification."""
        label = "Long" if self._session.break_type is BreakType.LONG else "Short"
        return f"{label} break: {format_mmss(self.remaining_seconds() or 0)} left"

    def static_countdown_text(self) -> str:
        """Countdown line for surfaces that cannot refresh."""
        label = "Long" if self._session.break_type is BreakType.LONG else "Short"
        end = self._session.phase_end_time
        if end is None:
            return f"{label} break"
        return f"{label} break until {time.strftime('%H:%M:%S', time.localtime(end))}"

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def start(self) -> str:
        """Reset the session and begin work session #1."""
        self._reset()
        return self._enter_work()

    def stop(self) -> str:
        """Stop everything and return to idle.  Safe to call repeatedly."""
        self._reset()
        self._publish(events.POMODORO_STOPPED)
        return self._report("Pomodoro stopped.")

    def request_break(self) -> str:
        """Begin a short or long break now.

        Called during work, the current session ends early and counts as
        completed.
        """
        s = self._session
        if not s.running:
            return self._report("Pomodoro is not running.", logging.WARNING)
        if s.phase is SessionPhase.WORKING:
            self._complete_work()
        return self._begin_break()

    def _begin_break(self) -> str:
        s = self._session
        self._clear_display()
        break_type = choose_break_type(s.cycle_count, self._resolve("cycles_before_long_break"))
        duration = self._break_duration(break_type)

        s.phase = SessionPhase.ON_BREAK
        s.break_type = break_type
        s.phase_end_time = self._clock() + duration
        self._scheduler.schedule_once(duration, self._on_break_finished)

        if self._display.show_break(self.countdown_text(), self.static_countdown_text()):
            self._scheduler.schedule_repeating(TICK_SECONDS, self._on_tick)

        self._publish(
            events.BREAK_STARTED,
            {"cycle": s.cycle_count, "break_type": break_type.value, "duration": duration},
        )
        return self._report(f"{break_type.value.capitalize()} break started ({duration}s).")

    def delay_break(self, seconds: Any = None) -> str:
        """Hide the current break and bring it back after *seconds*."""
        try:
            self._ensure_in_break()
        except InvalidCommandError as exc:
            return self._report(str(exc), logging.WARNING)

        default = self._resolve("delay_break_seconds")
        delay = resolve_delay(seconds, default)

        self._clear_display()
        s = self._session
        s.phase = SessionPhase.DELAY_WINDOW
        s.break_type = None
        s.phase_end_time = None
        self._scheduler.schedule_once(delay, self.request_break)

        self._publish(events.BREAK_DELAYED, {"cycle": s.cycle_count, "delay": delay})
        return self._report(f"Break delayed {delay}s.")

    def stop_break(self) -> str:
        """End the current break early, exactly as if its timer had fired."""
        try:
            self._ensure_in_break()
        except InvalidCommandError as exc:
            return self._report(str(exc), logging.WARNING)

        self._scheduler.cancel_once()
        return self._on_break_finished()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _enter_work(self) -> str:
        self._clear_display()
        duration = self._resolve("work_duration_seconds")
        s = self._session
        s.phase = SessionPhase.WORKING
        s.break_type = None
        s.phase_end_time = self._clock() + duration
        self._scheduler.schedule_once(duration, self._on_work_finished)

        number = s.cycle_count + 1
        self._publish(events.WORK_STARTED, {"cycle": number, "duration": duration})
        return self._report(f"Pomodoro work #{number} started!")

    def _complete_work(self) -> None:
        self._scheduler.cancel_once()
        self._clear_display()
        self._session.cycle_count += 1
        self._log.info("Work session #%d complete", self._session.cycle_count)

    def _on_work_finished(self) -> None:
        self._complete_work()
        if self._config.auto_break:
            self._begin_break()
        else:
            self._enter_work()

    def _on_break_finished(self) -> str:
        self._publish(events.BREAK_ENDED, {"cycle": self._session.cycle_count})
        return self._enter_work()

    def _on_tick(self) -> None:
        if not self._session.in_break:
            self._scheduler.cancel_repeating()
            return
        self._display.refresh(self.countdown_text())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self._clear_display()
        self._scheduler.cancel_all()
        self._session.reset()

    def _clear_display(self) -> None:
        self._scheduler.cancel_repeating()
        self._display.clear()

    def _ensure_in_break(self) -> None:
        if not self._session.in_break:
            raise InvalidCommandError("Not currently in a break.")

    def _break_duration(self, break_type: BreakType) -> int:
        if break_type is BreakType.LONG:
            return self._resolve("long_break_duration_seconds")
        return self._resolve("break_duration_seconds")

    def _resolve(self, name: str) -> int:
        return resolve_positive_integer(getattr(self._config, name), name, _DEFAULTS[name])

    def _report(self, message: str, level: int = logging.INFO) -> str:
        self._log.bind(cycle=self._session.cycle_count)
        self._log.log(level, message)
        self._publish(events.REPORT, {"message": message})
        return message

    def _publish(self, event_type: str, payload: dict[str, Any] | None = None) -> None:
        if self._bus is not None:
            self._bus.publish_nowait(event_type, payload)
