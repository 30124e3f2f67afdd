"""Session state models and enumerations."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class SessionPhase(str, Enum):
    """Lifecycle phase of the Pomodoro session."""

    IDLE = "idle"
    WORKING = "working"
    ON_BREAK = "on_break"
    DELAY_WINDOW = "delay_window"


class BreakType(str, Enum):
    """Kind of break chosen when a break starts."""

    SHORT = "short"
    LONG = "long"


class Session(BaseModel):
    """The single mutable timer session owned by the state machine.

    Timer handles live in :class:`~pomocat.core.scheduler.TimerScheduler` and
    the showing surface in
    :class:`~pomocat.core.display_coordinator.DisplayCoordinator`; this model
    holds the rest.
    """

    phase: SessionPhase = Field(default=SessionPhase.IDLE)
    cycle_count: int = Field(default=0, ge=0, description="Completed work sessions")
    break_type: BreakType | None = Field(default=None)
    phase_end_time: float | None = Field(
        default=None, description="Wall-clock time the current phase ends"
    )

    @property
    def in_break(self) -> bool:
        return self.phase is SessionPhase.ON_BREAK

    @property
    def running(self) -> bool:
        return self.phase is not SessionPhase.IDLE

    def reset(self) -> None:
        """Return to the zero state (idle, no cycles, no end time)."""
        self.phase = SessionPhase.IDLE
        self.cycle_count = 0
        self.break_type = None
        self.phase_end_time = None
