"""Core services: scheduler, state machine, display coordination, event bus."""

from pomocat.core.display_coordinator import DisplayCoordinator
from pomocat.core.event_bus import EventBus
from pomocat.core.pomodoro import PomodoroStateMachine
from pomocat.core.scheduler import TimerScheduler

__all__ = [
    "DisplayCoordinator",
    "EventBus",
    "PomodoroStateMachine",
    "TimerScheduler",
]
