"""Pydantic models for configuration, events, and session state."""
from pomocat.core.models.config import DisplayConfig, PomocatConfig, SystemConfig, TimerConfig
from pomocat.core.models.event import Event
from pomocat.core.models.session import BreakType, Session, SessionPhase

__all__ = [
    "PomocatConfig",
    "TimerConfig",
    "DisplayConfig",
    "SystemConfig",
    "Event",
    "BreakType",
    "Session",
    "SessionPhase",
]
