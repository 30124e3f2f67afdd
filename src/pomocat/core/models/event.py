"""Pydantic model for event bus messages."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Event(BaseModel):
    """Immutable message flowing through the event bus.

    Session events carry ``cycle`` in their payload; ``pomodoro.report``
    carries ``message``.
    """

    model_config = ConfigDict(frozen=True)

    event_type: str = Field(description="Dot-separated event type, e.g. 'pomodoro.break.started'")
    payload: dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def cycle(self) -> int | None:
        return self.payload.get("cycle")

    @property
    def message(self) -> str:
        return str(self.payload.get("message", ""))
