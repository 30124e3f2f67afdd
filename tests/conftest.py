"""Shared pytest fixtures for pomocat tests."""

from __future__ import annotations

import pytest

from pomocat.core.display_coordinator import DisplayCoordinator
from pomocat.core.event_bus import EventBus
from pomocat.core.models.config import DisplayConfig, PomocatConfig, TimerConfig
from pomocat.core.pomodoro import PomodoroStateMachine
from pomocat.core.scheduler import TimerScheduler
from pomocat.surfaces.memory import InMemorySurface
from tests.helpers.fake_loop import FakeLoop


@pytest.fixture
async def event_bus():
    """Provide a started EventBus that is stopped after the test."""
    bus = EventBus(queue_size=100)
    await bus.start()
    yield bus
    await bus.stop()


@pytest.fixture(scope="session")
def pomocat_config() -> PomocatConfig:
    """Session-scoped default config (no file I/O)."""
    return PomocatConfig()


@pytest.fixture
def fake_loop() -> FakeLoop:
    return FakeLoop()


@pytest.fixture
def scheduler(fake_loop: FakeLoop) -> TimerScheduler:
    return TimerScheduler(loop=fake_loop)  # type: ignore[arg-type]


@pytest.fixture
def surface() -> InMemorySurface:
    return InMemorySurface()


@pytest.fixture
def timer_config() -> TimerConfig:
    return TimerConfig()


@pytest.fixture
def machine(
    fake_loop: FakeLoop,
    scheduler: TimerScheduler,
    surface: InMemorySurface,
    timer_config: TimerConfig,
) -> PomodoroStateMachine:
    """State machine on virtual time, showing breaks on an in-memory surface."""
    coordinator = DisplayCoordinator([surface], DisplayConfig())
    return PomodoroStateMachine(timer_config, scheduler, coordinator, clock=fake_loop.time)
