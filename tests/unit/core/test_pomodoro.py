"""Tests for PomodoroStateMachine — commands, transitions, and timers."""

from __future__ import annotations

import pytest

from pomocat.core import events
from pomocat.core.display_coordinator import DisplayCoordinator
from pomocat.core.event_bus import EventBus
from pomocat.core.models.config import DisplayConfig, TimerConfig
from pomocat.core.models.event import Event
from pomocat.core.models.session import BreakType, SessionPhase
from pomocat.core.pomodoro import PomodoroStateMachine, choose_break_type, format_mmss
from pomocat.core.scheduler import TimerScheduler
from pomocat.surfaces.memory import InMemorySurface
from tests.helpers.fake_loop import FakeLoop
from tests.helpers.runtime import wait_for

WORK = 1500
SHORT = 300
LONG = 1200


def _make_machine(
    config: TimerConfig | None = None,
    surface: InMemorySurface | None = None,
    event_bus: EventBus | None = None,
) -> tuple[FakeLoop, PomodoroStateMachine, InMemorySurface]:
    loop = FakeLoop()
    surface = surface or InMemorySurface()
    coordinator = DisplayCoordinator([surface], DisplayConfig(), event_bus=event_bus)
    machine = PomodoroStateMachine(
        config or TimerConfig(),
        TimerScheduler(loop=loop),  # type: ignore[arg-type]
        coordinator,
        event_bus=event_bus,
        clock=loop.time,
    )
    return loop, machine, surface


class TestStart:
    def test_start_then_status(self, machine: PomodoroStateMachine):
        assert machine.start() == "Pomodoro work #1 started!"
        assert machine.status() == "Cycle #1, working"
        assert machine.phase is SessionPhase.WORKING
        assert machine.session.cycle_count == 0
        assert machine.remaining_seconds() == WORK

    def test_status_before_start(self, machine: PomodoroStateMachine):
        assert machine.status() == "Not running"

    def test_restart_resets_cycles(self, fake_loop: FakeLoop, machine: PomodoroStateMachine):
        machine.start()
        fake_loop.advance(WORK)
        assert machine.session.cycle_count == 1

        machine.start()
        assert machine.session.cycle_count == 0
        assert machine.status() == "Cycle #1, working"
        assert len(fake_loop.pending) == 1


class TestBreaks:
    def test_work_expiry_enters_short_break(
        self, fake_loop: FakeLoop, machine: PomodoroStateMachine, surface: InMemorySurface
    ):
        machine.start()
        fake_loop.advance(WORK)

        assert machine.phase is SessionPhase.ON_BREAK
        assert machine.session.cycle_count == 1
        assert machine.session.break_type is BreakType.SHORT
        assert machine.status() == "Cycle #1, in short break"
        assert machine.session.phase_end_time == fake_loop.time() + SHORT
        assert surface.visible
        assert surface.last_content is not None
        assert surface.last_content.countdown == "Short break: 05:00 left"

    def test_every_fourth_session_earns_long_break(
        self, fake_loop: FakeLoop, machine: PomodoroStateMachine
    ):
        machine.start()
        seen: list[BreakType] = []
        for _ in range(8):
            fake_loop.advance(WORK)
            seen.append(machine.session.break_type)
            fake_loop.advance(LONG if seen[-1] is BreakType.LONG else SHORT)
            assert machine.phase is SessionPhase.WORKING

        assert seen == [BreakType.SHORT] * 3 + [BreakType.LONG] + [BreakType.SHORT] * 3 + [BreakType.LONG]
        assert machine.status() == "Cycle #9, working"

    def test_break_expiry_returns_to_work(
        self, fake_loop: FakeLoop, machine: PomodoroStateMachine, surface: InMemorySurface
    ):
        machine.start()
        fake_loop.advance(WORK + SHORT)

        assert machine.phase is SessionPhase.WORKING
        assert machine.status() == "Cycle #2, working"
        assert not surface.visible

    def test_ticker_refreshes_countdown(
        self, fake_loop: FakeLoop, machine: PomodoroStateMachine, surface: InMemorySurface
    ):
        machine.start()
        fake_loop.advance(WORK)
        fake_loop.advance(1)
        assert surface.last_content.countdown == "Short break: 04:59 left"
        fake_loop.advance(60)
        assert surface.last_content.countdown == "Short break: 03:59 left"
        assert surface.calls("refresh") == 61

    def test_ticker_stops_with_break(self, fake_loop: FakeLoop, machine: PomodoroStateMachine):
        machine.start()
        fake_loop.advance(WORK + SHORT)
        # Only the next work timer is left.
        assert len(fake_loop.pending) == 1

    def test_request_break_replaces_work_timer(
        self, fake_loop: FakeLoop, machine: PomodoroStateMachine
    ):
        machine.start()
        fake_loop.advance(100)
        assert machine.request_break() == "Short break started (300s)."
        assert machine.session.break_type is BreakType.SHORT
        # One phase timer and one ticker.
        assert len(fake_loop.pending) == 2

    def test_early_break_completes_the_work_session(
        self, fake_loop: FakeLoop, machine: PomodoroStateMachine
    ):
        machine.start()
        fake_loop.advance(100)
        machine.request_break()

        assert machine.session.cycle_count == 1
        assert machine.status() == "Cycle #1, in short break"
        assert machine.stop_break() == "Pomodoro work #2 started!"
        assert machine.status() == "Cycle #2, working"

    def test_early_breaks_count_toward_long_break(self, machine: PomodoroStateMachine):
        machine.start()
        seen: list[BreakType] = []
        for _ in range(4):
            machine.request_break()
            seen.append(machine.session.break_type)
            machine.stop_break()
        assert seen == [BreakType.SHORT] * 3 + [BreakType.LONG]

    def test_request_break_when_idle(self, machine: PomodoroStateMachine):
        assert machine.request_break() == "Pomodoro is not running."
        assert machine.phase is SessionPhase.IDLE

    def test_static_surface_gets_end_time_and_no_ticker(self):
        surface = InMemorySurface(refreshable=False)
        loop, machine, _ = _make_machine(surface=surface)
        machine.start()
        loop.advance(WORK)

        assert surface.visible
        assert "break until" in surface.last_content.countdown
        assert len(loop.pending) == 1
        loop.advance(5)
        assert surface.calls("refresh") == 0


class TestDelayBreak:
    def test_delay_uses_configured_default(self, fake_loop: FakeLoop, machine: PomodoroStateMachine, surface):
        machine.start()
        fake_loop.advance(WORK)

        assert machine.delay_break() == "Break delayed 60s."
        assert machine.phase is SessionPhase.DELAY_WINDOW
        assert machine.session.phase_end_time is None
        assert machine.session.break_type is None
        assert machine._scheduler.once_remaining() == 60
        assert not surface.visible
        assert machine.status() == "Cycle #1, break delayed"
        # The ticker is gone; only the delay timer remains.
        assert len(fake_loop.pending) == 1

    def test_break_returns_after_delay(self, fake_loop: FakeLoop, machine: PomodoroStateMachine, surface):
        machine.start()
        fake_loop.advance(WORK)
        machine.delay_break(30)

        fake_loop.advance(30)
        assert machine.phase is SessionPhase.ON_BREAK
        assert machine.session.break_type is BreakType.SHORT
        assert machine.remaining_seconds() == SHORT
        assert surface.visible

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(-5, 0), ("soon", 0), (12.4, 12), (0, 0), (90, 90)],
    )
    def test_delay_argument_resolution(self, fake_loop: FakeLoop, machine: PomodoroStateMachine, seconds, expected):
        machine.start()
        fake_loop.advance(WORK)

        assert machine.delay_break(seconds) == f"Break delayed {expected}s."
        assert machine._scheduler.once_remaining() == expected

    def test_delay_outside_break_is_rejected(self, fake_loop: FakeLoop, machine: PomodoroStateMachine):
        machine.start()
        fake_loop.advance(10)

        assert machine.delay_break(30) == "Not currently in a break."
        assert machine.phase is SessionPhase.WORKING
        assert machine._scheduler.once_remaining() == WORK - 10

    def test_delay_twice_is_rejected(self, fake_loop: FakeLoop, machine: PomodoroStateMachine):
        machine.start()
        fake_loop.advance(WORK)
        machine.delay_break(30)
        assert machine.delay_break(30) == "Not currently in a break."
        assert machine._scheduler.once_remaining() == 30


class TestStopBreak:
    def test_stop_break_matches_natural_expiry(self):
        loop_a, stopped, surface_a = _make_machine()
        loop_b, natural, surface_b = _make_machine()
        for loop, machine in ((loop_a, stopped), (loop_b, natural)):
            machine.start()
            loop.advance(WORK)

        assert stopped.stop_break() == "Pomodoro work #2 started!"
        loop_b.advance(SHORT)

        for machine, surface in ((stopped, surface_a), (natural, surface_b)):
            assert machine.phase is SessionPhase.WORKING
            assert machine.session.cycle_count == 1
            assert machine.status() == "Cycle #2, working"
            assert machine.remaining_seconds() == WORK
            assert not surface.visible

    def test_stop_break_outside_break(self, machine: PomodoroStateMachine):
        assert machine.stop_break() == "Not currently in a break."
        machine.start()
        assert machine.stop_break() == "Not currently in a break."
        assert machine.phase is SessionPhase.WORKING


class TestStop:
    def test_stop_twice_is_idle_without_timers(self, fake_loop: FakeLoop, machine: PomodoroStateMachine):
        machine.start()
        fake_loop.advance(WORK)

        assert machine.stop() == "Pomodoro stopped."
        assert machine.stop() == "Pomodoro stopped."
        assert machine.phase is SessionPhase.IDLE
        assert machine.session.cycle_count == 0
        assert machine.remaining_seconds() is None
        assert fake_loop.pending == []

    def test_stop_clears_break_display(self, fake_loop: FakeLoop, machine: PomodoroStateMachine, surface):
        machine.start()
        fake_loop.advance(WORK)
        machine.stop()

        assert not surface.visible
        assert machine.status() == "Not running"


class TestConfigHandling:
    def test_auto_break_off_restarts_work(self):
        loop, machine, surface = _make_machine(TimerConfig(auto_break=False))
        machine.start()
        loop.advance(WORK)

        assert machine.phase is SessionPhase.WORKING
        assert machine.session.cycle_count == 1
        assert machine.status() == "Cycle #2, working"
        assert not surface.visible

        assert machine.request_break() == "Short break started (300s)."

    def test_invalid_durations_fall_back_to_defaults(self):
        config = TimerConfig(work_duration_seconds="abc", break_duration_seconds=2.6, cycles_before_long_break=0)
        loop, machine, _ = _make_machine(config)
        machine.start()
        assert machine.remaining_seconds() == WORK

        loop.advance(WORK)
        assert machine.remaining_seconds() == 3
        # cycles_before_long_break falls back to 4.
        assert machine.session.break_type is BreakType.SHORT

    def test_duration_edits_apply_to_next_phase(self):
        config = TimerConfig()
        loop, machine, _ = _make_machine(config)
        machine.start()
        config.work_duration_seconds = 600
        loop.advance(WORK + SHORT)
        assert machine.remaining_seconds() == 600


class TestDisplayFailures:
    def test_failing_surface_does_not_stop_timers(self):
        surface = InMemorySurface(fail_on={"show", "clear"})
        loop, machine, _ = _make_machine(surface=surface)
        machine.start()
        loop.advance(WORK)

        assert machine.phase is SessionPhase.ON_BREAK
        assert machine._scheduler.has_once
        assert not machine._scheduler.has_repeating

        loop.advance(SHORT)
        assert machine.phase is SessionPhase.WORKING

    def test_failing_refresh_keeps_ticking(self):
        surface = InMemorySurface(fail_on={"refresh"})
        loop, machine, _ = _make_machine(surface=surface)
        machine.start()
        loop.advance(WORK + 3)
        assert machine._scheduler.has_repeating
        assert machine.remaining_seconds() == SHORT - 3


class TestEvents:
    async def test_commands_publish_reports(self, event_bus: EventBus):
        reports: list[str] = []
        started: list[Event] = []

        async def on_report(event: Event) -> None:
            reports.append(event.payload["message"])

        event_bus.subscribe(events.REPORT, on_report)
        event_bus.subscribe(events.BREAK_STARTED, started.append)

        loop, machine, _ = _make_machine(event_bus=event_bus)
        machine.start()
        loop.advance(WORK)
        machine.stop()

        await wait_for(lambda: len(reports) == 3, timeout=2.0)
        assert reports == [
            "Pomodoro work #1 started!",
            "Short break started (300s).",
            "Pomodoro stopped.",
        ]
        assert started[0].payload == {"cycle": 1, "break_type": "short", "duration": SHORT}


class TestHelpers:
    @pytest.mark.parametrize(
        ("cycles", "every", "expected"),
        [(0, 4, BreakType.SHORT), (4, 4, BreakType.LONG), (8, 4, BreakType.LONG), (3, 4, BreakType.SHORT), (5, 2, BreakType.SHORT), (6, 3, BreakType.LONG)],
    )
    def test_choose_break_type(self, cycles, every, expected):
        assert choose_break_type(cycles, every) is expected

    def test_format_mmss(self):
        assert format_mmss(300) == "05:00"
        assert format_mmss(59.2) == "01:00"
        assert format_mmss(-3) == "00:00"
