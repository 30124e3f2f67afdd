"""pomocat — Application entry point (NiceGUI composition root).

Wires together: Config → EventBus → Surfaces → Scheduler → Coordinator →
State machine → UI.  NiceGUI owns the event loop; ``app.on_startup`` /
``app.on_shutdown`` handle lifecycle.
"""

from __future__ import annotations

import logging as _logging

from nicegui import app, ui

from pomocat.config.config_manager import load_config
from pomocat.core.display_coordinator import DisplayCoordinator
from pomocat.core.event_bus import EventBus
from pomocat.core.pomodoro import PomodoroStateMachine
from pomocat.core.scheduler import TimerScheduler
from pomocat.log_config.logger import setup_logging
from pomocat.surfaces.factory import create_display_surfaces
from pomocat.ui.layout import PomocatLayout

_log = _logging.getLogger(__name__)


def main() -> None:
    """Synchronous entry point — bootstraps and starts NiceGUI."""

    # 1. Load configuration, then logging at the configured level
    config = load_config()
    setup_logging(config.system.log_level, config.system.log_dir)
    _log.info("Starting pomocat")

    # 2. Create event bus
    bus = EventBus(queue_size=config.system.event_bus_queue_size)

    # 3. Display surfaces and the coordinator in front of them
    surfaces = create_display_surfaces(config.display)
    coordinator = DisplayCoordinator(surfaces, config.display, event_bus=bus)

    # 4. Scheduler binds to NiceGUI's loop on first use
    scheduler = TimerScheduler()
    machine = PomodoroStateMachine(config.timer, scheduler, coordinator, event_bus=bus)

    # 5. UI layout
    layout = PomocatLayout(machine, surfaces, bus)
    layout.setup_page()

    # 6. Wire lifecycle hooks
    async def on_startup() -> None:
        await bus.start()
        layout.subscribe()
        _log.info("pomocat running on http://localhost:%d", config.system.webui_port)

    async def on_shutdown() -> None:
        _log.info("NiceGUI shutdown — stopping pomocat")
        machine.stop()
        await bus.stop()

    app.on_startup(on_startup)
    app.on_shutdown(on_shutdown)

    # 7. Launch NiceGUI (blocks forever)
    ui.run(
        port=config.system.webui_port,
        title="pomocat",
        reload=False,
        show=False,
    )


if __name__ == "__main__":
    main()
