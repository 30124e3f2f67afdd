"""Main page layout — single-page NiceGUI application.

Provides the ``@ui.page('/')`` route with:
* Dark theme
* Compact status bar (session status + time left)
* Command row (start, stop, break now, delay break, stop break, status)
* Report log fed by ``pomodoro.report`` events
* Containers the overlay and the dedicated window render into
"""

from __future__ import annotations

import logging as _logging
from typing import Sequence

from nicegui import Client, ui

from pomocat.core import events
from pomocat.core.event_bus import EventBus
from pomocat.core.interfaces.display import DisplaySurface
from pomocat.core.models.event import Event
from pomocat.core.pomodoro import PomodoroStateMachine, format_mmss
from pomocat.surfaces.nicegui_surfaces import DedicatedWindow, NiceGUIOverlay

_log = _logging.getLogger(__name__)


class PomocatLayout:
    """Manages the main page layout and its status bar state.

    Args:
        machine: The session state machine the buttons drive.
        surfaces: Display surfaces; NiceGUI ones get bound to page containers.
        event_bus: The global event bus for status updates and reports.
    """

    _STATUS_BAR_HEIGHT = 32
    _REPORT_LINES = 50

    def __init__(
        self,
        machine: PomodoroStateMachine,
        surfaces: Sequence[DisplaySurface],
        event_bus: EventBus,
    ) -> None:
        self._machine = machine
        self._surfaces = list(surfaces)
        self._bus = event_bus

        # UI elements (bound after page renders)
        self._lbl_status: ui.label | None = None
        self._lbl_remaining: ui.label | None = None
        self._report_log: ui.log | None = None
        self._delay_input: ui.number | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def subscribe(self) -> None:
        """Subscribe to session events.  Call after the bus has started."""
        for event_type in (
            events.WORK_STARTED,
            events.BREAK_STARTED,
            events.BREAK_DELAYED,
            events.BREAK_ENDED,
            events.POMODORO_STOPPED,
        ):
            self._bus.subscribe(event_type, self._on_session_changed)
        self._bus.subscribe(events.REPORT, self._on_report)
        self._bus.subscribe(events.DISPLAY_ERROR, self._on_display_error)

    def setup_page(self) -> None:
        """Register the ``@ui.page('/')`` route."""

        @ui.page("/")
        def index():
            self._build_page()

    def _build_page(self) -> None:
        """Construct the full page layout."""
        ui.dark_mode().enable()
        ui.query("body").style("background: #1a1a1a; margin: 0; padding: 0;")

        with ui.column().classes("w-full items-center").style(
            "min-height: 100vh; padding: 0 4px; gap: 8px;"
        ):
            self._build_status_bar()
            self._build_commands()
            self._build_surfaces()
            self._report_log = ui.log(max_lines=self._REPORT_LINES).classes("w-full").style(
                "max-width: 800px; height: 160px;"
            )

        # Refresh the "time left" label once a second while the page is open.
        ui.timer(1.0, self._update_status_bar)

    def _build_status_bar(self) -> None:
        with ui.row().classes("w-full items-center justify-between").style(
            f"max-width: 800px; background: #333333; height: {self._STATUS_BAR_HEIGHT}px; "
            "padding: 0 12px; color: #ffffff; font-family: 'Segoe UI', sans-serif;"
        ):
            self._lbl_status = ui.label(self._machine.status()).style("font-size: 14px;")
            self._lbl_remaining = ui.label(self._format_remaining()).style(
                "font-family: 'Courier New', monospace; font-size: 14px; color: #aaaaaa;"
            )

    def _build_commands(self) -> None:
        with ui.row().classes("items-center"):
            ui.button("Start", on_click=self._machine.start).props("color=green")
            ui.button("Stop", on_click=self._machine.stop).props("color=red")
            ui.button("Break now", on_click=self._machine.request_break)
            self._delay_input = ui.number("Delay (s)", value=None, min=0).style("width: 96px;")
            ui.button("Delay break", on_click=self._on_delay_clicked).props("color=orange")
            ui.button("Stop break", on_click=self._machine.stop_break)
            ui.button("Status", on_click=self._on_status_clicked).props("flat")

    def _build_surfaces(self) -> None:
        """Create the containers NiceGUI surfaces render into and bind them."""
        with ui.column().classes("items-center").style(
            "background: #000000; width: min(100%, 800px); min-height: 240px; "
            "justify-content: center; overflow: hidden;"
        ) as window_container:
            pass
        overlay_container = ui.element("div")
        self._attach_surfaces(ui.context.client, overlay_container, window_container)

    def _attach_surfaces(
        self,
        client: Client,
        overlay_container: ui.element,
        window_container: ui.element,
    ) -> None:
        """Bind NiceGUI surfaces to this page's containers while *client* is connected."""
        bindings: list[tuple[NiceGUIOverlay | DedicatedWindow, ui.element]] = []
        for surface in self._surfaces:
            if isinstance(surface, NiceGUIOverlay):
                bindings.append((surface, overlay_container))
            elif isinstance(surface, DedicatedWindow):
                bindings.append((surface, window_container))

        def bind() -> None:
            for surface, container in bindings:
                surface.bind_container(container)

        def unbind() -> None:
            for surface, container in bindings:
                surface.unbind_container(container)

        bind()
        client.on_connect(bind)
        client.on_disconnect(unbind)

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------

    def _on_delay_clicked(self) -> None:
        value = self._delay_input.value if self._delay_input is not None else None
        self._machine.delay_break(value)

    def _on_status_clicked(self) -> None:
        self._push_report(self._machine.status())

    # ------------------------------------------------------------------
    # Status bar helpers
    # ------------------------------------------------------------------

    def _format_remaining(self) -> str:
        remaining = self._machine.remaining_seconds()
        return "--:--" if remaining is None else format_mmss(remaining)

    def _update_status_bar(self) -> None:
        try:
            if self._lbl_status:
                self._lbl_status.text = self._machine.status()
            if self._lbl_remaining:
                self._lbl_remaining.text = self._format_remaining()
        except RuntimeError:
            # The page was closed; keep the event subscription alive.
            self._lbl_status = None
            self._lbl_remaining = None

    def _push_report(self, message: str) -> None:
        if self._report_log is not None:
            try:
                self._report_log.push(message)
            except RuntimeError:
                # Client already gone.
                self._report_log = None

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    async def _on_session_changed(self, _event: Event) -> None:
        self._update_status_bar()

    async def _on_report(self, event: Event) -> None:
        self._push_report(event.message)

    async def _on_display_error(self, event: Event) -> None:
        self._push_report(
            f"Display error on {event.payload.get('surface')}: {event.payload.get('error')}"
        )
