"""NiceGUI surfaces — the floating overlay and the dedicated window.

Both render into container elements bound during page setup by calling
:meth:`bind_container` (one per connected client).  All calls happen on the
NiceGUI event loop, the same loop that runs the timers, so rendering is done
inline.  A container whose client has gone away raises ``RuntimeError`` on
access; it is dropped and the remaining containers are still served.
"""

from __future__ import annotations

import logging

from nicegui import ui

from pomocat.core.errors import DisplaySurfaceError
from pomocat.core.geometry import CellSize, Placement, Viewport
from pomocat.core.interfaces.display import BreakContent, DisplaySurface, SurfaceCapabilities
from pomocat.core.models.config import DisplayConfig
from pomocat.surfaces.measure import measure_image_file, measure_text_block

_log = logging.getLogger(__name__)

_PANEL_STYLE = (
    "background: #1f1f1f; color: #ffffff; font-family: 'Courier New', monospace; "
    "border: 8px solid #3a3a3a; border-radius: 8px; box-sizing: content-box; "
    "display: flex; flex-direction: column; align-items: center; justify-content: center; "
    "overflow: hidden;"
)


class _ContainerSurface(DisplaySurface):
    """Shared plumbing: container binding, measuring, drawing, clearing."""

    def __init__(self, config: DisplayConfig) -> None:
        self._config = config
        self._containers: set[ui.element] = set()
        self._panels: list[ui.element] = []
        self._countdown_labels: list[ui.label] = []

    def bind_container(self, container: ui.element) -> None:
        """Bind a NiceGUI container element (call inside ``@ui.page``)."""
        self._containers.add(container)
        _log.debug("%s bound container (total=%d)", self.name, len(self._containers))

    def unbind_container(self, container: ui.element) -> None:
        """Remove a container binding (call on client disconnect)."""
        self._containers.discard(container)

    # ------------------------------------------------------------------
    # DisplaySurface implementation
    # ------------------------------------------------------------------

    def cell_size(self) -> CellSize:
        return CellSize(width=self._config.char_width, height=self._config.char_height)

    def viewport(self) -> Viewport:
        return Viewport(width=self._config.viewport_width, height=self._config.viewport_height)

    def measure_text(self, text: str) -> tuple[int, int]:
        return measure_text_block(text)

    def measure_image(self, path: str) -> tuple[int, int]:
        return measure_image_file(path)

    def show(self, content: BreakContent, placement: Placement) -> None:
        if not self._containers:
            raise DisplaySurfaceError(f"{self.name}: no container bound")
        self.clear()
        for container in list(self._containers):
            try:
                with container:
                    self._draw(content, placement)
            except RuntimeError:
                self._containers.discard(container)
        if not self._panels:
            raise DisplaySurfaceError(f"{self.name}: no live client to show on")

    def refresh(self, content: BreakContent) -> None:
        for label in list(self._countdown_labels):
            try:
                label.set_text(content.countdown)
            except RuntimeError:
                self._countdown_labels.remove(label)

    def clear(self) -> None:
        for panel in self._panels:
            try:
                panel.delete()
            except RuntimeError:
                pass
        self._panels.clear()
        self._countdown_labels.clear()

    def focus(self) -> None:
        for container in list(self._containers):
            try:
                container.client.run_javascript("window.focus()")
            except RuntimeError:
                self._containers.discard(container)

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def _panel_style(self, placement: Placement) -> str:
        cell = self.cell_size()
        return (
            f"{_PANEL_STYLE} width: {placement.columns * cell.width}px; "
            f"height: {placement.rows * cell.height}px; "
            f"font-size: {cell.height}px; line-height: {cell.height}px;"
        )

    def _draw(self, content: BreakContent, placement: Placement) -> None:
        with ui.element("div").style(self._panel_style(placement)) as panel:
            if content.image_path:
                ui.image(content.image_path).props("fit=none").style("width: 100%; flex: 1;")
            elif content.text:
                ui.label(content.text).style("white-space: pre;")
            label = ui.label(content.countdown).style("white-space: pre; margin-top: 16px;")
        self._panels.append(panel)
        self._countdown_labels.append(label)


class NiceGUIOverlay(_ContainerSurface):
    """Floating panel positioned over the page; updates its countdown live."""

    name = "overlay"

    def capabilities(self) -> SurfaceCapabilities:
        return SurfaceCapabilities(graphical=True, refreshable=True)

    def _panel_style(self, placement: Placement) -> str:
        return (
            f"{super()._panel_style(placement)} position: fixed; z-index: 1000; "
            f"left: {placement.left}px; top: {placement.top}px;"
        )


class DedicatedWindow(_ContainerSurface):
    """Static fallback: the notification is drawn once in its own panel."""

    name = "window"

    def capabilities(self) -> SurfaceCapabilities:
        return SurfaceCapabilities(graphical=True, refreshable=False)

    def refresh(self, content: BreakContent) -> None:
        raise DisplaySurfaceError("Dedicated window cannot refresh in place")
