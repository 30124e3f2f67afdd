"""DisplayCoordinator — picks a surface, sizes the notification, shows it.

Every call into a surface runs inside :meth:`DisplayCoordinator._guard`, so a
failing backend is logged (and published as ``display.error``) but never
reaches the timer logic that asked for the display.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Sequence

from pomocat.core import events
from pomocat.core.errors import DisplaySurfaceError
from pomocat.core.event_bus import EventBus
from pomocat.core.geometry import Placement, image_placement, text_placement
from pomocat.core.interfaces.display import BreakContent, DisplaySurface, SurfaceCapabilities
from pomocat.core.models.config import DisplayConfig

_log = logging.getLogger(__name__)


class DisplayCoordinator:
    """Shows, refreshes and clears the break notification.

    Surfaces are tried in preference order on every :meth:`show_break`; the
    first one that renders becomes the active surface until :meth:`clear`.

    Args:
        surfaces: Candidate surfaces, most capable first.
        config: Display settings (content and focus behaviour).
        event_bus: Optional bus for ``display.error`` events.
    """

    def __init__(
        self,
        surfaces: Sequence[DisplaySurface],
        config: DisplayConfig,
        event_bus: EventBus | None = None,
    ) -> None:
        self._surfaces = list(surfaces)
        self._config = config
        self._bus = event_bus
        self._active: DisplaySurface | None = None
        self._active_caps: SurfaceCapabilities | None = None
        self._content: BreakContent | None = None

    # ------------------------------------------------------------------
    # Public properties
    # ------------------------------------------------------------------

    @property
    def active_surface(self) -> DisplaySurface | None:
        """The surface currently showing a notification, if any."""
        return self._active

    @property
    def refreshable(self) -> bool:
        return self._active_caps is not None and self._active_caps.refreshable

    # ------------------------------------------------------------------
    # Show / refresh / clear
    # ------------------------------------------------------------------

    def show_break(self, countdown: str, static_countdown: str | None = None) -> bool:
        """Show the break notification on the first surface that manages it.

        Args:
            countdown: Live countdown line for refreshable surfaces.
            static_countdown: Line for surfaces that cannot refresh (e.g. the
                break's end time); defaults to *countdown*.

        Returns:
            ``True`` if the active surface can be refreshed by a ticker.
        """
        self.clear()
        for surface in self._surfaces:
            shown = False
            with self._guard(surface, "show"):
                caps = surface.capabilities()
                line = countdown if caps.refreshable else (static_countdown or countdown)
                content, placement = self._compose(surface, caps, line)
                surface.show(content, placement)
                shown = True
            if not shown:
                continue

            self._active = surface
            self._active_caps = caps
            self._content = content
            _log.info("Break shown on %s at %s", surface.name, placement)
            if self._config.get_focus_on_break:
                with self._guard(surface, "focus"):
                    surface.focus()
            return caps.refreshable

        _log.error("No display surface could show the break notification")
        return False

    def refresh(self, countdown: str) -> None:
        """Push a new countdown line to the active surface."""
        if self._active is None or self._content is None or not self.refreshable:
            return
        content = self._content.model_copy(update={"countdown": countdown})
        with self._guard(self._active, "refresh"):
            self._active.refresh(content)
            self._content = content

    def clear(self) -> None:
        """Remove the notification from the active surface (idempotent)."""
        surface = self._active
        self._active = None
        self._active_caps = None
        self._content = None
        if surface is not None:
            with self._guard(surface, "clear"):
                surface.clear()

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _compose(
        self,
        surface: DisplaySurface,
        caps: SurfaceCapabilities,
        countdown: str,
    ) -> tuple[BreakContent, Placement]:
        """Build the content for *surface* and compute where it goes."""
        cell = surface.cell_size()
        viewport = surface.viewport()

        image_path = self._config.cat_image_path
        if image_path and caps.graphical:
            try:
                pixel_width, pixel_height = surface.measure_image(image_path)
            except DisplaySurfaceError as exc:
                _log.warning("Cannot use image %s on %s (%s) — showing text", image_path, surface.name, exc)
                self._report_error(surface, "measure_image", exc)
            else:
                countdown_columns, _ = surface.measure_text(countdown)
                content = BreakContent(image_path=image_path, countdown=countdown)
                placement = image_placement(
                    pixel_width, pixel_height, cell, viewport, countdown_columns=countdown_columns
                )
                return content, placement

        content = BreakContent(text=self._config.ascii_art, countdown=countdown)
        columns, rows = surface.measure_text(content.as_text())
        return content, text_placement(columns, rows, cell, viewport)

    @contextmanager
    def _guard(self, surface: DisplaySurface, operation: str) -> Iterator[None]:
        """Log and swallow any failure of a surface call."""
        try:
            yield
        except Exception as exc:
            _log.exception("Display surface %s failed during %s", surface.name, operation)
            self._report_error(surface, operation, exc)

    def _report_error(self, surface: DisplaySurface, operation: str, exc: Exception) -> None:
        if self._bus is not None:
            self._bus.publish_nowait(
                events.DISPLAY_ERROR,
                {"surface": surface.name, "operation": operation, "error": str(exc)},
            )
