"""Surface factory — builds the display surface preference chain."""

from __future__ import annotations

import logging
from typing import TextIO

from pomocat.core.interfaces.display import DisplaySurface
from pomocat.core.models.config import DisplayConfig

_log = logging.getLogger(__name__)


def create_display_surfaces(
    config: DisplayConfig,
    terminal_stream: TextIO | None = None,
) -> list[DisplaySurface]:
    """Return the surfaces to try, most capable first.

    * ``use_dedicated_surface`` → only the :class:`DedicatedWindow`.
    * otherwise → :class:`NiceGUIOverlay`, then :class:`TerminalOverlay`
      (when ``terminal_fallback`` is set), then :class:`DedicatedWindow`.
    """
    from pomocat.surfaces.nicegui_surfaces import DedicatedWindow, NiceGUIOverlay

    if config.use_dedicated_surface:
        surfaces: list[DisplaySurface] = [DedicatedWindow(config)]
    else:
        surfaces = [NiceGUIOverlay(config)]
        if config.terminal_fallback:
            from pomocat.surfaces.terminal_overlay import TerminalOverlay

            surfaces.append(TerminalOverlay(stream=terminal_stream))
        surfaces.append(DedicatedWindow(config))

    _log.info("Display surfaces: %s", ", ".join(s.name for s in surfaces))
    return surfaces
