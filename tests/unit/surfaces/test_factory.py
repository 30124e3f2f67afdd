"""Tests for create_display_surfaces."""

import io

from pomocat.core.models.config import DisplayConfig
from pomocat.surfaces.factory import create_display_surfaces
from pomocat.surfaces.nicegui_surfaces import DedicatedWindow, NiceGUIOverlay
from pomocat.surfaces.terminal_overlay import TerminalOverlay


def test_default_chain():
    surfaces = create_display_surfaces(DisplayConfig(), terminal_stream=io.StringIO())
    assert [type(s) for s in surfaces] == [NiceGUIOverlay, TerminalOverlay, DedicatedWindow]


def test_without_terminal_fallback():
    surfaces = create_display_surfaces(DisplayConfig(terminal_fallback=False))
    assert [s.name for s in surfaces] == ["overlay", "window"]


def test_dedicated_surface_only():
    surfaces = create_display_surfaces(DisplayConfig(use_dedicated_surface=True))
    assert len(surfaces) == 1
    assert isinstance(surfaces[0], DedicatedWindow)
