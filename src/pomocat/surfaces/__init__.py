"""Display surfaces: factory + backends (NiceGUI, terminal, in-memory)."""

from pomocat.surfaces.factory import create_display_surfaces

__all__ = ["create_display_surfaces"]
