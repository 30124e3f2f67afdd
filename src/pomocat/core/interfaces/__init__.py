"""Display surface interface."""

from pomocat.core.interfaces.display import BreakContent, DisplaySurface, SurfaceCapabilities

__all__ = [
    "BreakContent",
    "DisplaySurface",
    "SurfaceCapabilities",
]
