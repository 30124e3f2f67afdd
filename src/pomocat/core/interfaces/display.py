"""Display surface interface (ABC) and the content it renders.

Every break-notification backend implements :class:`DisplaySurface`.  The
NiceGUI overlay, the terminal overlay, the dedicated window and the
in-memory test surface all share it, so the coordinator picks a variant by
its declared capabilities instead of by backend identity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel, ConfigDict, Field

from pomocat.core.geometry import CellSize, Placement, Viewport


class SurfaceCapabilities(BaseModel):
    """What a surface can do."""

    model_config = ConfigDict(frozen=True)

    graphical: bool = Field(description="Can render images")
    refreshable: bool = Field(description="Can update the countdown in place")


class BreakContent(BaseModel):
    """One frame of the break notification.

    Exactly one of ``text`` / ``image_path`` is normally set; ``countdown`` is
    the line that changes on every tick.
    """

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    image_path: str | None = None
    countdown: str = ""

    def as_text(self) -> str:
        """Text and countdown as one block, separated by a blank line."""
        return "\n\n".join(part for part in (self.text, self.countdown) if part)


class DisplaySurface(ABC):
    """Rendering backend for break notifications.

    Implementations raise :class:`~pomocat.core.errors.DisplaySurfaceError`
    for anything they cannot do; callers never assume a call succeeded.
    """

    name: str = "surface"

    @abstractmethod
    def capabilities(self) -> SurfaceCapabilities:
        """Return the surface's capabilities."""

    @abstractmethod
    def cell_size(self) -> CellSize:
        """Return the size of one character cell in pixels."""

    @abstractmethod
    def viewport(self) -> Viewport:
        """Return the pixel rectangle notifications are centered in."""

    @abstractmethod
    def measure_text(self, text: str) -> tuple[int, int]:
        """Return ``(columns, rows)`` occupied by *text*."""

    @abstractmethod
    def measure_image(self, path: str) -> tuple[int, int]:
        """Return ``(pixel_width, pixel_height)`` of the image at *path*."""

    @abstractmethod
    def show(self, content: BreakContent, placement: Placement) -> None:
        """Show *content* at *placement*, replacing anything shown before."""

    @abstractmethod
    def refresh(self, content: BreakContent) -> None:
        """Update the visible content in place (refreshable surfaces only)."""

    @abstractmethod
    def clear(self) -> None:
        """Remove the notification."""

    def focus(self) -> None:
        """Bring the surface to the foreground.  No-op by default."""
