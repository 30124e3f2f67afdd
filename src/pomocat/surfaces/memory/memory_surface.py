"""In-memory display surface for testing and development.

Stores the last rendered content so tests can assert on it without
requiring NiceGUI or a terminal.
"""

from __future__ import annotations

from pomocat.core.errors import DisplaySurfaceError
from pomocat.core.geometry import CellSize, Placement, Viewport
from pomocat.core.interfaces.display import BreakContent, DisplaySurface, SurfaceCapabilities
from pomocat.surfaces.measure import measure_text_block


class InMemorySurface(DisplaySurface):
    """A lightweight surface that records calls in memory.

    Args:
        name: Name used in logs and ``display.error`` events.
        graphical: Whether the surface claims to render images.
        refreshable: Whether the surface claims in-place refresh.
        image_sizes: ``path → (width, height)`` answers for
            :meth:`measure_image`; unknown paths raise
            :class:`DisplaySurfaceError`.
        fail_on: Method names that raise :class:`DisplaySurfaceError`.

    Attributes:
        last_content: The content of the last show/refresh, or ``None``.
        last_placement: The placement of the last show, or ``None``.
        visible: ``True`` between :meth:`show` and :meth:`clear`.
        focused: ``True`` after :meth:`focus`.
        call_log: Ordered list of ``(method_name, args)`` tuples.
    """

    def __init__(
        self,
        name: str = "memory",
        graphical: bool = True,
        refreshable: bool = True,
        image_sizes: dict[str, tuple[int, int]] | None = None,
        fail_on: set[str] | None = None,
        cell: CellSize | None = None,
        area: Viewport | None = None,
    ) -> None:
        self.name = name
        self._caps = SurfaceCapabilities(graphical=graphical, refreshable=refreshable)
        self._image_sizes = dict(image_sizes or {})
        self.fail_on: set[str] = set(fail_on or ())
        self._cell = cell or CellSize(width=8, height=16)
        self._area = area or Viewport(width=1920, height=1080)

        self.last_content: BreakContent | None = None
        self.last_placement: Placement | None = None
        self.visible: bool = False
        self.focused: bool = False
        self.call_log: list[tuple[str, dict[str, object]]] = []

    def _check(self, method: str) -> None:
        if method in self.fail_on:
            raise DisplaySurfaceError(f"{self.name}: simulated {method} failure")

    def capabilities(self) -> SurfaceCapabilities:
        return self._caps

    def cell_size(self) -> CellSize:
        return self._cell

    def viewport(self) -> Viewport:
        return self._area

    def measure_text(self, text: str) -> tuple[int, int]:
        self._check("measure_text")
        return measure_text_block(text)

    def measure_image(self, path: str) -> tuple[int, int]:
        self._check("measure_image")
        try:
            return self._image_sizes[path]
        except KeyError:
            raise DisplaySurfaceError(f"Image not found: {path}") from None

    def show(self, content: BreakContent, placement: Placement) -> None:
        self._check("show")
        self.last_content = content
        self.last_placement = placement
        self.visible = True
        self.call_log.append(("show", {"content": content, "placement": placement}))

    def refresh(self, content: BreakContent) -> None:
        self._check("refresh")
        self.last_content = content
        self.call_log.append(("refresh", {"content": content}))

    def clear(self) -> None:
        self._check("clear")
        self.last_content = None
        self.last_placement = None
        self.visible = False
        self.call_log.append(("clear", {}))

    def focus(self) -> None:
        self._check("focus")
        self.focused = True
        self.call_log.append(("focus", {}))

    def calls(self, method: str) -> int:
        """Return how many times *method* was called."""
        return sum(1 for name, _ in self.call_log if name == method)
