"""TerminalOverlay — a box drawn over the terminal with ANSI escapes.

One "pixel" is one character cell, so the shared geometry works unchanged:
the viewport is the terminal size and the cell size is ``1 × 1``.
"""

from __future__ import annotations

import shutil
import sys
from typing import TextIO

from pomocat.core.errors import DisplaySurfaceError
from pomocat.core.geometry import CellSize, Placement, Viewport
from pomocat.core.interfaces.display import BreakContent, DisplaySurface, SurfaceCapabilities
from pomocat.surfaces.measure import measure_text_block

_SAVE_CURSOR = "\x1b7"
_RESTORE_CURSOR = "\x1b8"
_REVERSE = "\x1b[7m"
_RESET = "\x1b[0m"
_BELL = "\a"


def _move(row: int, column: int) -> str:
    # ANSI positions are 1-based.
    return f"\x1b[{row + 1};{column + 1}H"


class TerminalOverlay(DisplaySurface):
    """Refreshable, text-only surface on a terminal stream.

    Args:
        stream: Where escapes are written (defaults to ``sys.stdout`` at call
            time).
        size: Fixed ``(columns, rows)``; defaults to the live terminal size.
    """

    name = "terminal"

    def __init__(self, stream: TextIO | None = None, size: tuple[int, int] | None = None) -> None:
        self._stream = stream
        self._size = size
        self._placement: Placement | None = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def capabilities(self) -> SurfaceCapabilities:
        return SurfaceCapabilities(graphical=False, refreshable=True)

    def cell_size(self) -> CellSize:
        return CellSize(width=1, height=1)

    def viewport(self) -> Viewport:
        columns, rows = self._size or tuple(shutil.get_terminal_size())
        return Viewport(width=columns, height=rows)

    def measure_text(self, text: str) -> tuple[int, int]:
        return measure_text_block(text)

    def measure_image(self, path: str) -> tuple[int, int]:
        raise DisplaySurfaceError("Terminal overlay cannot show images")

    def show(self, content: BreakContent, placement: Placement) -> None:
        if content.image_path:
            raise DisplaySurfaceError("Terminal overlay cannot show images")
        self.clear()
        self._placement = placement
        self._draw(content)

    def refresh(self, content: BreakContent) -> None:
        if self._placement is None:
            raise DisplaySurfaceError("Nothing shown to refresh")
        self._draw(content)

    def clear(self) -> None:
        if self._placement is None:
            return
        p = self._placement
        self._placement = None
        blank = " " * p.columns
        self._write("".join(_move(p.top + i, p.left) + blank for i in range(p.rows)))

    def focus(self) -> None:
        self._write(_BELL)

    def _draw(self, content: BreakContent) -> None:
        p = self._placement
        assert p is not None
        inner = max(0, p.columns - 2)
        # One padding row above; the rest is filled with blanks.
        lines = [""] + content.as_text().split("\n")
        lines += [""] * max(0, p.rows - len(lines))
        out = []
        for i, line in enumerate(lines[: p.rows]):
            row = f" {line[:inner].ljust(inner)} "[: p.columns]
            out.append(f"{_move(p.top + i, p.left)}{_REVERSE}{row}{_RESET}")
        self._write("".join(out))

    def _write(self, text: str) -> None:
        stream = self.stream
        stream.write(f"{_SAVE_CURSOR}{text}{_RESTORE_CURSOR}")
        stream.flush()
