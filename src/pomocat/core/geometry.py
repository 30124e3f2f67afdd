"""Placement arithmetic for break notifications.

Sizes the notification frame from its content (a measured text block or an
image in pixels) and centers it inside the surface's viewing area.  All
results are integers; every pixel → cell conversion rounds *up* so the frame
is never smaller than what it holds.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field

# Cells added around a text block (one on each side, both axes).
TEXT_PADDING = 2
# Pixels added around an image frame for the surface border.
BORDER_PIXELS = 16
# Rows reserved under an image for the countdown line.
COUNTDOWN_ROWS = 2


class CellSize(BaseModel):
    """Size of one character cell in pixels."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(gt=0)
    height: int = Field(gt=0)


class Viewport(BaseModel):
    """Pixel rectangle the notification is centered in."""

    model_config = ConfigDict(frozen=True)

    left: int = 0
    top: int = 0
    width: int = Field(ge=0)
    height: int = Field(ge=0)


class Placement(BaseModel):
    """Where to put the notification: pixel origin plus size in cells."""

    model_config = ConfigDict(frozen=True)

    left: int = Field(ge=0)
    top: int = Field(ge=0)
    columns: int = Field(ge=0)
    rows: int = Field(ge=0)


def pixels_to_cells(pixels: int, cell: int) -> int:
    """Convert a pixel length to cells, rounding up."""
    return math.ceil(pixels / cell)


def center(frame_width: int, frame_height: int, viewport: Viewport) -> tuple[int, int]:
    """Return the ``(left, top)`` that centers a frame in *viewport*.

    Never negative: a frame larger than the viewport is pinned to the
    top-left edge instead of being pushed off-screen.
    """
    left = viewport.left + (viewport.width - frame_width) // 2
    top = viewport.top + (viewport.height - frame_height) // 2
    return max(0, left), max(0, top)


def text_placement(
    columns: int,
    rows: int,
    cell: CellSize,
    viewport: Viewport,
    padding: int = TEXT_PADDING,
) -> Placement:
    """Place a text block of ``columns × rows`` cells.

    *padding* cells are added to both dimensions; pass ``0`` when the text
    already carries its own margin.
    """
    total_columns = columns + padding
    total_rows = rows + padding
    left, top = center(total_columns * cell.width, total_rows * cell.height, viewport)
    return Placement(left=left, top=top, columns=total_columns, rows=total_rows)


def image_placement(
    pixel_width: int,
    pixel_height: int,
    cell: CellSize,
    viewport: Viewport,
    countdown_columns: int | None = None,
) -> Placement:
    """Place an image of ``pixel_width × pixel_height``.

    When *countdown_columns* is given, a countdown line is shown under the
    image: :data:`COUNTDOWN_ROWS` extra rows are reserved and the frame is
    widened to at least the countdown's width.
    """
    columns = pixels_to_cells(pixel_width, cell.width)
    rows = pixels_to_cells(pixel_height, cell.height)
    text_pixel_width = 0
    extra_rows = 0
    if countdown_columns is not None:
        extra_rows = COUNTDOWN_ROWS
        rows += extra_rows
        columns = max(columns, countdown_columns)
        text_pixel_width = countdown_columns * cell.width

    frame_width = max(pixel_width, text_pixel_width) + BORDER_PIXELS
    frame_height = pixel_height + extra_rows * cell.height + BORDER_PIXELS
    left, top = center(frame_width, frame_height, viewport)
    return Placement(left=left, top=top, columns=columns, rows=rows)
