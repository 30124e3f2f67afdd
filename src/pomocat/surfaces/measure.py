"""Content measurement shared by the surfaces."""

from __future__ import annotations

from PIL import Image, UnidentifiedImageError

from pomocat.core.errors import DisplaySurfaceError


def measure_text_block(text: str) -> tuple[int, int]:
    """Return ``(columns, rows)`` of *text*: widest line and line count."""
    if not text:
        return 0, 0
    lines = text.split("\n")
    return max(len(line) for line in lines), len(lines)


def measure_image_file(path: str) -> tuple[int, int]:
    """Return the pixel size of the image at *path*.

    Raises:
        DisplaySurfaceError: If the file is missing or cannot be decoded.
    """
    try:
        with Image.open(path) as image:
            return image.size
    except FileNotFoundError as exc:
        raise DisplaySurfaceError(f"Image not found: {path}") from exc
    except (UnidentifiedImageError, OSError) as exc:
        raise DisplaySurfaceError(f"Cannot decode image {path}: {exc}") from exc
