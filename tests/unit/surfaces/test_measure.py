"""Tests for text and image measurement helpers."""

from __future__ import annotations

import pytest
from PIL import Image

from pomocat.core.errors import DisplaySurfaceError
from pomocat.surfaces.measure import measure_image_file, measure_text_block


class TestMeasureText:
    def test_widest_line_and_line_count(self):
        assert measure_text_block("ab\nabcd\n") == (4, 3)

    def test_empty(self):
        assert measure_text_block("") == (0, 0)


class TestMeasureImage:
    def test_reads_pixel_size(self, tmp_path):
        path = tmp_path / "cat.png"
        Image.new("RGB", (120, 80)).save(path)
        assert measure_image_file(str(path)) == (120, 80)

    def test_missing_file(self, tmp_path):
        with pytest.raises(DisplaySurfaceError, match="not found"):
            measure_image_file(str(tmp_path / "nope.png"))

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "cat.png"
        path.write_bytes(b"definitely not a png")
        with pytest.raises(DisplaySurfaceError, match="Cannot decode"):
            measure_image_file(str(path))
