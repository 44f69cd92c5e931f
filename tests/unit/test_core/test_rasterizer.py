"""
Unit tests for frame rasterization.
"""

import pytest

from wssviz.core.flags import PageFlags
from wssviz.core.page_range import PageRange
from wssviz.core.rasterizer import FrameRasterizer, page_color
from wssviz.models import FrameCounts
from wssviz.validation import NoPagesSampled, PfnOutOfRange

PRESENT = 1 << 63
SWAPPED = 1 << 62
ACTIVE = 1 << 58
ZERO = 1 << 57


def _pixel(rasterizer: FrameRasterizer, index: int):
    return tuple(rasterizer.pixels[3 * index:3 * index + 3])


@pytest.mark.unit
class TestPageColor:
    """Test cases for the page color policy."""

    @pytest.mark.parametrize(
        "flags, expected",
        [
            (PageFlags(True, False, True, False), (0x7F, 0, 0)),
            (PageFlags(True, False, True, True), (0xFF, 0, 0)),
            (PageFlags(True, False, False, False), (0, 0x7F, 0)),
            (PageFlags(True, False, False, True), (0, 0xFF, 0)),
            (PageFlags(False, True, False, False), (0x60, 0x60, 0x60)),
            (PageFlags(False, True, True, True), (0x60, 0x60, 0x60)),
            (PageFlags(False, False, False, False), (0, 0, 0)),
            (PageFlags(False, False, True, True), (0, 0, 0)),
        ],
    )
    def test_colors(self, flags, expected):
        assert page_color(flags) == expected

    def test_present_wins_over_swapped(self):
        assert page_color(PageFlags(True, True, False, False)) == (0, 0x7F, 0)


@pytest.mark.unit
class TestFrameRasterizer:
    """Test cases for FrameRasterizer."""

    def test_buffer_size(self):
        rasterizer = FrameRasterizer(PageRange(1, 11))
        assert rasterizer.image_size == 4
        assert len(rasterizer.pixels) == 3 * 4 * 4

    def test_pages_placed_from_address(self):
        rasterizer = FrameRasterizer(PageRange(1, 6))
        counts = rasterizer.rasterize([(0x3000, [PRESENT, PRESENT | ACTIVE])])
        assert _pixel(rasterizer, 0) == (0, 0, 0)
        assert _pixel(rasterizer, 2) == (0, 0x7F, 0)
        assert _pixel(rasterizer, 3) == (0x7F, 0, 0)
        assert counts.total == 2

    def test_counts(self):
        rasterizer = FrameRasterizer(PageRange(1, 7))
        words = [
            PRESENT | ACTIVE | ZERO,
            PRESENT,
            PRESENT | ZERO,
            SWAPPED | ZERO,
            SWAPPED,
            0,
        ]
        counts = rasterizer.rasterize([(0x1000, words)])
        assert counts == FrameCounts(
            total=6, mapped=3, active=1, idle=2, swapped=2, zero=3
        )
        assert counts.active + counts.idle == counts.mapped
        assert counts.mapped <= counts.total

    def test_fractions(self):
        rasterizer = FrameRasterizer(PageRange(1, 5))
        counts = rasterizer.rasterize([(0x1000, [PRESENT | ACTIVE, PRESENT, ZERO, 0])])
        fractions = counts.fractions()
        assert fractions == {"active": 0.25, "zero": 0.25, "mapped": 0.5}
        assert all(0.0 <= value <= 1.0 for value in fractions.values())

    def test_no_pages_sampled(self):
        rasterizer = FrameRasterizer(PageRange(1, 5))
        counts = rasterizer.rasterize([(0x1000, [])])
        with pytest.raises(NoPagesSampled):
            counts.fractions()

    def test_counts_reset_between_frames(self):
        rasterizer = FrameRasterizer(PageRange(1, 2))
        rasterizer.rasterize([(0x1000, [PRESENT])])
        counts = rasterizer.rasterize([(0x1000, [0])])
        assert counts.total == 1
        assert counts.mapped == 0

    def test_pixel_overwritten_in_full(self):
        rasterizer = FrameRasterizer(PageRange(1, 2))
        rasterizer.rasterize([(0x1000, [PRESENT | ACTIVE | ZERO])])
        rasterizer.rasterize([(0x1000, [SWAPPED])])
        assert _pixel(rasterizer, 0) == (0x60, 0x60, 0x60)

    def test_unvisited_pixels_keep_color(self):
        rasterizer = FrameRasterizer(PageRange(1, 3))
        rasterizer.rasterize([(0x1000, [PRESENT, PRESENT])])
        rasterizer.rasterize([(0x1000, [0])])
        assert _pixel(rasterizer, 0) == (0, 0, 0)
        assert _pixel(rasterizer, 1) == (0, 0x7F, 0)

    def test_overflow_rejected_before_painting(self):
        rasterizer = FrameRasterizer(PageRange(1, 3))
        with pytest.raises(PfnOutOfRange) as exc_info:
            rasterizer.rasterize([(0x2000, [PRESENT, PRESENT, PRESENT])])
        assert exc_info.value.pfn == 3
        assert rasterizer.pixels == bytearray(len(rasterizer.pixels))

    def test_address_below_range_rejected(self):
        rasterizer = FrameRasterizer(PageRange(2, 4))
        with pytest.raises(PfnOutOfRange):
            rasterizer.rasterize([(0x1000, [PRESENT])])
