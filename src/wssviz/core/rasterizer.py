"""
Per-timestamp rasterization of page states.

Pages are laid out row-major in a square RGB raster, one pixel per frame
number. Colors:

    present, active      red    0x7F (0xFF when zero-filled)
    present, not active  green  0x7F (0xFF when zero-filled)
    swapped              grey   0x60
    anything else        black

The buffer is reused between timestamps; only pages seen in a frame are
repainted, so slots not covered by that frame keep their last color.
"""

import logging
from typing import Iterable, Sequence, Tuple

from ..models.results import FrameCounts
from ..validation import PfnOutOfRange
from .flags import PageFlags, decode_flags
from .page_range import PageRange

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]

BASE_INTENSITY = 0x7F
ZERO_BOOST = 0x80
SWAPPED_COLOR: Color = (0x60, 0x60, 0x60)
UNMAPPED_COLOR: Color = (0x00, 0x00, 0x00)


def page_color(flags: PageFlags) -> Color:
    """Color of a page; the first matching state wins."""
    intensity = BASE_INTENSITY + (ZERO_BOOST if flags.zero else 0)
    if flags.present:
        if flags.active:
            return (intensity, 0, 0)
        return (0, intensity, 0)
    if flags.swapped:
        return SWAPPED_COLOR
    return UNMAPPED_COLOR


class FrameRasterizer:
    """
    Owns the pixel buffer and paints one timestamp at a time into it.
    """

    def __init__(self, page_range: PageRange, page_size: int = 4096):
        self.page_range = page_range
        self.page_size = page_size
        self.image_size = page_range.image_size
        self.pixels = bytearray(3 * self.image_size * self.image_size)

    def paint(self, index: int, color: Color) -> None:
        offset = 3 * index
        self.pixels[offset:offset + 3] = bytes(color)

    def _check_extent(self, address: int, page_count: int) -> int:
        """Return the raster index of the address's first page, or raise."""
        start_pfn = address // self.page_size
        if page_count == 0:
            return start_pfn - self.page_range.first_pfn
        first, last = self.page_range.first_pfn, self.page_range.last_pfn
        if start_pfn < first:
            raise PfnOutOfRange(start_pfn, first, last)
        end_pfn = start_pfn + page_count
        if end_pfn > last:
            raise PfnOutOfRange(max(start_pfn, last), first, last)
        return start_pfn - first

    def rasterize_address(self, address: int, words: Sequence[int], counts: FrameCounts) -> None:
        """
        Paint the contiguous pages starting at `address` and add them to `counts`.

        Raises:
            PfnOutOfRange: If any of the pages falls outside the raster range;
                nothing is painted for this address in that case
        """
        page_idx = self._check_extent(address, len(words))
        for word in words:
            flags = decode_flags(word)
            counts.total += 1
            if flags.zero:
                counts.zero += 1
            if flags.present:
                counts.mapped += 1
                if flags.active:
                    counts.active += 1
                else:
                    counts.idle += 1
            elif flags.swapped:
                counts.swapped += 1
            self.paint(page_idx, page_color(flags))
            page_idx += 1

    def rasterize(self, streams: Iterable[Tuple[int, Sequence[int]]]) -> FrameCounts:
        """
        Paint one timestamp from (address, flag words) pairs in address order.

        Returns:
            The page counts of this timestamp
        """
        counts = FrameCounts()
        for address, words in streams:
            self.rasterize_address(address, words, counts)
        logger.debug(
            f"Frame counts: total={counts.total} mapped={counts.mapped} "
            f"active={counts.active} idle={counts.idle} swapped={counts.swapped} "
            f"zero={counts.zero}"
        )
        return counts
