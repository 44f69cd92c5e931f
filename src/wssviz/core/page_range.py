"""
Page frame range resolution.

The raster covers one contiguous range of frame numbers. Two policies
decide how that range is found:

- reference: only the reference timestamp (second-to-last, because the
  newest capture may still be in progress) is inspected. Pages of other
  timestamps that do not fit are rejected with PfnOutOfRange.
- union: every timestamp is inspected and the raster covers all of them.

Only file sizes are needed; no sample is decoded here.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Sequence

from ..samples import SampleStore, parse_address
from ..validation import EmptyRange, PfnOutOfRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageRange:
    """Half-open frame number range [first_pfn, last_pfn)."""

    first_pfn: int
    last_pfn: int

    def __post_init__(self):
        if self.last_pfn <= self.first_pfn:
            raise EmptyRange(
                f"page range [{self.first_pfn:#x}, {self.last_pfn:#x}) is empty"
            )

    @property
    def span(self) -> int:
        return self.last_pfn - self.first_pfn

    @property
    def image_size(self) -> int:
        """Side of the smallest square raster holding every page in the range."""
        side = math.isqrt(self.span)
        if side * side < self.span:
            side += 1
        return side

    def index_of(self, pfn: int) -> int:
        """
        Raster index of a frame number.

        Raises:
            PfnOutOfRange: If pfn is outside the range
        """
        if not self.first_pfn <= pfn < self.last_pfn:
            raise PfnOutOfRange(pfn, self.first_pfn, self.last_pfn)
        return pfn - self.first_pfn


def reference_timestamp(timestamps: Sequence[str]) -> str:
    """
    The timestamp used to size the raster: the second-to-last one, or the
    only one when a single capture exists.
    """
    if not timestamps:
        raise EmptyRange("no timestamps to size the raster from")
    return timestamps[-2] if len(timestamps) > 1 else timestamps[0]


def _timestamp_bounds(
    store: SampleStore, timestamp: str, addresses: List[str], page_size: int
) -> PageRange:
    if not addresses:
        raise EmptyRange(f"timestamp {timestamp} has no address samples")
    first_pfn = parse_address(addresses[0]) // page_size
    last_address = addresses[-1]
    last_pfn = parse_address(last_address) // page_size + store.page_count(timestamp, last_address)
    return PageRange(first_pfn, last_pfn)


def resolve_page_range(
    store: SampleStore, timestamp: str, addresses: List[str], page_size: int = 4096
) -> PageRange:
    """
    Compute the page range from one timestamp's ordered addresses.

    The range starts at the first address's frame and ends after the last
    address's final page.

    Raises:
        MalformedSample: If the last address's sample has a partial word
        EmptyRange: If there are no addresses or no pages
    """
    page_range = _timestamp_bounds(store, timestamp, addresses, page_size)
    logger.info(
        f"Page range from {timestamp}: [{page_range.first_pfn:#x}, {page_range.last_pfn:#x}) "
        f"{page_range.span} pages, image size {page_range.image_size}"
    )
    return page_range


def resolve_union_range(
    store: SampleStore, timestamps: Sequence[str], page_size: int = 4096
) -> PageRange:
    """
    Compute a page range covering every address of every timestamp.

    Unlike the reference range, every address's extent is checked, not just
    the last one, so sparse or shrinking address sets are covered too.
    """
    first_pfn = None
    last_pfn = None
    for timestamp in timestamps:
        for address in store.addresses(timestamp):
            start = parse_address(address) // page_size
            end = start + store.page_count(timestamp, address)
            first_pfn = start if first_pfn is None else min(first_pfn, start)
            last_pfn = end if last_pfn is None else max(last_pfn, end)

    if first_pfn is None:
        raise EmptyRange("no address samples in any timestamp")

    page_range = PageRange(first_pfn, last_pfn)
    logger.info(
        f"Page range over {len(timestamps)} timestamps: "
        f"[{page_range.first_pfn:#x}, {page_range.last_pfn:#x}) "
        f"{page_range.span} pages, image size {page_range.image_size}"
    )
    return page_range
