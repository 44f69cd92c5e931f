"""
Sequence assembly: drives rasterization over every timestamp.

The assembler owns all state of a run (the rasterizer with its pixel
buffer and the growing statistics) and passes every finished frame to a
FrameSink. Any error aborts the whole run; nothing is retried.
"""

import logging
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from ..models.config import RenderConfig
from ..models.results import FrameStatistics, RenderResults
from ..output.base import FrameSink
from ..samples import SampleStore, parse_address, parse_timestamp
from ..validation import MalformedSample, NoPagesSampled
from .flags import decode_words
from .page_range import (
    PageRange,
    reference_timestamp,
    resolve_page_range,
    resolve_union_range,
)
from .rasterizer import FrameRasterizer

logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    """Format a duration as HH:MM:SS; hours keep counting past 24."""
    total = int(seconds)
    hours, remainder = divmod(total, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


class SequenceAssembler:
    """
    Renders every timestamp of a sample store, oldest first.
    """

    def __init__(self, store: SampleStore, render_config: Optional[RenderConfig] = None):
        self.store = store
        self.config = render_config or RenderConfig()

    def _address_layout(
        self, timestamps: Sequence[str], reference: str
    ) -> Dict[str, List[str]]:
        """
        Addresses to read for every timestamp, according to the range policy.

        Under the reference policy every frame reads the reference listing
        plus any address its own directory adds; pages of such an address
        still have to fall inside the reference range.
        """
        if self.config.range_policy != "reference":
            return {timestamp: self.store.addresses(timestamp) for timestamp in timestamps}

        reference_addresses = self.store.addresses(reference)
        known = set(reference_addresses)
        layout = {}
        for timestamp in timestamps:
            extra = [a for a in self.store.addresses(timestamp) if a not in known]
            if extra:
                logger.warning(
                    f"Timestamp {timestamp} has {len(extra)} addresses missing at "
                    f"reference {reference}: {', '.join(extra)}"
                )
            layout[timestamp] = sorted(reference_addresses + extra, key=parse_address)
        return layout

    def _check_samples(self, layout: Dict[str, List[str]]) -> None:
        """Stat every sample so a partial word fails before any painting."""
        for timestamp, addresses in layout.items():
            for address in addresses:
                self.store.page_count(timestamp, address)

    def _resolve_range(
        self, timestamps: Sequence[str], reference: str, layout: Dict[str, List[str]]
    ) -> PageRange:
        if self.config.range_policy == "union":
            return resolve_union_range(self.store, timestamps, self.config.page_size)
        return resolve_page_range(
            self.store, reference, layout[reference], self.config.page_size
        )

    def _streams(
        self, timestamp: str, addresses: List[str]
    ) -> Iterator[Tuple[int, Sequence[int]]]:
        for address in addresses:
            data = self.store.read_sample(timestamp, address)
            try:
                words = decode_words(data, self.config.word_byte_order)
            except MalformedSample as e:
                path = self.store.sample_path(timestamp, address)
                raise MalformedSample(f"{path}: {e}", path=str(path)) from e
            yield parse_address(address), words

    def run(self, sink: Optional[FrameSink] = None) -> RenderResults:
        """
        Render all timestamps.

        Args:
            sink: Receives every frame as soon as it is complete

        Returns:
            Page range information and per-frame statistics

        Raises:
            MissingSamples, MalformedSample, EmptyRange, PfnOutOfRange,
            NoPagesSampled: On the first problem found
            OSError: If a sample cannot be read
        """
        timestamps = self.store.timestamps()
        reference = reference_timestamp(timestamps)
        layout = self._address_layout(timestamps, reference)
        self._check_samples(layout)
        page_range = self._resolve_range(timestamps, reference, layout)

        rasterizer = FrameRasterizer(page_range, self.config.page_size)
        start_time = parse_timestamp(timestamps[0])
        results = RenderResults(
            first_pfn=page_range.first_pfn,
            last_pfn=page_range.last_pfn,
            image_size=page_range.image_size,
            range_policy=self.config.range_policy,
            reference_timestamp=reference,
            timestamps=list(timestamps),
        )

        for index, timestamp in enumerate(timestamps):
            logger.info(f"Rendering frame {index + 1} / {len(timestamps)}: {timestamp}")
            counts = rasterizer.rasterize(self._streams(timestamp, layout[timestamp]))

            elapsed_seconds = (parse_timestamp(timestamp) - start_time).total_seconds()
            elapsed_label = format_elapsed(elapsed_seconds)
            try:
                frame = FrameStatistics.from_counts(
                    index, timestamp, elapsed_seconds, elapsed_label, counts
                )
            except NoPagesSampled as e:
                raise NoPagesSampled(f"timestamp {timestamp}: {e}") from e

            if sink is not None:
                sink.add_frame(
                    index,
                    bytes(rasterizer.pixels),
                    rasterizer.image_size,
                    self.config.caption,
                    elapsed_label,
                )
            results.frames.append(frame)
            logger.info(
                f"Frame {index:03d} at {elapsed_label}: mapped {frame.mapped_fraction:.3f}, "
                f"active {frame.active_fraction:.3f}, zero {frame.zero_fraction:.3f}"
            )

        return results
