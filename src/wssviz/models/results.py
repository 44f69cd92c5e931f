"""
Render results data models.

This module defines the per-frame page statistics and the container for
everything a complete sequence run produces. The statistics are shaped so
they can be turned into a Polars DataFrame for storage and charting.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from ..validation import NoPagesSampled


@dataclass
class FrameCounts:
    """
    Page counts accumulated over every address of one timestamp.
    """

    total: int = 0
    mapped: int = 0
    active: int = 0
    idle: int = 0
    swapped: int = 0
    zero: int = 0

    def fractions(self) -> Dict[str, float]:
        """
        Return the active, zero and mapped fractions of the total.

        Raises:
            NoPagesSampled: If no page was seen for this timestamp
        """
        if self.total == 0:
            raise NoPagesSampled("no pages were sampled for this timestamp")
        return {
            "active": self.active / self.total,
            "zero": self.zero / self.total,
            "mapped": self.mapped / self.total,
        }


@dataclass
class FrameStatistics:
    """
    Statistics for one rendered frame.
    """

    index: int
    timestamp: str
    elapsed_seconds: float
    elapsed_label: str
    counts: FrameCounts
    active_fraction: float
    zero_fraction: float
    mapped_fraction: float

    @classmethod
    def from_counts(
        cls,
        index: int,
        timestamp: str,
        elapsed_seconds: float,
        elapsed_label: str,
        counts: FrameCounts,
    ) -> "FrameStatistics":
        fractions = counts.fractions()
        return cls(
            index=index,
            timestamp=timestamp,
            elapsed_seconds=elapsed_seconds,
            elapsed_label=elapsed_label,
            counts=counts,
            active_fraction=fractions["active"],
            zero_fraction=fractions["zero"],
            mapped_fraction=fractions["mapped"],
        )

    def to_row(self) -> Dict[str, Any]:
        """Flatten into a single table row."""
        row = {
            "frame": self.index,
            "timestamp": self.timestamp,
            "elapsed_seconds": self.elapsed_seconds,
            "elapsed": self.elapsed_label,
            "active_fraction": self.active_fraction,
            "zero_fraction": self.zero_fraction,
            "mapped_fraction": self.mapped_fraction,
        }
        row.update({f"{name}_pages": value for name, value in asdict(self.counts).items()})
        return row


@dataclass
class RenderResults:
    """
    Everything produced by a complete sequence run, apart from the images.
    """

    first_pfn: int
    last_pfn: int
    image_size: int
    range_policy: str
    reference_timestamp: str
    timestamps: List[str]
    frames: List[FrameStatistics] = field(default_factory=list)

    @property
    def active_pages(self) -> List[float]:
        return [frame.active_fraction for frame in self.frames]

    @property
    def zero_pages(self) -> List[float]:
        return [frame.zero_fraction for frame in self.frames]

    @property
    def mapped_pages(self) -> List[float]:
        return [frame.mapped_fraction for frame in self.frames]

    def rows(self) -> List[Dict[str, Any]]:
        return [frame.to_row() for frame in self.frames]

    def metadata(self) -> Dict[str, Any]:
        """Run description saved next to the statistics table."""
        return {
            "first_pfn": self.first_pfn,
            "last_pfn": self.last_pfn,
            "page_count": self.last_pfn - self.first_pfn,
            "image_size": self.image_size,
            "range_policy": self.range_policy,
            "reference_timestamp": self.reference_timestamp,
            "timestamps": list(self.timestamps),
            "frame_count": len(self.frames),
        }
