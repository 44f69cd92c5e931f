"""
Core rendering pipeline: flag decoding, page range resolution,
rasterization and sequence assembly.
"""

from .assembler import SequenceAssembler, format_elapsed
from .flags import (
    ACTIVE_BIT,
    LRU_BIT,
    PRESENT_BIT,
    SWAPPED_BIT,
    ZERO_BIT,
    PageFlags,
    decode_flags,
    decode_words,
)
from .page_range import (
    PageRange,
    reference_timestamp,
    resolve_page_range,
    resolve_union_range,
)
from .rasterizer import FrameRasterizer, page_color

__all__ = [
    "SequenceAssembler",
    "format_elapsed",
    "ACTIVE_BIT",
    "LRU_BIT",
    "PRESENT_BIT",
    "SWAPPED_BIT",
    "ZERO_BIT",
    "PageFlags",
    "decode_flags",
    "decode_words",
    "PageRange",
    "reference_timestamp",
    "resolve_page_range",
    "resolve_union_range",
    "FrameRasterizer",
    "page_color",
]
