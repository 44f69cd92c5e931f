"""
Page flag word decoding.

Each sampled page is described by one unsigned 64-bit word. The bit layout
follows /proc/<pid>/pagemap for present and swapped; the active and zero
bits are taken from the otherwise unused frame-number bits.
"""

import struct
from dataclasses import dataclass
from typing import Literal, Tuple

from ..samples import WORD_SIZE
from ..validation import MalformedSample

PRESENT_BIT = 63
SWAPPED_BIT = 62
ACTIVE_BIT = 58
ZERO_BIT = 57
# Only set by in-guest tracking; not used for rendering.
LRU_BIT = 5

_BYTE_ORDER_PREFIX = {"little": "<", "big": ">"}


@dataclass(frozen=True)
class PageFlags:
    """Decoded state of one page."""

    present: bool
    swapped: bool
    active: bool
    zero: bool


def decode_flags(word: int) -> PageFlags:
    """Decode the present, swapped, active and zero bits of a flag word."""
    return PageFlags(
        present=word & (1 << PRESENT_BIT) != 0,
        swapped=word & (1 << SWAPPED_BIT) != 0,
        active=word & (1 << ACTIVE_BIT) != 0,
        zero=word & (1 << ZERO_BIT) != 0,
    )


def decode_words(data: bytes, byte_order: Literal["little", "big"] = "little") -> Tuple[int, ...]:
    """
    Split raw sample bytes into unsigned 64-bit flag words.

    Raises:
        MalformedSample: If the data length is not a multiple of 8
        ValueError: If byte_order is not 'little' or 'big'
    """
    if len(data) % WORD_SIZE:
        raise MalformedSample(
            f"sample of {len(data)} bytes is not a multiple of {WORD_SIZE}"
        )
    try:
        prefix = _BYTE_ORDER_PREFIX[byte_order]
    except KeyError:
        raise ValueError(f"Unsupported byte order: {byte_order}")
    return struct.unpack(f"{prefix}{len(data) // WORD_SIZE}Q", data)
