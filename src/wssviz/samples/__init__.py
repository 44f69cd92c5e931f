"""
Sample store access.
"""

from .store import WORD_SIZE, SampleStore, parse_address, parse_timestamp

__all__ = [
    "WORD_SIZE",
    "SampleStore",
    "parse_address",
    "parse_timestamp",
]
