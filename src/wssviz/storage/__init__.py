"""
Storage of render statistics.

Per-frame page statistics are kept as a Polars DataFrame and saved in
Parquet (or JSON) format together with the run metadata, so runs can be
re-charted or compared without decoding the samples again.
"""

from .base import DataStorage
from .data_manager import StatisticsStorageManager, statistics_frame
from .factory import create_storage
from .parquet_storage import ParquetStorage

__all__ = [
    "DataStorage",
    "ParquetStorage",
    "StatisticsStorageManager",
    "create_storage",
    "statistics_frame",
]
