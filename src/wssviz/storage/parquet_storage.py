"""
Parquet storage implementation using Polars.

Tables go to compressed Parquet files; small dictionaries such as the run
metadata go to indented UTF-8 JSON next to them.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional, Union

import polars as pl

from .base import DataStorage

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ParquetStorage(DataStorage):
    """
    Polars-backed storage for statistics tables and run metadata.
    """

    def __init__(self, compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"):
        self.compression = compression
        logger.debug(f"ParquetStorage using {compression} compression")

    @staticmethod
    def _prepare(path: PathLike) -> Path:
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        return target

    def save_dataframe(self, df: pl.DataFrame, path: PathLike) -> None:
        target = self._prepare(path)
        try:
            df.write_parquet(target, compression=self.compression)
        except Exception as e:
            logger.error(f"Writing {len(df)} rows to {target} failed: {e}")
            raise
        logger.debug(f"Wrote {len(df)} rows x {df.width} columns to {target}")

    def load_dataframe(self, path: PathLike, columns: Optional[List[str]] = None) -> pl.DataFrame:
        try:
            df = pl.read_parquet(path, columns=columns)
        except Exception as e:
            logger.error(f"Reading table {path} failed: {e}")
            raise
        logger.debug(f"Read {len(df)} rows from {path}")
        return df

    def save_dict(self, data: Dict[str, Any], path: PathLike) -> None:
        target = self._prepare(path)
        try:
            target.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        except (OSError, TypeError) as e:
            logger.error(f"Writing JSON to {target} failed: {e}")
            raise
        logger.debug(f"Wrote {len(data)} keys to {target}")

    def load_dict(self, path: PathLike) -> Dict[str, Any]:
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(f"Reading JSON {path} failed: {e}")
            raise
        return data

    def file_exists(self, path: PathLike) -> bool:
        return Path(path).is_file()
