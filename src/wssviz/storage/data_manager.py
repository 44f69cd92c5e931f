"""
Storage manager for render results.

This module provides a high-level interface for saving and loading the
per-frame statistics of a render run, its metadata and a human-readable
summary, using the configured storage format.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import polars as pl

from ..config import get_config
from ..models.config import StorageConfig
from ..models.results import RenderResults
from ..models.runtime import RunContext
from .factory import create_storage

logger = logging.getLogger(__name__)

STATISTICS_SCHEMA = {
    "frame": pl.Int64,
    "timestamp": pl.Utf8,
    "elapsed_seconds": pl.Float64,
    "elapsed": pl.Utf8,
    "active_fraction": pl.Float64,
    "zero_fraction": pl.Float64,
    "mapped_fraction": pl.Float64,
    "total_pages": pl.Int64,
    "mapped_pages": pl.Int64,
    "active_pages": pl.Int64,
    "idle_pages": pl.Int64,
    "swapped_pages": pl.Int64,
    "zero_pages": pl.Int64,
}


def statistics_frame(results: RenderResults) -> pl.DataFrame:
    """One row per rendered frame, in frame order."""
    return pl.DataFrame(results.rows(), schema=STATISTICS_SCHEMA)


class StatisticsStorageManager:
    """
    Saves and loads the statistics of a render run.
    """

    def __init__(self, output_dir: Path, storage_config: Optional[StorageConfig] = None):
        """
        Args:
            output_dir: Directory where data files will be stored
            storage_config: Storage settings; the global configuration is
                used when omitted
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        storage_config = storage_config or get_config().storage
        self.storage_format = storage_config.format
        self.compression = storage_config.compression
        self.generate_legacy = storage_config.generate_legacy_formats

        self.storage = create_storage(self.storage_format, self.compression)
        logger.debug(
            f"Initialized StatisticsStorageManager with format: {self.storage_format}"
        )

    @property
    def statistics_file(self) -> Path:
        suffix = "parquet" if self.storage_format == "parquet" else "json"
        return self.output_dir / f"stats.{suffix}"

    def save_results(self, results: RenderResults, run_context: RunContext) -> pl.DataFrame:
        """
        Save statistics, metadata and the summary log of a finished run.

        Returns:
            The statistics table that was saved
        """
        logger.info("Saving render statistics...")
        df = statistics_frame(results)
        self._save_statistics(df)
        self._save_metadata(results, run_context)
        self._save_summary_log(results, run_context)
        logger.info(f"Successfully saved render statistics to: {self.output_dir}")
        return df

    def _save_statistics(self, df: pl.DataFrame) -> None:
        if self.storage_format == "parquet":
            self.storage.save_dataframe(df, str(self.statistics_file))
        else:
            self.storage.save_dict({"frames": df.to_dicts()}, str(self.statistics_file))
        logger.info(f"Saved {len(df)} frame statistics to: {self.statistics_file}")

        if self.generate_legacy:
            legacy_path = self.output_dir / "stats.csv"
            df.write_csv(legacy_path)
            logger.info(f"Saved legacy CSV format to: {legacy_path}")

    def _save_metadata(self, results: RenderResults, run_context: RunContext) -> None:
        metadata: Dict[str, Any] = {
            "pid": run_context.pid,
            "sample_root": str(run_context.sample_root),
            "output_dir": str(run_context.paths.output_dir),
        }
        metadata.update(results.metadata())
        self.storage.save_dict(metadata, str(run_context.paths.metadata_file))
        logger.debug(f"Saved metadata to: {run_context.paths.metadata_file}")

    def _save_summary_log(self, results: RenderResults, run_context: RunContext) -> None:
        """Save human-readable summary log."""
        summary_path = run_context.paths.summary_log_file
        span = results.last_pfn - results.first_pfn

        with open(summary_path, "w", encoding="utf-8") as f:
            f.write("Working Set Render Summary\n")
            f.write("==========================\n\n")
            f.write(f"PID: {run_context.pid}\n")
            f.write(f"Sample root: {run_context.sample_root}\n")
            f.write(f"Range policy: {results.range_policy}\n")
            f.write(f"Reference timestamp: {results.reference_timestamp}\n")
            f.write(
                f"Page range: {results.first_pfn:#x} - {results.last_pfn:#x} ({span} pages)\n"
            )
            f.write(f"Image size: {results.image_size} x {results.image_size}\n")
            f.write(f"Frames: {len(results.frames)}\n\n")

            f.write("--- Per-frame page state ---\n")
            for frame in results.frames:
                c = frame.counts
                f.write(
                    f"{frame.index:03d} {frame.elapsed_label} {frame.timestamp}: "
                    f"total {c.total}, mapped {c.mapped} ({frame.mapped_fraction:.1%}), "
                    f"active {c.active} ({frame.active_fraction:.1%}), idle {c.idle}, "
                    f"swapped {c.swapped}, zero {c.zero} ({frame.zero_fraction:.1%})\n"
                )

        logger.info(f"Saved summary log to: {summary_path}")

    def load_statistics(self, columns: Optional[List[str]] = None) -> pl.DataFrame:
        """
        Load a saved statistics table.

        Raises:
            FileNotFoundError: If no statistics were saved in output_dir
        """
        path = str(self.statistics_file)
        if not self.storage.file_exists(path):
            raise FileNotFoundError(f"No frame statistics found in {self.output_dir}")
        if self.storage_format == "parquet":
            return self.storage.load_dataframe(path, columns)
        df = pl.DataFrame(self.storage.load_dict(path).get("frames", []))
        return df.select(columns) if columns else df
