"""
Runtime data models.

This module contains data structures used during a single render run:
the output file layout and the run context handed between the CLI,
the sequence assembler and the writers.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class RunPaths:
    """
    A container for all generated file paths for a single render run.
    """

    output_dir: Path
    animation_file: Path
    chart_base: Path
    metadata_file: Path
    summary_log_file: Path

    @classmethod
    def for_output_dir(cls, output_dir: Path) -> "RunPaths":
        output_dir = Path(output_dir)
        return cls(
            output_dir=output_dir,
            animation_file=output_dir / "gif.gif",
            chart_base=output_dir / "graph",
            metadata_file=output_dir / "run_info.json",
            summary_log_file=output_dir / "summary.log",
        )

    def still_frame(self, index: int) -> Path:
        """Path of the numbered still for frame `index` (000.png, 001.png, ...)."""
        return self.output_dir / f"{index:03d}.png"


@dataclass
class RunContext:
    """
    Everything that identifies one render run.
    """

    pid: int
    sample_root: Path
    paths: RunPaths
    # Set when the pid still belongs to a live process at start-up.
    process_alive: Optional[bool] = None
