"""
Command-line interface for the wssviz working-set visualizer.

This module provides the main CLI entry point: it resolves the sample root
for the given process id, renders every timestamp into still frames and an
animation, saves the per-frame statistics and draws the trend chart.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import psutil

from ..config import get_config
from ..core import SequenceAssembler
from ..models import AppConfig, RenderResults, RunContext, RunPaths
from ..output import AnimationWriter
from ..plotter import plot_page_trends
from ..samples import SampleStore
from ..storage import StatisticsStorageManager
from ..validation import (
    UsageError,
    ValidationError,
    WssVizError,
    handle_cli_error,
    validate_pid,
)

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises UsageError instead of exiting."""

    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="wssviz",
        description="Render working-set page samples of a process into an animation and trend chart.",
    )
    parser.add_argument(
        "pid",
        help="Process id whose samples are read from <sample_root_base>/<pid>.",
    )
    return parser


def create_run_context(pid: int, app_config: AppConfig) -> RunContext:
    sample_root = Path(app_config.paths.sample_root_base) / str(pid)
    paths = RunPaths.for_output_dir(sample_root / app_config.paths.output_subdir)
    return RunContext(pid=pid, sample_root=sample_root, paths=paths)


def run_visualization(run_context: RunContext, app_config: AppConfig) -> RenderResults:
    """
    Render all samples of one process and write every output.

    The animation, statistics and chart are only written after every
    frame rendered successfully.

    Raises:
        WssVizError: On missing, malformed or inconsistent samples
        OSError: If a sample cannot be read or an output cannot be written
    """
    render_config = app_config.render
    store = SampleStore(
        run_context.sample_root,
        timestamp_glob=render_config.timestamp_glob,
        address_glob=render_config.address_glob,
    )
    timestamps = store.timestamps()
    logger.info(f"Found {len(timestamps)} timestamps in {run_context.sample_root}")

    run_context.process_alive = psutil.pid_exists(run_context.pid)
    if run_context.process_alive:
        logger.warning(
            f"Process {run_context.pid} is still running; "
            f"the newest timestamp may still be capturing."
        )

    writer = AnimationWriter(
        run_context.paths,
        frame_delay_ms=render_config.frame_delay_ms,
        labels=render_config.labels,
    )
    results = SequenceAssembler(store, render_config).run(writer)
    writer.finalize()

    manager = StatisticsStorageManager(run_context.paths.output_dir, app_config.storage)
    stats_df = manager.save_results(results, run_context)

    if app_config.chart.enabled:
        plot_page_trends(stats_df, run_context.paths.chart_base, app_config.chart)
    else:
        logger.info("Trend chart disabled in configuration.")

    return results


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for wssviz.

    Exits with status 2 on a usage error and 1 when the run fails.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        pid = validate_pid(args.pid)
    except (UsageError, ValidationError) as e:
        parser.print_usage(sys.stderr)
        handle_cli_error(
            error=e,
            context="argument parsing",
            exit_code=2,
            logger=logger,
        )

    # Load application configuration
    try:
        app_config = get_config()
    except (FileNotFoundError, ValueError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=True,
            logger=logger,
        )

    run_context = create_run_context(pid, app_config)
    logger.info(f"Reading samples from: {run_context.sample_root}")
    logger.info(f"Outputs will be saved in: {run_context.paths.output_dir}")

    try:
        results = run_visualization(run_context, app_config)
    except (WssVizError, OSError) as e:
        handle_cli_error(
            error=e,
            context=f"rendering samples of pid {pid}",
            exit_code=1,
            logger=logger,
        )

    logger.info(
        f"Rendered {len(results.frames)} frames "
        f"({results.image_size}x{results.image_size} pixels) to {run_context.paths.output_dir}"
    )


if __name__ == "__main__":
    main_cli()
