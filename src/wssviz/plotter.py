"""
Generates the page-state trend chart.

This module is responsible for the summary visualization of a render run.
It takes the per-frame statistics table (a Polars DataFrame) and draws one
line per tracked fraction over the frame sequence using Plotly:

- "mapped": share of sampled pages that are present
- "zeros": share of sampled pages that are zero-filled
- "active": share of sampled pages that are present and active

The chart is saved as an interactive HTML file and, if Kaleido is
installed, as a static PNG image.
"""

import logging
from pathlib import Path
from typing import Optional

# Third-party library imports
import plotly.graph_objects as go
import polars as pl

from .models.config import ChartConfig

logger = logging.getLogger(__name__)

# --- Module Constants ---

# Series drawn on the chart: (legend name, statistics column, line color).
TREND_SERIES = (
    ("mapped", "mapped_fraction", "#2ca02c"),
    ("zeros", "zero_fraction", "#1f77b4"),
    ("active", "active_fraction", "#d62728"),
)


def _save_plotly_figure(
    fig: go.Figure, base_path: Path, chart_config: ChartConfig
) -> Optional[Path]:
    """
    Saves a Plotly figure to HTML (if enabled) and, if possible, PNG.

    Args:
        fig: The Plotly figure object to save.
        base_path: Output path without extension.
        chart_config: Size and format settings.

    Returns:
        The PNG path if the static image was written, otherwise None.
    """
    if chart_config.write_html:
        plot_filename_html = base_path.with_suffix(".html")
        fig.write_html(plot_filename_html)
        logger.info(f"Interactive chart saved to: {plot_filename_html}")

    plot_filename_png = base_path.with_suffix(".png")
    try:
        fig.write_image(
            plot_filename_png, width=chart_config.width, height=chart_config.height
        )
    except Exception as e_kaleido:
        # The HTML chart carries the same data, so this is not fatal.
        logger.warning(
            f"Failed to save static chart to PNG (Kaleido might be missing or misconfigured): {e_kaleido}"
        )
        return None
    logger.info(f"Static chart saved to: {plot_filename_png}")
    return plot_filename_png


def build_trend_figure(stats_df: pl.DataFrame, title: str = "") -> go.Figure:
    """
    Build the trend figure from a statistics table.

    Args:
        stats_df: One row per frame with `elapsed`, `mapped_fraction`,
            `zero_fraction` and `active_fraction` columns.
        title: Chart title.

    Raises:
        ValueError: If a required column is missing
    """
    required_cols = ["elapsed"] + [column for _, column, _ in TREND_SERIES]
    missing = [c for c in required_cols if c not in stats_df.columns]
    if missing:
        raise ValueError(f"statistics table is missing columns: {missing}")

    x_values = stats_df["elapsed"].to_list()
    fig = go.Figure()
    for name, column, color in TREND_SERIES:
        fig.add_trace(
            go.Scatter(
                x=x_values,
                y=stats_df[column].to_list(),
                mode="lines+markers",
                name=name,
                line={"color": color},
            )
        )

    fig.update_layout(
        title_text=title,
        legend_title_text="Pages",
        xaxis_title="Elapsed time (HH:MM:SS)",
        yaxis_title="Fraction of sampled pages",
        yaxis=dict(range=[0, 1]),
        xaxis=dict(type="category"),
    )
    return fig


def plot_page_trends(
    stats_df: pl.DataFrame, base_path: Path, chart_config: Optional[ChartConfig] = None
) -> Optional[Path]:
    """
    Draw and save the trend chart for one render run.

    Args:
        stats_df: Per-frame statistics.
        base_path: Output path without extension (e.g. `img/graph`).
        chart_config: Chart settings; defaults apply when omitted.

    Returns:
        The PNG path when it was written, otherwise None.
    """
    chart_config = chart_config or ChartConfig()
    if stats_df.is_empty():
        logger.warning("Trend chart: statistics table is empty. Skipping.")
        return None

    fig = build_trend_figure(stats_df, chart_config.title)
    return _save_plotly_figure(fig, Path(base_path), chart_config)
