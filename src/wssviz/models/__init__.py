"""
Data models and structures for the renderer.

Configuration Models:
- Sample and output locations
- Raster, label and animation settings
- Trend chart and statistics storage settings

Runtime Models:
- Output file layout and run context

Result Models:
- Per-timestamp page counts and fractions
- The complete statistics of a render run
"""

from .config import (
    AppConfig,
    ChartConfig,
    LabelConfig,
    PathsConfig,
    RenderConfig,
    StorageConfig,
)
from .runtime import RunContext, RunPaths
from .results import FrameCounts, FrameStatistics, RenderResults

__all__ = [
    # Configuration
    "AppConfig",
    "ChartConfig",
    "LabelConfig",
    "PathsConfig",
    "RenderConfig",
    "StorageConfig",
    # Runtime
    "RunContext",
    "RunPaths",
    # Results
    "FrameCounts",
    "FrameStatistics",
    "RenderResults",
]
