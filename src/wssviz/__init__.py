"""
wssviz: Working-set page state visualizer.

This package renders per-page memory state samples of a process (present,
swapped, active, zero-filled) into a sequence of raster frames, an animated
GIF and a trend chart of the mapped, zero and active page fractions.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Input validation and error handling
- samples: Sample directory discovery and reading
- core: Flag decoding, page range resolution, rasterization and sequencing
- output: Still frame and animation writers
- storage: Per-frame statistics persistence
- cli: Command-line interface

Usage:
    From command line:
        wssviz <pid>

    Programmatically:
        from wssviz import SampleStore, SequenceAssembler, get_config
        config = get_config()
        store = SampleStore(root)
        results = SequenceAssembler(store, config.render).run()
"""

# Main interfaces
from .config import get_config, clear_config_cache, set_config_path
from .cli import main_cli
from .core import SequenceAssembler, FrameRasterizer, PageRange, decode_flags
from .samples import SampleStore
from .output import AnimationWriter

# Model classes for external use
from .models import (
    AppConfig,
    RenderConfig,
    RunContext,
    RunPaths,
    FrameCounts,
    FrameStatistics,
    RenderResults,
)

# Errors
from .validation import (
    ValidationError,
    WssVizError,
    UsageError,
    MissingSamples,
    MalformedSample,
    EmptyRange,
    PfnOutOfRange,
    NoPagesSampled,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "main_cli",
    "SequenceAssembler",
    "FrameRasterizer",
    "PageRange",
    "decode_flags",
    "SampleStore",
    "AnimationWriter",
    # Models
    "AppConfig",
    "RenderConfig",
    "RunContext",
    "RunPaths",
    "FrameCounts",
    "FrameStatistics",
    "RenderResults",
    # Errors
    "ValidationError",
    "WssVizError",
    "UsageError",
    "MissingSamples",
    "MalformedSample",
    "EmptyRange",
    "PfnOutOfRange",
    "NoPagesSampled",
]
