"""
Configuration data models.

This module contains the configuration data structures for sample locations,
rendering behavior, chart output and statistics storage, loaded from
`config.toml`.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal


@dataclass
class PathsConfig:
    """
    Where samples are read from and where outputs go, from `[paths]`.
    """

    # Parent of the per-pid sample roots; the CLI appends the pid.
    sample_root_base: str = "/tmp/wss"
    # Output directory, relative to the sample root.
    output_subdir: str = "img"


@dataclass
class LabelConfig:
    """
    Label strip drawn below every frame, from `[render.labels]`.
    """

    caption_color: str = "red"
    elapsed_color: str = "white"
    # The strip height is ceil(image_size / border_divisor) rows.
    border_divisor: int = 30
    # Font size as a fraction of the strip height.
    font_scale: float = 0.9


@dataclass
class RenderConfig:
    """
    Raster and animation settings, from `[render]`.
    """

    page_size: int = 4096
    word_byte_order: Literal["little", "big"] = "little"
    # "reference" sizes from one timestamp and rejects overflowing pages,
    # "union" sizes from every timestamp up front.
    range_policy: Literal["reference", "union"] = "reference"
    caption: str = "SPECjbb 1 core, 3100 MiB RAM, 2500 MiB heap"
    frame_delay_ms: int = 1000
    timestamp_glob: str = "20*"
    address_glob: str = "0x*"
    labels: LabelConfig = field(default_factory=LabelConfig)


@dataclass
class ChartConfig:
    """
    Trend chart settings, from `[chart]`.
    """

    enabled: bool = True
    title: str = "Page state over time"
    width: int = 1200
    height: int = 600
    write_html: bool = True


@dataclass
class StorageConfig:
    """
    Statistics storage settings, from `[storage]`.

    Attributes:
        format: Primary storage format for the per-frame statistics table
            - 'parquet': columnar format with compression
            - 'json': human-readable list of rows
        compression: Compression algorithm for the Parquet format
        generate_legacy_formats: Whether to also write the table as CSV
    """

    format: Literal["parquet", "json"] = "parquet"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"
    generate_legacy_formats: bool = False

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "StorageConfig":
        """
        Create a StorageConfig instance from a dictionary.

        Raises:
            ValueError: If invalid configuration values are provided
        """
        format_type = config_dict.get("format", "parquet")
        compression = config_dict.get("compression", "snappy")
        generate_legacy = config_dict.get("generate_legacy_formats", False)

        if format_type not in ("parquet", "json"):
            raise ValueError(f"Unsupported storage format: {format_type}")

        if format_type == "parquet" and compression not in (
            "snappy",
            "gzip",
            "brotli",
            "lz4",
            "zstd",
        ):
            raise ValueError(f"Unsupported compression algorithm: {compression}")

        return cls(
            format=format_type,
            compression=compression,
            generate_legacy_formats=bool(generate_legacy),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format,
            "compression": self.compression,
            "generate_legacy_formats": self.generate_legacy_formats,
        }


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    paths: PathsConfig = field(default_factory=PathsConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
