"""
Configuration validation utilities.

This module turns the raw sections of `config.toml` into validated
configuration dataclasses. Missing keys take the dataclass defaults.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    AppConfig,
    ChartConfig,
    LabelConfig,
    PathsConfig,
    RenderConfig,
    StorageConfig,
)
from ..validation import (
    ValidationError,
    validate_enum_choice,
    validate_non_empty_string,
    validate_positive_float,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)


def _validate_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean", field_name=field_name, value=value
        )
    return value


def _validate_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValidationError(
            f"{field_name} must be a string", field_name=field_name, value=value
        )
    return value


def validate_paths_config(paths_data: Dict[str, Any]) -> PathsConfig:
    """
    Validate the `[paths]` section.

    Raises:
        ValidationError: If validation fails
    """
    defaults = PathsConfig()
    sample_root_base = validate_non_empty_string(
        paths_data.get("sample_root_base", defaults.sample_root_base),
        field_name="paths.sample_root_base",
    )
    output_subdir = validate_non_empty_string(
        paths_data.get("output_subdir", defaults.output_subdir),
        field_name="paths.output_subdir",
    )
    return PathsConfig(sample_root_base=sample_root_base, output_subdir=output_subdir)


def validate_label_config(label_data: Dict[str, Any]) -> LabelConfig:
    """Validate the `[render.labels]` section."""
    defaults = LabelConfig()
    return LabelConfig(
        caption_color=validate_non_empty_string(
            label_data.get("caption_color", defaults.caption_color),
            field_name="render.labels.caption_color",
        ),
        elapsed_color=validate_non_empty_string(
            label_data.get("elapsed_color", defaults.elapsed_color),
            field_name="render.labels.elapsed_color",
        ),
        border_divisor=validate_positive_integer(
            label_data.get("border_divisor", defaults.border_divisor),
            min_value=1,
            max_value=1000,
            field_name="render.labels.border_divisor",
        ),
        font_scale=validate_positive_float(
            label_data.get("font_scale", defaults.font_scale),
            min_value=0.1,
            max_value=1.0,
            field_name="render.labels.font_scale",
        ),
    )


def validate_render_config(render_data: Dict[str, Any]) -> RenderConfig:
    """
    Validate the `[render]` section, including its `labels` table.

    Raises:
        ValidationError: If validation fails
    """
    defaults = RenderConfig()

    page_size = validate_positive_integer(
        render_data.get("page_size", defaults.page_size),
        min_value=1,
        field_name="render.page_size",
    )
    if page_size & (page_size - 1):
        raise ValidationError(
            f"render.page_size must be a power of two, got {page_size}",
            field_name="render.page_size",
            value=page_size,
        )

    word_byte_order = validate_enum_choice(
        render_data.get("word_byte_order", defaults.word_byte_order),
        valid_choices=["little", "big"],
        field_name="render.word_byte_order",
    )
    range_policy = validate_enum_choice(
        render_data.get("range_policy", defaults.range_policy),
        valid_choices=["reference", "union"],
        field_name="render.range_policy",
    )
    caption = _validate_string(
        render_data.get("caption", defaults.caption), "render.caption"
    )
    frame_delay_ms = validate_positive_integer(
        render_data.get("frame_delay_ms", defaults.frame_delay_ms),
        min_value=10,
        max_value=60_000,
        field_name="render.frame_delay_ms",
    )
    timestamp_glob = validate_non_empty_string(
        render_data.get("timestamp_glob", defaults.timestamp_glob),
        field_name="render.timestamp_glob",
    )
    address_glob = validate_non_empty_string(
        render_data.get("address_glob", defaults.address_glob),
        field_name="render.address_glob",
    )
    labels = validate_label_config(render_data.get("labels", {}))

    return RenderConfig(
        page_size=page_size,
        word_byte_order=word_byte_order,
        range_policy=range_policy,
        caption=caption,
        frame_delay_ms=frame_delay_ms,
        timestamp_glob=timestamp_glob,
        address_glob=address_glob,
        labels=labels,
    )


def validate_chart_config(chart_data: Dict[str, Any]) -> ChartConfig:
    """Validate the `[chart]` section."""
    defaults = ChartConfig()
    return ChartConfig(
        enabled=_validate_bool(chart_data.get("enabled", defaults.enabled), "chart.enabled"),
        title=_validate_string(chart_data.get("title", defaults.title), "chart.title"),
        width=validate_positive_integer(
            chart_data.get("width", defaults.width),
            min_value=100,
            max_value=10_000,
            field_name="chart.width",
        ),
        height=validate_positive_integer(
            chart_data.get("height", defaults.height),
            min_value=100,
            max_value=10_000,
            field_name="chart.height",
        ),
        write_html=_validate_bool(
            chart_data.get("write_html", defaults.write_html), "chart.write_html"
        ),
    )


def validate_storage_config(storage_data: Dict[str, Any]) -> StorageConfig:
    """
    Validate the `[storage]` section.

    Raises:
        ValidationError: If the format or compression is unsupported
    """
    try:
        return StorageConfig.from_dict(storage_data)
    except ValueError as e:
        raise ValidationError(f"storage: {e}", field_name="storage", value=storage_data)


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate a whole parsed `config.toml` into an AppConfig.

    Raises:
        ValidationError: If any section fails validation
    """
    app_config = AppConfig(
        paths=validate_paths_config(config_data.get("paths", {})),
        render=validate_render_config(config_data.get("render", {})),
        chart=validate_chart_config(config_data.get("chart", {})),
        storage=validate_storage_config(config_data.get("storage", {})),
    )
    logger.debug(f"Validated configuration: {app_config}")
    return app_config
