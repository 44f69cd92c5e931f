"""
Unit tests for configuration validation functionality.

Tests the validation of the paths, render, chart and storage sections,
including defaults for missing keys and error handling.
"""

import pytest

from wssviz.config.validators import (
    validate_app_config,
    validate_chart_config,
    validate_paths_config,
    validate_render_config,
    validate_storage_config,
)
from wssviz.models import AppConfig
from wssviz.validation import ValidationError


@pytest.mark.unit
class TestRenderConfigValidation:
    """Test cases for render configuration validation."""

    def test_validate_render_config_success(self, sample_config_data):
        config = validate_render_config(sample_config_data["render"])

        assert config.page_size == 4096
        assert config.range_policy == "reference"
        assert config.caption == "test workload"
        assert config.frame_delay_ms == 500
        assert config.labels.border_divisor == 30

    def test_defaults_for_missing_keys(self):
        config = validate_render_config({})
        assert config.word_byte_order == "little"
        assert config.frame_delay_ms == 1000
        assert config.labels.caption_color == "red"

    @pytest.mark.parametrize("page_size", [0, 3000, -4096, "big"])
    def test_invalid_page_size(self, page_size):
        with pytest.raises(ValidationError) as exc_info:
            validate_render_config({"page_size": page_size})
        assert "page_size" in str(exc_info.value)

    def test_invalid_range_policy(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_render_config({"range_policy": "largest"})
        assert "range_policy" in str(exc_info.value)

    def test_invalid_byte_order(self):
        with pytest.raises(ValidationError):
            validate_render_config({"word_byte_order": "native"})

    def test_frame_delay_bounds(self):
        with pytest.raises(ValidationError):
            validate_render_config({"frame_delay_ms": 5})
        with pytest.raises(ValidationError):
            validate_render_config({"frame_delay_ms": 120_000})

    def test_empty_caption_allowed(self):
        assert validate_render_config({"caption": ""}).caption == ""

    def test_non_string_caption(self):
        with pytest.raises(ValidationError):
            validate_render_config({"caption": 42})

    def test_invalid_label_settings(self):
        with pytest.raises(ValidationError):
            validate_render_config({"labels": {"font_scale": 2.5}})
        with pytest.raises(ValidationError):
            validate_render_config({"labels": {"border_divisor": 0}})


@pytest.mark.unit
class TestOtherSections:
    """Test cases for the paths, chart and storage sections."""

    def test_paths(self, sample_config_data):
        config = validate_paths_config(sample_config_data["paths"])
        assert config.sample_root_base.endswith("wss")
        assert config.output_subdir == "img"

    def test_empty_output_subdir(self):
        with pytest.raises(ValidationError):
            validate_paths_config({"output_subdir": "  "})

    def test_chart(self, sample_config_data):
        config = validate_chart_config(sample_config_data["chart"])
        assert config.width == 800
        assert config.title == "Test trends"

    def test_chart_enabled_must_be_bool(self):
        with pytest.raises(ValidationError):
            validate_chart_config({"enabled": "yes"})

    def test_storage_invalid_format(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_storage_config({"format": "xml"})
        assert "storage" in str(exc_info.value)


@pytest.mark.unit
class TestAppConfigValidation:
    """Test cases for whole-file validation."""

    def test_full_config(self, sample_config_data):
        config = validate_app_config(sample_config_data)
        assert config.render.caption == "test workload"
        assert config.chart.height == 400
        assert config.storage.format == "parquet"

    def test_empty_config_uses_defaults(self):
        assert validate_app_config({}) == AppConfig()
