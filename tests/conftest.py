"""
Pytest configuration and shared fixtures for the wssviz test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the wssviz project.
"""

import shutil
import struct
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Union

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Sample helpers
# ============================================================================

TIMESTAMPS = [
    "2024-05-01T10:00:00",
    "2024-05-01T10:00:30",
    "2024-05-01T10:01:30",
]

# A sample file is either a list of flag words or raw bytes.
SampleContent = Union[List[int], bytes]


def pack_words(words: List[int], byte_order: str = "little") -> bytes:
    prefix = "<" if byte_order == "little" else ">"
    return struct.pack(f"{prefix}{len(words)}Q", *words)


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def write_samples(temp_dir):
    """
    Return a function that writes a sample store and returns its root.

    The layout maps timestamp -> address -> content.
    """

    def _write(
        layout: Dict[str, Dict[str, SampleContent]],
        pid: int = 4242,
        byte_order: str = "little",
    ) -> Path:
        root = temp_dir / "wss" / str(pid)
        for timestamp, samples in layout.items():
            directory = root / timestamp
            directory.mkdir(parents=True, exist_ok=True)
            for address, content in samples.items():
                if not isinstance(content, bytes):
                    content = pack_words(content, byte_order)
                (directory / address).write_bytes(content)
        return root

    return _write


@pytest.fixture
def uniform_layout():
    """Return a function building a layout with the same samples at every timestamp."""

    def _layout(
        samples: Dict[str, SampleContent], timestamps: List[str] = TIMESTAMPS[:2]
    ) -> Dict[str, Dict[str, SampleContent]]:
        return {timestamp: dict(samples) for timestamp in timestamps}

    return _layout


@pytest.fixture
def sample_config_data(temp_dir):
    """Sample configuration data for testing."""
    return {
        "paths": {
            "sample_root_base": str(temp_dir / "wss"),
            "output_subdir": "img",
        },
        "render": {
            "page_size": 4096,
            "word_byte_order": "little",
            "range_policy": "reference",
            "caption": "test workload",
            "frame_delay_ms": 500,
            "timestamp_glob": "20*",
            "address_glob": "0x*",
            "labels": {
                "caption_color": "red",
                "elapsed_color": "white",
                "border_divisor": 30,
                "font_scale": 0.9,
            },
        },
        "chart": {
            "enabled": True,
            "title": "Test trends",
            "width": 800,
            "height": 400,
            "write_html": True,
        },
        "storage": {
            "format": "parquet",
            "compression": "snappy",
            "generate_legacy_formats": False,
        },
    }


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def config_files(temp_dir, sample_config_data):
    """Create a temporary configuration file for testing."""
    import toml

    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(sample_config_data, f)

    return {
        "config": config_file,
        "dir": temp_dir,
    }


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    # Store original config path (default path)
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield  # Run the test

    from wssviz.config import clear_config_cache, set_config_path

    clear_config_cache()

    # Always reset to original config path
    set_config_path(original_config_path)
