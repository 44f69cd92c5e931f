"""
Unit tests for storage factory.
"""

import pytest

from wssviz.storage.factory import create_storage
from wssviz.storage.parquet_storage import ParquetStorage


@pytest.mark.unit
class TestStorageFactory:
    """Test cases for storage factory."""

    def test_create_parquet_storage(self):
        """Test creating ParquetStorage."""
        storage = create_storage("parquet")
        assert isinstance(storage, ParquetStorage)
        assert storage.compression == "snappy"

        storage = create_storage("parquet", "zstd")
        assert storage.compression == "zstd"

    def test_create_json_storage(self):
        assert isinstance(create_storage("json"), ParquetStorage)

    def test_create_storage_unsupported_format(self):
        """Test creating storage with unsupported format."""
        with pytest.raises(ValueError) as excinfo:
            create_storage("unsupported")

        assert "Unsupported storage format" in str(excinfo.value)
