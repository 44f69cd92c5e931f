"""
Unit tests for page range resolution.
"""

import pytest

from wssviz.core.page_range import (
    PageRange,
    reference_timestamp,
    resolve_page_range,
    resolve_union_range,
)
from wssviz.samples import SampleStore
from wssviz.validation import EmptyRange, MalformedSample, PfnOutOfRange

T0, T1, T2 = "2024-05-01T10:00:00", "2024-05-01T10:00:30", "2024-05-01T10:01:30"


@pytest.mark.unit
class TestPageRange:
    """Test cases for the PageRange value type."""

    @pytest.mark.parametrize("span", [1, 2, 3, 4, 5, 15, 16, 17, 99, 100, 101, 4097])
    def test_image_size_is_minimal(self, span):
        page_range = PageRange(10, 10 + span)
        side = page_range.image_size
        assert side * side >= span
        assert (side - 1) * (side - 1) < span

    def test_empty_range_rejected(self):
        with pytest.raises(EmptyRange):
            PageRange(5, 5)
        with pytest.raises(EmptyRange):
            PageRange(6, 5)

    def test_index_of(self):
        page_range = PageRange(0x100, 0x110)
        assert page_range.index_of(0x100) == 0
        assert page_range.index_of(0x10F) == 15

    def test_index_of_out_of_range(self):
        page_range = PageRange(0x100, 0x110)
        with pytest.raises(PfnOutOfRange) as exc_info:
            page_range.index_of(0x110)
        assert exc_info.value.pfn == 0x110
        with pytest.raises(PfnOutOfRange):
            page_range.index_of(0xFF)


@pytest.mark.unit
class TestReferenceTimestamp:
    """Test cases for choosing the sizing timestamp."""

    def test_second_to_last(self):
        assert reference_timestamp([T0, T1, T2]) == T1

    def test_single_timestamp(self):
        assert reference_timestamp([T0]) == T0

    def test_no_timestamps(self):
        with pytest.raises(EmptyRange):
            reference_timestamp([])


@pytest.mark.unit
class TestResolvePageRange:
    """Test cases for resolving the range from one timestamp."""

    def test_range_from_first_and_last_address(self, write_samples):
        root = write_samples({T0: {"0x1000": [0, 0], "0x5000": [0, 0, 0]}})
        store = SampleStore(root)
        page_range = resolve_page_range(store, T0, store.addresses(T0))
        assert page_range.first_pfn == 1
        assert page_range.last_pfn == 5 + 3
        assert page_range.image_size == 3

    def test_custom_page_size(self, write_samples):
        root = write_samples({T0: {"0x2000": [0] * 4}})
        store = SampleStore(root)
        page_range = resolve_page_range(store, T0, ["0x2000"], page_size=8192)
        assert (page_range.first_pfn, page_range.last_pfn) == (1, 5)

    def test_partial_word_in_last_sample(self, write_samples):
        root = write_samples({T0: {"0x1000": b"\x00" * 7}})
        store = SampleStore(root)
        with pytest.raises(MalformedSample):
            resolve_page_range(store, T0, ["0x1000"])

    def test_empty_last_sample(self, write_samples):
        root = write_samples({T0: {"0x1000": b""}})
        store = SampleStore(root)
        with pytest.raises(EmptyRange):
            resolve_page_range(store, T0, ["0x1000"])

    def test_no_addresses(self, write_samples):
        root = write_samples({T0: {}})
        store = SampleStore(root)
        with pytest.raises(EmptyRange):
            resolve_page_range(store, T0, [])


@pytest.mark.unit
class TestResolveUnionRange:
    """Test cases for resolving the range over every timestamp."""

    def test_union_covers_every_timestamp(self, write_samples):
        root = write_samples(
            {
                T0: {"0x3000": [0]},
                T1: {"0x1000": [0, 0]},
                T2: {"0x3000": [0] * 6},
            }
        )
        store = SampleStore(root)
        page_range = resolve_union_range(store, [T0, T1, T2])
        assert (page_range.first_pfn, page_range.last_pfn) == (1, 9)

    def test_union_checks_every_address(self, write_samples):
        # The first address extends past the start of the last one.
        root = write_samples({T0: {"0x1000": [0] * 10, "0x2000": [0]}})
        store = SampleStore(root)
        page_range = resolve_union_range(store, [T0])
        assert page_range.last_pfn == 11

    def test_union_without_samples(self, write_samples):
        root = write_samples({T0: {}, T1: {}})
        store = SampleStore(root)
        with pytest.raises(EmptyRange):
            resolve_union_range(store, [T0, T1])
