"""
Tests for item partitioning
"""

import math
import pytest

from tableplan.core.errors import InvalidArgumentError
from tableplan.services.partition import partition_items, validate_count

def test_even_split():
    assert partition_items([1, 2, 3, 4], 2) == [[1, 2], [3, 4]]

def test_last_window_shorter():
    assert partition_items([1, 2, 3, 4, 5], 2) == [[1, 2, 3], [4, 5]]

def test_more_parts_than_items():
    assert partition_items(["a", "b"], 4) == [["a"], ["b"], [], []]

def test_empty_items():
    assert partition_items([], 3) == [[], [], []]

@pytest.mark.parametrize("size,parts", [(7, 3), (10, 4), (1, 1), (9, 9), (12, 5)])
def test_windows_reconstruct_items(size, parts):
    items = list(range(size))
    windows = partition_items(items, parts)

    assert len(windows) == parts
    assert [item for window in windows for item in window] == items
    assert all(len(window) <= math.ceil(size / parts) for window in windows)

@pytest.mark.parametrize("value", [0, -2, 2.5, "3", None, True])
def test_invalid_counts_rejected(value):
    with pytest.raises(InvalidArgumentError):
        validate_count(value, "number of subparts")

def test_valid_count_returned():
    assert validate_count(4, "number of tables") == 4
