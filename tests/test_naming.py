"""
Tests for table name allocation
"""

import pytest

from tableplan.core.errors import InvalidArgumentError
from tableplan.services.naming import (
    allocate_table_names,
    first_number,
    highest_table_number,
    next_subpart_names,
    subpart_suffix,
    uses_room_prefix,
)

def test_first_number_takes_first_digit_run():
    assert first_number("12") == 12
    assert first_number("ROOM7") == 7
    assert first_number("bar 3 window 9") == 3
    assert first_number("patio") is None

def test_highest_table_number_ignores_unnumbered_names():
    assert highest_table_number(["2", "7", "patio", "ROOM4"]) == 7
    assert highest_table_number(["patio"]) == 0
    assert highest_table_number([]) == 0

def test_allocate_continues_after_highest():
    names = allocate_table_names(["2", "7", "bar"], 3)
    assert names == ["8", "9", "10"]

def test_allocate_with_prefix():
    assert allocate_table_names([], 2, prefix="ROOM") == ["ROOM1", "ROOM2"]
    assert allocate_table_names(["ROOM1", "ROOM2"], 1, prefix="ROOM") == ["ROOM3"]

def test_allocate_never_repeats_within_batch():
    names = allocate_table_names(["1", "3", "x5"], 25)
    assert len(names) == len(set(names))
    assert not set(names) & {"1", "3", "x5"}

def test_allocate_does_not_mutate_existing():
    existing = {"1", "2"}
    allocate_table_names(existing, 3)
    assert existing == {"1", "2"}

@pytest.mark.parametrize("section_name", ["room section", "Room Section", "ROOM SECTION"])
def test_room_prefix_trigger_is_case_insensitive(section_name):
    assert uses_room_prefix(section_name, "room section")

def test_room_prefix_requires_exact_name():
    assert not uses_room_prefix("room section 2", "room section")
    assert not uses_room_prefix("terrace", "room section")

def test_subpart_suffix():
    assert subpart_suffix("12 B", "12") == "B"
    assert subpart_suffix("12", "12") is None
    assert subpart_suffix("12 AB", "12") is None
    assert subpart_suffix("12 b", "12") is None
    assert subpart_suffix("13 B", "12") is None

def test_subpart_suffix_base_with_spaces():
    assert subpart_suffix("1 A C", "1 A") == "C"
    assert subpart_suffix("Window 2 B", "Window 2") == "B"
    assert subpart_suffix("Window 2", "Window 2") is None

def test_subpart_names_for_nested_subpart():
    assert next_subpart_names("1 A", ["1 A A", "1 A B"], 2) == ["1 A C", "1 A D"]

def test_subpart_names_for_base_with_spaces():
    assert next_subpart_names("Window 2", ["Window 2 A", "Window 2 B"], 1) == ["Window 2 C"]

def test_subpart_names_start_at_a():
    assert next_subpart_names("5", [], 2) == ["5 A", "5 B"]

def test_subpart_names_continue_after_siblings():
    assert next_subpart_names("5", ["5 A", "5 B"], 2) == ["5 C", "5 D"]

def test_subpart_names_skip_siblings_without_suffix():
    assert next_subpart_names("5", ["5 A", "renamed"], 1) == ["5 B"]

def test_subpart_names_overflow_past_z():
    assert next_subpart_names("5", ["5 Y"], 1) == ["5 Z"]
    with pytest.raises(InvalidArgumentError):
        next_subpart_names("5", ["5 Y"], 2)
    with pytest.raises(InvalidArgumentError):
        next_subpart_names("5", [], 27)
