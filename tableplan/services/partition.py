"""
Item partitioning for table subdivision
"""

import math
from typing import Any, List, Sequence

from tableplan.core.errors import InvalidArgumentError


def validate_count(value: Any, label: str) -> int:
    """Ensure a requested count is a positive integer"""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgumentError(f"Invalid {label} provided")
    return value


def partition_items(items: Sequence[Any], parts: int) -> List[List[Any]]:
    """Split items into `parts` contiguous windows of near-equal size.

    Every window holds at most ceil(len(items) / parts) items. When there are
    more parts than items the trailing windows are empty.
    """
    parts = validate_count(parts, "number of subparts")
    per_part = math.ceil(len(items) / parts)

    windows = []
    for i in range(parts):
        start = i * per_part
        end = min((i + 1) * per_part, len(items))
        windows.append(list(items[start:end]))
    return windows
