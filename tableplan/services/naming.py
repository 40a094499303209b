"""
Table name allocation

Two schemes are supported: numeric names for tables generated under a
section ("1", "2", ... or "ROOM1", "ROOM2", ... for the room section) and
lettered names for subparts of a split table ("5 A", "5 B", ...).
"""

import re
import string
from typing import Iterable, List, Optional, Set

from tableplan.core.errors import InvalidArgumentError

_DIGITS = re.compile(r"[0-9]+")
SUBPART_LETTERS = string.ascii_uppercase


def first_number(name: str) -> Optional[int]:
    """Return the first run of digits in a name, if any"""
    match = _DIGITS.search(name or "")
    return int(match.group(0)) if match else None


def highest_table_number(names: Iterable[str]) -> int:
    numbers = [n for n in (first_number(name) for name in names) if n is not None]
    return max(numbers, default=0)


def uses_room_prefix(section_name: str, trigger: str) -> bool:
    """Whether tables in this section get the room prefix"""
    return (section_name or "").lower() == trigger.lower()


def allocate_table_names(
    existing: Iterable[str],
    count: int,
    prefix: Optional[str] = None
) -> List[str]:
    """Allocate `count` numeric table names that collide with nothing in `existing`.

    Numbering continues from the highest number found in the existing names.
    When a candidate is taken, the number is bumped until a free bare number
    is found; the prefix is not re-applied on that path.
    """
    taken: Set[str] = set(existing)
    highest = highest_table_number(taken)

    allocated = []
    for i in range(count):
        number = highest + i + 1
        name = f"{prefix}{number}" if prefix else str(number)

        while name in taken:
            number += 1
            name = str(number)

        taken.add(name)
        allocated.append(name)

    return allocated


def subpart_suffix(name: str, base: str) -> Optional[str]:
    """Return the letter that follows `base` in a subpart name such as "12 B" """
    prefix = f"{base} "
    if not (name or "").startswith(prefix):
        return None
    suffix = name[len(prefix):]
    if len(suffix) == 1 and suffix in SUBPART_LETTERS:
        return suffix
    return None


def next_subpart_names(base: str, sibling_names: Iterable[str], count: int) -> List[str]:
    """Allocate `count` lettered subpart names continuing after the existing siblings.

    Raises InvalidArgumentError when the sequence would run past "Z".
    """
    suffixes = [s for s in (subpart_suffix(name, base) for name in sibling_names) if s]
    start = SUBPART_LETTERS.index(max(suffixes)) + 1 if suffixes else 0

    if start + count > len(SUBPART_LETTERS):
        raise InvalidArgumentError(
            f"Table {base} cannot be divided into {count} more subparts: "
            f"only {len(SUBPART_LETTERS) - start} subpart letters left"
        )

    return [f"{base} {letter}" for letter in SUBPART_LETTERS[start:start + count]]
