"""File/rank coordinate helpers.

Files are the letters ``a``–``h`` (west to east), ranks the integers ``1``–``8``
(Light's home rank is 1). Coordinates outside those ranges are off-board; no
helper ever wraps from one edge to the other.
"""

from __future__ import annotations

from typing import TypeAlias

Coord: TypeAlias = tuple[str, int]

MIN_FILE = "a"
MAX_FILE = "h"
MIN_RANK = 1
MAX_RANK = 8

FILES = "abcdefgh"


def is_on_board(file: str, rank: int) -> bool:
    """Whether ``(file, rank)`` names one of the 64 squares."""
    return len(file) == 1 and MIN_FILE <= file <= MAX_FILE and MIN_RANK <= rank <= MAX_RANK


def shift_file(file: str, delta: int) -> str:
    """File *delta* columns east of *file* (may be off-board, e.g. 'i' or '`')."""
    return chr(ord(file) + delta)


def file_index(file: str) -> int:
    """Zero-based column index, e.g. 'a' → 0."""
    return ord(file) - ord(MIN_FILE)


def square_name(file: str, rank: int) -> str:
    """Human-readable name, e.g. ('e', 4) → 'e4'."""
    return f"{file}{rank}"


def parse_square(name: str) -> Coord:
    """Parse square name, e.g. 'e4' → ('e', 4)."""
    name = name.strip().lower()
    if len(name) != 2 or name[0] not in FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return name[0], int(name[1])
