"""Square type alias and coordinate helpers.

A square is an ``(x, y)`` pair: ``x`` is the file (a=0 … h=7) and ``y``
the rank (1=0 … 8=7), so white starts on ranks 0–1.
"""

from __future__ import annotations

from typing import TypeAlias

BOARD_SIZE = 8

Square: TypeAlias = tuple[int, int]


def is_on_board(x: int, y: int) -> bool:
    """Whether ``(x, y)`` lies inside the 8x8 board."""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (0, 0) → 'a1', (7, 7) → 'h8'."""
    x, y = sq
    return chr(ord("a") + x) + str(y + 1)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → (4, 3)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return ord(name[0]) - ord("a"), int(name[1]) - 1
