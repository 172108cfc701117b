"""Exception hierarchy of the rules engine.

Every error also derives from the closest builtin so callers that only
know about ``IndexError`` / ``ValueError`` keep working.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all rules-engine errors."""


class OutOfBoardError(ChessError, IndexError):
    """A coordinate outside the 8x8 board was requested."""

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"Coordinate ({x}, {y}) is off the board")
        self.x = x
        self.y = y


class IllegalMoveError(ChessError, ValueError):
    """A move was requested that is not in the piece's legal-move set."""


class BoardInvariantError(ChessError, RuntimeError):
    """The board reached a state the rules never allow (e.g. two kings)."""
