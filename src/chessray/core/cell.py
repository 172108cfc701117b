"""Cell — one of the 64 board slots."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessray.core.enums import Color
from chessray.core.types import BOARD_SIZE, Square, is_on_board, square_name

if TYPE_CHECKING:
    from chessray.core.board import Board
    from chessray.core.pieces import Piece


class Cell:
    """A board slot holding an optional piece and the set of its attackers.

    The attacker set (``hit_by``) is rebuilt by the board at the start of
    every turn; only :class:`~chessray.core.direction.Direction` and the
    pieces themselves write to it.
    """

    __slots__ = ("board", "x", "y", "piece", "hit_by")

    def __init__(self, board: Board, x: int, y: int) -> None:
        self.board = board
        self.x = x
        self.y = y
        self.piece: Piece | None = None
        self.hit_by: set[Piece] = set()

    # -- Identity -----------------------------------------------------------

    @property
    def coords(self) -> Square:
        return self.x, self.y

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``'e4'``."""
        return square_name(self.coords)

    def is_empty(self) -> bool:
        return self.piece is None

    # -- Line of sight ------------------------------------------------------

    def open(self, dx: int, dy: int) -> Cell | None:
        """The cell one ``(dx, dy)`` step away, or ``None`` past the edge."""
        x, y = self.x + dx, self.y + dy
        if not is_on_board(x, y):
            return None
        return self.board.get_cell(x, y)

    def open_line_of_sight(
        self, dx: int, dy: int, max_steps: int = BOARD_SIZE
    ) -> Iterator[Cell]:
        """Walk from this cell in ``(dx, dy)`` steps.

        Yields at most *max_steps* cells, stops at the board edge, and stops
        *after* yielding the first occupied cell.
        """
        cell: Cell | None = self
        for _ in range(max_steps):
            cell = cell.open(dx, dy)
            if cell is None:
                return
            yield cell
            if cell.piece is not None:
                return

    # -- Attacker set -------------------------------------------------------

    def attackers(self, color: Color) -> list[Piece]:
        """Pieces of *color* that currently hit this cell."""
        return [piece for piece in self.hit_by if piece.color == color]

    def is_attacked_by(self, color: Color) -> bool:
        return any(piece.color == color for piece in self.hit_by)

    def __repr__(self) -> str:
        occupant = self.piece.fen_char if self.piece is not None else "."
        return f"Cell({self.name}, {occupant})"
