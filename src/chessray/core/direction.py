"""Direction — a ray cast from a piece's cell, with the exposure test."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chessray.core.types import BOARD_SIZE

if TYPE_CHECKING:
    from chessray.core.cell import Cell
    from chessray.core.pieces import Piece


class Direction:
    """Cells a piece can reach along one ``(dx, dy)`` step direction.

    The ray is walked once at construction: it is ordered by distance from
    the piece and ends at the board edge, after ``desired_count`` steps, or
    on the first occupied cell (inclusive). Unless ``update_hit_graph`` is
    false, the owning piece is registered as an attacker of every cell on it.
    """

    __slots__ = ("piece", "dx", "dy", "desired_count", "_cells")

    def __init__(
        self,
        piece: Piece,
        dx: int,
        dy: int,
        desired_count: int = BOARD_SIZE,
        update_hit_graph: bool = True,
    ) -> None:
        if piece.cell is None:
            raise ValueError(f"{piece!r} is not placed on a board")
        self.piece = piece
        self.dx = dx
        self.dy = dy
        self.desired_count = desired_count
        self._cells: tuple[Cell, ...] = tuple(
            piece.cell.open_line_of_sight(dx, dy, desired_count)
        )
        if update_hit_graph:
            for cell in self._cells:
                cell.hit_by.add(piece)

    @property
    def cells(self) -> tuple[Cell, ...]:
        """Every cell on the ray, including the blocking one."""
        return self._cells

    # -- Moves --------------------------------------------------------------

    def get_possible_moves(self, enemy_capturable: bool = True) -> Iterator[Cell]:
        """Cells the piece may move to along this ray.

        The last cell is included only if it is empty, or holds an enemy
        piece and *enemy_capturable* is true.
        """
        if not self._cells:
            return
        yield from self._cells[:-1]
        last = self._cells[-1]
        if self._can_end_on(last, enemy_capturable):
            yield last

    def possible_move_count(self, enemy_capturable: bool = True) -> int:
        if not self._cells:
            return 0
        if self._can_end_on(self._cells[-1], enemy_capturable):
            return len(self._cells)
        return len(self._cells) - 1

    def _can_end_on(self, cell: Cell, enemy_capturable: bool) -> bool:
        if cell.piece is None:
            return True
        return enemy_capturable and cell.piece.color != self.piece.color

    # -- Exposure test ------------------------------------------------------

    def is_blocked_if_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        blocked: Cell,
        captured: Cell | None = None,
    ) -> bool:
        """Whether this ray cannot reach *blocked* after a hypothetical move.

        The move takes a piece from *from_cell* to *to_cell*; *captured* is an
        extra cell emptied by the move (the pawn taken en passant). Only this
        ray and a short re-walk past its current blocker are inspected.
        """
        cells = self._cells

        if blocked in cells:
            # Only a piece landing strictly in front of the target shields it.
            if to_cell in cells and cells.index(to_cell) < cells.index(blocked):
                return True
            return False

        if not cells:
            return True

        terminal = cells[-1]
        if terminal.piece is None or (
            terminal is not from_cell and terminal is not captured
        ):
            return True

        # The blocker is leaving: it either steps closer along the ray or the
        # ray extends past its old end.
        if to_cell in cells[:-1]:
            return True
        for cell in self._walk_past(terminal, from_cell, captured):
            if cell is blocked:
                return False
            if cell is to_cell:
                return True
        return True

    def _walk_past(
        self, start: Cell, from_cell: Cell, captured: Cell | None
    ) -> Iterator[Cell]:
        """Continue the ray beyond *start* for the unused step budget."""
        cell: Cell | None = start
        for _ in range(self.desired_count - len(self._cells)):
            cell = cell.open(self.dx, self.dy)
            if cell is None:
                return
            yield cell
            if cell.piece is None or cell is from_cell or cell is captured:
                continue
            return

    def __repr__(self) -> str:
        names = ",".join(cell.name for cell in self._cells)
        return f"Direction({self.dx:+d},{self.dy:+d}: {names})"
