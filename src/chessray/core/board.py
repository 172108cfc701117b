"""Board — the 8x8 cell grid, the pieces on it, and the turn protocol."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from chessray.core.cell import Cell
from chessray.core.enums import (
    PROMOTION_TYPES,
    Color,
    GameResult,
    MoveFlag,
    PieceType,
)
from chessray.core.errors import BoardInvariantError, IllegalMoveError, OutOfBoardError
from chessray.core.move import MoveRecord
from chessray.core.pieces import (
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    Queen,
    Rook,
    piece_class,
)
from chessray.core.types import BOARD_SIZE, Square, is_on_board, parse_square

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[type[Piece], ...] = (
    Rook,
    Knight,
    Bishop,
    Queen,
    King,
    Bishop,
    Knight,
    Rook,
)


class Board:
    """Owns every Cell and Piece of one game and runs the per-turn protocol.

    A turn is::

        board.turn_start(color)      # rebuild attacks, filter legal moves
        ...                          # caller picks a cell from piece.legal_moves
        board.move(origin, target)   # mutate; the caller then starts the next turn
    """

    __slots__ = (
        "_cells",
        "_pieces",
        "current_player",
        "in_check",
        "result",
        "_en_passant",
        "_en_passant_fresh",
    )

    def __init__(self) -> None:
        self._cells: list[Cell] = [
            Cell(self, x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)
        ]
        self._pieces: list[Piece] = []
        self.current_player = Color.WHITE
        self.in_check = False
        self.result = GameResult.IN_PROGRESS
        self._en_passant: Cell | None = None
        # True until the first turn_start after the double step that set it.
        self._en_passant_fresh = False

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        board = cls()
        for x, piece_cls in enumerate(_BACK_RANK):
            board.place(piece_cls(Color.WHITE), x, 0)
            board.place(Pawn(Color.WHITE), x, 1)
            board.place(Pawn(Color.BLACK), x, 6)
            board.place(piece_cls(Color.BLACK), x, 7)
        return board

    # -- Element access -----------------------------------------------------

    def get_cell(self, x: int, y: int) -> Cell:
        """Bounds-checked cell lookup."""
        if not is_on_board(x, y):
            raise OutOfBoardError(x, y)
        return self._cells[y * BOARD_SIZE + x]

    def cell(self, name: str) -> Cell:
        """Cell by algebraic name, e.g. ``board.cell("e4")``."""
        return self.get_cell(*parse_square(name))

    def __getitem__(self, sq: Square) -> Cell:
        return self.get_cell(*sq)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def open(self, x: int, y: int, dx: int, dy: int) -> Cell | None:
        """Single step from ``(x, y)``; ``None`` past the edge."""
        return self.get_cell(x, y).open(dx, dy)

    def open_line_of_sight(
        self, x0: int, y0: int, dx: int, dy: int, max_steps: int = BOARD_SIZE
    ) -> list[Cell]:
        """Ray walk from ``(x0, y0)``, edge- and first-occupant-terminated."""
        return list(self.get_cell(x0, y0).open_line_of_sight(dx, dy, max_steps))

    @property
    def en_passant(self) -> Cell | None:
        """Cell a pawn may capture onto en passant this turn."""
        return self._en_passant

    # -- Setup --------------------------------------------------------------

    def place(self, piece: Piece, x: int, y: int) -> None:
        """Put a new *piece* on ``(x, y)``; does not recalculate."""
        cell = self.get_cell(x, y)
        if cell.piece is not None:
            raise BoardInvariantError(
                f"{cell.name} is already occupied by {cell.piece!r}"
            )
        cell.piece = piece
        piece.on_place(cell)
        self._pieces.append(piece)

    def remove(self, x: int, y: int) -> Piece | None:
        """Take the piece off ``(x, y)`` and return it."""
        cell = self.get_cell(x, y)
        if cell.piece is None:
            return None
        return self._take(cell)

    def set_en_passant(self, cell: Cell | None) -> None:
        """Set the en-passant target, valid for the next turn only."""
        self._en_passant = cell
        self._en_passant_fresh = cell is not None

    def _take(self, cell: Cell) -> Piece:
        piece = cell.piece
        assert piece is not None
        cell.piece = None
        self._pieces.remove(piece)
        piece.cell = None
        piece.legal_moves = []
        return piece

    # -- Queries ------------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces on the board, optionally only those of *color*."""
        if color is None:
            return list(self._pieces)
        return [piece for piece in self._pieces if piece.color == color]

    def king(self, color: Color) -> King:
        kings = [p for p in self._pieces if isinstance(p, King) and p.color == color]
        if len(kings) != 1:
            raise BoardInvariantError(
                f"Expected one {color.name} king, found {len(kings)}"
            )
        return kings[0]

    def king_cell(self, color: Color) -> Cell:
        cell = self.king(color).cell
        assert cell is not None
        return cell

    def is_in_check(self, color: Color) -> bool:
        """Whether *color*'s king is in the opponent's attacker set.

        Reads the attacker sets of the last :meth:`turn_start`.
        """
        return self.king_cell(color).is_attacked_by(color.opposite)

    def legal_moves(self, color: Color | None = None) -> Iterator[tuple[Cell, Cell]]:
        """``(origin, target)`` pairs computed by the last :meth:`turn_start`."""
        for piece in self.pieces(color):
            origin = piece.cell
            assert origin is not None
            for target in piece.legal_moves:
                yield origin, target

    def legal_move_count(self, color: Color | None = None) -> int:
        return sum(len(piece.legal_moves) for piece in self.pieces(color))

    @property
    def is_checkmate(self) -> bool:
        return self.result != GameResult.IN_PROGRESS and self.in_check

    @property
    def is_stalemate(self) -> bool:
        return self.result == GameResult.DRAW and not self.in_check

    @property
    def is_game_over(self) -> bool:
        return self.result != GameResult.IN_PROGRESS

    def is_promotable(self, from_cell: Cell, to_cell: Cell) -> bool:
        """Whether moving from *from_cell* to *to_cell* promotes a pawn."""
        piece = from_cell.piece
        return isinstance(piece, Pawn) and to_cell.y == piece.color.promotion_rank

    # -- Turn protocol ------------------------------------------------------

    def turn_start(self, color: Color) -> None:
        """Recompute every piece, then filter *color*'s legal moves.

        All pieces of both colors are recalculated before any legal-move
        filtering: the king-safety test reads the opponent's rays.
        """
        self._check_invariants()

        if self._en_passant is not None and not self._en_passant_fresh:
            self._en_passant = None
        self._en_passant_fresh = False
        self.current_player = color

        for cell in self._cells:
            cell.hit_by.clear()
        for piece in self._pieces:
            piece.recalculate()

        for piece in self._pieces:
            if piece.color != color:
                piece.legal_moves = []
                continue
            piece.legal_moves = [
                target
                for target in piece.possible_moves()
                if self._is_legal(piece, target)
            ]

        self.in_check = self.is_in_check(color)
        count = self.legal_move_count(color)
        if count:
            self.result = GameResult.IN_PROGRESS
        elif self.in_check:
            self.result = (
                GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
            )
            _LOGGER.info("Checkmate: %s has no legal moves and is in check", color)
        else:
            self.result = GameResult.DRAW
            _LOGGER.info("Stalemate: %s has no legal moves", color)

        _LOGGER.debug(
            "Turn start for %s: %d legal moves%s",
            color,
            count,
            " (in check)" if self.in_check else "",
        )

    def _check_invariants(self) -> None:
        for color in Color:
            self.king(color)
        for piece in self._pieces:
            if piece.cell is None or piece.cell.piece is not piece:
                raise BoardInvariantError(f"{piece!r} is not on the cell it claims")

    def _is_legal(self, piece: Piece, target: Cell) -> bool:
        origin = piece.cell
        assert origin is not None
        if isinstance(piece, King):
            if abs(target.x - origin.x) == 2:
                return self._is_castling_safe(piece, target)
            return self._is_safe_after(piece, target, target)
        return self._is_safe_after(piece, target, self.king_cell(piece.color))

    def _is_castling_safe(self, king: King, target: Cell) -> bool:
        """The king may not castle out of, through, or into check."""
        origin = king.cell
        assert origin is not None
        if origin.is_attacked_by(king.color.opposite):
            return False
        step = 1 if target.x > origin.x else -1
        passing = self.get_cell(origin.x + step, origin.y)
        return self._is_safe_after(king, passing, passing) and self._is_safe_after(
            king, target, target
        )

    def _is_safe_after(self, piece: Piece, target: Cell, king_cell: Cell) -> bool:
        """Whether *king_cell* is unattacked once *piece* moves to *target*."""
        origin = piece.cell
        assert origin is not None
        captured: Cell | None = None
        if (
            isinstance(piece, Pawn)
            and target is self._en_passant
            and target.x != origin.x
            and target.piece is None
        ):
            captured = self.get_cell(target.x, origin.y)

        for enemy in self._pieces:
            if enemy.color == piece.color:
                continue
            if enemy.cell is target or enemy.cell is captured:
                continue
            if not enemy.is_blocked_if_move(origin, target, king_cell, captured):
                return False
        return True

    # -- Mutation -----------------------------------------------------------

    def move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        promotion: PieceType = PieceType.QUEEN,
    ) -> MoveRecord:
        """Play a legal move of the current player.

        Handles captures, the castling rook hop, en passant, and promotion
        to *promotion*. Does not start the next turn.
        """
        piece = from_cell.piece
        if piece is None:
            raise IllegalMoveError(f"No piece on {from_cell.name}")
        if piece.color != self.current_player or to_cell not in piece.legal_moves:
            raise IllegalMoveError(
                f"{from_cell.name}{to_cell.name} is not a legal move for {piece!r}"
            )
        if promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {promotion.name}")

        flag = MoveFlag.NORMAL
        captured: Piece | None = None
        if to_cell.piece is not None:
            captured = self._take(to_cell)
        elif (
            isinstance(piece, Pawn)
            and to_cell is self._en_passant
            and to_cell.x != from_cell.x
        ):
            captured = self._take(self.get_cell(to_cell.x, from_cell.y))
            flag = MoveFlag.EN_PASSANT

        from_cell.piece = None
        to_cell.piece = piece
        piece.on_move(to_cell)

        if isinstance(piece, King) and abs(to_cell.x - from_cell.x) == 2:
            flag = self._castle_rook(from_cell, to_cell)

        next_en_passant: Cell | None = None
        if isinstance(piece, Pawn) and abs(to_cell.y - from_cell.y) == 2:
            next_en_passant = self.get_cell(from_cell.x, (from_cell.y + to_cell.y) // 2)
            flag = MoveFlag.DOUBLE_PAWN
        self.set_en_passant(next_en_passant)

        promoted: PieceType | None = None
        if isinstance(piece, Pawn) and to_cell.y == piece.color.promotion_rank:
            replacement = piece_class(promotion).promoted_from(piece)
            self._pieces[self._pieces.index(piece)] = replacement
            piece.cell = None
            to_cell.piece = replacement
            replacement.on_place(to_cell)
            promoted = promotion
            flag = MoveFlag.PROMOTION

        # One move per turn: nothing is legal again until the next turn_start.
        for mover in self._pieces:
            if mover.color == piece.color:
                mover.legal_moves = []

        record = MoveRecord(
            color=piece.color,
            piece_type=piece.piece_type,
            origin=from_cell.coords,
            target=to_cell.coords,
            flag=flag,
            captured=captured.piece_type if captured is not None else None,
            promotion=promoted,
        )
        _LOGGER.debug("Played %s (%s)", record, flag.name)
        return record

    def _castle_rook(self, king_from: Cell, king_to: Cell) -> MoveFlag:
        rank = king_from.y
        if king_to.x > king_from.x:
            rook_from, rook_to, flag = 7, 5, MoveFlag.CASTLE_KINGSIDE
        else:
            rook_from, rook_to, flag = 0, 3, MoveFlag.CASTLE_QUEENSIDE
        source = self.get_cell(rook_from, rank)
        rook = source.piece
        if not isinstance(rook, Rook):
            raise BoardInvariantError(f"No rook on {source.name} to castle with")
        source.piece = None
        dest = self.get_cell(rook_to, rank)
        dest.piece = rook
        rook.on_move(dest)
        return flag

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for y in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for x in range(BOARD_SIZE):
                piece = self.get_cell(x, y).piece
                row.append(piece.fen_char if piece else ".")
            rows.append(f"{y + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
