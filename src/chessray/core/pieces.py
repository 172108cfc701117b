"""Piece hierarchy: per-variant move generation and the exposure test."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING, ClassVar

from chessray.core.direction import Direction
from chessray.core.enums import Color, PieceType
from chessray.core.types import BOARD_SIZE

if TYPE_CHECKING:
    from chessray.core.cell import Cell

Offset = tuple[int, int]

BISHOP_DIRS: tuple[Offset, ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[Offset, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[Offset, ...] = ROOK_DIRS + BISHOP_DIRS

KNIGHT_OFFSETS: tuple[Offset, ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


class Piece(ABC):
    """Abstract chess piece living on a :class:`~chessray.core.cell.Cell`.

    ``possible_moves`` are pseudo-legal; ``legal_moves`` is the subset the
    board keeps after king-safety filtering. Both are rebuilt every turn:
    first :meth:`recalculate` for every piece on the board, then the board
    filters the side to move.
    """

    piece_type: ClassVar[PieceType]
    char: ClassVar[str]

    def __init__(self, color: Color, moved: bool = False) -> None:
        self.color = color
        self._moved = moved
        self.cell: Cell | None = None
        self.legal_moves: list[Cell] = []

    @classmethod
    def promoted_from(cls, piece: Piece) -> Piece:
        """Replacement for *piece* keeping its color and moved-flag."""
        return cls(piece.color, moved=piece.moved)

    # -- State --------------------------------------------------------------

    @property
    def moved(self) -> bool:
        """False until the first move, then permanently true."""
        return self._moved

    def on_place(self, cell: Cell) -> None:
        """Attach to *cell* at setup or promotion; does not recalculate."""
        self.cell = cell

    def on_move(self, cell: Cell) -> None:
        """Attach to *cell* after a move; does not recalculate."""
        self.cell = cell
        self._moved = True

    # -- Display ------------------------------------------------------------

    @property
    def fen_char(self) -> str:
        """Uppercase for white, lowercase for black."""
        return self.char if self.color == Color.WHITE else self.char.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    def __repr__(self) -> str:
        where = self.cell.name if self.cell is not None else "-"
        return f"{type(self).__name__}({self.color}, {where})"

    # -- Rules --------------------------------------------------------------

    @abstractmethod
    def possible_moves(self) -> Iterator[Cell]:
        """Pseudo-legal destinations; a fresh iterator on every call."""

    @abstractmethod
    def recalculate(self) -> None:
        """Rebuild move data and register in the board's attacker sets."""

    @abstractmethod
    def is_blocked_if_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        blocked: Cell,
        captured: Cell | None = None,
    ) -> bool:
        """Whether this piece cannot hit *blocked* once from_cell→to_cell is played.

        Captures of this piece itself are the caller's business.
        """

    def can_capture(self, cell: Cell | None) -> bool:
        return (
            cell is not None
            and cell.piece is not None
            and cell.piece.color != self.color
        )

    def attacks(self, cell: Cell) -> bool:
        return self in cell.hit_by


class _SlidingPiece(Piece):
    """Piece whose moves are a fixed set of Directions."""

    directions_spec: ClassVar[tuple[Offset, ...]]
    max_steps: ClassVar[int] = BOARD_SIZE

    def __init__(self, color: Color, moved: bool = False) -> None:
        super().__init__(color, moved)
        self.directions: list[Direction] = []

    def recalculate(self) -> None:
        self.directions = [
            Direction(self, dx, dy, self.max_steps) for dx, dy in self.directions_spec
        ]

    def possible_moves(self) -> Iterator[Cell]:
        for direction in self.directions:
            yield from direction.get_possible_moves()

    def is_blocked_if_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        blocked: Cell,
        captured: Cell | None = None,
    ) -> bool:
        # Any single open direction is enough to hit the target.
        return all(
            direction.is_blocked_if_move(from_cell, to_cell, blocked, captured)
            for direction in self.directions
        )


class Rook(_SlidingPiece):
    piece_type = PieceType.ROOK
    char = "R"
    directions_spec = ROOK_DIRS


class Bishop(_SlidingPiece):
    piece_type = PieceType.BISHOP
    char = "B"
    directions_spec = BISHOP_DIRS


class Queen(_SlidingPiece):
    piece_type = PieceType.QUEEN
    char = "Q"
    directions_spec = QUEEN_DIRS


class King(_SlidingPiece):
    """One-step rays in all eight directions plus castling.

    Castling here only checks the static conditions (king and rook unmoved,
    nothing in between); attacked squares are the board's concern.
    """

    piece_type = PieceType.KING
    char = "K"
    directions_spec = QUEEN_DIRS
    max_steps = 1

    def __init__(self, color: Color, moved: bool = False) -> None:
        super().__init__(color, moved)
        self.can_castle_left = False
        self.can_castle_right = False

    def recalculate(self) -> None:
        super().recalculate()
        self.can_castle_left = self._castling_open(0, range(1, 4))
        self.can_castle_right = self._castling_open(7, range(5, 7))

    def _castling_open(self, rook_x: int, between: range) -> bool:
        cell = self.cell
        rank = self.color.home_rank
        if self.moved or cell is None or cell.coords != (4, rank):
            return False
        board = cell.board
        rook = board.get_cell(rook_x, rank).piece
        if not isinstance(rook, Rook) or rook.color != self.color or rook.moved:
            return False
        return all(board.get_cell(x, rank).piece is None for x in between)

    def castling_targets(self) -> Iterator[Cell]:
        if self.cell is None:
            return
        board = self.cell.board
        rank = self.color.home_rank
        if self.can_castle_left:
            yield board.get_cell(2, rank)
        if self.can_castle_right:
            yield board.get_cell(6, rank)

    def possible_moves(self) -> Iterator[Cell]:
        yield from super().possible_moves()
        yield from self.castling_targets()


class Knight(Piece):
    """Fixed-offset jumper; its attacks cannot be obstructed."""

    piece_type = PieceType.KNIGHT
    char = "N"

    def __init__(self, color: Color, moved: bool = False) -> None:
        super().__init__(color, moved)
        self.targets: list[Cell] = []

    def recalculate(self) -> None:
        cell = self.cell
        if cell is None:
            raise ValueError(f"{self!r} is not placed on a board")
        self.targets = []
        for dx, dy in KNIGHT_OFFSETS:
            target = cell.open(dx, dy)
            if target is not None:
                target.hit_by.add(self)
                self.targets.append(target)

    def possible_moves(self) -> Iterator[Cell]:
        for target in self.targets:
            if target.piece is None or target.piece.color != self.color:
                yield target

    def is_blocked_if_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        blocked: Cell,
        captured: Cell | None = None,
    ) -> bool:
        return blocked not in self.targets


class Pawn(Piece):
    """Forward pushes that never capture, diagonal hits that only capture."""

    piece_type = PieceType.PAWN
    char = "P"

    def __init__(self, color: Color, moved: bool = False) -> None:
        super().__init__(color, moved)
        self.forward: Direction | None = None
        self.hits: list[Cell] = []

    def recalculate(self) -> None:
        cell = self.cell
        if cell is None:
            raise ValueError(f"{self!r} is not placed on a board")
        step = self.color.forward
        self.forward = Direction(
            self, 0, step, 1 if self.moved else 2, update_hit_graph=False
        )
        self.hits = []
        for dx in (-1, 1):
            hit = cell.open(dx, step)
            if hit is not None:
                hit.hit_by.add(self)
                self.hits.append(hit)

    def possible_moves(self) -> Iterator[Cell]:
        if self.forward is not None:
            yield from self.forward.get_possible_moves(enemy_capturable=False)
        for hit in self.hits:
            if self.can_capture(hit):
                yield hit

    def is_blocked_if_move(
        self,
        from_cell: Cell,
        to_cell: Cell,
        blocked: Cell,
        captured: Cell | None = None,
    ) -> bool:
        return blocked not in self.hits

    def can_capture(self, cell: Cell | None) -> bool:
        if super().can_capture(cell):
            return True
        return (
            cell is not None
            and cell is cell.board.en_passant
            and cell.y == self.color.en_passant_rank
        )


_PIECE_CLASSES: dict[PieceType, type[Piece]] = {
    cls.piece_type: cls for cls in (Pawn, Knight, Bishop, Rook, Queen, King)
}
_CHAR_TYPES: dict[str, PieceType] = {
    cls.char: piece_type for piece_type, cls in _PIECE_CLASSES.items()
}


def piece_class(piece_type: PieceType) -> type[Piece]:
    return _PIECE_CLASSES[piece_type]


def create_piece(piece_type: PieceType, color: Color, moved: bool = False) -> Piece:
    """Instantiate the variant for *piece_type*."""
    return _PIECE_CLASSES[piece_type](color, moved)


def piece_from_char(char: str, moved: bool = False) -> Piece:
    """Create piece from FEN character, e.g. 'N' → white knight."""
    try:
        piece_type = _CHAR_TYPES[char.upper()]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None
    color = Color.WHITE if char.isupper() else Color.BLACK
    return create_piece(piece_type, color, moved)
