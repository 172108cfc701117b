"""MoveRecord value object describing an executed move."""

from __future__ import annotations

from dataclasses import dataclass

from chessray.core.enums import Color, MoveFlag, PieceType
from chessray.core.types import Square, square_name

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """What :meth:`Board.move` did, in plain coordinates."""

    color: Color
    piece_type: PieceType
    origin: Square
    target: Square
    flag: MoveFlag = MoveFlag.NORMAL
    captured: PieceType | None = None
    promotion: PieceType | None = None

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def __str__(self) -> str:
        base = f"{square_name(self.origin)}{square_name(self.target)}"
        if self.promotion is not None:
            base += _PROMO_CHARS[self.promotion]
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
