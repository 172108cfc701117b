"""FEN parsing and serialization.

A board keeps moved-flags rather than castling rights, so castling rights
are mapped onto those flags: a king or corner rook without a matching right
is loaded as already moved. A pawn counts as unmoved only on its starting
rank. The half-move and full-move clocks are accepted but not tracked.
"""

from __future__ import annotations

from chessray.core.board import Board
from chessray.core.enums import Color
from chessray.core.pieces import King, Pawn, Rook, piece_from_char
from chessray.core.types import parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Castling letter -> (color, rook file)
_CASTLING_RIGHTS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string into a :class:`Board` with ``current_player`` set.

    The board is not recalculated; call :meth:`Board.turn_start` next.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Castling rights (needed before placing pieces)
    rights: set[str] = set()
    if castling_part != "-":
        for ch in castling_part:
            if ch not in _CASTLING_RIGHTS or ch in rights:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            rights.add(ch)
    rook_rights = {_CASTLING_RIGHTS[ch] for ch in rights}
    king_rights = {color for color, _ in rook_rights}

    # 2. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        y = 7 - rank_idx
        x = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                x += step
            else:
                if x >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                moved = _loads_as_moved(ch, x, y, rook_rights, king_rights)
                board.place(piece_from_char(ch, moved=moved), x, y)
                x += 1
            if x > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if x != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 3. Side to move
    if side_part == "w":
        board.current_player = Color.WHITE
    elif side_part == "b":
        board.current_player = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 4. En passant
    if ep_part != "-":
        x, y = parse_square(ep_part)
        if y != board.current_player.en_passant_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        target = board.get_cell(x, y)
        pushed = board.get_cell(x, y - board.current_player.forward).piece
        if (
            target.piece is not None
            or not isinstance(pushed, Pawn)
            or pushed.color == board.current_player
        ):
            raise ValueError(
                f"Invalid FEN en-passant square without a pushed pawn: {ep_part!r}"
            )
        board.set_en_passant(target)

    # 5-6. Clocks (optional, validated only)
    for field in parts[4:]:
        if not field.isdigit():
            raise ValueError(f"Invalid FEN clock field: {field!r}")

    return board


def _loads_as_moved(
    char: str,
    x: int,
    y: int,
    rook_rights: set[tuple[Color, int]],
    king_rights: set[Color],
) -> bool:
    color = Color.WHITE if char.isupper() else Color.BLACK
    kind = char.upper()
    if kind == Pawn.char:
        return y != color.pawn_rank
    if kind == King.char:
        return color not in king_rights or (x, y) != (4, color.home_rank)
    if kind == Rook.char:
        return (color, x) not in rook_rights or y != color.home_rank
    return True


def board_to_fen(board: Board) -> str:
    """Serialise *board* to FEN (clocks are written as ``0 1``)."""
    # 1. Placement
    rows: list[str] = []
    for y in range(7, -1, -1):
        empty = 0
        row = ""
        for x in range(8):
            piece = board.get_cell(x, y).piece
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += piece.fen_char
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if board.current_player == Color.WHITE else "b"

    # 3. Castling, derived from moved-flags
    castling_str = ""
    for ch, (color, rook_x) in _CASTLING_RIGHTS.items():
        rank = color.home_rank
        king = board.get_cell(4, rank).piece
        rook = board.get_cell(rook_x, rank).piece
        if (
            isinstance(king, King)
            and isinstance(rook, Rook)
            and king.color == color
            and rook.color == color
            and not king.moved
            and not rook.moved
        ):
            castling_str += ch
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep = board.en_passant
    ep_str = square_name(ep.coords) if ep is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} 0 1"
