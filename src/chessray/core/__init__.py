"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessray.core import Board, Color

    board = Board.initial()
    board.turn_start(Color.WHITE)
    for origin, target in board.legal_moves(Color.WHITE):
        print(origin.name, target.name)
"""

from chessray.core.board import Board
from chessray.core.cell import Cell
from chessray.core.direction import Direction
from chessray.core.enums import PROMOTION_TYPES, Color, GameResult, MoveFlag, PieceType
from chessray.core.errors import (
    BoardInvariantError,
    ChessError,
    IllegalMoveError,
    OutOfBoardError,
)
from chessray.core.fen import STARTING_FEN, board_from_fen, board_to_fen
from chessray.core.move import MoveRecord
from chessray.core.pieces import (
    Bishop,
    King,
    Knight,
    Pawn,
    Piece,
    Queen,
    Rook,
    create_piece,
    piece_from_char,
)
from chessray.core.types import Square, is_on_board, parse_square, square_name

__all__ = [
    # Enums / flags
    "PROMOTION_TYPES",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "is_on_board",
    "parse_square",
    "square_name",
    # Errors
    "BoardInvariantError",
    "ChessError",
    "IllegalMoveError",
    "OutOfBoardError",
    # Domain objects
    "Board",
    "Cell",
    "Direction",
    "MoveRecord",
    "Piece",
    "Pawn",
    "Knight",
    "Bishop",
    "Rook",
    "Queen",
    "King",
    "create_piece",
    "piece_from_char",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_to_fen",
]
