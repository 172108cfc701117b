"""Game state — the board plus the session's phase and selection."""

from __future__ import annotations

from dataclasses import dataclass, field

from chessray.core.board import Board
from chessray.core.cell import Cell
from chessray.core.enums import Color, GameResult, PieceType
from chessray.core.fen import STARTING_FEN, board_from_fen
from chessray.core.move import MoveRecord
from chessray.game.interfaces import GamePhase


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, held piece, pending promotion.

    This is a pure data/logic class — no threading, no UI.
    """

    board: Board = field(init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    held: Cell | None = field(default=None, init=False)
    pending_target: Cell | None = field(default=None, init=False)
    last_move: MoveRecord | None = field(default=None, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the game and start the first turn."""
        self.start_fen = fen or STARTING_FEN
        self.board = board_from_fen(self.start_fen)
        self.held = None
        self.pending_target = None
        self.last_move = None
        self._start_turn(self.board.current_player)

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(
        self,
        origin: Cell,
        target: Cell,
        promotion: PieceType = PieceType.QUEEN,
    ) -> MoveRecord:
        """Play a legal move and hand the turn to the opponent.

        Caller is responsible for legality check.
        """
        mover = self.board.current_player
        record = self.board.move(origin, target, promotion)
        self.last_move = record
        self.held = None
        self.pending_target = None
        self._start_turn(mover.opposite)
        return record

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.board.current_player

    @property
    def result(self) -> GameResult:
        return self.board.result

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    def legal_targets(self) -> list[Cell]:
        """Legal destinations of the held piece."""
        if self.held is None or self.held.piece is None:
            return []
        return list(self.held.piece.legal_moves)

    # ── Internal ─────────────────────────────────────────────────────────

    def _start_turn(self, color: Color) -> None:
        self.board.turn_start(color)
        if self.board.is_game_over:
            self.phase = GamePhase.GAME_OVER
        else:
            self.phase = GamePhase.IDLE
