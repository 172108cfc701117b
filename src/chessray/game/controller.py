"""GameController — the central orchestrator of a local two-player game.

Coordinates: GameState, Board turn protocol, promotion choice.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessray.core.cell import Cell
from chessray.core.enums import PROMOTION_TYPES, GameResult, PieceType
from chessray.core.errors import OutOfBoardError
from chessray.core.move import MoveRecord
from chessray.core.types import Square
from chessray.game.interfaces import GamePhase, IGameController
from chessray.game.state import GameState

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, "GameState"], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: selection, promotion, turn hand-off.

    Thread-safety: methods are designed to be called from a single thread
    (the main/UI thread). A turn's recomputation always finishes before the
    next call is accepted.
    """

    __slots__ = ("_state", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> GamePhase:
        return self._state.phase

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        self._state = GameState()
        self._state.setup(fen)
        _LOGGER.info("New game from %s", self._state.start_fen)
        self._emit_phase(self._state.phase)
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)

    def select(self, x: int, y: int) -> bool:
        state = self._state
        if state.phase not in (GamePhase.IDLE, GamePhase.HOLDING):
            return False
        try:
            cell = state.board.get_cell(x, y)
        except OutOfBoardError:
            _LOGGER.debug("Ignoring click outside the board at (%d, %d)", x, y)
            return False

        if state.phase == GamePhase.HOLDING and cell in state.legal_targets():
            assert state.held is not None
            if state.board.is_promotable(state.held, cell):
                state.pending_target = cell
                self._set_phase(GamePhase.AWAIT_PROMOTION)
            else:
                self._play(state.held, cell, PieceType.QUEEN)
            return True

        if self._can_pick_up(cell):
            state.held = cell
            self._set_phase(GamePhase.HOLDING)
            return True

        _LOGGER.debug("Ignoring selection of %s", cell.name)
        return False

    def choose_promotion(self, piece_type: PieceType) -> bool:
        state = self._state
        if state.phase != GamePhase.AWAIT_PROMOTION:
            return False
        if piece_type not in PROMOTION_TYPES:
            return False
        assert state.held is not None and state.pending_target is not None
        self._play(state.held, state.pending_target, piece_type)
        return True

    def cancel(self) -> None:
        state = self._state
        if state.phase not in (GamePhase.HOLDING, GamePhase.AWAIT_PROMOTION):
            return
        state.held = None
        state.pending_target = None
        self._set_phase(GamePhase.IDLE)

    def submit_move(
        self,
        origin: Square,
        target: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        state = self._state
        if state.phase not in (GamePhase.IDLE, GamePhase.HOLDING):
            return False

        try:
            from_cell = state.board.get_cell(*origin)
            to_cell = state.board.get_cell(*target)
        except OutOfBoardError:
            _LOGGER.debug("Rejected off-board move %s -> %s", origin, target)
            return False

        piece = from_cell.piece
        if piece is None or not self._can_pick_up(from_cell):
            _LOGGER.debug("Rejected move from %s", from_cell.name)
            return False
        if to_cell not in piece.legal_moves:
            _LOGGER.debug("Rejected illegal move %s%s", from_cell.name, to_cell.name)
            return False
        if promotion is None:
            promotion = PieceType.QUEEN
        elif promotion not in PROMOTION_TYPES:
            return False

        self._play(from_cell, to_cell, promotion)
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _can_pick_up(self, cell: Cell) -> bool:
        piece = cell.piece
        return (
            piece is not None
            and piece.color == self._state.side_to_move
            and bool(piece.legal_moves)
        )

    def _play(self, origin: Cell, target: Cell, promotion: PieceType) -> None:
        record = self._state.apply_move(origin, target, promotion)
        _LOGGER.info("%s played %s", record.color, record)
        self._emit_move(record)
        self._emit_phase(self._state.phase)
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)

    def _set_phase(self, phase: GamePhase) -> None:
        self._state.phase = phase
        self._emit_phase(phase)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._state)

    def _emit_game_over(self, result: GameResult) -> None:
        _LOGGER.info("Game over: %s", result.name)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
