"""Tests for GameController — the orchestrator."""

import pytest

from chessray.core.enums import Color, GameResult, MoveFlag, PieceType
from chessray.core.move import MoveRecord
from chessray.core.pieces import Knight, Pawn, Rook
from chessray.core.types import parse_square
from chessray.game.controller import GameController
from chessray.game.interfaces import GamePhase
from chessray.game.state import GameState

PROMOTION_FEN = "7k/P7/8/8/8/8/8/K7 w - - 0 1"
STALEMATE_FEN = "7k/8/5KQ1/8/8/8/8/8 b - - 0 1"


def _make_controller(fen: str | None = None) -> GameController:
    ctrl = GameController()
    ctrl.new_game(fen)
    return ctrl


def _select(ctrl: GameController, name: str) -> bool:
    return ctrl.select(*parse_square(name))


def _submit(ctrl: GameController, uci: str) -> bool:
    return ctrl.submit_move(parse_square(uci[:2]), parse_square(uci[2:4]))


class TestNewGame:
    def test_phase_idle(self) -> None:
        ctrl = _make_controller()
        assert ctrl.phase == GamePhase.IDLE
        assert ctrl.state.side_to_move == Color.WHITE

    def test_not_started_before_new_game(self) -> None:
        assert GameController().phase == GamePhase.NOT_STARTED

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ctrl = _make_controller(fen)
        assert ctrl.state.side_to_move == Color.BLACK
        assert ctrl.state.start_fen == fen

    def test_terminal_position_is_game_over(self) -> None:
        ctrl = GameController()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.new_game(STALEMATE_FEN)
        assert ctrl.phase == GamePhase.GAME_OVER
        assert results == [GameResult.DRAW]

    def test_restart_resets_state(self) -> None:
        ctrl = _make_controller()
        assert _submit(ctrl, "e2e4")
        ctrl.new_game()
        assert ctrl.state.side_to_move == Color.WHITE
        assert ctrl.state.last_move is None

    def test_invalid_fen_raises(self) -> None:
        with pytest.raises(ValueError):
            _make_controller("not a fen")


class TestSelect:
    def test_pick_up_own_piece(self) -> None:
        ctrl = _make_controller()
        assert _select(ctrl, "e2")
        assert ctrl.phase == GamePhase.HOLDING
        assert ctrl.state.held is ctrl.state.board.cell("e2")
        assert {c.name for c in ctrl.state.legal_targets()} == {"e3", "e4"}

    def test_opponent_piece_ignored(self) -> None:
        ctrl = _make_controller()
        assert not _select(ctrl, "e7")
        assert ctrl.phase == GamePhase.IDLE

    def test_piece_without_moves_ignored(self) -> None:
        ctrl = _make_controller()
        assert not _select(ctrl, "a1")
        assert ctrl.state.held is None

    def test_empty_cell_ignored(self) -> None:
        ctrl = _make_controller()
        assert not _select(ctrl, "e4")

    def test_off_board_ignored(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.select(8, 3)
        assert not ctrl.select(-1, 0)

    def test_drop_on_legal_target_plays(self) -> None:
        ctrl = _make_controller()
        moves: list[MoveRecord] = []
        ctrl.events.on_move.append(lambda record, state: moves.append(record))
        _select(ctrl, "e2")
        assert _select(ctrl, "e4")
        assert ctrl.phase == GamePhase.IDLE
        assert ctrl.state.side_to_move == Color.BLACK
        assert ctrl.state.held is None
        assert [str(m) for m in moves] == ["e2e4"]
        assert moves[0].flag == MoveFlag.DOUBLE_PAWN

    def test_reselect_other_piece(self) -> None:
        ctrl = _make_controller()
        _select(ctrl, "e2")
        assert _select(ctrl, "g1")
        assert ctrl.phase == GamePhase.HOLDING
        assert ctrl.state.held is ctrl.state.board.cell("g1")

    def test_illegal_target_keeps_holding(self) -> None:
        ctrl = _make_controller()
        _select(ctrl, "e2")
        assert not _select(ctrl, "e5")
        assert ctrl.phase == GamePhase.HOLDING

    def test_cancel(self) -> None:
        ctrl = _make_controller()
        _select(ctrl, "e2")
        ctrl.cancel()
        assert ctrl.phase == GamePhase.IDLE
        assert ctrl.state.held is None

    def test_cancel_when_idle_is_noop(self) -> None:
        ctrl = _make_controller()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.cancel()
        assert phases == []


class TestPromotion:
    def test_waits_for_choice(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        _select(ctrl, "a7")
        assert _select(ctrl, "a8")
        assert ctrl.phase == GamePhase.AWAIT_PROMOTION
        assert isinstance(ctrl.state.board.cell("a7").piece, Pawn)
        assert not _select(ctrl, "a1")

    def test_choice_applied(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        _select(ctrl, "a7")
        _select(ctrl, "a8")
        assert not ctrl.choose_promotion(PieceType.KING)
        assert ctrl.choose_promotion(PieceType.ROOK)
        assert isinstance(ctrl.state.board.cell("a8").piece, Rook)
        assert ctrl.state.side_to_move == Color.BLACK
        assert ctrl.state.last_move is not None
        assert ctrl.state.last_move.promotion == PieceType.ROOK

    def test_choice_outside_promotion_rejected(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        assert not ctrl.choose_promotion(PieceType.QUEEN)

    def test_cancel_abandons_promotion(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        _select(ctrl, "a7")
        _select(ctrl, "a8")
        ctrl.cancel()
        assert ctrl.phase == GamePhase.IDLE
        assert ctrl.state.pending_target is None
        assert isinstance(ctrl.state.board.cell("a7").piece, Pawn)

    def test_submit_move_with_choice(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        assert ctrl.submit_move((0, 6), (0, 7), PieceType.KNIGHT)
        assert isinstance(ctrl.state.board.cell("a8").piece, Knight)

    def test_submit_move_defaults_to_queen(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        assert _submit(ctrl, "a7a8")
        assert str(ctrl.state.last_move) == "a7a8q"

    def test_submit_move_rejects_bad_choice(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        assert not ctrl.submit_move((0, 6), (0, 7), PieceType.PAWN)
        assert ctrl.state.side_to_move == Color.WHITE


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_controller()
        assert _submit(ctrl, "g1f3")
        assert ctrl.state.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_controller()
        assert not _submit(ctrl, "e2e5")
        assert ctrl.state.side_to_move == Color.WHITE

    def test_wrong_side_rejected(self) -> None:
        ctrl = _make_controller()
        assert not _submit(ctrl, "e7e5")

    def test_empty_origin_rejected(self) -> None:
        ctrl = _make_controller()
        assert not _submit(ctrl, "e4e5")

    def test_off_board_rejected(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.submit_move((4, 1), (4, 9))

    def test_alternating_turns(self) -> None:
        ctrl = _make_controller()
        for uci in ("e2e4", "e7e5", "g1f3", "b8c6"):
            assert _submit(ctrl, uci)
        assert ctrl.state.side_to_move == Color.WHITE
        assert str(ctrl.state.last_move) == "b8c6"

    def test_checkmate_ends_game(self) -> None:
        ctrl = _make_controller()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        for uci in ("f2f3", "e7e5", "g2g4", "d8h4"):
            assert _submit(ctrl, uci)
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.state.result == GameResult.BLACK_WINS
        assert results == [GameResult.BLACK_WINS]
        assert not _submit(ctrl, "e1f2")
        assert not _select(ctrl, "e1")


class TestEvents:
    def test_phase_sequence(self) -> None:
        ctrl = GameController()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game()
        _select(ctrl, "e2")
        _select(ctrl, "e4")
        assert phases == [GamePhase.IDLE, GamePhase.HOLDING, GamePhase.IDLE]

    def test_move_callback_receives_state(self) -> None:
        ctrl = _make_controller()
        seen: list[GameState] = []
        ctrl.events.on_move.append(lambda record, state: seen.append(state))
        _submit(ctrl, "d2d4")
        assert seen == [ctrl.state]
