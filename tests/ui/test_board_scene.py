"""Tests for BoardScene helpers, highlights and promotion handling."""

from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF

from chessray.core.enums import PieceType
from chessray.core.pieces import Knight
from chessray.core.types import parse_square
from chessray.game.controller import GameController
from chessray.game.interfaces import GamePhase
from chessray.ui.board.board_scene import BoardScene
from chessray.ui.styles.theme import BoardTheme

PROMOTION_FEN = "7k/P7/8/8/8/8/8/K7 w - - 0 1"


def _scene(fen: str | None = None) -> tuple[BoardScene, GameController]:
    ctrl = GameController()
    ctrl.new_game(fen)
    return BoardScene(ctrl), ctrl


def test_pos_to_square_respects_orientation() -> None:
    scene = BoardScene()
    scene.set_flipped(False)
    assert scene._pos_to_square(scene.sceneRect().topLeft()) == parse_square("a8")

    scene.set_flipped(True)
    assert scene._pos_to_square(scene.sceneRect().topLeft()) == parse_square("h1")


def test_pos_outside_board_is_none() -> None:
    scene = BoardScene()
    assert scene._pos_to_square(QPointF(-5, 10)) is None
    assert scene._pos_to_square(QPointF(10, BoardScene.TILE * 8 + 1)) is None


def test_scene_without_controller_draws_empty_board() -> None:
    scene = BoardScene()
    assert len(scene._square_items) == 64
    assert scene._piece_items == {}
    scene.click_square((4, 1))
    assert scene._highlight_items == []


def test_set_show_coordinates_toggles_all_labels_visibility() -> None:
    scene = BoardScene()
    assert len(scene._coord_items) == 16

    scene.set_show_coordinates(False)
    assert all(not item.isVisible() for item in scene._coord_items)

    scene.set_show_coordinates(True)
    assert all(item.isVisible() for item in scene._coord_items)


def test_pieces_drawn_from_board() -> None:
    scene, _ctrl = _scene()
    assert len(scene._piece_items) == 32
    assert scene._piece_items[parse_square("e1")].text() == "♔"
    assert scene._piece_items[parse_square("d8")].text() == "♛"


def test_stuck_pieces_marked_at_start() -> None:
    scene, _ctrl = _scene()
    # Rooks, bishops, queen and king cannot move yet.
    assert len(scene._highlight_items) == 6

    scene.set_show_stuck_pieces(False)
    assert scene._highlight_items == []


def test_click_holds_piece_and_marks_targets() -> None:
    scene, ctrl = _scene()
    scene.set_show_stuck_pieces(False)
    scene.click_square(parse_square("e2"))
    assert ctrl.phase == GamePhase.HOLDING
    # Held cell plus e3 and e4.
    assert len(scene._highlight_items) == 3

    scene.set_show_legal_moves(False)
    assert len(scene._highlight_items) == 1


def test_click_target_plays_move() -> None:
    scene, ctrl = _scene()
    scene.click_square(parse_square("g1"))
    scene.click_square(parse_square("f3"))
    assert isinstance(ctrl.state.board.cell("f3").piece, Knight)
    assert parse_square("f3") in scene._piece_items
    assert parse_square("g1") not in scene._piece_items


def test_check_highlighted() -> None:
    scene, _ctrl = _scene("4k3/8/8/8/8/8/8/4K2r w - - 0 1")
    scene.set_show_stuck_pieces(False)
    assert len(scene._highlight_items) == 1


def test_inspect_overlays_attacked_cells() -> None:
    scene, _ctrl = _scene()
    scene.set_show_stuck_pieces(False)
    scene.inspect(parse_square("g1"))
    # g1 knight hits e2, f3 and h3.
    assert len(scene._highlight_items) == 3

    scene.inspect(parse_square("g1"))
    assert scene._highlight_items == []

    scene.inspect(parse_square("g1"))
    scene.set_show_attacked_cells(False)
    assert scene._highlight_items == []


def test_inspect_empty_cell_clears_overlay() -> None:
    scene, _ctrl = _scene()
    scene.set_show_stuck_pieces(False)
    scene.inspect(parse_square("g1"))
    scene.inspect(parse_square("e4"))
    assert scene._highlight_items == []


def test_promotion_cancel_keeps_pawn(monkeypatch: pytest.MonkeyPatch) -> None:
    scene, ctrl = _scene(PROMOTION_FEN)
    monkeypatch.setattr(
        "chessray.ui.board.board_scene.PromotionDialog.ask",
        lambda _color, _parent: None,
    )

    scene.click_square(parse_square("a7"))
    scene.click_square(parse_square("a8"))

    assert ctrl.phase == GamePhase.IDLE
    assert ctrl.state.board.cell("a8").piece is None


def test_promotion_uses_selected_piece(monkeypatch: pytest.MonkeyPatch) -> None:
    scene, ctrl = _scene(PROMOTION_FEN)
    monkeypatch.setattr(
        "chessray.ui.board.board_scene.PromotionDialog.ask",
        lambda _color, _parent: PieceType.KNIGHT,
    )

    scene.click_square(parse_square("a7"))
    scene.click_square(parse_square("a8"))

    assert isinstance(ctrl.state.board.cell("a8").piece, Knight)
    assert scene._piece_items[parse_square("a8")].text() == "♘"


def test_set_theme_recolors_squares() -> None:
    scene = BoardScene()
    theme = BoardTheme.blue()
    scene.set_theme(theme)
    a1 = scene._square_items[parse_square("a1")]
    assert a1.brush().color() == theme.dark_square
    assert len(scene._square_items) == 64
