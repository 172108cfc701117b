"""BoardScene — QGraphicsScene that draws the chessboard and pieces."""

from __future__ import annotations

from typing import TYPE_CHECKING

from PyQt6.QtCore import QObject, QPointF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPen
from PyQt6.QtWidgets import (
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
    QGraphicsSimpleTextItem,
)

from chessray.core.enums import Color
from chessray.core.types import BOARD_SIZE, Square
from chessray.game.interfaces import GamePhase
from chessray.ui.dialogs.promotion_dialog import PromotionDialog
from chessray.ui.styles.theme import BoardTheme

if TYPE_CHECKING:
    from chessray.core.pieces import Piece
    from chessray.game.controller import GameController


class BoardScene(QGraphicsScene):
    """Renders the board of a :class:`GameController` and forwards clicks.

    Left click picks up / drops pieces; right click toggles the attacked
    cells overlay for the piece under the cursor.
    """

    TILE = 80  # px per square

    def __init__(
        self,
        controller: GameController | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._theme = BoardTheme.default()
        self._controller = controller
        self._flipped = False
        self._show_coordinates = True
        self._show_legal_moves = True
        self._show_stuck_pieces = True
        self._show_attacked_cells = True
        self._inspected: Piece | None = None

        # Visual layers
        self._square_items: dict[Square, QGraphicsRectItem] = {}
        self._coord_items: list[QGraphicsSimpleTextItem] = []
        self._highlight_items: list[QGraphicsRectItem] = []
        self._piece_items: dict[Square, QGraphicsSimpleTextItem] = {}

        self._draw_board()
        self.refresh()

    # ── Public API ───────────────────────────────────────────────────────

    def set_controller(self, controller: GameController) -> None:
        self._controller = controller
        self._inspected = None
        self.refresh()

    def set_flipped(self, flipped: bool) -> None:
        """Flip the board orientation."""
        self._flipped = flipped
        self._draw_board()
        self.refresh()

    def is_flipped(self) -> bool:
        return self._flipped

    def set_theme(self, theme: BoardTheme) -> None:
        self._theme = theme
        self._draw_board()
        self.refresh()

    def set_show_coordinates(self, visible: bool) -> None:
        """Show or hide rank/file coordinate labels."""
        self._show_coordinates = visible
        for item in self._coord_items:
            item.setVisible(visible)

    def set_show_legal_moves(self, visible: bool) -> None:
        self._show_legal_moves = visible
        self.refresh()

    def set_show_stuck_pieces(self, visible: bool) -> None:
        self._show_stuck_pieces = visible
        self.refresh()

    def set_show_attacked_cells(self, visible: bool) -> None:
        self._show_attacked_cells = visible
        self.refresh()

    def inspect(self, sq: Square | None) -> None:
        """Overlay the cells hit by the piece on *sq*; same square toggles off."""
        piece = None
        if sq is not None and self._has_board():
            assert self._controller is not None
            piece = self._controller.state.board[sq].piece
        self._inspected = None if piece is self._inspected else piece
        self.refresh()

    def click_square(self, sq: Square) -> None:
        """Handle a left click on *sq*, asking for a promotion piece if needed."""
        ctrl = self._controller
        if ctrl is None:
            return
        ctrl.select(*sq)
        if ctrl.phase == GamePhase.AWAIT_PROMOTION:
            choice = PromotionDialog.ask(ctrl.state.side_to_move, None)
            if choice is None:
                ctrl.cancel()
            else:
                ctrl.choose_promotion(choice)
        self.refresh()

    def refresh(self) -> None:
        """Redraw pieces and highlights from the controller's board."""
        self._sync_pieces()
        self._sync_highlights()

    # ── Board drawing ────────────────────────────────────────────────────

    def _draw_board(self) -> None:
        """Draw or redraw the 64 squares and coordinates."""
        for sq_item in self._square_items.values():
            self.removeItem(sq_item)
        self._square_items.clear()
        for coord_item in self._coord_items:
            self.removeItem(coord_item)
        self._coord_items.clear()

        t = self.TILE
        font = QFont("Adwaita Sans", max(9, t // 8))

        for y in range(BOARD_SIZE):
            for x in range(BOARD_SIZE):
                vx, vy = self._visual_coords(x, y)
                is_dark = (x + y) % 2 == 0
                color = self._theme.dark_square if is_dark else self._theme.light_square
                rect = QGraphicsRectItem(vx * t, vy * t, t, t)
                rect.setBrush(QBrush(color))
                rect.setPen(QPen(Qt.PenStyle.NoPen))
                rect.setZValue(0)
                self.addItem(rect)
                self._square_items[(x, y)] = rect

                coord_color = self._theme.coord_dark if is_dark else self._theme.coord_light
                # Rank numbers (left edge)
                if x == 0:
                    self._add_coord(str(y + 1), vx * t + 2, vy * t + 1, font, coord_color)
                # File letters (bottom edge)
                if y == 0:
                    self._add_coord(
                        chr(ord("a") + x), vx * t + t - 12, vy * t + t - 16, font, coord_color
                    )

        self.setSceneRect(0, 0, BOARD_SIZE * t, BOARD_SIZE * t)

    def _add_coord(
        self, label: str, px: float, py: float, font: QFont, color: QColor
    ) -> None:
        txt = QGraphicsSimpleTextItem(label)
        txt.setFont(font)
        txt.setBrush(QBrush(color))
        txt.setPos(px, py)
        txt.setZValue(0.3)
        txt.setVisible(self._show_coordinates)
        self.addItem(txt)
        self._coord_items.append(txt)

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current board."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        if not self._has_board():
            return

        assert self._controller is not None
        t = self.TILE
        font = QFont("DejaVu Sans", int(t * 0.6))
        for cell in self._controller.state.board:
            piece = cell.piece
            if piece is None:
                continue
            item = QGraphicsSimpleTextItem(piece.symbol)
            item.setFont(font)
            fill = QColor(255, 255, 255) if piece.color == Color.WHITE else QColor(0, 0, 0)
            item.setBrush(QBrush(fill))
            item.setPen(QPen(QColor(40, 40, 40)))
            vx, vy = self._visual_coords(cell.x, cell.y)
            bounds = item.boundingRect()
            item.setPos(
                vx * t + (t - bounds.width()) / 2, vy * t + (t - bounds.height()) / 2
            )
            item.setZValue(1)
            self.addItem(item)
            self._piece_items[cell.coords] = item

    def _sync_highlights(self) -> None:
        for item in self._highlight_items:
            self.removeItem(item)
        self._highlight_items.clear()

        if not self._has_board():
            return

        assert self._controller is not None
        state = self._controller.state
        board = state.board
        theme = self._theme

        if state.held is not None:
            self._add_highlight(state.held.coords, theme.highlight_from)
            if self._show_legal_moves:
                for target in state.legal_targets():
                    self._add_highlight(target.coords, theme.highlight_to)

        if self._show_stuck_pieces and not state.is_game_over:
            for piece in board.pieces(state.side_to_move):
                if not piece.legal_moves and piece.cell is not None:
                    self._add_highlight(piece.cell.coords, theme.highlight_stuck)

        if board.in_check:
            self._add_highlight(
                board.king_cell(state.side_to_move).coords, theme.highlight_check
            )

        inspected = self._inspected
        if self._show_attacked_cells and inspected is not None:
            for cell in board:
                if inspected.attacks(cell):
                    self._add_highlight(cell.coords, theme.highlight_attacked)

    def _add_highlight(self, sq: Square, color: QColor) -> None:
        self._highlight_items.append(self._make_highlight(sq, color))

    def _make_highlight(self, sq: Square, color: QColor) -> QGraphicsRectItem:
        t = self.TILE
        vx, vy = self._visual_coords(*sq)
        rect = QGraphicsRectItem(vx * t, vy * t, t, t)
        rect.setBrush(QBrush(color))
        rect.setPen(QPen(Qt.PenStyle.NoPen))
        rect.setZValue(0.5)
        self.addItem(rect)
        return rect

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if self._controller is None or event is None:
            return super().mousePressEvent(event)

        sq = self._pos_to_square(event.scenePos())
        if event.button() == Qt.MouseButton.RightButton:
            self.inspect(sq)
            return None
        if sq is None:
            self._controller.cancel()
            self.refresh()
            return None
        self.click_square(sq)
        return None

    def _has_board(self) -> bool:
        ctrl = self._controller
        return ctrl is not None and ctrl.phase != GamePhase.NOT_STARTED

    # ── Coordinate helpers ───────────────────────────────────────────────

    def _visual_coords(self, x: int, y: int) -> tuple[int, int]:
        """Board (x, y) → scene column/row, white at the bottom unless flipped."""
        if self._flipped:
            return BOARD_SIZE - 1 - x, y
        return x, BOARD_SIZE - 1 - y

    def _pos_to_square(self, pos: QPointF) -> Square | None:
        t = self.TILE
        col = int(pos.x() // t)
        row = int(pos.y() // t)
        if not (0 <= col < BOARD_SIZE and 0 <= row < BOARD_SIZE):
            return None
        if self._flipped:
            return BOARD_SIZE - 1 - col, row
        return col, BOARD_SIZE - 1 - row
