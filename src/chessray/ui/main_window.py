"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from PyQt6.QtGui import QAction, QActionGroup, QCloseEvent
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMessageBox,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from chessray.core.enums import GameResult
from chessray.core.move import MoveRecord
from chessray.game.controller import GameController
from chessray.game.interfaces import GamePhase
from chessray.game.state import GameState
from chessray.ui.board.board_view import BoardView
from chessray.ui.settings import AppSettings
from chessray.ui.styles.theme import THEME_NAMES, BoardTheme

TCallback = TypeVar("TCallback", bound=Callable[..., None])


def status_text(state: GameState) -> str:
    """One-line description of the position for the status bar."""
    board = state.board
    side = str(state.side_to_move).capitalize()
    if state.result == GameResult.DRAW:
        return "Stalemate: draw"
    if state.result in (GameResult.WHITE_WINS, GameResult.BLACK_WINS):
        winner = "White" if state.result == GameResult.WHITE_WINS else "Black"
        return f"Checkmate: {winner} wins"
    if state.phase == GamePhase.AWAIT_PROMOTION:
        return f"{side}: choose a promotion piece"
    if board.in_check:
        return f"{side} to move, check!"
    return f"{side} to move"


class MainWindow(QMainWindow):
    """Main application window for Chessray."""

    def __init__(
        self,
        fen: str | None = None,
        settings: AppSettings | None = None,
    ) -> None:
        super().__init__()
        self.setWindowTitle("Chessray")
        self.setMinimumSize(480, 520)
        self.resize(720, 760)

        self._controller = GameController()
        self._settings = settings or AppSettings()
        self._start_fen = fen

        self._setup_ui()
        self._setup_menu()
        self._connect_game_events()
        self._apply_settings()

        self._controller.new_game(fen)
        self._refresh()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def status_message(self) -> str:
        return self._status_label.text()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)

        self._board_view = BoardView(self._controller)
        root.addWidget(self._board_view, stretch=1)

        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel("Ready")
        self._status.addWidget(self._status_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        # Game menu
        menu_game = menu_bar.addMenu("&Game")
        assert menu_game is not None

        self._act_new_game = QAction("&New game", self)
        self._act_new_game.setShortcut("Ctrl+N")
        self._act_new_game.triggered.connect(self._on_new_game)
        menu_game.addAction(self._act_new_game)

        self._act_flip = QAction("&Flip board", self)
        self._act_flip.setShortcut("F")
        self._act_flip.triggered.connect(self._on_flip)
        menu_game.addAction(self._act_flip)

        menu_game.addSeparator()

        act_quit = QAction("&Quit", self)
        act_quit.setShortcut("Ctrl+Q")
        act_quit.triggered.connect(self.close)
        menu_game.addAction(act_quit)

        # View menu
        menu_view = menu_bar.addMenu("&View")
        assert menu_view is not None

        self._toggle_actions: dict[str, QAction] = {}
        for attr, label in (
            ("show_coordinates", "Coordinates"),
            ("show_legal_moves", "Legal moves"),
            ("show_stuck_pieces", "Pieces without moves"),
            ("show_attacked_cells", "Attacked cells (right click)"),
        ):
            action = QAction(label, self)
            action.setCheckable(True)
            action.setChecked(getattr(self._settings, attr))
            action.toggled.connect(
                lambda checked, name=attr: self._on_toggle(name, checked)
            )
            menu_view.addAction(action)
            self._toggle_actions[attr] = action

        menu_theme = menu_view.addMenu("Board theme")
        assert menu_theme is not None
        group = QActionGroup(self)
        for name in THEME_NAMES:
            action = QAction(name, self)
            action.setCheckable(True)
            action.setChecked(name == self._settings.board_theme)
            action.triggered.connect(lambda _checked, n=name: self._on_theme(n))
            group.addAction(action)
            menu_theme.addAction(action)

    # ── Game events ──────────────────────────────────────────────────────

    def _connect_game_events(self) -> None:
        """Subscribe to GameController callbacks (idempotent)."""
        events = self._controller.events
        self._replace_callback(events.on_move, self._on_game_move)
        self._replace_callback(events.on_game_over, self._on_game_over)
        self._replace_callback(events.on_phase_changed, self._on_phase_changed)

    @staticmethod
    def _replace_callback(callbacks: list[TCallback], callback: TCallback) -> None:
        callbacks[:] = [cb for cb in callbacks if cb != callback]
        callbacks.append(callback)

    def _on_game_move(self, record: MoveRecord, state: GameState) -> None:
        self._refresh()

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self._refresh()

    def _on_game_over(self, result: GameResult) -> None:
        self._refresh()
        if self.isVisible():
            QMessageBox.information(self, "Game over", self.status_message)

    # ── Actions ──────────────────────────────────────────────────────────

    def _on_new_game(self) -> None:
        self._controller.new_game(self._start_fen)
        self._refresh()

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())

    def _on_toggle(self, name: str, checked: bool) -> None:
        setattr(self._settings, name, checked)
        self._apply_settings()

    def _on_theme(self, name: str) -> None:
        self._settings.board_theme = name
        self._apply_settings()

    # ── Helpers ──────────────────────────────────────────────────────────

    def _apply_settings(self) -> None:
        s = self._settings
        scene = self._board_view.board_scene
        scene.set_theme(BoardTheme.by_name(s.board_theme))
        scene.set_show_coordinates(s.show_coordinates)
        scene.set_show_legal_moves(s.show_legal_moves)
        scene.set_show_stuck_pieces(s.show_stuck_pieces)
        scene.set_show_attacked_cells(s.show_attacked_cells)

    def _refresh(self) -> None:
        if self._controller.phase == GamePhase.NOT_STARTED:
            return
        self._board_view.board_scene.refresh()
        self._status_label.setText(status_text(self._controller.state))

    def closeEvent(self, a0: QCloseEvent | None) -> None:
        self._controller.events.on_move.clear()
        self._controller.events.on_game_over.clear()
        self._controller.events.on_phase_changed.clear()
        super().closeEvent(a0)
