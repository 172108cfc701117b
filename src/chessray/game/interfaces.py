"""Abstract interfaces for the game layer.

The UI depends on :class:`IGameController`, not on the concrete controller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chessray.core.enums import PieceType
    from chessray.core.types import Square


# ── Game phase FSM states ────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states of a local two-player session."""

    NOT_STARTED = auto()
    IDLE = auto()  # waiting for the side to move to pick up a piece
    HOLDING = auto()  # a piece is picked up, waiting for its destination
    AWAIT_PROMOTION = auto()  # destination chosen, waiting for the new piece
    GAME_OVER = auto()


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IGameController(ABC):
    """Interface for the game orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> None:
        """Set up a new game and start the first turn."""

    @abstractmethod
    def select(self, x: int, y: int) -> bool:
        """Pick up a piece, or drop the held one, at ``(x, y)``.

        Returns True if the click changed the session state.
        """

    @abstractmethod
    def choose_promotion(self, piece_type: PieceType) -> bool:
        """Finish a pending promotion with *piece_type*."""

    @abstractmethod
    def cancel(self) -> None:
        """Drop the held piece (or abandon a pending promotion)."""

    @abstractmethod
    def submit_move(
        self,
        origin: Square,
        target: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Submit a move. Returns True if legal and applied."""
