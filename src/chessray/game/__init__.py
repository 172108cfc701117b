"""Game management layer — controller and session state machine.

Quick start::

    from chessray.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit_move((4, 1), (4, 3))  # e2-e4
"""

from chessray.game.controller import GameController, GameEvents
from chessray.game.interfaces import GamePhase, IGameController
from chessray.game.state import GameState

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    # Concrete
    "GameController",
    "GameEvents",
    "GameState",
]
