"""User-configurable display settings."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Board
    board_theme: str = "Classic"
    show_coordinates: bool = True
    show_legal_moves: bool = True
    # Mark own pieces that have no legal move this turn
    show_stuck_pieces: bool = True
    # Overlay the attacker set of an inspected piece
    show_attacked_cells: bool = True
