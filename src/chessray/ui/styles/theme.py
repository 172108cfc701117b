"""Visual theme constants and QSS styles for Chessray."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # held piece origin
    highlight_to: QColor  # legal move targets
    highlight_check: QColor  # king in check
    highlight_attacked: QColor  # cells hit by the inspected piece
    highlight_stuck: QColor  # own pieces without legal moves
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),  # tan
            dark_square=QColor(181, 136, 99),  # brown
            highlight_from=QColor(255, 255, 0, 100),  # yellow transparent
            highlight_to=QColor(0, 128, 0, 90),  # green overlay
            highlight_check=QColor(255, 0, 0, 120),  # red transparent
            highlight_attacked=QColor(160, 0, 160, 90),  # magenta
            highlight_stuck=QColor(120, 0, 0, 60),
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
        )

    @classmethod
    def blue(cls) -> BoardTheme:
        return cls(
            light_square=QColor(222, 227, 230),
            dark_square=QColor(140, 162, 173),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 128, 0, 90),
            highlight_check=QColor(255, 0, 0, 120),
            highlight_attacked=QColor(160, 0, 160, 90),
            highlight_stuck=QColor(120, 0, 0, 60),
            coord_light=QColor(140, 162, 173),
            coord_dark=QColor(222, 227, 230),
        )

    @classmethod
    def green(cls) -> BoardTheme:
        return cls(
            light_square=QColor(236, 238, 220),
            dark_square=QColor(112, 149, 120),
            highlight_from=QColor(255, 255, 0, 100),
            highlight_to=QColor(0, 128, 0, 90),
            highlight_check=QColor(255, 0, 0, 120),
            highlight_attacked=QColor(160, 0, 160, 90),
            highlight_stuck=QColor(120, 0, 0, 60),
            coord_light=QColor(112, 149, 120),
            coord_dark=QColor(236, 238, 220),
        )

    @classmethod
    def by_name(cls, name: str) -> BoardTheme:
        """Preset by display name; unknown names fall back to the default."""
        presets = {
            "Classic": cls.default,
            "Blue": cls.blue,
            "Green": cls.green,
        }
        return presets.get(name, cls.default)()


THEME_NAMES: tuple[str, ...] = ("Classic", "Blue", "Green")


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-family: "Adwaita Sans", "Helvetica Neue", sans-serif;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}

QMenuBar {
    background: #2b2b2b;
    color: #e0e0e0;
}

QStatusBar {
    background: #1e1e1e;
    color: #d4d4d4;
}
"""
