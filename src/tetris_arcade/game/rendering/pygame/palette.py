# src/tetris_arcade/game/rendering/pygame/palette.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Color = Tuple[int, int, int]

# colour id 1..7 -> RGB (cyan, magenta, yellow, green, blue, red, orange)
PIECE_COLORS: Tuple[Color, ...] = (
    (0, 255, 255),
    (255, 0, 255),
    (255, 255, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 0, 0),
    (255, 170, 0),
)


@dataclass(frozen=True)
class Palette:
    bg: Color = (20, 20, 24)
    panel_bg: Color = (26, 26, 30)
    board_bg: Color = (0, 0, 0)
    flash: Color = (255, 255, 255)
    grid: Color = (45, 45, 52)
    border: Color = (90, 90, 105)
    block_outline: Color = (0, 0, 0)

    text: Color = (220, 220, 230)
    muted: Color = (170, 170, 185)
    warn: Color = (240, 160, 90)
    accent: Color = (0, 255, 120)

    fallback_piece: Color = (180, 180, 200)
    piece_colors: Tuple[Color, ...] = PIECE_COLORS

    ghost_alpha: int = 128
    overlay_rgba: Tuple[int, int, int, int] = (0, 0, 0, 170)

    def color_for_id(self, color_id: int) -> Color:
        i = int(color_id) - 1
        if 0 <= i < len(self.piece_colors):
            return self.piece_colors[i]
        return self.fallback_piece
