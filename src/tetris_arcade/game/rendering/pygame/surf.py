# src/tetris_arcade/game/rendering/pygame/surf.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

import pygame

Color = Tuple[int, int, int]


@dataclass
class SurfaceCache:
    """
    Cache small surfaces (cell-sized blocks) by (size, color, outline).
    This avoids re-allocating surfaces every frame.
    """

    _cells: Dict[Tuple[int, Color, Color | None], pygame.Surface]

    def __init__(self) -> None:
        self._cells = {}

    def cell(self, *, size: int, color: Color, outline: Color | None = None) -> pygame.Surface:
        key = (int(size), color, outline)
        surf = self._cells.get(key)
        if surf is None:
            s = int(size)
            surf = pygame.Surface((s, s), flags=pygame.SRCALPHA)
            surf.fill(color)
            if outline is not None:
                pygame.draw.rect(surf, outline, pygame.Rect(0, 0, s, s), width=1)
            self._cells[key] = surf
        return surf


def blit_text(
        *,
        screen: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        pos: Tuple[int, int],
        color: Color,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def blit_text_centered(
        *,
        screen: pygame.Surface,
        font: pygame.font.Font,
        text: str,
        center: Tuple[int, int],
        color: Color,
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, img.get_rect(center=center))
