# src/tetris_arcade/game/rendering/pygame/particles.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pygame

from tetris_arcade.game.core.events import GameListener
from tetris_arcade.game.rendering.pygame.palette import Color, Palette


@dataclass
class Particle:
    x: float  # board cells
    y: float
    vx: float
    vy: float
    life: float
    color: Color


class ParticleSystem(GameListener):
    """
    Burst of sparks along each cleared row (visual only).

    Subscribes to on_line_clear; positions are in board-cell units so the
    system does not depend on the window layout.
    """

    per_row: int = 30
    max_life: float = 50.0

    def __init__(self, *, board_w: int, palette: Palette, rng: Optional[np.random.Generator] = None) -> None:
        self.board_w = int(board_w)
        self.palette = palette
        self._rng = rng if rng is not None else np.random.default_rng()
        self.particles: List[Particle] = []

    def on_start(self) -> None:
        self.particles.clear()

    def on_line_clear(self, rows: Sequence[int]) -> None:
        colors = self.palette.piece_colors
        for y in rows:
            for _ in range(self.per_row):
                self.particles.append(
                    Particle(
                        x=float(self._rng.random() * self.board_w),
                        y=float(y),
                        vx=float((self._rng.random() - 0.5) * 0.5),
                        vy=float(self._rng.random() * -1.5),
                        life=float(30 + self._rng.random() * 20),
                        color=colors[int(self._rng.integers(0, len(colors)))],
                    )
                )

    def update(self) -> None:
        alive: List[Particle] = []
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= 1
            if p.life > 0:
                alive.append(p)
        self.particles = alive

    def draw(self, *, screen: pygame.Surface, origin: Tuple[int, int], cell: int, clip: pygame.Rect) -> None:
        if not self.particles:
            return
        ox, oy = origin
        size = max(1, int(cell) // 2)
        prev_clip = screen.get_clip()
        screen.set_clip(clip)
        dot = pygame.Surface((size, size), pygame.SRCALPHA)
        for p in self.particles:
            alpha = int(255 * max(0.0, min(1.0, p.life / self.max_life)))
            dot.fill((*p.color, alpha))
            screen.blit(dot, (ox + int(p.x * cell), oy + int(p.y * cell)))
        screen.set_clip(prev_clip)
