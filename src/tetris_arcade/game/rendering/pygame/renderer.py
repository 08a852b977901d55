# src/tetris_arcade/game/rendering/pygame/renderer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import pygame

from tetris_arcade.game.core.types import GameStatus, State
from tetris_arcade.game.rendering.pygame.grid import draw_grid
from tetris_arcade.game.rendering.pygame.palette import Color, Palette
from tetris_arcade.game.rendering.pygame.particles import ParticleSystem
from tetris_arcade.game.rendering.pygame.sidebar import SIDEBAR_W, draw_sidebar, sidebar_min_h
from tetris_arcade.game.rendering.pygame.surf import SurfaceCache, blit_text_centered
from tetris_arcade.game.rendering.pygame.window import Layout, WindowSpec, compute_layout, create_window

__all__ = ["Color", "Palette", "TetrisRenderer"]


@dataclass(frozen=True)
class Fonts:
    big: pygame.font.Font
    main: pygame.font.Font
    small: pygame.font.Font
    tiny: pygame.font.Font


class TetrisRenderer:
    """
    Draws one frame from a State snapshot. Never mutates the session.
    """

    def __init__(
        self,
        *,
        cell: int,
        show_grid_lines: bool,
        show_ghost: bool = True,
        palette: Optional[Palette] = None,
    ) -> None:
        self.cell = int(cell)
        self.show_grid_lines = bool(show_grid_lines)
        self.show_ghost = bool(show_ghost)
        self.palette = palette or Palette()

        big = pygame.font.SysFont("consolas", 28, bold=True) or pygame.font.SysFont(None, 28)
        main = pygame.font.SysFont("consolas", 18) or pygame.font.SysFont(None, 18)
        small = pygame.font.SysFont("consolas", 16) or pygame.font.SysFont(None, 16)
        tiny = pygame.font.SysFont("consolas", 14) or pygame.font.SysFont(None, 14)
        self.fonts = Fonts(big=big, main=main, small=small, tiny=tiny)

        self.cache = SurfaceCache()

    def init_window(
        self,
        *,
        board_h: int,
        board_w: int,
        title: str = "Tetris Arcade",
        sidebar_w: int = SIDEBAR_W,
    ) -> tuple[pygame.Surface, Layout]:
        layout = compute_layout(
            board_h=int(board_h),
            board_w=int(board_w),
            cell=int(self.cell),
            title=str(title),
            sidebar_w=int(sidebar_w),
            sidebar_h=sidebar_min_h(),
        )
        spec = WindowSpec(width=layout.window.width, height=layout.window.height, title=str(title))
        screen = create_window(spec)
        return screen, layout

    def render(
        self,
        *,
        screen: pygame.Surface,
        state: State,
        layout: Layout,
        flash: bool = False,
        hide_ghost: bool = False,
        particles: Optional[ParticleSystem] = None,
    ) -> None:
        grid = state.grid
        h, w = int(grid.shape[0]), int(grid.shape[1])

        screen.fill(self.palette.bg)

        # ghost only while actively playing
        ghost_y = state.ghost_y
        if not self.show_ghost or hide_ghost or state.status is not GameStatus.RUNNING:
            ghost_y = None

        draw_grid(
            screen=screen,
            grid=grid,
            active=state.active if state.status is not GameStatus.IDLE else None,
            ghost_y=ghost_y,
            origin=layout.origin,
            margin=layout.margin,
            cell=self.cell,
            show_grid_lines=self.show_grid_lines,
            flash=bool(flash),
            palette=self.palette,
            cache=self.cache,
        )

        board_rect = layout.board_rect(board_w=w, board_h=h, cell=self.cell)
        if particles is not None:
            particles.draw(screen=screen, origin=layout.origin, cell=self.cell, clip=board_rect)

        draw_sidebar(
            screen=screen,
            state=state,
            x=layout.sidebar_x,
            y=layout.sidebar_y,
            w=layout.sidebar_w,
            board_outer_h=h * self.cell + 2 * layout.margin,
            cell=self.cell,
            palette=self.palette,
            cache=self.cache,
            font_small=self.fonts.small,
            font_tiny=self.fonts.tiny,
        )

        self._draw_status_overlay(screen=screen, state=state, board_rect=board_rect)

    def _draw_status_overlay(self, *, screen: pygame.Surface, state: State, board_rect: pygame.Rect) -> None:
        lines: List[Tuple[str, pygame.font.Font, Color]] = []
        if state.status is GameStatus.IDLE:
            lines = [
                ("TETRIS", self.fonts.big, self.palette.accent),
                ("Press Enter to start", self.fonts.small, self.palette.text),
            ]
        elif state.status is GameStatus.PAUSED:
            lines = [
                ("PAUSED", self.fonts.big, self.palette.warn),
                ("Press P to resume", self.fonts.small, self.palette.text),
            ]
        elif state.status is GameStatus.GAME_OVER:
            lines = [
                ("GAME OVER", self.fonts.big, self.palette.warn),
                (f"Score: {state.score}", self.fonts.main, self.palette.text),
                ("Press Enter to play again", self.fonts.small, self.palette.muted),
            ]
        if not lines:
            return

        veil = pygame.Surface(board_rect.size, pygame.SRCALPHA)
        veil.fill(self.palette.overlay_rgba)
        screen.blit(veil, board_rect.topleft)

        gap = 10
        total_h = sum(f.get_linesize() for _, f, _ in lines) + gap * (len(lines) - 1)
        cy = board_rect.centery - total_h // 2
        for text, font, color in lines:
            lh = font.get_linesize()
            blit_text_centered(screen=screen, font=font, text=text, center=(board_rect.centerx, cy + lh // 2), color=color)
            cy += lh + gap
