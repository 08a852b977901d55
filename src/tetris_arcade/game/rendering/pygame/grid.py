# src/tetris_arcade/game/rendering/pygame/grid.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pygame

from tetris_arcade.game.core.types import PieceSnapshot
from tetris_arcade.game.rendering.pygame.palette import Palette
from tetris_arcade.game.rendering.pygame.surf import SurfaceCache


# -----------------------------------------------------------------------------
# Rendering constants (no inline magic numbers)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class GridRenderCfg:
    border_width: int = 2
    grid_line_width: int = 1
    ghost_outline_width: int = 2
    ghost_inset: int = 2
    ghost_dash: int = 4


CFG = GridRenderCfg()


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------
def draw_grid(
        *,
        screen: pygame.Surface,
        grid: np.ndarray,
        active: Optional[PieceSnapshot],
        ghost_y: Optional[int],
        origin: Tuple[int, int],
        margin: int,
        cell: int,
        show_grid_lines: bool,
        flash: bool,
        palette: Palette,
        cache: SurfaceCache,
) -> None:
    """
    Draw the locked board, then the ghost outline, then the active piece.

    CONTRACT:
      - `grid` is the LOCKED board only (read-only view).
      - cell values are colour ids: 0 = empty, 1..K = palette.piece_colors[id-1].
    """
    ox, oy = origin
    h, w = int(grid.shape[0]), int(grid.shape[1])

    board_rect = pygame.Rect(ox, oy, w * cell, h * cell)
    pygame.draw.rect(screen, palette.flash if flash else palette.board_bg, board_rect)

    for y in range(h):
        for x in range(w):
            rx = ox + x * cell
            ry = oy + y * cell
            cid = int(grid[y, x])
            if cid != 0:
                color = palette.color_for_id(cid)
                screen.blit(cache.cell(size=cell, color=color, outline=palette.block_outline), (rx, ry))
            if show_grid_lines:
                pygame.draw.rect(
                    screen,
                    palette.grid,
                    pygame.Rect(rx, ry, cell, cell),
                    width=int(CFG.grid_line_width),
                )

    if active is not None and ghost_y is not None:
        _draw_ghost(screen=screen, piece=active, ghost_y=int(ghost_y), origin=origin, cell=cell, palette=palette)

    if active is not None:
        draw_shape(
            screen=screen,
            shape=active.shape,
            px=active.x,
            py=active.y,
            origin=origin,
            cell=cell,
            color=palette.color_for_id(active.color),
            palette=palette,
            cache=cache,
            clip=board_rect,
        )

    pygame.draw.rect(
        screen,
        palette.border,
        pygame.Rect(ox - margin, oy - margin, w * cell + 2 * margin, h * cell + 2 * margin),
        width=int(CFG.border_width),
    )


def draw_shape(
        *,
        screen: pygame.Surface,
        shape: np.ndarray,
        px: int,
        py: int,
        origin: Tuple[int, int],
        cell: int,
        color: Tuple[int, int, int],
        palette: Palette,
        cache: SurfaceCache,
        clip: Optional[pygame.Rect] = None,
) -> None:
    """Blit a piece mask at board coordinates (px, py)."""
    ox, oy = origin
    prev_clip = screen.get_clip()
    if clip is not None:
        screen.set_clip(clip)
    block = cache.cell(size=cell, color=color, outline=palette.block_outline)
    mh, mw = int(shape.shape[0]), int(shape.shape[1])
    for yy in range(mh):
        for xx in range(mw):
            if int(shape[yy, xx]) == 0:
                continue
            screen.blit(block, (ox + (int(px) + xx) * cell, oy + (int(py) + yy) * cell))
    if clip is not None:
        screen.set_clip(prev_clip)


# -----------------------------------------------------------------------------
# Overlay helpers
# -----------------------------------------------------------------------------
def _draw_ghost(
        *,
        screen: pygame.Surface,
        piece: PieceSnapshot,
        ghost_y: int,
        origin: Tuple[int, int],
        cell: int,
        palette: Palette,
) -> None:
    """
    Dashed outline of the landing position (visual only).
    """
    ox, oy = origin
    r, g, b = palette.color_for_id(piece.color)
    color = (r, g, b, int(palette.ghost_alpha))

    inset = int(CFG.ghost_inset)
    size = max(1, int(cell) - 2 * inset)
    outline = pygame.Surface((size, size), pygame.SRCALPHA)
    _dashed_rect(outline, color, size=size, dash=int(CFG.ghost_dash), width=int(CFG.ghost_outline_width))

    mh, mw = int(piece.shape.shape[0]), int(piece.shape.shape[1])
    for yy in range(mh):
        for xx in range(mw):
            if int(piece.shape[yy, xx]) == 0:
                continue
            gy = ghost_y + yy
            if gy < 0:
                continue
            screen.blit(outline, (ox + (piece.x + xx) * cell + inset, oy + gy * cell + inset))


def _dashed_rect(surf: pygame.Surface, color: Tuple[int, int, int, int], *, size: int, dash: int, width: int) -> None:
    step = max(2, 2 * dash)
    last = size - width
    for i in range(0, size, step):
        seg = min(dash, size - i)
        surf.fill(color, pygame.Rect(i, 0, seg, width))
        surf.fill(color, pygame.Rect(i, last, seg, width))
        surf.fill(color, pygame.Rect(0, i, width, seg))
        surf.fill(color, pygame.Rect(last, i, width, seg))
