# src/tetris_arcade/game/rendering/pygame/sidebar.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
import pygame

from tetris_arcade.game.core.types import GameStatus, State
from tetris_arcade.game.rendering.pygame.palette import Palette
from tetris_arcade.game.rendering.pygame.surf import SurfaceCache, blit_text

# -----------------------------------------------------------------------------
# Public sizing contract
# -----------------------------------------------------------------------------
SIDEBAR_W = 220


# -----------------------------------------------------------------------------
# Layout constants (all magic numbers live here, not inline)
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SidebarLayout:
    panel_gap_y: int = 12

    next_panel_h: int = 150
    stats_panel_h: int = 150

    title_pad_x: int = 10
    title_pad_y: int = 8

    next_box_cells: int = 4
    next_box_y_offset: int = 34
    next_box_border_w: int = 2

    stats_pad_x: int = 10
    stats_first_row_y_offset: int = 34
    stats_row_h: int = 20
    stats_value_dx: int = 80

    controls_list_y_offset: int = 34
    controls_key_x_offset: int = 10
    controls_desc_x_offset: int = 80
    controls_row_h: int = 18


_LAYOUT = SidebarLayout()

CONTROLS: Tuple[Tuple[str, str], ...] = (
    ("Left/Right", "move"),
    ("Up", "rotate cw"),
    ("Z", "rotate ccw"),
    ("Down", "soft drop"),
    ("Space", "hard drop"),
    ("P", "pause"),
    ("Enter", "start"),
    ("Esc", "quit"),
)


def controls_min_h() -> int:
    """Height that fits the whole CONTROLS legend."""
    return _LAYOUT.controls_list_y_offset + len(CONTROLS) * _LAYOUT.controls_row_h + 8


def sidebar_min_h() -> int:
    return _LAYOUT.next_panel_h + _LAYOUT.stats_panel_h + 2 * _LAYOUT.panel_gap_y + controls_min_h()


# -----------------------------------------------------------------------------
# Public draw
# -----------------------------------------------------------------------------
def draw_sidebar(
    *,
    screen: pygame.Surface,
    state: State,
    x: int,
    y: int,
    w: int,
    board_outer_h: int,
    cell: int,
    palette: Palette,
    cache: SurfaceCache,
    font_small: pygame.font.Font,
    font_tiny: pygame.font.Font,
) -> None:
    """
    Right sidebar (presentation only): NEXT preview, STATS, CONTROLS.
    """
    panel_w = int(w)
    preview_cell = max(8, min(int(cell), (panel_w - 40) // _LAYOUT.next_box_cells))

    # -------------------------------------------------------------------------
    # NEXT panel
    # -------------------------------------------------------------------------
    _panel(screen=screen, palette=palette, font_small=font_small, x=x, y=y, w=panel_w, h=_LAYOUT.next_panel_h, title="NEXT")

    box_w = _LAYOUT.next_box_cells * preview_cell
    box_x = int(x) + (panel_w - box_w) // 2
    box_y = int(y) + _LAYOUT.next_box_y_offset
    box_rect = pygame.Rect(box_x, box_y, box_w, box_w)
    pygame.draw.rect(screen, palette.board_bg, box_rect)
    pygame.draw.rect(screen, palette.border, box_rect, width=_LAYOUT.next_box_border_w)

    if state.next_piece is not None and state.next_shape is not None:
        draw_piece_preview_mask(
            screen=screen,
            mask=state.next_shape,
            color_id=state.next_piece.color,
            dst_x=box_x,
            dst_y=box_y,
            cells=_LAYOUT.next_box_cells,
            cell=preview_cell,
            palette=palette,
            cache=cache,
        )

    # -------------------------------------------------------------------------
    # STATS panel
    # -------------------------------------------------------------------------
    stats_y = int(y) + _LAYOUT.next_panel_h + _LAYOUT.panel_gap_y
    _panel(screen=screen, palette=palette, font_small=font_small, x=x, y=stats_y, w=panel_w, h=_LAYOUT.stats_panel_h, title="STATS")

    rows: List[Tuple[str, str]] = [
        ("Score", f"{state.score}"),
        ("High", f"{state.high_score}"),
        ("Level", f"{state.level}"),
        ("Lines", f"{state.lines}"),
        ("Speed", f"{state.fall_interval_ms} ms"),
    ]
    label_x = int(x) + _LAYOUT.stats_pad_x
    value_x = label_x + _LAYOUT.stats_value_dx
    yy = stats_y + _LAYOUT.stats_first_row_y_offset
    for k, v in rows:
        blit_text(screen=screen, font=font_tiny, text=f"{k}:", pos=(label_x, yy), color=palette.muted)
        blit_text(screen=screen, font=font_tiny, text=v, pos=(value_x, yy), color=palette.text)
        yy += _LAYOUT.stats_row_h

    # -------------------------------------------------------------------------
    # CONTROLS panel
    # -------------------------------------------------------------------------
    ctrl_y = stats_y + _LAYOUT.stats_panel_h + _LAYOUT.panel_gap_y
    used_h = ctrl_y - int(y)
    controls_h = max(controls_min_h(), int(board_outer_h) - used_h)
    _panel(screen=screen, palette=palette, font_small=font_small, x=x, y=ctrl_y, w=panel_w, h=controls_h, title="CONTROLS")

    yy = ctrl_y + _LAYOUT.controls_list_y_offset
    key_x = int(x) + _LAYOUT.controls_key_x_offset
    desc_x = int(x) + _LAYOUT.controls_desc_x_offset
    bottom_guard = ctrl_y + controls_h - _LAYOUT.controls_row_h

    for key, desc in CONTROLS:
        if yy > bottom_guard:
            break
        blit_text(screen=screen, font=font_tiny, text=key, pos=(key_x, yy), color=palette.accent)
        blit_text(screen=screen, font=font_tiny, text=desc, pos=(desc_x, yy), color=palette.muted)
        yy += _LAYOUT.controls_row_h

    if state.status is GameStatus.PAUSED and yy <= bottom_guard:
        blit_text(screen=screen, font=font_small, text="PAUSED", pos=(key_x, yy + 4), color=palette.warn)


# -----------------------------------------------------------------------------
# Small primitives
# -----------------------------------------------------------------------------
def draw_piece_preview_mask(
    *,
    screen: pygame.Surface,
    mask: np.ndarray,
    color_id: int,
    dst_x: int,
    dst_y: int,
    cells: int,
    cell: int,
    palette: Palette,
    cache: SurfaceCache,
) -> None:
    """
    Draw a piece mask centred (by its filled bounding box) in a cells x cells box.
    """
    ys, xs = np.nonzero(np.asarray(mask) != 0)
    if len(xs) == 0:
        return

    minx, maxx = int(xs.min()), int(xs.max())
    miny, maxy = int(ys.min()), int(ys.max())
    shape_w = maxx - minx + 1
    shape_h = maxy - miny + 1

    # centre in pixels so odd widths still sit in the middle
    off_x = (int(cells) * int(cell) - shape_w * int(cell)) // 2
    off_y = (int(cells) * int(cell) - shape_h * int(cell)) // 2

    block = cache.cell(size=int(cell), color=palette.color_for_id(color_id), outline=palette.block_outline)
    for yy in range(shape_h):
        for xx in range(shape_w):
            if int(mask[miny + yy, minx + xx]) == 0:
                continue
            rx = int(dst_x) + off_x + xx * int(cell)
            ry = int(dst_y) + off_y + yy * int(cell)
            screen.blit(block, (rx, ry))


def _panel(
    *,
    screen: pygame.Surface,
    palette: Palette,
    font_small: pygame.font.Font,
    x: int,
    y: int,
    w: int,
    h: int,
    title: Optional[str] = None,
) -> None:
    rect = pygame.Rect(int(x), int(y), int(w), int(h))
    pygame.draw.rect(screen, palette.panel_bg, rect)
    pygame.draw.rect(screen, palette.border, rect, width=2)
    if title:
        tx = int(x) + _LAYOUT.title_pad_x
        ty = int(y) + _LAYOUT.title_pad_y
        blit_text(screen=screen, font=font_small, text=title, pos=(tx, ty), color=palette.accent)
