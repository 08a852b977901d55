# src/tetris_arcade/game/core/board.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from tetris_arcade.game.core.constants import EMPTY_CELL


@dataclass
class Board:
    """
    Playfield of locked blocks.

    grid has shape (h, w); 0 = empty, >=1 colour id of the piece that locked there.
    The array is allocated once and only ever rewritten in place, so its shape
    never changes for the lifetime of the board.
    """

    h: int
    w: int
    grid: np.ndarray

    @classmethod
    def empty(cls, *, h: int, w: int) -> "Board":
        if int(h) <= 0 or int(w) <= 0:
            raise ValueError(f"board dimensions must be positive, got h={h} w={w}")
        return cls(h=int(h), w=int(w), grid=np.zeros((int(h), int(w)), dtype=np.uint8))

    def clear(self) -> None:
        self.grid.fill(EMPTY_CELL)

    def copy(self) -> "Board":
        return Board(h=self.h, w=self.w, grid=self.grid.copy())

    def view(self) -> np.ndarray:
        """Read-only view for collaborators (renderers must not mutate the board)."""
        v = self.grid.view()
        v.flags.writeable = False
        return v

    def collides(self, shape: np.ndarray, x: int, y: int) -> bool:
        """
        True if any set cell of `shape` placed at (x, y) hits an occupied cell,
        leaves the horizontal bounds, or falls below the floor.

        Cells above the top edge (row < 0) are not checked: rotating a tall piece
        at spawn may briefly poke out of the board.
        """
        m = shape
        mh, mw = m.shape
        for yy in range(mh):
            for xx in range(mw):
                if m[yy, xx] == 0:
                    continue
                bx = x + xx
                by = y + yy
                if bx < 0 or bx >= self.w or by >= self.h:
                    return True
                if by < 0:
                    continue
                if self.grid[by, bx] != EMPTY_CELL:
                    return True
        return False

    def lock(self, shape: np.ndarray, x: int, y: int, color: int) -> List[Tuple[int, int]]:
        """
        Write every set cell of `shape` at offset (x, y) with `color`.

        No placement check is done here; callers validate with collides() first.
        Cells above the top edge are dropped. Returns the written (x, y) cells.
        """
        placed: List[Tuple[int, int]] = []
        mh, mw = shape.shape
        for yy in range(mh):
            for xx in range(mw):
                if shape[yy, xx] == 0:
                    continue
                bx = int(x) + xx
                by = int(y) + yy
                if by < 0:
                    continue
                self.grid[by, bx] = int(color)
                placed.append((bx, by))
        return placed

    def is_full_row(self, y: int) -> bool:
        return bool(np.all(self.grid[int(y)] != EMPTY_CELL))

    def full_rows(self) -> List[int]:
        full = np.all(self.grid != EMPTY_CELL, axis=1)
        return [int(y) for y in np.flatnonzero(full)]

    def sweep_rows(self) -> List[int]:
        """
        Remove full rows bottom-up, shifting everything above down by one and
        inserting an empty row at the top each time.

        The same row index is re-checked after a removal because the row above
        has just moved into it. Returns the index of each removal, in order.
        """
        removed: List[int] = []
        y = self.h - 1
        while y >= 0:
            if not self.is_full_row(y):
                y -= 1
                continue
            removed.append(int(y))
            if y > 0:
                self.grid[1 : y + 1] = self.grid[0:y].copy()
            self.grid[0].fill(EMPTY_CELL)
        return removed

    def sweep(self) -> int:
        return len(self.sweep_rows())

    def ghost_y(self, shape: np.ndarray, x: int, y: int) -> int:
        """
        Landing row of `shape` dropped straight down from (x, y).

        Pure: probes collides() only, never touches the grid.
        """
        gy = int(y)
        while not self.collides(shape, x, gy + 1):
            gy += 1
        return gy
