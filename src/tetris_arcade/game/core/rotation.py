# src/tetris_arcade/game/core/rotation.py
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np

from tetris_arcade.game.core.board import Board
from tetris_arcade.game.core.constants import KICK_OFFSETS


def _check_dir(dir: int) -> int:
    d = int(dir)
    if d not in (-1, 1):
        raise ValueError(f"rotation dir must be +1 (cw) or -1 (ccw), got {dir!r}")
    return d


def rotate_shape(matrix: np.ndarray, dir: int) -> np.ndarray:
    """
    Pure rotation: returns a new matrix, the input is left untouched.

      cw  (+1): transpose, then reverse each row
      ccw (-1): transpose, then reverse the row order
    """
    d = _check_dir(dir)
    t = np.asarray(matrix).T
    out = t[:, ::-1] if d > 0 else t[::-1, :]
    return np.ascontiguousarray(out, dtype=np.uint8).copy()


def try_rotate(
        *,
        board: Board,
        shape: np.ndarray,
        x: int,
        y: int,
        dir: int,
        kicks: Sequence[int] = KICK_OFFSETS,
) -> Optional[Tuple[np.ndarray, int]]:
    """
    Rotate with a horizontal kick search.

    Offsets are tried in order; the first non-colliding one wins and
    (new_shape, new_x) is returned. None means every offset collided and
    the caller keeps its shape and position. y is never changed.
    """
    rotated = rotate_shape(shape, dir)
    for dx in kicks:
        nx = int(x) + int(dx)
        if not board.collides(rotated, nx, int(y)):
            return rotated, nx
    return None
