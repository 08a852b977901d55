# src/tetris_arcade/game/core/types.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

import numpy as np


class Command(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    SOFT_DROP = auto()
    ROTATE_CW = auto()
    ROTATE_CCW = auto()
    HARD_DROP = auto()
    TOGGLE_PAUSE = auto()
    START = auto()


class GameStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class NextPiece:
    """Lookahead slot: kind and colour are drawn independently."""

    kind: str
    color: int


@dataclass
class ActivePiece:
    """
    The falling piece.

    Mutated in place by move/rotate/drop; replaced the moment it locks.
    `shape` is owned by this piece (never a catalog array).
    """

    kind: str
    shape: np.ndarray
    x: int
    y: int
    color: int

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    @property
    def height(self) -> int:
        return int(self.shape.shape[0])

    def snapshot(self) -> "PieceSnapshot":
        shape = self.shape.copy()
        shape.flags.writeable = False
        return PieceSnapshot(kind=self.kind, shape=shape, x=int(self.x), y=int(self.y), color=int(self.color))


@dataclass(frozen=True)
class PieceSnapshot:
    kind: str
    shape: np.ndarray
    x: int
    y: int
    color: int


@dataclass(frozen=True)
class LockResult:
    """
    Outcome of one lock sequence.

    cleared_rows holds the row index at which each full row was removed,
    in removal order (bottom-up). Renderers use it for per-row effects.
    """

    cells: tuple[tuple[int, int], ...]
    cleared_rows: tuple[int, ...] = ()
    score_delta: int = 0
    game_over: bool = False

    @property
    def cleared(self) -> int:
        return len(self.cleared_rows)


@dataclass(frozen=True)
class State:
    """
    Render-facing snapshot.

    Contracts:
      - grid is a read-only view of the LOCKED board (no active overlay).
      - grid cell values are colour ids: 0 = empty, 1..NUM_COLORS = locked block colour.
      - ghost_y is the projected landing row of the active piece (display only).
    """

    grid: np.ndarray
    status: GameStatus
    score: int
    level: int
    lines: int
    high_score: int
    fall_interval_ms: int

    active: PieceSnapshot | None
    ghost_y: int | None
    next_piece: NextPiece | None
    next_shape: np.ndarray | None

    flash: int = 0

    @property
    def game_over(self) -> bool:
        return self.status is GameStatus.GAME_OVER

    @property
    def paused(self) -> bool:
        return self.status is GameStatus.PAUSED

    @property
    def running(self) -> bool:
        return self.status is GameStatus.RUNNING
