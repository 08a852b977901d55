# src/tetris_arcade/game/core/piece_rules.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from tetris_arcade.game.core.types import NextPiece


class PieceRule(ABC):
    """
    Lookahead source interface.

    Lifecycle:
      - reset(rng=..., kinds=..., num_colors=...) is called once per game start
      - next_piece() is called whenever the session needs a new lookahead piece

    Notes:
      - The RNG is session-owned and injected; rules must not create their own streams.
      - Colour ids are 1..num_colors (0 is reserved for empty board cells).
    """

    @abstractmethod
    def reset(self, *, rng: np.random.Generator, kinds: Sequence[str], num_colors: int) -> None:
        raise NotImplementedError

    @abstractmethod
    def next_piece(self) -> NextPiece:
        raise NotImplementedError


@dataclass
class UniformPieceRule(PieceRule):
    """
    Kind and colour drawn uniformly and independently per piece.

    No bag, no repeat protection: the same kind can come up any number of
    times in a row, and the same kind can show up in different colours.
    """

    _rng: np.random.Generator | None = None
    _kinds: tuple[str, ...] = ()
    _num_colors: int = 0

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[str], num_colors: int) -> None:
        self._rng = rng
        self._kinds = tuple(str(k) for k in kinds)
        self._num_colors = int(num_colors)
        if not self._kinds:
            raise ValueError("UniformPieceRule requires non-empty kinds")
        if self._num_colors <= 0:
            raise ValueError(f"UniformPieceRule requires num_colors >= 1 (got {num_colors})")

    def next_piece(self) -> NextPiece:
        if self._rng is None or not self._kinds:
            raise RuntimeError("UniformPieceRule.reset() must be called before next_piece()")
        ki = int(self._rng.integers(0, len(self._kinds)))
        ci = int(self._rng.integers(0, self._num_colors))
        return NextPiece(kind=self._kinds[ki], color=ci + 1)


@dataclass
class SequencePieceRule(PieceRule):
    """
    Scripted lookahead: cycles through a fixed list of (kind, colour) pairs.

    Deterministic regardless of the injected RNG; used for tests and replays.
    """

    sequence: Sequence[Tuple[str, int]] = ()

    _pos: int = 0

    def reset(self, *, rng: np.random.Generator, kinds: Sequence[str], num_colors: int) -> None:
        if not self.sequence:
            raise ValueError("SequencePieceRule requires a non-empty sequence")
        known = set(str(k) for k in kinds)
        for kind, color in self.sequence:
            if kind not in known:
                raise KeyError(f"unknown kind {kind!r} in sequence (kinds={sorted(known)!r})")
            if not (1 <= int(color) <= int(num_colors)):
                raise ValueError(f"colour id must be in [1, {num_colors}], got {color}")
        self._pos = 0

    def next_piece(self) -> NextPiece:
        if not self.sequence:
            raise RuntimeError("SequencePieceRule has an empty sequence")
        kind, color = self.sequence[self._pos % len(self.sequence)]
        self._pos += 1
        return NextPiece(kind=str(kind), color=int(color))
