# tests/conftest.py
from __future__ import annotations

from typing import Callable, List, Sequence, Tuple

import numpy as np
import pytest

from tetris_arcade.game.core.events import GameListener
from tetris_arcade.game.core.game import GameSession
from tetris_arcade.game.core.piece_rules import SequencePieceRule


class RecordingListener(GameListener):
    def __init__(self) -> None:
        self.calls: List[Tuple[str, tuple]] = []

    def on_start(self) -> None:
        self.calls.append(("start", ()))

    def on_rotate_success(self) -> None:
        self.calls.append(("rotate", ()))

    def on_lock(self) -> None:
        self.calls.append(("lock", ()))

    def on_line_clear(self, rows: Sequence[int]) -> None:
        self.calls.append(("line_clear", tuple(rows)))

    def on_game_over(self, score: int) -> None:
        self.calls.append(("game_over", (score,)))

    def on_pause(self) -> None:
        self.calls.append(("pause", ()))

    def on_resume(self) -> None:
        self.calls.append(("resume", ()))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def make_session() -> Callable[..., GameSession]:
    """Factory for sessions with a scripted piece sequence (default: all O pieces)."""

    def _make(sequence: Sequence[Tuple[str, int]] = (("O", 1),), **kwargs) -> GameSession:
        kwargs.setdefault("rng", np.random.default_rng(0))
        return GameSession(piece_rule=SequencePieceRule(sequence=list(sequence)), **kwargs)

    return _make


@pytest.fixture
def recorder() -> RecordingListener:
    return RecordingListener()
