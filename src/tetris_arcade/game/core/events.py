# src/tetris_arcade/game/core/events.py
from __future__ import annotations

import logging
from typing import Iterable, List, Protocol, Sequence, runtime_checkable

LOG = logging.getLogger(__name__)


class GameListener:
    """
    Observer for session transitions (audio, particles, HUD, ...).

    Every hook is a no-op; subclasses override the ones they care about.
    Listeners read state, they never drive it: return values are ignored.
    """

    def on_start(self) -> None:
        pass

    def on_rotate_success(self) -> None:
        pass

    def on_lock(self) -> None:
        pass

    def on_line_clear(self, rows: Sequence[int]) -> None:
        pass

    def on_game_over(self, score: int) -> None:
        pass

    def on_pause(self) -> None:
        pass

    def on_resume(self) -> None:
        pass


@runtime_checkable
class HighScoreStore(Protocol):
    def load_high_score(self) -> int: ...

    def save_high_score(self, score: int) -> None: ...


class NullHighScoreStore:
    def load_high_score(self) -> int:
        return 0

    def save_high_score(self, score: int) -> None:
        return None


class EventDispatcher:
    """
    Fan-out to listeners, best-effort.

    A listener that raises is logged and skipped; the remaining listeners
    still run and the exception never reaches the game state machine.
    """

    def __init__(self, listeners: Iterable[GameListener] = ()) -> None:
        self._listeners: List[GameListener] = list(listeners)

    def add(self, listener: GameListener) -> None:
        self._listeners.append(listener)

    def remove(self, listener: GameListener) -> None:
        self._listeners.remove(listener)

    @property
    def listeners(self) -> tuple[GameListener, ...]:
        return tuple(self._listeners)

    def emit(self, hook: str, *args: object) -> None:
        for listener in list(self._listeners):
            fn = getattr(listener, hook, None)
            if fn is None:
                continue
            try:
                fn(*args)
            except Exception:
                LOG.warning("listener %r failed in %s", listener, hook, exc_info=True)


def load_high_score_safe(store: HighScoreStore) -> int:
    try:
        return max(0, int(store.load_high_score()))
    except Exception:
        LOG.warning("high score store %r failed to load; using 0", store, exc_info=True)
        return 0


def save_high_score_safe(store: HighScoreStore, score: int) -> bool:
    try:
        store.save_high_score(int(score))
        return True
    except Exception:
        LOG.warning("high score store %r failed to save %d", store, int(score), exc_info=True)
        return False


__all__ = [
    "GameListener",
    "HighScoreStore",
    "NullHighScoreStore",
    "EventDispatcher",
    "load_high_score_safe",
    "save_high_score_safe",
]
