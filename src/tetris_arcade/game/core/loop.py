# src/tetris_arcade/game/core/loop.py
from __future__ import annotations

import logging
from typing import Any, Optional

from tetris_arcade.game.core.game import GameSession
from tetris_arcade.game.core.types import Command, GameStatus, LockResult, State

LOG = logging.getLogger(__name__)


class GameLoop:
    """
    Gravity driver for a GameSession.

    The loop never schedules itself. The host calls tick(now_ms) once per
    frame with a monotonic timestamp and keeps calling while `wants_ticks`
    is True (RUNNING). Paused and game-over sessions ignore ticks.

    State machine (status lives on the session):

      IDLE --start--> RUNNING <--toggle_pause--> PAUSED
      RUNNING --spawn collision--> GAME_OVER --start--> RUNNING
    """

    def __init__(self, session: GameSession) -> None:
        self.session = session
        self.drop_counter_ms = 0.0
        self._last_time_ms: Optional[float] = None
        self.last_lock: Optional[LockResult] = None

    @property
    def status(self) -> GameStatus:
        return self.session.status

    @property
    def wants_ticks(self) -> bool:
        return self.session.status is GameStatus.RUNNING

    def reset_timing(self, now_ms: Optional[float] = None) -> None:
        self.drop_counter_ms = 0.0
        self._last_time_ms = None if now_ms is None else float(now_ms)

    # ---- transitions ---------------------------------------------------------------

    def start(self, now_ms: Optional[float] = None) -> State:
        state = self.session.start()
        self.reset_timing(now_ms)
        self.last_lock = None
        return state

    def pause(self) -> bool:
        return self.session.pause()

    def resume(self, now_ms: Optional[float] = None) -> bool:
        ok = self.session.resume()
        if ok:
            # the paused interval must not arrive as one huge dt
            self.reset_timing(now_ms)
        return ok

    def toggle_pause(self, now_ms: Optional[float] = None) -> bool:
        if self.session.status is GameStatus.RUNNING:
            return self.pause()
        if self.session.status is GameStatus.PAUSED:
            return self.resume(now_ms)
        return False

    # ---- time ----------------------------------------------------------------------

    def tick(self, now_ms: float) -> bool:
        """
        Advance by the wall-clock time since the previous tick.

        The first tick after start/resume only records the time base (dt = 0).
        Returns True if a gravity drop was performed.
        """
        if not self.wants_ticks:
            return False
        now = float(now_ms)
        dt = 0.0 if self._last_time_ms is None else now - self._last_time_ms
        self._last_time_ms = now
        return self.advance(dt)

    def advance(self, dt_ms: float) -> bool:
        """Accumulate dt; once the counter exceeds the fall interval, soft-drop and reset it."""
        if not self.wants_ticks:
            return False
        self.drop_counter_ms += max(0.0, float(dt_ms))
        if self.drop_counter_ms > self.session.fall_interval_ms:
            self.last_lock = self.session.soft_drop()
            self.drop_counter_ms = 0.0
            return True
        return False

    # ---- input ---------------------------------------------------------------------

    def handle(self, command: Any, now_ms: Optional[float] = None) -> bool:
        """
        Route an input command. Timing side effects:

          - START / resume reset the time base
          - a manual soft drop resets the drop counter
        """
        c = GameSession.normalize_command(command)
        if c is Command.START:
            if self.session.status in (GameStatus.RUNNING, GameStatus.PAUSED):
                return False
            self.start(now_ms)
            return True
        if c is Command.TOGGLE_PAUSE:
            return self.toggle_pause(now_ms)

        _, _, _, info = self.session.step(c)
        lock = info.get("lock", None)
        if isinstance(lock, LockResult):
            self.last_lock = lock
        if c is Command.SOFT_DROP and self.session.status is GameStatus.RUNNING:
            self.drop_counter_ms = 0.0
        return bool(info.get("changed", False))
