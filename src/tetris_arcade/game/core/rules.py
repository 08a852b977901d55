# src/tetris_arcade/game/core/rules.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ScoreConfig:
    points_per_line: int = 10
    points_per_level: int = 30
    base_interval_ms: int = 1000
    interval_step_ms: int = 100
    min_interval_ms: int = 100


def score_for_clears(cleared: int, cfg: ScoreConfig) -> int:
    if cleared <= 0:
        return 0
    return int(cleared) * int(cfg.points_per_line)


def level_for_score(score: int, cfg: ScoreConfig) -> int:
    return int(score) // int(cfg.points_per_level) + 1


def fall_interval_ms(level: int, cfg: ScoreConfig) -> int:
    return max(int(cfg.min_interval_ms), int(cfg.base_interval_ms) - (int(level) - 1) * int(cfg.interval_step_ms))


@dataclass
class Progression:
    """
    Score / level / fall speed for one game.

    Only apply_clears() moves the numbers, and only upwards.
    """

    cfg: ScoreConfig
    score: int = 0
    lines: int = 0
    level: int = 1
    fall_interval_ms: int = 1000

    def __post_init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self.score = 0
        self.lines = 0
        self.level = 1
        self.fall_interval_ms = fall_interval_ms(1, self.cfg)

    def apply_clears(self, cleared: int) -> int:
        """Fold a sweep result into the tracker. Returns the score delta."""
        if cleared <= 0:
            return 0
        delta = score_for_clears(cleared, self.cfg)
        self.score += delta
        self.lines += int(cleared)
        self.level = level_for_score(self.score, self.cfg)
        self.fall_interval_ms = fall_interval_ms(self.level, self.cfg)
        return delta
