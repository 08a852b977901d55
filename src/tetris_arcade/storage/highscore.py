# src/tetris_arcade/storage/highscore.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

LOG = logging.getLogger(__name__)


@dataclass
class JsonHighScoreStore:
    """
    High score persisted as {"high_score": <int>} in a JSON file.

    load_high_score():
      - missing file -> 0
      - unreadable / malformed file -> 0 (logged)
    save_high_score():
      - creates parent directories; I/O errors propagate to the caller
    """

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def load_high_score(self) -> int:
        if not self.path.is_file():
            return 0
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            LOG.warning("could not read high score file %s; starting from 0", self.path, exc_info=True)
            return 0

        v = data.get("high_score", 0) if isinstance(data, dict) else data
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            LOG.warning("high score file %s has unexpected content %r; starting from 0", self.path, data)
            return 0
        return max(0, int(v))

    def save_high_score(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps({"high_score": int(score)}, indent=2), encoding="utf-8")
        tmp.replace(self.path)


@dataclass
class MemoryHighScoreStore:
    high_score: int = 0
    saves: int = 0

    def load_high_score(self) -> int:
        return int(self.high_score)

    def save_high_score(self, score: int) -> None:
        self.high_score = int(score)
        self.saves += 1


__all__ = ["JsonHighScoreStore", "MemoryHighScoreStore"]
