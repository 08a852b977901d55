# src/tetris_arcade/game/config.py
from __future__ import annotations

from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator

from tetris_arcade.config.base import ConfigBase
from tetris_arcade.game.core.constants import BOARD_H, BOARD_W, HARD_DROP_FLASH_FRAMES, MAX_COLOR_ID, NUM_COLORS

PieceRuleName = Literal["uniform"]


def _as_int(value: object, *, where: str) -> int:
    if isinstance(value, bool):
        raise ValueError(f"{where} must be an int, got bool")
    if not isinstance(value, (int, float, str, bytes, bytearray)):
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"{where} must be an int-like value, got {type(value)!r}") from e


class GameConfig(ConfigBase):
    """
    Engine-facing config.

    Single home for everything the deterministic core needs:
      - board geometry and piece source
      - scoring / level / fall-speed constants
      - pause policy for hard drops
    """

    width: int = Field(default=BOARD_W, ge=4)
    height: int = Field(default=BOARD_H, ge=4)
    seed: Optional[int] = Field(default=None, ge=0)
    piece_rule: PieceRuleName = "uniform"
    pieces_path: Optional[str] = None
    num_colors: int = Field(default=NUM_COLORS, ge=1, le=MAX_COLOR_ID)

    points_per_line: int = Field(default=10, ge=1)
    points_per_level: int = Field(default=30, ge=1)
    base_interval_ms: int = Field(default=1000, gt=0)
    interval_step_ms: int = Field(default=100, ge=0)
    min_interval_ms: int = Field(default=100, gt=0)

    flash_frames: int = Field(default=HARD_DROP_FLASH_FRAMES, ge=0)
    hard_drop_while_paused: bool = True

    @field_validator("seed", mode="before")
    @classmethod
    def _seed_int(cls, v: object) -> Optional[int]:
        if v is None:
            return None
        return _as_int(v, where="game.seed")

    @field_validator("piece_rule", mode="before")
    @classmethod
    def _piece_rule_lower(cls, v: object) -> str:
        return str(v).strip().lower()

    @model_validator(mode="after")
    def _check_intervals(self) -> "GameConfig":
        if self.min_interval_ms > self.base_interval_ms:
            raise ValueError(
                f"game.min_interval_ms ({self.min_interval_ms}) must be <= game.base_interval_ms ({self.base_interval_ms})"
            )
        return self


__all__ = ["GameConfig", "PieceRuleName"]
