# src/tetris_arcade/config/root.py
from __future__ import annotations

from typing import Optional, Tuple

from pydantic import Field, field_validator

from tetris_arcade.config.base import ConfigBase
from tetris_arcade.game.config import GameConfig


class UiConfig(ConfigBase):
    cell: int = Field(default=20, ge=8, le=96)
    fps: int = Field(default=60, ge=1)
    show_grid: bool = False
    show_ghost: bool = True
    key_repeat: Optional[Tuple[int, int]] = (170, 50)
    title: str = "Tetris Arcade"


class AudioConfig(ConfigBase):
    enabled: bool = True
    sounds_dir: Optional[str] = None
    rotate: str = "rotate.wav"
    drop: str = "drop.wav"
    line_clear: str = "line-clear.wav"
    game_over: str = "game-over.wav"
    music: Optional[str] = "bg-music.mp3"
    music_volume: float = Field(default=0.4, ge=0.0, le=1.0)
    sfx_volume: float = Field(default=1.0, ge=0.0, le=1.0)


class StorageConfig(ConfigBase):
    highscore_path: Optional[str] = None


class AppConfig(ConfigBase):
    log_level: str = "info"
    game: GameConfig = GameConfig()
    ui: UiConfig = UiConfig()
    audio: AudioConfig = AudioConfig()
    storage: StorageConfig = StorageConfig()

    @field_validator("log_level", mode="before")
    @classmethod
    def _log_level_lower(cls, v: object) -> str:
        s = str(v).strip().lower()
        if s not in {"debug", "info", "warning", "error", "critical"}:
            raise ValueError(f"unknown log_level {v!r}")
        return s


__all__ = ["UiConfig", "AudioConfig", "StorageConfig", "AppConfig"]
