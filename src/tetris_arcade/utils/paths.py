# src/tetris_arcade/utils/paths.py
from __future__ import annotations

from pathlib import Path

APP_DIR_NAME = ".tetris_arcade"


def data_dir() -> Path:
    """
    Per-user data directory (~/.tetris_arcade). Not created here.
    """
    return Path.home() / APP_DIR_NAME


def default_highscore_path() -> Path:
    return data_dir() / "highscore.json"


def resolve_user_path(raw: str | Path) -> Path:
    """
    Expand '~' and make relative paths absolute against the working directory.
    """
    s = str(raw).strip().strip('"').strip("'")
    if not s:
        raise ValueError("empty path")
    return Path(s).expanduser().resolve()


__all__ = ["data_dir", "default_highscore_path", "resolve_user_path"]
