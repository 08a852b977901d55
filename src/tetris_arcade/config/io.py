# src/tetris_arcade/config/io.py
from __future__ import annotations

from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf
from pydantic import BaseModel

from tetris_arcade.config.root import AppConfig


def to_plain_dict(cfg: Any) -> dict[str, Any]:
    if isinstance(cfg, BaseModel):
        return cfg.model_dump(mode="json")
    if isinstance(cfg, DictConfig):
        data = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(data, dict):
            raise TypeError("config must resolve to a mapping")
        return data
    raise TypeError(f"unsupported config type: {type(cfg).__name__}")


def load_yaml(path: Path) -> dict[str, Any]:
    cfg_path = Path(path)
    cfg = OmegaConf.load(cfg_path)
    data = OmegaConf.to_container(cfg, resolve=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"config({path}) must be a mapping")
    return data


def load_app_config(path: Path | None = None, *, overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Load an AppConfig from YAML (or defaults when path is None), then deep-merge
    `overrides` (e.g. CLI flags) on top before validation.
    """
    base = OmegaConf.create(load_yaml(path) if path is not None else {})
    if overrides:
        base = OmegaConf.merge(base, OmegaConf.create(overrides))
    data = OmegaConf.to_container(base, resolve=True)
    if not isinstance(data, dict):
        raise TypeError("config must resolve to a mapping")
    return AppConfig.model_validate(data)


__all__ = ["to_plain_dict", "load_yaml", "load_app_config"]
