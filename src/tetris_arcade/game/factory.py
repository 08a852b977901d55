# src/tetris_arcade/game/factory.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import numpy as np

from tetris_arcade.game.config import GameConfig
from tetris_arcade.game.core.events import GameListener, HighScoreStore
from tetris_arcade.game.core.game import GameSession
from tetris_arcade.game.core.piece_rules import PieceRule, UniformPieceRule
from tetris_arcade.game.core.pieceset import PieceCatalog
from tetris_arcade.game.core.rules import ScoreConfig


def _make_piece_rule(name: str) -> PieceRule:
    n = str(name).strip().lower()
    if n == "uniform":
        return UniformPieceRule()
    raise ValueError(f"unknown piece_rule={name!r}")


def score_config_from(cfg: GameConfig) -> ScoreConfig:
    return ScoreConfig(
        points_per_line=int(cfg.points_per_line),
        points_per_level=int(cfg.points_per_level),
        base_interval_ms=int(cfg.base_interval_ms),
        interval_step_ms=int(cfg.interval_step_ms),
        min_interval_ms=int(cfg.min_interval_ms),
    )


def make_session_from_cfg(
        cfg: GameConfig | dict | None = None,
        *,
        listeners: Iterable[GameListener] = (),
        high_scores: Optional[HighScoreStore] = None,
        piece_rule: Optional[PieceRule] = None,
) -> GameSession:
    """
    Build a GameSession from config.

    seed=None seeds the session RNG from OS entropy.
    An explicit piece_rule (e.g. SequencePieceRule) overrides cfg.piece_rule.
    """
    if cfg is None:
        game_cfg = GameConfig()
    elif isinstance(cfg, GameConfig):
        game_cfg = cfg
    elif isinstance(cfg, dict):
        game_cfg = GameConfig.model_validate(cfg)
    else:
        raise TypeError(f"cfg must be GameConfig|mapping|None, got {type(cfg)!r}")

    pieces = PieceCatalog.classic7()
    if game_cfg.pieces_path is not None:
        pieces = PieceCatalog.from_yaml(Path(game_cfg.pieces_path))

    return GameSession(
        width=game_cfg.width,
        height=game_cfg.height,
        pieces=pieces,
        piece_rule=piece_rule or _make_piece_rule(game_cfg.piece_rule),
        score_cfg=score_config_from(game_cfg),
        num_colors=game_cfg.num_colors,
        listeners=listeners,
        high_scores=high_scores,
        hard_drop_while_paused=game_cfg.hard_drop_while_paused,
        flash_frames=game_cfg.flash_frames,
        rng=np.random.default_rng(game_cfg.seed),
    )


__all__ = ["make_session_from_cfg", "score_config_from"]
