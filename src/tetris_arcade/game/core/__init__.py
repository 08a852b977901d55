# src/tetris_arcade/game/core/__init__.py
from __future__ import annotations

from tetris_arcade.game.core.board import Board
from tetris_arcade.game.core.events import EventDispatcher, GameListener, HighScoreStore, NullHighScoreStore
from tetris_arcade.game.core.game import GameSession
from tetris_arcade.game.core.loop import GameLoop
from tetris_arcade.game.core.piece_rules import PieceRule, SequencePieceRule, UniformPieceRule
from tetris_arcade.game.core.pieceset import PieceCatalog
from tetris_arcade.game.core.rotation import rotate_shape, try_rotate
from tetris_arcade.game.core.rules import Progression, ScoreConfig, fall_interval_ms, level_for_score, score_for_clears
from tetris_arcade.game.core.types import (
    ActivePiece,
    Command,
    GameStatus,
    LockResult,
    NextPiece,
    PieceSnapshot,
    State,
)

__all__ = [
    "Board",
    "PieceCatalog",
    "rotate_shape",
    "try_rotate",
    "PieceRule",
    "UniformPieceRule",
    "SequencePieceRule",
    "ScoreConfig",
    "Progression",
    "score_for_clears",
    "level_for_score",
    "fall_interval_ms",
    "GameListener",
    "HighScoreStore",
    "NullHighScoreStore",
    "EventDispatcher",
    "GameSession",
    "GameLoop",
    "ActivePiece",
    "Command",
    "GameStatus",
    "LockResult",
    "NextPiece",
    "PieceSnapshot",
    "State",
]
