# tests/test_config.py
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from tetris_arcade.config.io import load_app_config, load_yaml, to_plain_dict
from tetris_arcade.config.root import AppConfig
from tetris_arcade.game.config import GameConfig


def test_game_config_defaults_match_classic_rules() -> None:
    cfg = GameConfig()
    assert (cfg.width, cfg.height) == (12, 20)
    assert cfg.seed is None
    assert cfg.piece_rule == "uniform"
    assert (cfg.points_per_line, cfg.points_per_level) == (10, 30)
    assert (cfg.base_interval_ms, cfg.interval_step_ms, cfg.min_interval_ms) == (1000, 100, 100)
    assert cfg.hard_drop_while_paused is True


def test_game_config_rejects_unknown_keys() -> None:
    with pytest.raises(ValidationError, match="Extra inputs are not permitted"):
        GameConfig.model_validate({"gravity": 2})


def test_game_config_is_frozen() -> None:
    cfg = GameConfig()
    with pytest.raises(ValidationError):
        cfg.width = 10  # type: ignore[misc]


def test_game_config_rejects_inverted_intervals() -> None:
    with pytest.raises(ValidationError, match="min_interval_ms"):
        GameConfig.model_validate({"base_interval_ms": 50, "min_interval_ms": 100})


def test_game_config_rejects_bool_seed_and_unknown_rule() -> None:
    with pytest.raises(ValidationError, match="bool"):
        GameConfig.model_validate({"seed": True})
    with pytest.raises(ValidationError):
        GameConfig.model_validate({"piece_rule": "bag7"})
    assert GameConfig.model_validate({"seed": "7", "piece_rule": " Uniform "}).seed == 7


def test_app_config_validates_log_level() -> None:
    assert AppConfig.model_validate({"log_level": "DEBUG"}).log_level == "debug"
    with pytest.raises(ValidationError, match="unknown log_level"):
        AppConfig.model_validate({"log_level": "loud"})


def test_load_app_config_without_file_gives_defaults() -> None:
    cfg = load_app_config()
    assert cfg == AppConfig()


def test_load_app_config_merges_yaml_and_overrides(tmp_path: Path) -> None:
    p = tmp_path / "play.yaml"
    p.write_text(
        "log_level: warning\n"
        "game:\n"
        "  width: 10\n"
        "  seed: 3\n"
        "ui:\n"
        "  cell: 24\n",
        encoding="utf-8",
    )

    cfg = load_app_config(p, overrides={"game": {"seed": 9}, "audio": {"enabled": False}})

    assert cfg.log_level == "warning"
    assert (cfg.game.width, cfg.game.height, cfg.game.seed) == (10, 20, 9)
    assert cfg.ui.cell == 24
    assert cfg.audio.enabled is False


def test_load_yaml_handles_empty_and_non_mapping(tmp_path: Path) -> None:
    empty = tmp_path / "empty.yaml"
    empty.write_text("", encoding="utf-8")
    assert load_yaml(empty) == {}

    listy = tmp_path / "list.yaml"
    listy.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(TypeError, match="mapping"):
        load_yaml(listy)


def test_to_plain_dict_round_trips_through_validation() -> None:
    cfg = AppConfig.model_validate({"game": {"width": 14}})
    data = to_plain_dict(cfg)
    assert data["game"]["width"] == 14
    assert AppConfig.model_validate(data) == cfg
    with pytest.raises(TypeError, match="unsupported"):
        to_plain_dict(object())


def test_game_config_caps_colour_count_at_one_byte() -> None:
    assert GameConfig.model_validate({"num_colors": 255}).num_colors == 255
    with pytest.raises(ValidationError, match="less than or equal to 255"):
        GameConfig.model_validate({"num_colors": 256})
