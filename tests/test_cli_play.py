# tests/test_cli_play.py
from __future__ import annotations

from pathlib import Path

from tetris_arcade.cli.play import build_overrides, highscore_path_from, parse_args
from tetris_arcade.config.io import load_app_config
from tetris_arcade.utils.paths import default_highscore_path


def test_no_flags_produce_no_overrides() -> None:
    assert build_overrides(parse_args([])) == {}


def test_flags_map_onto_config_sections() -> None:
    args = parse_args(
        [
            "--seed", "5",
            "--width", "10",
            "--no-hard-drop-while-paused",
            "--cell", "24",
            "--no-ghost",
            "--no-repeat",
            "--no-sound",
            "--highscore-file", "scores.json",
            "--log-level", "debug",
        ]
    )
    out = build_overrides(args)
    assert out == {
        "game": {"seed": 5, "width": 10, "hard_drop_while_paused": False},
        "ui": {"cell": 24, "show_ghost": False, "key_repeat": None},
        "audio": {"enabled": False},
        "storage": {"highscore_path": "scores.json"},
        "log_level": "debug",
    }

    cfg = load_app_config(None, overrides=out)
    assert cfg.game.hard_drop_while_paused is False
    assert cfg.ui.key_repeat is None


def test_highscore_path_defaults_to_data_dir(tmp_path: Path) -> None:
    cfg = load_app_config()
    assert highscore_path_from(cfg) == default_highscore_path()

    target = tmp_path / "hs.json"
    cfg = load_app_config(overrides={"storage": {"highscore_path": str(target)}})
    assert highscore_path_from(cfg) == target.resolve()
