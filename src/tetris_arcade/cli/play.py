# src/tetris_arcade/cli/play.py
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from tetris_arcade.config.io import load_app_config
from tetris_arcade.config.root import AppConfig
from tetris_arcade.storage.highscore import JsonHighScoreStore
from tetris_arcade.utils.logging import setup_logger
from tetris_arcade.utils.paths import default_highscore_path, resolve_user_path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play Tetris Arcade (pygame).")
    ap.add_argument("--config", type=str, default=None, help="YAML config file (AppConfig schema)")

    # --- game ---
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--width", type=int, default=None)
    ap.add_argument("--height", type=int, default=None)
    ap.add_argument(
        "--hard-drop-while-paused",
        dest="hard_drop_while_paused",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="allow Space to hard-drop while the game is paused",
    )

    # --- runtime / UI ---
    ap.add_argument("--fps", type=int, default=None, help="render FPS cap (UI loop)")
    ap.add_argument("--cell", type=int, default=None)
    ap.add_argument("--show-grid", action="store_true")
    ap.add_argument("--no-ghost", action="store_true")
    ap.add_argument("--no-repeat", action="store_true", help="disable held-key auto repeat")

    # --- collaborators ---
    ap.add_argument("--no-sound", action="store_true")
    ap.add_argument("--sounds-dir", type=str, default=None)
    ap.add_argument("--highscore-file", type=str, default=None)

    ap.add_argument("--log-level", type=str, default=None, choices=["debug", "info", "warning", "error"])
    return ap.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    game: dict[str, Any] = {}
    ui: dict[str, Any] = {}
    audio: dict[str, Any] = {}
    storage: dict[str, Any] = {}

    if args.seed is not None:
        game["seed"] = int(args.seed)
    if args.width is not None:
        game["width"] = int(args.width)
    if args.height is not None:
        game["height"] = int(args.height)
    if args.hard_drop_while_paused is not None:
        game["hard_drop_while_paused"] = bool(args.hard_drop_while_paused)

    if args.fps is not None:
        ui["fps"] = int(args.fps)
    if args.cell is not None:
        ui["cell"] = int(args.cell)
    if args.show_grid:
        ui["show_grid"] = True
    if args.no_ghost:
        ui["show_ghost"] = False
    if args.no_repeat:
        ui["key_repeat"] = None

    if args.no_sound:
        audio["enabled"] = False
    if args.sounds_dir is not None:
        audio["sounds_dir"] = str(args.sounds_dir)

    if args.highscore_file is not None:
        storage["highscore_path"] = str(args.highscore_file)

    out: dict[str, Any] = {}
    for key, node in (("game", game), ("ui", ui), ("audio", audio), ("storage", storage)):
        if node:
            out[key] = node
    if args.log_level is not None:
        out["log_level"] = str(args.log_level)
    return out


def highscore_path_from(cfg: AppConfig) -> Path:
    if cfg.storage.highscore_path:
        return resolve_user_path(cfg.storage.highscore_path)
    return default_highscore_path()


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    cfg = load_app_config(Path(args.config) if args.config else None, overrides=build_overrides(args))

    log = setup_logger(name="tetris_arcade", use_rich=True, level=cfg.log_level)

    # pygame-dependent modules are imported lazily so --help works headless
    from tetris_arcade.game.audio import PygameAudio
    from tetris_arcade.game.factory import make_session_from_cfg
    from tetris_arcade.game.rendering.pygame.app import run_manual_play

    store = JsonHighScoreStore(highscore_path_from(cfg))
    log.info("[play] high score file: %s", store.path)

    audio = PygameAudio(cfg.audio)
    session = make_session_from_cfg(cfg.game, listeners=[audio], high_scores=store)
    try:
        return run_manual_play(session=session, ui=cfg.ui)
    finally:
        audio.close()


if __name__ == "__main__":
    raise SystemExit(main())
