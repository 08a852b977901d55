# src/tetris_arcade/game/audio.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Sequence

import pygame

from tetris_arcade.config.root import AudioConfig
from tetris_arcade.game.core.events import GameListener

LOG = logging.getLogger(__name__)


class PygameAudio(GameListener):
    """
    Sound effects + looping background music through pygame.mixer.

    Best-effort: if the mixer cannot start or a file is missing, that sound is
    silent and a warning is logged once at load time. Playback errors are
    logged and dropped.
    """

    def __init__(self, cfg: AudioConfig) -> None:
        self.cfg = cfg
        self.enabled = bool(cfg.enabled)
        self._sounds: Dict[str, Optional[pygame.mixer.Sound]] = {}
        self._music_loaded = False

        if not self.enabled:
            return
        if not self._init_mixer():
            self.enabled = False
            return

        base = Path(cfg.sounds_dir).expanduser() if cfg.sounds_dir else Path("sounds")
        self._sounds = {
            "rotate": self._load_sound(base / cfg.rotate),
            "drop": self._load_sound(base / cfg.drop),
            "line_clear": self._load_sound(base / cfg.line_clear),
            "game_over": self._load_sound(base / cfg.game_over),
        }
        if cfg.music:
            self._music_loaded = self._load_music(base / cfg.music)

    # ---- loading -------------------------------------------------------------------

    @staticmethod
    def _init_mixer() -> bool:
        if pygame.mixer.get_init():
            return True
        try:
            pygame.mixer.init()
            return True
        except pygame.error:
            LOG.warning("audio mixer unavailable; running without sound", exc_info=True)
            return False

    def _load_sound(self, path: Path) -> Optional[pygame.mixer.Sound]:
        if not path.is_file():
            LOG.warning("sound file not found: %s", path)
            return None
        try:
            snd = pygame.mixer.Sound(str(path))
        except pygame.error:
            LOG.warning("could not load sound %s", path, exc_info=True)
            return None
        snd.set_volume(float(self.cfg.sfx_volume))
        return snd

    def _load_music(self, path: Path) -> bool:
        if not path.is_file():
            LOG.warning("music file not found: %s", path)
            return False
        try:
            pygame.mixer.music.load(str(path))
            pygame.mixer.music.set_volume(float(self.cfg.music_volume))
        except pygame.error:
            LOG.warning("could not load music %s", path, exc_info=True)
            return False
        return True

    # ---- playback ------------------------------------------------------------------

    def play(self, name: str) -> None:
        if not self.enabled:
            return
        snd = self._sounds.get(name)
        if snd is None:
            return
        # restart from the beginning if already playing
        snd.stop()
        snd.play()

    def _music(self, action: str) -> None:
        if not (self.enabled and self._music_loaded):
            return
        try:
            if action == "play":
                pygame.mixer.music.play(loops=-1)
            elif action == "pause":
                pygame.mixer.music.pause()
            elif action == "unpause":
                pygame.mixer.music.unpause()
            elif action == "stop":
                pygame.mixer.music.stop()
        except pygame.error:
            LOG.warning("music %s failed", action, exc_info=True)

    # ---- GameListener --------------------------------------------------------------

    def on_start(self) -> None:
        self._music("play")

    def on_rotate_success(self) -> None:
        self.play("rotate")

    def on_lock(self) -> None:
        self.play("drop")

    def on_line_clear(self, rows: Sequence[int]) -> None:
        self.play("line_clear")

    def on_game_over(self, score: int) -> None:
        self.play("game_over")
        self._music("pause")

    def on_pause(self) -> None:
        self._music("pause")

    def on_resume(self) -> None:
        self._music("unpause")

    def close(self) -> None:
        if pygame.mixer.get_init():
            self._music("stop")
