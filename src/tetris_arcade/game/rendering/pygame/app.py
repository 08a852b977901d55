# src/tetris_arcade/game/rendering/pygame/app.py
from __future__ import annotations

import logging
from typing import Dict, Optional

import pygame

from tetris_arcade.config.root import UiConfig
from tetris_arcade.game.core.game import GameSession
from tetris_arcade.game.core.loop import GameLoop
from tetris_arcade.game.core.types import Command, GameStatus
from tetris_arcade.game.rendering.pygame.particles import ParticleSystem
from tetris_arcade.game.rendering.pygame.renderer import TetrisRenderer

LOG = logging.getLogger(__name__)

KEYMAP: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_z: Command.ROTATE_CCW,
    pygame.K_SPACE: Command.HARD_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_RETURN: Command.START,
    pygame.K_KP_ENTER: Command.START,
}


def run_manual_play(
        *,
        session: GameSession,
        ui: UiConfig,
        loop: Optional[GameLoop] = None,
) -> int:
    """
    Keyboard-driven play loop.

    One frame = drain input events, tick the loop with pygame's monotonic
    clock, render. Input handlers and ticks run on this thread only, so they
    never interleave.
    """
    game_loop = loop or GameLoop(session)

    pygame.init()
    try:
        renderer = TetrisRenderer(cell=ui.cell, show_grid_lines=ui.show_grid, show_ghost=ui.show_ghost)
        screen, layout = renderer.init_window(board_h=session.h, board_w=session.w, title=ui.title)
        clock = pygame.time.Clock()

        if ui.key_repeat is not None:
            delay, interval = ui.key_repeat
            pygame.key.set_repeat(int(delay), int(interval))

        particles = ParticleSystem(board_w=session.w, palette=renderer.palette)
        session.add_listener(particles)

        space_held = False
        running = True
        while running:
            clock.tick(int(ui.fps))

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                if event.type == pygame.KEYUP and event.key == pygame.K_SPACE:
                    space_held = False
                    continue
                if event.type != pygame.KEYDOWN:
                    continue
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break

                cmd = KEYMAP.get(event.key)
                if cmd is None:
                    continue
                if cmd is Command.HARD_DROP:
                    space_held = True
                    # held key repeats must not slam piece after piece
                    if getattr(event, "repeat", False):
                        continue
                game_loop.handle(cmd, now_ms=pygame.time.get_ticks())

            game_loop.tick(pygame.time.get_ticks())
            if game_loop.wants_ticks:
                particles.update()

            flash_t = session.consume_flash() if session.status is GameStatus.RUNNING else 0
            renderer.render(
                screen=screen,
                state=session.state(),
                layout=layout,
                flash=flash_t > 0 and flash_t % 2 == 0,
                hide_ghost=space_held,
                particles=particles,
            )
            pygame.display.flip()
    finally:
        pygame.quit()

    LOG.info("bye (score=%d, high score=%d)", session.score, session.high_score)
    return 0
