# src/tetris_arcade/game/core/game.py
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import numpy as np

from tetris_arcade.game.core.board import Board
from tetris_arcade.game.core.constants import BOARD_H, BOARD_W, HARD_DROP_FLASH_FRAMES, MAX_COLOR_ID, NUM_COLORS
from tetris_arcade.game.core.events import (
    EventDispatcher,
    GameListener,
    HighScoreStore,
    NullHighScoreStore,
    load_high_score_safe,
    save_high_score_safe,
)
from tetris_arcade.game.core.piece_rules import PieceRule, UniformPieceRule
from tetris_arcade.game.core.pieceset import PieceCatalog
from tetris_arcade.game.core.rotation import try_rotate
from tetris_arcade.game.core.rules import Progression, ScoreConfig
from tetris_arcade.game.core.types import ActivePiece, Command, GameStatus, LockResult, NextPiece, State

LOG = logging.getLogger(__name__)


class GameSession:
    """
    One game: board, active piece, lookahead, progression and status flags.

    Contracts:

      - Single mutator: every method runs to completion synchronously. Input
        handlers and ticks must not interleave (the host serializes them).
      - board.grid is the authoritative LOCKED board; state() exposes a
        read-only view of it, never a copy.
      - Collisions are plain booleans that drive control flow, never errors.
      - A spawn that collides is the only way into GAME_OVER.
      - Listener / high-score store failures are logged and ignored.

    Pause policy:
      move/soft-drop are gated while paused; rotate and hard-drop are not
      (hard-drop gating is switchable through `hard_drop_while_paused`).
    """

    def __init__(
            self,
            *,
            width: int = BOARD_W,
            height: int = BOARD_H,
            pieces: Optional[PieceCatalog] = None,
            piece_rule: Optional[PieceRule] = None,
            score_cfg: Optional[ScoreConfig] = None,
            num_colors: int = NUM_COLORS,
            listeners: Iterable[GameListener] = (),
            high_scores: Optional[HighScoreStore] = None,
            hard_drop_while_paused: bool = True,
            flash_frames: int = HARD_DROP_FLASH_FRAMES,
            rng: Optional[np.random.Generator] = None,
    ) -> None:
        self.w = int(width)
        self.h = int(height)
        if self.w <= 0:
            raise ValueError(f"width must be positive, got {self.w}")
        if self.h <= 0:
            raise ValueError(f"height must be positive, got {self.h}")
        self.num_colors = int(num_colors)
        if not (1 <= self.num_colors <= MAX_COLOR_ID):
            raise ValueError(f"num_colors must be in [1, {MAX_COLOR_ID}], got {self.num_colors}")

        self.pieces = pieces if pieces is not None else PieceCatalog.classic7()
        if len(self.pieces) == 0:
            raise ValueError("PieceCatalog has no kinds (empty catalog is invalid).")
        for kind in self.pieces.kinds():
            if self.pieces.width(kind) > self.w:
                raise ValueError(f"piece {kind!r} is wider than the board (w={self.w})")

        self.board = Board.empty(h=self.h, w=self.w)
        self.progression = Progression(cfg=score_cfg or ScoreConfig())
        self.events = EventDispatcher(listeners)
        self.high_scores: HighScoreStore = high_scores or NullHighScoreStore()

        self.hard_drop_while_paused = bool(hard_drop_while_paused)
        self.flash_frames = int(flash_frames)

        # Session-owned RNG, injected into the piece rule on start().
        self._rng: np.random.Generator = rng if rng is not None else np.random.default_rng()
        self._piece_rule: PieceRule = piece_rule if piece_rule is not None else UniformPieceRule()

        self.status = GameStatus.IDLE
        self.active: Optional[ActivePiece] = None
        self.next_piece: Optional[NextPiece] = None
        self.high_score = 0
        self.flash_timer = 0
        self.last_lock: Optional[LockResult] = None

    # ---- lifecycle -----------------------------------------------------------------

    def set_rng(self, rng: np.random.Generator) -> None:
        self._rng = rng

    def add_listener(self, listener: GameListener) -> None:
        self.events.add(listener)

    @property
    def score(self) -> int:
        return int(self.progression.score)

    @property
    def level(self) -> int:
        return int(self.progression.level)

    @property
    def fall_interval_ms(self) -> int:
        return int(self.progression.fall_interval_ms)

    def start(self) -> State:
        """Full reset, fresh lookahead, first spawn. Status ends RUNNING (or GAME_OVER)."""
        self.board.clear()
        self.progression.reset()
        self.flash_timer = 0
        self.last_lock = None
        self.active = None
        self.high_score = load_high_score_safe(self.high_scores)

        self._piece_rule.reset(rng=self._rng, kinds=self.pieces.kinds(), num_colors=self.num_colors)
        self.next_piece = self._draw_next()

        self.status = GameStatus.RUNNING
        LOG.info("game started (%dx%d, high score %d)", self.w, self.h, self.high_score)
        self.events.emit("on_start")
        self.spawn()
        return self.state()

    def pause(self) -> bool:
        if self.status is not GameStatus.RUNNING:
            return False
        self.status = GameStatus.PAUSED
        self.events.emit("on_pause")
        return True

    def resume(self) -> bool:
        if self.status is not GameStatus.PAUSED:
            return False
        self.status = GameStatus.RUNNING
        self.events.emit("on_resume")
        return True

    def toggle_pause(self) -> bool:
        """Flip RUNNING <-> PAUSED. Ignored in IDLE / GAME_OVER."""
        if self.status is GameStatus.RUNNING:
            return self.pause()
        if self.status is GameStatus.PAUSED:
            return self.resume()
        return False

    # ---- piece operations ----------------------------------------------------------

    def spawn(self) -> bool:
        """
        Promote the lookahead to the active piece and draw a new lookahead.

        Spawn column is centred: floor(W/2) - floor(piece_width/2), row 0.
        Returns False (and enters GAME_OVER) if the spawn position collides.
        """
        if self.next_piece is None:
            raise RuntimeError("spawn() called before start(): no lookahead piece")

        nxt = self.next_piece
        shape = self.pieces.shape(nxt.kind)
        x = self.w // 2 - int(shape.shape[1]) // 2
        self.active = ActivePiece(kind=nxt.kind, shape=shape, x=x, y=0, color=nxt.color)
        self.next_piece = self._draw_next()
        LOG.debug("spawned %s at x=%d (next %s)", nxt.kind, x, self.next_piece.kind)

        if self.board.collides(shape, x, 0):
            self._game_over()
            return False
        return True

    def move_horizontal(self, dir: int) -> bool:
        d = int(dir)
        if d not in (-1, 1):
            raise ValueError(f"move dir must be -1 or +1, got {dir!r}")
        if self.status is not GameStatus.RUNNING:
            return False
        return self._try_move(dx=d, dy=0)

    def soft_drop(self) -> Optional[LockResult]:
        """
        One row down. If blocked, the piece locks instead.

        Returns the LockResult when a lock happened, else None.
        """
        if self.status is not GameStatus.RUNNING:
            return None
        if self._try_move(dx=0, dy=+1):
            return None
        return self._lock_and_advance()

    def hard_drop(self) -> Optional[LockResult]:
        if not self._accepts_hard_drop():
            return None
        ap = self._require_active()
        ap.y = self.board.ghost_y(ap.shape, ap.x, ap.y)
        # flash only plays while frames are being consumed
        if self.status is GameStatus.RUNNING:
            self.flash_timer = self.flash_frames
        return self._lock_and_advance()

    def rotate(self, dir: int = +1) -> bool:
        """
        Rotate with horizontal kicks. On failure nothing changes.
        """
        if self.status not in (GameStatus.RUNNING, GameStatus.PAUSED):
            return False
        ap = self._require_active()
        out = try_rotate(board=self.board, shape=ap.shape, x=ap.x, y=ap.y, dir=dir)
        if out is None:
            return False
        ap.shape, ap.x = out
        self.events.emit("on_rotate_success")
        return True

    def step(self, command: Any) -> Tuple[State, int, bool, Dict[str, object]]:
        """
        Apply one input command and return:

          (state, cleared_lines, game_over, info)

        info carries "lock" (LockResult) when the command locked a piece and
        "changed" (bool) telling whether the command had any effect.
        """
        c = self.normalize_command(command)
        cleared = 0
        info: Dict[str, object] = {}
        changed = False

        if c is Command.START:
            if self.status in (GameStatus.IDLE, GameStatus.GAME_OVER):
                self.start()
                changed = True
        elif c is Command.TOGGLE_PAUSE:
            changed = self.toggle_pause()
        elif c is Command.MOVE_LEFT:
            changed = self.move_horizontal(-1)
        elif c is Command.MOVE_RIGHT:
            changed = self.move_horizontal(+1)
        elif c is Command.ROTATE_CW:
            changed = self.rotate(+1)
        elif c is Command.ROTATE_CCW:
            changed = self.rotate(-1)
        elif c in (Command.SOFT_DROP, Command.HARD_DROP):
            was_running = self.status is GameStatus.RUNNING
            res = self.soft_drop() if c is Command.SOFT_DROP else self.hard_drop()
            if res is not None:
                info["lock"] = res
                cleared = res.cleared
            changed = res is not None or (c is Command.SOFT_DROP and was_running)

        info["changed"] = bool(changed)
        return self.state(), int(cleared), self.status is GameStatus.GAME_OVER, info

    def consume_flash(self) -> int:
        """Renderer hook: returns the current flash countdown and advances it by one frame."""
        t = int(self.flash_timer)
        if t > 0:
            self.flash_timer = t - 1
        return t

    # ---- internals -----------------------------------------------------------------

    @staticmethod
    def normalize_command(command: Any) -> Command:
        if isinstance(command, Command):
            return command
        s = str(command).strip().lower()
        mapping = {
            "left": Command.MOVE_LEFT,
            "move_left": Command.MOVE_LEFT,
            "right": Command.MOVE_RIGHT,
            "move_right": Command.MOVE_RIGHT,
            "down": Command.SOFT_DROP,
            "soft_drop": Command.SOFT_DROP,
            "drop": Command.HARD_DROP,
            "hard_drop": Command.HARD_DROP,
            "cw": Command.ROTATE_CW,
            "rotate": Command.ROTATE_CW,
            "rotate_cw": Command.ROTATE_CW,
            "ccw": Command.ROTATE_CCW,
            "rotate_ccw": Command.ROTATE_CCW,
            "pause": Command.TOGGLE_PAUSE,
            "toggle_pause": Command.TOGGLE_PAUSE,
            "start": Command.START,
        }
        try:
            return mapping[s]
        except KeyError as e:
            raise ValueError(f"unknown command {command!r}") from e

    def _accepts_hard_drop(self) -> bool:
        if self.status is GameStatus.RUNNING:
            return True
        return self.status is GameStatus.PAUSED and self.hard_drop_while_paused

    def _require_active(self) -> ActivePiece:
        if self.active is None:
            raise RuntimeError("no active piece (call start() first)")
        return self.active

    def _draw_next(self) -> NextPiece:
        nxt = self._piece_rule.next_piece()
        if nxt is None:
            raise RuntimeError("PieceRule.next_piece returned None (invalid).")
        if nxt.kind not in self.pieces:
            raise KeyError(f"piece rule produced unknown kind {nxt.kind!r} (kinds={list(self.pieces.kinds())!r})")
        return nxt

    def _try_move(self, dx: int, dy: int) -> bool:
        ap = self._require_active()
        nx, ny = ap.x + dx, ap.y + dy
        if self.board.collides(ap.shape, nx, ny):
            return False
        ap.x, ap.y = nx, ny
        return True

    def _lock_and_advance(self) -> LockResult:
        """
        Lock sequence: write the active piece, sweep full rows, update
        progression (+ high score), then spawn the lookahead.
        """
        ap = self._require_active()
        cells = self.board.lock(ap.shape, ap.x, ap.y, ap.color)
        self.events.emit("on_lock")

        rows = self.board.sweep_rows()
        delta = self.progression.apply_clears(len(rows))
        if rows:
            LOG.debug("cleared %d row(s) %s, score=%d level=%d", len(rows), rows, self.score, self.level)
            self.events.emit("on_line_clear", tuple(rows))
        if self.score > self.high_score:
            self.high_score = self.score
            save_high_score_safe(self.high_scores, self.high_score)

        spawned = self.spawn()
        res = LockResult(
            cells=tuple(cells),
            cleared_rows=tuple(rows),
            score_delta=int(delta),
            game_over=not spawned,
        )
        self.last_lock = res
        return res

    def _game_over(self) -> None:
        self.status = GameStatus.GAME_OVER
        LOG.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.progression.lines)
        self.events.emit("on_game_over", self.score)

    def state(self) -> State:
        """
        Public snapshot for renderers and tests. The grid is a read-only view;
        active/next shapes are copies.
        """
        ap = self.active
        ghost_y: Optional[int] = None
        if ap is not None and self.status is not GameStatus.GAME_OVER:
            ghost_y = self.board.ghost_y(ap.shape, ap.x, ap.y)

        next_shape = None
        if self.next_piece is not None:
            next_shape = self.pieces.canonical(self.next_piece.kind)

        return State(
            grid=self.board.view(),
            status=self.status,
            score=self.score,
            level=self.level,
            lines=int(self.progression.lines),
            high_score=int(self.high_score),
            fall_interval_ms=self.fall_interval_ms,
            active=ap.snapshot() if ap is not None else None,
            ghost_y=ghost_y,
            next_piece=self.next_piece,
            next_shape=next_shape,
            flash=int(self.flash_timer),
        )
