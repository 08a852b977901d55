# tests/test_game_session.py
from __future__ import annotations

import logging

import numpy as np
import pytest

from tetris_arcade.game.core.events import GameListener
from tetris_arcade.game.core.game import GameSession
from tetris_arcade.game.core.pieceset import PieceCatalog
from tetris_arcade.game.core.types import Command, GameStatus, LockResult
from tetris_arcade.storage.highscore import MemoryHighScoreStore


class _BrokenListener(GameListener):
    def on_lock(self) -> None:
        raise RuntimeError("boom")

    def on_start(self) -> None:
        raise RuntimeError("boom")


class _BrokenStore:
    def load_high_score(self) -> int:
        raise OSError("disk gone")

    def save_high_score(self, score: int) -> None:
        raise OSError("disk gone")


def test_new_session_is_idle_with_empty_board(make_session) -> None:
    s = make_session()
    st = s.state()
    assert st.status is GameStatus.IDLE
    assert st.active is None
    assert st.grid.shape == (20, 12)
    assert int(st.grid.sum()) == 0


def test_spawn_before_start_is_an_error(make_session) -> None:
    with pytest.raises(RuntimeError, match="before start"):
        make_session().spawn()


def test_start_spawns_centered_piece_and_draws_lookahead(make_session) -> None:
    s = make_session(sequence=[("I", 2), ("T", 3), ("O", 1)])
    st = s.start()

    assert st.status is GameStatus.RUNNING
    assert st.active is not None
    assert (st.active.kind, st.active.x, st.active.y, st.active.color) == ("I", 4, 0, 2)
    assert st.next_piece is not None
    assert (st.next_piece.kind, st.next_piece.color) == ("T", 3)
    assert st.next_shape is not None and st.next_shape.shape == (3, 3)


@pytest.mark.parametrize("kind,x", [("O", 5), ("T", 5), ("I", 4)])
def test_spawn_column_is_centered(make_session, kind: str, x: int) -> None:
    s = make_session(sequence=[(kind, 1)])
    s.start()
    assert s.active is not None
    assert s.active.x == x


def test_hard_drop_on_empty_board_locks_at_floor(make_session) -> None:
    s = make_session(sequence=[("O", 4)])
    s.start()

    res = s.hard_drop()

    assert isinstance(res, LockResult)
    assert sorted(res.cells) == [(5, 18), (5, 19), (6, 18), (6, 19)]
    assert res.cleared == 0
    grid = s.board.grid
    assert grid[18, 5] == grid[18, 6] == grid[19, 5] == grid[19, 6] == 4
    assert int((grid != 0).sum()) == 4
    assert s.score == 0
    # lookahead promoted
    assert s.active is not None and s.active.y == 0


def test_completing_a_row_clears_it_and_scores(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    s.board.grid[19, :] = 2
    s.board.grid[19, 5:7] = 0

    res = s.hard_drop()

    assert res is not None
    assert res.cleared_rows == (19,)
    assert res.score_delta == 10
    assert (s.score, s.level, s.progression.lines) == (10, 1, 1)
    # upper half of the O shifted into the bottom row; new top row is empty
    assert s.board.grid[19, 5] == 1 and s.board.grid[19, 6] == 1
    assert int((s.board.grid != 0).sum()) == 2
    assert int(s.board.grid[0].sum()) == 0


def test_level_and_fall_speed_follow_score(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    for _ in range(3):
        s.board.grid[18:20, :] = 2
        s.board.grid[18:20, 5:7] = 0
        s.hard_drop()
    assert (s.score, s.level, s.fall_interval_ms) == (60, 3, 800)


def test_spawn_collision_enters_game_over_and_freezes(make_session, recorder) -> None:
    s = make_session(sequence=[("O", 1)], listeners=[recorder])
    s.start()
    s.board.grid[0:4, 0:11] = 3

    assert s.spawn() is False
    assert s.status is GameStatus.GAME_OVER
    assert recorder.calls[-1] == ("game_over", (0,))

    grid_before = s.board.grid.copy()
    active_before = s.state().active
    for c in (Command.SOFT_DROP, Command.MOVE_LEFT, Command.ROTATE_CW, Command.HARD_DROP, Command.TOGGLE_PAUSE):
        _, _, game_over, info = s.step(c)
        assert game_over
        assert info["changed"] is False
    assert np.array_equal(s.board.grid, grid_before)
    active_after = s.state().active
    assert active_before is not None and active_after is not None
    assert (active_after.x, active_after.y) == (active_before.x, active_before.y)
    assert np.array_equal(active_after.shape, active_before.shape)
    assert s.state().ghost_y is None


def test_start_after_game_over_resets_everything(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    s.board.grid[19, :] = 2
    s.board.grid[19, 5:7] = 0
    s.hard_drop()
    s.board.grid[0:4, 0:11] = 3
    s.spawn()
    assert s.status is GameStatus.GAME_OVER

    st, _, game_over, _ = s.step(Command.START)

    assert not game_over
    assert st.status is GameStatus.RUNNING
    assert (st.score, st.level, st.lines) == (0, 1, 0)
    assert int(st.grid.sum()) == 0


def test_move_stops_at_walls_and_rejects_bad_direction(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    moves = 0
    while s.move_horizontal(-1):
        moves += 1
    assert moves == 5
    assert s.active is not None and s.active.x == 0
    while s.move_horizontal(+1):
        pass
    assert s.active.x == 10
    with pytest.raises(ValueError, match="move dir"):
        s.move_horizontal(0)


def test_soft_drop_moves_then_locks_when_blocked(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    for _ in range(18):
        assert s.soft_drop() is None
    assert s.active is not None and s.active.y == 18
    res = s.soft_drop()
    assert res is not None
    assert sorted(res.cells) == [(5, 18), (5, 19), (6, 18), (6, 19)]


def test_rotate_kicks_off_left_wall(make_session, recorder) -> None:
    s = make_session(sequence=[("T", 1)], listeners=[recorder])
    s.start()
    assert s.rotate(+1)
    while s.move_horizontal(-1):
        pass
    assert s.active is not None and s.active.x == -1

    assert s.rotate(+1)

    assert s.active.x == 0
    assert s.active.shape.tolist() == [[0, 0, 0], [1, 1, 1], [0, 1, 0]]
    assert recorder.names().count("rotate") == 2


def test_failed_rotation_changes_nothing(make_session, recorder) -> None:
    s = make_session(sequence=[("I", 1)], listeners=[recorder])
    s.start()
    assert s.active is not None
    s.board.grid[1:4, :] = 2
    s.board.grid[1, 4:8] = 0
    shape_before = s.active.shape.copy()
    x_before = s.active.x

    assert s.rotate(+1) is False

    assert np.array_equal(s.active.shape, shape_before)
    assert s.active.x == x_before
    assert "rotate" not in recorder.names()


def test_active_shape_never_aliases_catalog(make_session) -> None:
    s = make_session(sequence=[("T", 1)])
    s.start()
    s.rotate(+1)
    assert s.pieces.canonical("T").tolist() == [[0, 1, 0], [1, 1, 1], [0, 0, 0]]


def test_pause_gates_move_and_soft_drop(make_session, recorder) -> None:
    s = make_session(sequence=[("T", 1)], listeners=[recorder])
    s.start()
    assert s.active is not None
    x0, y0 = s.active.x, s.active.y

    assert s.toggle_pause()
    assert s.status is GameStatus.PAUSED
    assert s.move_horizontal(-1) is False
    assert s.soft_drop() is None
    assert (s.active.x, s.active.y) == (x0, y0)

    # rotation is not gated
    assert s.rotate(+1)

    assert s.toggle_pause()
    assert s.status is GameStatus.RUNNING
    assert recorder.names()[-3:] == ["pause", "rotate", "resume"]


def test_hard_drop_while_paused_is_allowed_by_default(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    s.pause()
    res = s.hard_drop()
    assert res is not None
    assert s.status is GameStatus.PAUSED
    assert s.board.grid[19, 5] == 1


def test_hard_drop_while_paused_can_be_disabled(make_session) -> None:
    s = make_session(sequence=[("O", 1)], hard_drop_while_paused=False)
    s.start()
    s.pause()
    assert s.hard_drop() is None
    assert int(s.board.grid.sum()) == 0


def test_pause_is_ignored_outside_a_running_game(make_session) -> None:
    s = make_session()
    assert s.toggle_pause() is False
    assert s.status is GameStatus.IDLE


def test_hard_drop_sets_flash_countdown(make_session) -> None:
    s = make_session(sequence=[("O", 1)], flash_frames=3)
    s.start()
    assert s.consume_flash() == 0
    s.hard_drop()
    assert s.state().flash == 3
    assert [s.consume_flash() for _ in range(5)] == [3, 2, 1, 0, 0]


def test_listeners_see_lock_then_line_clear(make_session, recorder) -> None:
    s = make_session(sequence=[("O", 1)], listeners=[recorder])
    s.start()
    s.board.grid[18:20, :] = 2
    s.board.grid[18:20, 5:7] = 0
    s.hard_drop()
    assert recorder.calls == [("start", ()), ("lock", ()), ("line_clear", (19, 19))]


def test_failing_listener_is_logged_and_skipped(make_session, recorder, caplog: pytest.LogCaptureFixture) -> None:
    s = make_session(sequence=[("O", 1)], listeners=[_BrokenListener(), recorder])
    with caplog.at_level(logging.WARNING):
        s.start()
        res = s.hard_drop()
    assert res is not None
    assert recorder.names() == ["start", "lock"]
    assert "failed in on_lock" in caplog.text


def test_high_score_is_loaded_and_saved_when_beaten(make_session) -> None:
    store = MemoryHighScoreStore(high_score=5)
    s = make_session(sequence=[("O", 1)], high_scores=store)
    st = s.start()
    assert st.high_score == 5

    s.board.grid[19, :] = 2
    s.board.grid[19, 5:7] = 0
    s.hard_drop()

    assert s.high_score == 10
    assert store.high_score == 10
    assert store.saves == 1


def test_high_score_not_saved_without_new_record(make_session) -> None:
    store = MemoryHighScoreStore(high_score=500)
    s = make_session(sequence=[("O", 1)], high_scores=store)
    s.start()
    s.board.grid[19, :] = 2
    s.board.grid[19, 5:7] = 0
    s.hard_drop()
    assert store.saves == 0
    assert s.high_score == 500


def test_broken_high_score_store_never_blocks_play(make_session) -> None:
    s = make_session(sequence=[("O", 1)], high_scores=_BrokenStore())
    st = s.start()
    assert st.high_score == 0
    s.board.grid[19, :] = 2
    s.board.grid[19, 5:7] = 0
    res = s.hard_drop()
    assert res is not None and res.score_delta == 10
    assert s.high_score == 10
    assert s.status is GameStatus.RUNNING


def test_state_grid_is_read_only_view(make_session) -> None:
    s = make_session()
    st = s.start()
    with pytest.raises(ValueError):
        st.grid[0, 0] = 1
    s.board.grid[19, 0] = 4
    assert st.grid[19, 0] == 4


def test_state_reports_ghost_row(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    st = s.start()
    assert st.ghost_y == 18
    s.board.grid[10, 5] = 1
    assert s.state().ghost_y == 8


def test_step_accepts_string_commands(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.step("start")
    st, cleared, game_over, info = s.step("left")
    assert st.active is not None and st.active.x == 4
    assert (cleared, game_over, info["changed"]) == (0, False, True)

    _, _, _, info = s.step("drop")
    assert isinstance(info["lock"], LockResult)

    with pytest.raises(ValueError, match="unknown command"):
        s.step("jump")


def test_start_is_ignored_while_running(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    s.move_horizontal(-1)
    _, _, _, info = s.step(Command.START)
    assert info["changed"] is False
    assert s.active is not None and s.active.x == 4


def test_constructor_rejects_bad_geometry(make_session) -> None:
    with pytest.raises(ValueError, match="width must be positive"):
        make_session(width=0)
    with pytest.raises(ValueError, match="wider than the board"):
        make_session(width=3)


def test_empty_catalog_is_rejected_not_replaced() -> None:
    with pytest.raises(ValueError, match="empty catalog"):
        GameSession(pieces=PieceCatalog(pieces={}, kind_order=()))


def test_colour_count_must_fit_the_grid_dtype(make_session) -> None:
    with pytest.raises(ValueError, match="num_colors"):
        make_session(num_colors=256)
    with pytest.raises(ValueError, match="num_colors"):
        make_session(num_colors=0)

    s = make_session(sequence=[("O", 255)], num_colors=255)
    s.start()
    s.hard_drop()
    assert s.board.grid[19, 5] == 255


def test_hard_drop_while_paused_does_not_queue_a_flash(make_session) -> None:
    s = make_session(sequence=[("O", 1)])
    s.start()
    s.pause()
    assert s.hard_drop() is not None
    assert s.state().flash == 0
    s.resume()
    assert s.consume_flash() == 0
