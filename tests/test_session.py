# tests/test_session.py
from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import (
    Action,
    EventType,
    GameConfig,
    GameSession,
    PieceKind,
    SessionState,
)


def _started(seed: int = 0) -> GameSession:
    session = GameSession(GameConfig(random_seed=seed))
    assert session.start()
    session.drain_events()
    return session


def _with_current(session: GameSession, kind: PieceKind) -> GameSession:
    session.current_piece = session.factory.spawn(kind)
    return session


def _types(session: GameSession) -> list[EventType]:
    return [event.type for event in session.drain_events()]


def test_new_session_is_ready_and_ignores_commands() -> None:
    session = GameSession()
    assert session.state is SessionState.READY
    assert not session.move(1)
    assert not session.rotate()
    assert not session.soft_drop()
    assert not session.hard_drop()
    assert not session.tick(5000)
    assert not session.toggle_pause()
    assert session.drain_events() == []


def test_start_spawns_current_and_next() -> None:
    session = GameSession(GameConfig(random_seed=3))
    assert session.start()
    assert session.state is SessionState.PLAYING
    assert session.current_piece is not None and session.next_piece is not None
    assert session.current_piece.y == 0
    assert (session.score, session.lines_cleared, session.level) == (0, 0, 0)
    assert session.drop_interval_ms == 1000
    assert _types(session) == [EventType.STARTED]


def test_start_is_ignored_while_playing() -> None:
    session = _started()
    assert not session.start()


def test_move_accepts_and_rejects_at_wall() -> None:
    session = _with_current(_started(), PieceKind.O)
    assert session.move(-1)
    assert session.current_piece.x == 3
    assert _types(session) == [EventType.MOVE_ACCEPTED]

    while session.move(-1):
        pass
    assert session.current_piece.x == 0
    assert _types(session)[-1] is EventType.MOVE_REJECTED


def test_move_rejects_bad_direction() -> None:
    session = _started()
    with pytest.raises(ValueError):
        session.move(2)


def test_rotate_emits_result_event() -> None:
    session = _with_current(_started(), PieceKind.T)
    session.soft_drop()
    assert session.rotate()
    assert session.current_piece.matrix.shape == (3, 2)
    assert _types(session) == [EventType.ROTATION_SUCCEEDED]


def test_tick_drops_once_interval_is_reached() -> None:
    session = _started()
    assert not session.tick(999)
    assert session.current_piece.y == 0
    assert session.tick(1)
    assert session.current_piece.y == 1
    assert session.drop_counter_ms == 0


def test_tick_on_the_floor_locks_and_resets_clock() -> None:
    session = _with_current(_started(), PieceKind.O)
    session.current_piece = session.current_piece.moved(dy=18)
    expected_next = session.next_piece

    assert session.tick(1500)

    assert session.current_piece is expected_next
    board = session.board()
    for x, y in [(4, 18), (5, 18), (4, 19), (5, 19)]:
        assert board[y, x] == int(PieceKind.O)
    assert session.drop_counter_ms == 0
    assert EventType.PIECE_LOCKED in _types(session)


def test_pause_suspends_ticks_and_commands() -> None:
    session = _started()
    board = session.board()
    assert session.toggle_pause()
    assert session.state is SessionState.PAUSED
    assert not session.tick(5000)
    assert not session.move(1)
    assert session.current_piece.y == 0
    assert np.array_equal(session.board(), board)

    assert session.toggle_pause()
    assert session.state is SessionState.PLAYING
    assert session.tick(1000)
    assert session.current_piece.y == 1
    assert _types(session) == [EventType.PAUSED, EventType.RESUMED]


def test_hard_drop_o_piece_lands_on_floor() -> None:
    session = _with_current(_started(), PieceKind.O)
    expected_next = session.next_piece

    assert session.hard_drop()

    board = session.board()
    for x, y in [(4, 18), (5, 18), (4, 19), (5, 19)]:
        assert board[y, x] == int(PieceKind.O)
    assert np.count_nonzero(board) == 4
    assert session.score == 0
    assert session.current_piece is expected_next
    assert session.state is SessionState.PLAYING

    events = session.drain_events()
    assert events[0].type is EventType.HARD_DROP and events[0].value == 18
    assert events[1].type is EventType.PIECE_LOCKED


def test_soft_drop_locks_at_floor() -> None:
    session = _with_current(_started(), PieceKind.I)
    for _ in range(19):
        assert session.soft_drop()
    assert session.current_piece.y == 19
    expected_next = session.next_piece
    assert not session.soft_drop()
    assert all(session.board()[19, 3:7] == int(PieceKind.I))
    assert session.current_piece is expected_next


def test_ghost_y_matches_landing_row() -> None:
    session = _with_current(_started(), PieceKind.T)
    assert session.ghost_y() == 18


def test_line_clear_scores_and_emits() -> None:
    session = _with_current(_started(), PieceKind.O)
    session.grid.grid[19, :] = 1
    session.grid.grid[19, 4:6] = 0

    session.hard_drop()

    assert session.score == 40
    assert session.lines_cleared == 1
    events = session.drain_events()
    cleared = [e for e in events if e.type is EventType.LINES_CLEARED]
    assert len(cleared) == 1 and cleared[0].value == 1 and not cleared[0].is_tetris
    board = session.board()
    assert board[19, 4] == int(PieceKind.O) and board[19, 5] == int(PieceKind.O)
    assert np.count_nonzero(board) == 2


def test_tetris_and_level_up() -> None:
    session = _with_current(_started(), PieceKind.I)
    session.current_piece = session.current_piece.with_matrix(np.array([[2], [2], [2], [2]], dtype=np.int8))
    session.current_piece = session.current_piece.moved(dx=9 - session.current_piece.x)
    session.grid.grid[16:, :9] = 1
    session.lines_cleared = 9

    session.hard_drop()

    assert session.score == 1200
    assert session.lines_cleared == 13
    assert session.level == 1
    assert session.drop_interval_ms == 950
    events = session.drain_events()
    assert any(e.is_tetris for e in events)
    assert any(e.type is EventType.LEVEL_UP and e.value == 1 for e in events)


def test_blocked_spawn_ends_the_game() -> None:
    session = _with_current(_started(), PieceKind.O)
    session.grid.grid[2:, :9] = 1

    assert not session.soft_drop()

    assert session.state is SessionState.GAME_OVER
    events = session.drain_events()
    assert events[-1].type is EventType.GAME_OVER
    assert events[-1].value == session.score

    board = session.board()
    assert not session.move(1)
    assert not session.rotate()
    assert not session.soft_drop()
    assert not session.hard_drop()
    assert not session.tick(10_000)
    assert not session.toggle_pause()
    assert np.array_equal(session.board(), board)


def test_restart_after_game_over_resets_everything() -> None:
    session = _with_current(_started(), PieceKind.O)
    session.grid.grid[2:, :9] = 1
    session.score = 500
    session.soft_drop()
    assert session.is_game_over
    assert session.score == 500

    assert session.start()
    assert session.state is SessionState.PLAYING
    assert session.score == 0
    assert session.grid.filled_cells() == 0


def test_reset_returns_to_ready() -> None:
    session = _started()
    session.reset()
    assert session.state is SessionState.READY
    assert session.current_piece is None
    assert session.start()


def test_step_dispatches_actions() -> None:
    session = _with_current(_started(), PieceKind.O)
    assert session.step(Action.RIGHT)
    assert session.current_piece.x == 5
    assert not session.step(Action.NONE)
    assert session.step(Action.PAUSE)
    assert session.is_paused


def test_board_with_piece_marks_active_cells_negative() -> None:
    session = _with_current(_started(), PieceKind.O)
    board = session.board_with_piece()
    assert board[0, 4] == -int(PieceKind.O)
    assert session.board()[0, 4] == 0
