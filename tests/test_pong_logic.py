from dataclasses import replace

import pytest

from pong_logic import (
    HALF_HEIGHT, HALF_WIDTH, Ball, Input, Phase, Player,
    advance_ball, advance_player, derive_input, initial_state, step, within_paddle,
)


def idle(elapsed_ms=16, start=False):
    return Input(request_start=start, paddle1_dir=0, paddle2_dir=0, elapsed_ms=elapsed_ms)


@pytest.fixture
def state():
    return initial_state()


def test_initial_state(state):
    assert state.phase == Phase.PAUSED
    assert state.ball == Ball(0, 0, 200, 200)
    assert state.player1.x == 20 - HALF_WIDTH
    assert state.player2.x == HALF_WIDTH - 20
    assert state.player1.y == state.player2.y == 0
    assert state.player1.score == state.player2.score == 0
    assert state.keys_held == frozenset()


def test_derive_input_keys():
    inp = derive_input(frozenset({" ", "w", "ArrowDown"}), 16)
    assert inp == Input(True, 1, -1, 16)


def test_derive_input_down_wins():
    inp = derive_input({"w", "s", "ArrowUp", "ArrowDown"}, 10)
    assert inp.paddle1_dir == -1
    assert inp.paddle2_dir == -1


def test_derive_input_ignores_unknown_keys():
    assert derive_input({"x", "Enter"}, 5) == Input(False, 0, 0, 5)


def test_derive_input_is_repeatable():
    keys = frozenset({"s", "ArrowUp"})
    assert derive_input(keys, 16.5) == derive_input(keys, 16.5)


def test_within_paddle_edges():
    p = Player(-280, 0, 0, 0)
    assert within_paddle(Ball(-272, 20, 0, 0), p)
    assert not within_paddle(Ball(-271, 0, 0, 0), p)
    assert not within_paddle(Ball(-280, -21, 0, 0), p)


def test_left_paddle_bounce(state):
    p1 = state.player1
    ball = Ball(p1.x, 0, -200, 0)
    out = advance_ball(16, ball, p1, state.player2)
    assert out.vx == 200
    assert out.x == pytest.approx(p1.x + 3.2)


def test_right_paddle_bounce(state):
    p2 = state.player2
    out = advance_ball(16, Ball(p2.x - 5, 10, 200, 0), state.player1, p2)
    assert out.vx == -200


def test_paddle_bounce_keeps_outgoing_direction(state):
    p1 = state.player1
    out = advance_ball(16, Ball(p1.x, 0, 200, 0), p1, state.player2)
    assert out.vx == 200


def test_ceiling_bounce(state):
    out = advance_ball(16, Ball(0, HALF_HEIGHT - 5, 0, 200), state.player1, state.player2)
    assert out.vy == -200
    assert out.y == pytest.approx(HALF_HEIGHT - 5 - 3.2)


def test_floor_bounce(state):
    out = advance_ball(16, Ball(0, 5 - HALF_HEIGHT, 0, -200), state.player1, state.player2)
    assert out.vy == 200


def test_free_flight_keeps_velocity(state):
    ball = Ball(10, 10, -150, 80)
    out = advance_ball(100, ball, state.player1, state.player2)
    assert (out.vx, out.vy) == (-150, 80)
    assert out.x == pytest.approx(-5)
    assert out.y == pytest.approx(18)


def test_reset_on_exit_keeps_velocity(state):
    ball = Ball(HALF_WIDTH + 50, 30, 200, -120)
    out = advance_ball(16, ball, state.player1, state.player2)
    assert out == Ball(0, 0, 200, -120)


def test_ball_on_the_edge_is_in_bounds(state):
    out = advance_ball(10, Ball(HALF_WIDTH, 0, 200, 0), state.player1, state.player2)
    assert out.x == pytest.approx(HALF_WIDTH + 2)


def test_advance_player_moves_and_scores():
    p = Player(-280, 0, 0, 0, score=2)
    out = advance_player(500, 1, 1, p)
    assert out.y == pytest.approx(100)
    assert out.vy == 200
    assert out.score == 3
    assert out.x == -280


def test_paddle_clamp_top():
    out = advance_player(100000, 1, 0, Player(-280, 0, 0, 0))
    assert out.y == HALF_HEIGHT - 22


def test_paddle_clamp_bottom():
    out = advance_player(100000, -1, 0, Player(280, 0, 0, 0))
    assert out.y == 22 - HALF_HEIGHT


def test_paddle_stops_without_input():
    out = advance_player(16, 0, 0, Player(280, 50, 0, 200))
    assert out.vy == 0
    assert out.y == 50


def test_serve_from_initial_state(state):
    new = step(state, derive_input({" "}, 16))
    assert new.phase == Phase.PLAYING
    # the tick that serves still starts paused
    assert new.ball == state.ball
    newer = step(new, derive_input(frozenset(), 16))
    assert newer.ball.x == pytest.approx(3.2)
    assert newer.ball.y == pytest.approx(3.2)


def test_serve_while_playing_moves_ball(state):
    playing = replace(state, phase=Phase.PLAYING)
    new = step(playing, derive_input({" "}, 16))
    assert new.phase == Phase.PLAYING
    assert new.ball.x == pytest.approx(3.2)
    assert new.ball.y == pytest.approx(3.2)


def test_pause_freezes_ball(state):
    ball = Ball(12.5, -40, 200, 200)
    paused = replace(state, ball=ball)
    for ms in (0, 16, 1e9, -50):
        assert step(paused, idle(ms)).ball is ball


def test_score_accumulation(state):
    s = replace(
        state,
        phase=Phase.PLAYING,
        ball=Ball(HALF_WIDTH + 1, 0, 200, 200),
        player1=replace(state.player1, score=3),
    )
    new = step(s, idle())
    assert new.player1.score == 4
    assert new.player2.score == 0
    assert new.phase == Phase.PAUSED
    assert (new.ball.x, new.ball.y) == (0, 0)


def test_score_for_player_two(state):
    s = replace(state, phase=Phase.PLAYING, ball=Ball(-HALF_WIDTH - 1, 0, -200, 0))
    new = step(s, idle())
    assert new.player2.score == 1
    assert new.player1.score == 0
    assert new.phase == Phase.PAUSED


def test_serve_key_beats_scoring(state):
    s = replace(state, phase=Phase.PLAYING, ball=Ball(HALF_WIDTH + 1, 0, 200, 0))
    new = step(s, idle(start=True))
    assert new.phase == Phase.PLAYING
    assert new.player1.score == 1


def test_phase_kept_without_score_or_serve(state):
    playing = replace(state, phase=Phase.PLAYING)
    assert step(playing, idle()).phase == Phase.PLAYING
    assert step(state, idle()).phase == Phase.PAUSED


def test_paddles_update_from_previous_values(state):
    new = step(state, Input(False, 1, -1, 100))
    assert new.player1.y == pytest.approx(20)
    assert new.player2.y == pytest.approx(-20)


def test_paddles_move_while_paused(state):
    new = step(state, Input(False, 1, 0, 16))
    assert new.phase == Phase.PAUSED
    assert new.player1.y == pytest.approx(3.2)


def test_step_keeps_keys_held(state):
    s = replace(state, keys_held=frozenset({"w", "q"}))
    assert step(s, idle()).keys_held == frozenset({"w", "q"})


def test_step_does_not_mutate_previous_state(state):
    before = state.to_dict()
    step(state, Input(True, 1, 1, 1000))
    assert state.to_dict() == before


def test_velocity_signs_kept_in_open_field(state):
    s = replace(state, phase=Phase.PLAYING, ball=Ball(0, 0, -200, 150))
    for _ in range(20):
        s = step(s, idle(16))
        assert s.ball.vx == -200
        assert s.ball.vy == 150
