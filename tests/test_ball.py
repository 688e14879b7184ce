from ball import Ball
from maze import Position


def _moving_session(session, path):
    session.set_algorithm("bfs")
    session.start_game()
    session.store_path(path)
    session.start_moving()
    return session


def test_ball_idles_outside_moving_phase(session):
    ball = Ball(session, step_ms=100)
    ball.update(1000)
    assert session.path_index == 0
    assert ball.move_timer == 0.0


def test_ball_steps_on_fixed_cadence(session):
    _moving_session(session, [(1, 1), (2, 1), (3, 1)])
    ball = Ball(session, step_ms=100)

    ball.update(99)
    assert session.path_index == 0
    ball.update(1)
    assert session.path_index == 1
    ball.update(250)
    assert session.path_index == 3
    assert session.ball_position == Position(3, 1)


def test_interpolated_position_moves_between_cells(session):
    _moving_session(session, [(1, 1), (2, 1)])
    ball = Ball(session, step_ms=100)
    ball.update(100)
    ball.update(100)
    ball.update(50)
    x, z = ball.interpolated_position()
    assert z == 1
    assert 1 < x <= 2


def test_game_speed_multiplier_scales_steps(session):
    _moving_session(session, [(1, 1), (2, 1), (3, 1)])
    ball = Ball(session, step_ms=100, game_speed_ref=[2.0])
    ball.update(100)
    assert session.path_index == 2
