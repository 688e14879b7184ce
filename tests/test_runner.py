import pytest

from ball import Ball
from constants import SETTLE_DELAY_MS, PRE_VISUALIZATION_DELAY_MS, VISUALIZATION_TICK_MS, BALL_STEP_MS
from maze import Position
from runner import AlgorithmRunner
from session import SolverFailure
from solvers import run_algorithm


class CountingSolver:
    def __init__(self, result=None, fail_times=0):
        self.calls = 0
        self.fail_times = fail_times
        self.result = result
        self.grids = []

    def __call__(self, algorithm, grid, start, end):
        self.calls += 1
        self.grids.append(grid)
        if self.calls <= self.fail_times:
            raise RuntimeError("solver exploded")
        if self.result is not None:
            return self.result
        return run_algorithm(algorithm, grid, start, end)


@pytest.fixture
def runner(session, scheduler):
    session.load_preset_maze(0)
    session.set_algorithm("astar")
    runner = AlgorithmRunner(session, scheduler)
    yield runner
    runner.shutdown()


def test_instant_mode_commits_overlays_then_moves_after_settle(session, scheduler, runner):
    assert session.start_game()

    assert session.phase == "solving"
    assert session.stats is not None
    assert len(session.path) >= 1
    assert session.grid.path_positions() == set(session.path)
    assert session.grid.visited_positions() == set(session.visited_cells)

    scheduler.update(SETTLE_DELAY_MS - 1)
    assert session.phase == "solving"
    scheduler.update(1)
    assert session.phase == "moving"
    assert session.path_index == 0


def test_step_mode_replays_visited_cells_then_moves(session, scheduler, runner):
    session.set_visualization_mode("step")
    session.start_game()

    assert session.grid.visited_positions() == set()
    assert session.grid.path_positions() == set()
    visited = session.visited_cells
    assert visited

    scheduler.update(PRE_VISUALIZATION_DELAY_MS)
    assert session.phase == "visualizing"

    for i in range(len(visited)):
        scheduler.update(VISUALIZATION_TICK_MS)
        assert session.visualization_index == i + 1
        assert session.grid.path_positions() == set()

    scheduler.update(VISUALIZATION_TICK_MS)
    assert not runner.player.running
    assert session.visualization_index == len(visited)
    assert session.grid.path_positions() == set(session.path)

    scheduler.update(SETTLE_DELAY_MS - 1)
    assert session.phase == "visualizing"
    scheduler.update(1)
    assert session.phase == "moving"


def test_solver_invoked_once_per_phase_entry(session, scheduler):
    solver = CountingSolver()
    runner = AlgorithmRunner(session, scheduler, solve_fn=solver)
    session.set_algorithm("bfs")
    session.start_game()

    session.set_visualization_mode("step")
    session.set_stats({"solve_time_ms": 0.0, "nodes_explored": 0, "path_length": 0})
    assert solver.calls == 1

    session.restart()
    session.set_algorithm("bfs")
    session.start_game()
    assert solver.calls == 2
    runner.shutdown()


def test_solver_receives_a_copy_of_the_grid(session, scheduler):
    solver = CountingSolver()
    runner = AlgorithmRunner(session, scheduler, solve_fn=solver)
    session.set_algorithm("bfs")
    session.start_game()

    assert solver.grids[0] is not session.grid
    assert solver.grids[0].path_positions() == set()
    runner.shutdown()


def test_restart_makes_pending_settle_a_no_op(session, scheduler, runner):
    session.start_game()
    session.restart()
    generation = session.generation

    scheduler.update(SETTLE_DELAY_MS * 4)
    assert session.phase == "menu"
    assert session.generation == generation
    assert scheduler.pending() == 0


def test_restart_mid_visualization_stops_the_player(session, scheduler, runner):
    session.set_visualization_mode("step")
    session.start_game()
    scheduler.update(PRE_VISUALIZATION_DELAY_MS + VISUALIZATION_TICK_MS * 3)
    assert session.visualization_index == 3

    session.restart()
    assert not runner.player.running

    scheduler.update(10_000)
    assert session.phase == "menu"
    assert session.visualization_index == 0
    assert session.grid.visited_positions() == set()


def test_stale_callback_cannot_advance_new_session(session, scheduler, runner):
    session.set_visualization_mode("step")
    session.start_game()
    session.load_preset_maze(2)
    session.set_algorithm("bfs")
    session.start_game()

    # Only the new session's pre-visualization delay may fire.
    scheduler.update(PRE_VISUALIZATION_DELAY_MS)
    assert session.phase == "visualizing"
    assert session.visualization_index == 0


def test_solver_failure_is_surfaced_and_retry_works(session, scheduler):
    solver = CountingSolver(fail_times=1)
    runner = AlgorithmRunner(session, scheduler, solve_fn=solver)
    session.set_algorithm("dfs")

    session.start_game()
    assert session.phase == "menu"
    assert isinstance(session.solve_error, SolverFailure)
    assert session.solve_error.algorithm == "dfs"
    assert not runner.orchestrator.has_solved
    assert "Retry" in runner.get_status_text()

    assert session.start_game()
    assert solver.calls == 2
    assert session.solve_error is None
    scheduler.update(SETTLE_DELAY_MS)
    assert session.phase == "moving"
    runner.shutdown()


def test_unsolvable_maze_runs_to_completion(session, scheduler):
    empty = {"path": [], "visited": [(1, 1), (2, 1)],
             "stats": {"solve_time_ms": 0.1, "nodes_explored": 2, "path_length": 0}}
    runner = AlgorithmRunner(session, scheduler, solve_fn=CountingSolver(result=empty))
    ball = Ball(session)
    session.set_algorithm("ids")
    session.set_visualization_mode("step")
    session.start_game()

    scheduler.update(PRE_VISUALIZATION_DELAY_MS + VISUALIZATION_TICK_MS * 3 + SETTLE_DELAY_MS)
    assert session.phase == "moving"

    ball.update(BALL_STEP_MS)
    assert session.phase == "completed"
    assert session.ball_position == session.start_pos
    assert "No path" in runner.get_status_text()
    runner.shutdown()


def test_full_run_moves_ball_to_the_end(session, scheduler, runner):
    ball = Ball(session)
    session.start_game()
    scheduler.update(SETTLE_DELAY_MS)
    assert session.phase == "moving"

    for _ in range(len(session.path)):
        ball.update(BALL_STEP_MS)
    assert session.path_index == len(session.path)
    assert session.ball_position == Position(13, 13)
    assert session.phase == "moving"

    ball.update(BALL_STEP_MS)
    assert session.phase == "completed"


def test_shutdown_unsubscribes(session, scheduler):
    solver = CountingSolver()
    runner = AlgorithmRunner(session, scheduler, solve_fn=solver)
    runner.shutdown()
    session.set_algorithm("bfs")
    session.start_game()
    assert solver.calls == 0
