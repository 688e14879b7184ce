import traceback
import sys

from constants import (
    ALGORITHM_NAMES, MODE_STEP,
    PHASE_MENU, PHASE_SOLVING, PHASE_VISUALIZING, PHASE_MOVING, PHASE_COMPLETED,
    VISUALIZATION_TICK_MS, PRE_VISUALIZATION_DELAY_MS, SETTLE_DELAY_MS,
)
from session import SolverFailure
from solvers import run_algorithm


def guarded(session, phase, action):
    """
    Wraps a scheduled session transition so it only runs if the session is still in
    the same generation and phase as when it was scheduled.
    """
    generation = session.generation

    def callback():
        if session.generation != generation or session.phase != phase:
            return
        action()
    return callback


class SolveOrchestrator:
    def __init__(self, session, scheduler, solve_fn=run_algorithm):
        self.session = session
        self.scheduler = scheduler
        self.solve_fn = solve_fn
        self.has_solved = False
        self.pending_task = None

    def on_session_change(self, session, changed):
        if session.phase == PHASE_MENU:
            self.has_solved = False
            self.cancel()
        elif session.phase == PHASE_SOLVING and session.selected_algorithm and not self.has_solved:
            self.solve()

    def cancel(self):
        if self.pending_task:
            self.pending_task.cancel()
            self.pending_task = None

    def solve(self):
        session = self.session
        algorithm = session.selected_algorithm
        self.has_solved = True

        print(f"Running {algorithm} algorithm...")
        try:
            result = self.solve_fn(algorithm, session.grid.copy(), session.start_pos, session.end_pos)
        except Exception as e:
            print(f"ERROR: Solver '{algorithm}' raised {type(e).__name__}: {e}", file=sys.stderr)
            traceback.print_exc()
            self.has_solved = False
            session.fail_solve(SolverFailure(algorithm, e))
            return None

        path, visited, stats = result["path"], result["visited"], result["stats"]
        print(f"Path found: {len(path)} cells")
        print(f"Visited: {len(visited)} cells")
        print(f"Time: {stats['solve_time_ms']:.2f}ms")

        session.set_stats(stats)
        if session.visualization_mode == MODE_STEP:
            session.store_visited_cells(visited)
            session.store_path(path)
            self.pending_task = self.scheduler.schedule_after(
                PRE_VISUALIZATION_DELAY_MS, guarded(session, PHASE_SOLVING, session.start_visualization))
        else:
            session.set_visited_cells(visited)
            session.set_path(path)
            self.pending_task = self.scheduler.schedule_after(
                SETTLE_DELAY_MS, guarded(session, PHASE_SOLVING, session.start_moving))
        return result


class VisualizationPlayer:
    """Reveals one visited cell every tick while the session is visualizing."""

    def __init__(self, session, scheduler):
        self.session = session
        self.scheduler = scheduler
        self.interval_task = None
        self.settle_task = None
        self._generation = None
        self._last_phase = session.phase

    @property
    def running(self):
        return self.interval_task is not None

    def on_session_change(self, session, changed):
        entered = session.phase == PHASE_VISUALIZING and self._last_phase != PHASE_VISUALIZING
        self._last_phase = session.phase
        if entered:
            self.start()
        elif session.phase != PHASE_VISUALIZING:
            self.stop()
            if session.phase == PHASE_MENU:
                self.cancel()

    def start(self):
        self.stop()
        self._generation = self.session.generation
        self.interval_task = self.scheduler.schedule_interval(VISUALIZATION_TICK_MS, self.tick)

    def stop(self):
        if self.interval_task:
            self.interval_task.cancel()
            self.interval_task = None

    def cancel(self):
        self.stop()
        if self.settle_task:
            self.settle_task.cancel()
            self.settle_task = None

    def tick(self):
        session = self.session
        if session.phase != PHASE_VISUALIZING or session.generation != self._generation:
            self.stop()
            return False
        has_more = session.advance_visualization()
        if not has_more:
            self.stop()
            self.settle_task = self.scheduler.schedule_after(
                SETTLE_DELAY_MS, guarded(session, PHASE_VISUALIZING, session.start_moving))
        return has_more


class AlgorithmRunner:
    """Attaches the solve orchestrator and the visualization player to one session."""

    def __init__(self, session, scheduler, solve_fn=run_algorithm):
        self.session = session
        self.scheduler = scheduler
        self.orchestrator = SolveOrchestrator(session, scheduler, solve_fn)
        self.player = VisualizationPlayer(session, scheduler)
        self._unsubscribers = [
            session.subscribe(self.orchestrator.on_session_change),
            session.subscribe(self.player.on_session_change),
        ]

    def shutdown(self):
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.orchestrator.cancel()
        self.player.cancel()

    def get_status_text(self):
        session = self.session
        name = ALGORITHM_NAMES.get(session.selected_algorithm, "No algorithm")
        if session.phase == PHASE_MENU:
            if session.solve_error:
                return f"{session.solve_error}. Retry or restart."
            return f"{name}: Ready" if session.selected_algorithm else "Select an algorithm to begin."
        if session.phase == PHASE_SOLVING:
            return f"{name}: Solving..."
        if session.phase == PHASE_VISUALIZING:
            return f"{name}: Visualizing ({session.visualization_index}/{len(session.visited_cells)})"
        if session.phase == PHASE_MOVING:
            return f"{name}: Moving... ({session.path_index}/{len(session.path)})"
        if session.phase == PHASE_COMPLETED:
            if not session.path:
                return f"{name}: No path found."
            return f"{name}: Finished! Path length: {len(session.path)}"
        return name
