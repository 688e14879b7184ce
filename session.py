import sys

from constants import (
    ALGORITHMS, DIFFICULTY_SIZES, VISUALIZATION_MODES,
    DEFAULT_DIFFICULTY, DEFAULT_VISUALIZATION_MODE, DEFAULT_PRESET_INDEX,
    PHASE_MENU, PHASE_SOLVING, PHASE_VISUALIZING, PHASE_MOVING, PHASE_COMPLETED,
)
from maze import Position, generate_random_maze, create_preset_maze


class SolverFailure(Exception):
    """A solver raised while solving; the session stays usable for a retry."""

    def __init__(self, algorithm, original):
        super().__init__(f"{algorithm} failed: {type(original).__name__}: {original}")
        self.algorithm = algorithm
        self.original = original


class MazeSession:
    """
    The single source of truth for one maze run.

    Phases: menu -> solving -> (visualizing ->) moving -> completed, with menu
    reachable from anywhere through restart(). Transition methods return False and
    change nothing when called from a phase that has no such edge.

    Observers register with subscribe() and are called as callback(session, changed_keys)
    after every state change.
    """

    def __init__(self, rng=None):
        self.rng = rng
        self._listeners = []
        self.phase = PHASE_MENU
        self.selected_algorithm = None
        self.visualization_mode = DEFAULT_VISUALIZATION_MODE
        self.difficulty = DEFAULT_DIFFICULTY
        self.generation = 0
        self._install_maze(create_preset_maze(DEFAULT_PRESET_INDEX))

    # --- Observation ---
    def subscribe(self, callback):
        self._listeners.append(callback)

        def unsubscribe():
            if callback in self._listeners:
                self._listeners.remove(callback)
        return unsubscribe

    def _set(self, **changes):
        for key, value in changes.items():
            setattr(self, key, value)
        changed = frozenset(changes)
        for listener in list(self._listeners):
            listener(self, changed)

    def snapshot(self):
        return {
            "phase": self.phase,
            "grid": self.grid,
            "stats": self.stats,
            "visualization_index": self.visualization_index,
            "path_index": self.path_index,
            "path_length": len(self.path),
            "visited_length": len(self.visited_cells),
            "ball_position": self.ball_position,
            "solve_error": self.solve_error,
        }

    # --- Configuration ---
    def set_algorithm(self, algorithm):
        if algorithm is not None and algorithm not in ALGORITHMS:
            raise ValueError(f"Unknown algorithm '{algorithm}'")
        self._set(selected_algorithm=algorithm)

    def set_difficulty(self, difficulty):
        if difficulty not in DIFFICULTY_SIZES:
            raise ValueError(f"Unknown difficulty '{difficulty}'")
        self._set(difficulty=difficulty)

    def set_visualization_mode(self, mode):
        if mode not in VISUALIZATION_MODES:
            raise ValueError(f"Unknown visualization mode '{mode}'")
        self._set(visualization_mode=mode)

    # --- Maze replacement ---
    def _fresh_state(self, layout):
        return {
            "grid": layout["grid"],
            "width": layout["width"],
            "height": layout["height"],
            "start_pos": layout["start"],
            "end_pos": layout["end"],
            "ball_position": layout["start"],
            "path": (),
            "visited_cells": (),
            "path_index": 0,
            "visualization_index": 0,
            "stats": None,
            "solve_error": None,
        }

    def _install_maze(self, layout):
        # Called from __init__ before any listener exists.
        for key, value in self._fresh_state(layout).items():
            setattr(self, key, value)

    def _replace_maze(self, layout, **extra):
        self._set(phase=PHASE_MENU, generation=self.generation + 1, **self._fresh_state(layout), **extra)

    def _random_layout(self):
        width, height = DIFFICULTY_SIZES[self.difficulty]
        return generate_random_maze(width, height, rng=self.rng)

    def restart(self):
        self._replace_maze(self._random_layout(), selected_algorithm=None)

    def generate_maze(self):
        self._replace_maze(self._random_layout())

    def load_preset_maze(self, preset_index):
        self._replace_maze(create_preset_maze(preset_index))

    # --- Solve results ---
    def set_stats(self, stats):
        self._set(stats=stats)

    def store_path(self, path):
        self._set(path=tuple(Position(*p) for p in path))

    def store_visited_cells(self, cells):
        self._set(visited_cells=tuple(Position(*p) for p in cells))

    def set_path(self, path):
        path = tuple(Position(*p) for p in path)
        self._set(path=path, grid=self.grid.mark_path(path))

    def set_visited_cells(self, cells):
        cells = tuple(Position(*p) for p in cells)
        self._set(visited_cells=cells, grid=self.grid.mark_visited(cells))

    # --- Phase transitions ---
    def start_game(self):
        if self.phase != PHASE_MENU or not self.selected_algorithm:
            return False
        self._set(phase=PHASE_SOLVING, solve_error=None)
        return True

    def fail_solve(self, failure):
        if self.phase != PHASE_SOLVING:
            return False
        self._set(phase=PHASE_MENU, solve_error=failure, path=(), visited_cells=(),
                  grid=self.grid.clear_overlays())
        return True

    def start_visualization(self):
        if self.phase != PHASE_SOLVING:
            return False
        self._set(phase=PHASE_VISUALIZING, visualization_index=0, grid=self.grid.clear_overlays())
        return True

    def advance_visualization(self):
        """
        Reveals the next visited cell and returns True, or, once every cell has been
        shown, commits the whole path overlay and returns False.
        """
        if self.phase != PHASE_VISUALIZING:
            return False
        if self.visualization_index < len(self.visited_cells):
            cell = self.visited_cells[self.visualization_index]
            self._set(grid=self.grid.add_visited(cell), visualization_index=self.visualization_index + 1)
            return True
        self._set(grid=self.grid.add_path(self.path))
        return False

    def start_moving(self):
        if self.phase not in (PHASE_SOLVING, PHASE_VISUALIZING):
            return False
        self._set(phase=PHASE_MOVING, path_index=0)
        return True

    def move_ball(self):
        if self.phase != PHASE_MOVING or self.path_index >= len(self.path):
            return False
        self._set(ball_position=self.path[self.path_index], path_index=self.path_index + 1)
        return True

    def complete(self):
        if self.phase != PHASE_MOVING:
            return False
        if self.path_index < len(self.path):
            print(f"W: complete() called with {len(self.path) - self.path_index} path cells left; ignored.",
                  file=sys.stderr)
            return False
        print(f"--- Run Complete --- {self.selected_algorithm}: {len(self.path)} path cells")
        self._set(phase=PHASE_COMPLETED)
        return True
