import random
import sys
from typing import NamedTuple

import numpy as np

from constants import MIN_MAZE_DIMENSION


class Position(NamedTuple):
    x: int
    z: int


class Cell:
    __slots__ = ("x", "z", "is_wall", "is_start", "is_end", "is_path", "is_visited")

    def __init__(self, x, z, is_wall=True, is_start=False, is_end=False, is_path=False, is_visited=False):
        self.x = x
        self.z = z
        self.is_wall = is_wall
        self.is_start = is_start
        self.is_end = is_end
        self.is_path = is_path
        self.is_visited = is_visited

    def copy(self):
        return Cell(self.x, self.z, self.is_wall, self.is_start, self.is_end, self.is_path, self.is_visited)

    def flags(self):
        return (self.is_wall, self.is_start, self.is_end, self.is_path, self.is_visited)

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented
        return (self.x, self.z) == (other.x, other.z) and self.flags() == other.flags()

    def __repr__(self):
        return (f"Cell(x={self.x}, z={self.z}, wall={self.is_wall}, start={self.is_start}, "
                f"end={self.is_end}, path={self.is_path}, visited={self.is_visited})")


class Grid:
    """
    Rows of cells indexed as rows[z][x]. The shape never changes after construction.

    Overlay operations (mark_path, mark_visited, add_visited, clear_overlays) never
    mutate in place: they return a fresh Grid so observers can detect the change by
    identity.
    """

    def __init__(self, width, height, rows=None, is_wall=True):
        self.width = width
        self.height = height
        if rows is None:
            rows = [[Cell(x, z, is_wall=is_wall) for x in range(width)] for z in range(height)]
        self.rows = rows

    def in_bounds(self, x, z):
        return 0 <= x < self.width and 0 <= z < self.height

    def cell(self, x, z):
        """Returns the cell at (x, z), or None when the coordinate is outside the grid."""
        if not self.in_bounds(x, z):
            return None
        return self.rows[z][x]

    def is_wall(self, x, z):
        return not self.in_bounds(x, z) or self.rows[z][x].is_wall

    def set_wall(self, x, z, is_wall):
        # Used only while a generator is building the grid.
        if self.in_bounds(x, z):
            self.rows[z][x].is_wall = is_wall

    def copy(self):
        return Grid(self.width, self.height, [[c.copy() for c in row] for row in self.rows])

    def __iter__(self):
        for row in self.rows:
            yield from row

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.width == other.width and self.height == other.height and self.rows == other.rows

    # --- Overlays ---
    def _with_flag(self, flag, positions, clear_first=True):
        new_grid = self.copy()
        if clear_first:
            for cell in new_grid:
                setattr(cell, flag, False)
        for pos in positions:
            cell = new_grid.cell(pos[0], pos[1])
            if cell is not None:
                setattr(cell, flag, True)
        return new_grid

    def mark_path(self, positions):
        return self._with_flag("is_path", positions)

    def mark_visited(self, positions):
        return self._with_flag("is_visited", positions)

    def add_visited(self, pos):
        return self._with_flag("is_visited", [pos], clear_first=False)

    def add_path(self, positions):
        return self._with_flag("is_path", positions, clear_first=False)

    def clear_overlays(self):
        new_grid = self.copy()
        for cell in new_grid:
            cell.is_path = False
            cell.is_visited = False
        return new_grid

    def path_positions(self):
        return {Position(c.x, c.z) for c in self if c.is_path}

    def visited_positions(self):
        return {Position(c.x, c.z) for c in self if c.is_visited}

    # --- Solver snapshot ---
    def wall_mask(self):
        """Read-only boolean array of shape (height, width); True marks a wall."""
        mask = np.array([[c.is_wall for c in row] for row in self.rows], dtype=bool)
        mask.flags.writeable = False
        return mask

    def open_neighbors(self, pos):
        x, z = pos
        neighbors = []
        for dx, dz in [(0, -1), (0, 1), (-1, 0), (1, 0)]:  # N, S, W, E
            nx, nz = x + dx, z + dz
            if not self.is_wall(nx, nz):
                neighbors.append(Position(nx, nz))
        return neighbors


def _place_start_and_end(grid, start, end):
    start_cell = grid.cell(*start)
    start_cell.is_wall = False
    start_cell.is_start = True
    end_cell = grid.cell(*end)
    end_cell.is_wall = False
    end_cell.is_end = True


def _maze_result(grid, start, end):
    return {"grid": grid, "start": start, "end": end, "width": grid.width, "height": grid.height}


def generate_random_maze(width, height, rng=None):
    """
    Randomized recursive backtracker over the odd-coordinate cells.

    Carving starts at (1, 1) on an all-wall grid and jumps two cells at a time,
    opening the wall in between. The walk uses an explicit stack so large grids
    cannot exhaust the interpreter's recursion limit.
    """
    if width < MIN_MAZE_DIMENSION or height < MIN_MAZE_DIMENSION or width % 2 == 0 or height % 2 == 0:
        raise ValueError(f"Maze dimensions must be odd and >= {MIN_MAZE_DIMENSION}, got {width}x{height}")
    rng = rng or random

    grid = Grid(width, height)
    start = Position(1, 1)
    end = Position(width - 2, height - 2)

    def is_valid_carve_pos(x, z):
        return 1 <= x <= width - 2 and 1 <= z <= height - 2

    def shuffled_directions():
        directions = [(0, -2), (0, 2), (-2, 0), (2, 0)]  # N, S, W, E
        rng.shuffle(directions)
        return iter(directions)

    grid.set_wall(start.x, start.z, False)
    stack = [(start.x, start.z, shuffled_directions())]
    while stack:
        x, z, directions = stack[-1]
        step = next(directions, None)
        if step is None:
            stack.pop()
            continue
        dx, dz = step
        next_x, next_z = x + dx, z + dz
        if is_valid_carve_pos(next_x, next_z) and grid.is_wall(next_x, next_z):
            grid.set_wall(x + dx // 2, z + dz // 2, False)
            grid.set_wall(next_x, next_z, False)
            stack.append((next_x, next_z, shuffled_directions()))

    _place_start_and_end(grid, start, end)

    # Keep the exit reachable from its north and west sides even if carving skipped it.
    grid.set_wall(end.x, end.z - 1, False)
    grid.set_wall(end.x - 1, end.z, False)

    return _maze_result(grid, start, end)


# Hand-authored layouts. Wall coordinates are (z, x) pairs inside a 15x15 board.
PRESET_MAZES = [
    {
        "width": 15,
        "height": 15,
        "walls": [
            (2, 1), (2, 2), (2, 3), (2, 5), (2, 6), (2, 7), (2, 9), (2, 10), (2, 11),
            (4, 3), (4, 4), (4, 5), (4, 7), (4, 8), (4, 9), (4, 11), (4, 12), (4, 13),
            (5, 3), (5, 9),
            (6, 1), (6, 3), (6, 5), (6, 6), (6, 7), (6, 9), (6, 11),
            (7, 5), (7, 11),
            (8, 1), (8, 2), (8, 3), (8, 5), (8, 7), (8, 8), (8, 9), (8, 11), (8, 12), (8, 13),
            (9, 7),
            (10, 1), (10, 2), (10, 3), (10, 5), (10, 6), (10, 7), (10, 9), (10, 10), (10, 11),
            (11, 3), (11, 9),
            (12, 3), (12, 5), (12, 6), (12, 7), (12, 9), (12, 11), (12, 12), (12, 13),
        ],
    },
    {
        "width": 15,
        "height": 15,
        "walls": [
            (2, 2), (2, 4), (2, 6), (2, 8), (2, 10), (2, 12),
            (3, 2), (3, 6), (3, 10),
            (4, 2), (4, 4), (4, 6), (4, 8), (4, 10), (4, 12),
            (5, 4), (5, 8), (5, 12),
            (6, 2), (6, 4), (6, 6), (6, 8), (6, 10), (6, 12),
            (7, 2), (7, 6), (7, 10),
            (8, 2), (8, 4), (8, 6), (8, 8), (8, 10), (8, 12),
            (9, 4), (9, 8), (9, 12),
            (10, 2), (10, 4), (10, 6), (10, 8), (10, 10), (10, 12),
            (11, 2), (11, 6), (11, 10),
            (12, 2), (12, 4), (12, 6), (12, 8), (12, 10), (12, 12),
        ],
    },
    {
        "width": 15,
        "height": 15,
        "walls": [
            (1, 7), (2, 7), (3, 7), (4, 7), (5, 7),
            (7, 1), (7, 2), (7, 3), (7, 4), (7, 5), (7, 9), (7, 10), (7, 11), (7, 12), (7, 13),
            (9, 7), (10, 7), (11, 7), (12, 7), (13, 7),
            (3, 3), (3, 11), (11, 3), (11, 11),
            (4, 3), (4, 11), (10, 3), (10, 11),
            (3, 4), (3, 10), (11, 4), (11, 10),
        ],
    },
]


def create_preset_maze(preset_index, presets=None):
    presets = PRESET_MAZES if presets is None else presets
    preset = presets[preset_index % len(presets)]
    width, height = preset["width"], preset["height"]

    grid = Grid(width, height, is_wall=False)
    for x in range(width):
        grid.set_wall(x, 0, True)
        grid.set_wall(x, height - 1, True)
    for z in range(height):
        grid.set_wall(0, z, True)
        grid.set_wall(width - 1, z, True)

    for entry in preset["walls"]:
        try:
            z, x = entry
        except (TypeError, ValueError):
            print(f"W: Ignoring malformed preset wall entry {entry!r}", file=sys.stderr)
            continue
        if isinstance(x, int) and isinstance(z, int) and grid.in_bounds(x, z):
            grid.set_wall(x, z, True)

    start = Position(1, 1)
    end = Position(width - 2, height - 2)
    _place_start_and_end(grid, start, end)
    return _maze_result(grid, start, end)
