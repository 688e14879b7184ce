from abc import ABC, abstractmethod
import time

from maze import Position


class BaseSolver(ABC):
    def __init__(self, grid, start_pos, end_pos):
        # The solver only ever sees a read-only wall snapshot, never the live grid.
        self.walls = grid.wall_mask()
        self.height, self.width = self.walls.shape
        self.start_pos = Position(*start_pos)
        self.end_pos = Position(*end_pos)

        # Results
        self.path = []
        self.visited = []
        self.nodes_expanded = 0
        self.path_found = False
        self.solve_time_ms = 0.0

    def is_wall(self, x, z):
        return not (0 <= x < self.width and 0 <= z < self.height) or bool(self.walls[z, x])

    def get_neighbors(self, current_pos):
        x, z = current_pos
        neighbors = []
        for dx, dz in [(0, -1), (0, 1), (-1, 0), (1, 0)]:
            next_x, next_z = x + dx, z + dz
            if not self.is_wall(next_x, next_z):
                neighbors.append(Position(next_x, next_z))
        return neighbors

    def reconstruct_path(self, target_node, came_from):
        path = []
        curr = target_node
        while curr is not None:
            path.append(curr)
            curr = came_from.get(curr)
        path.reverse()
        if not path or path[0] != self.start_pos:
            return []
        return path

    def manhattan_heuristic(self, pos_a, pos_b):
        return abs(pos_a[0] - pos_b[0]) + abs(pos_a[1] - pos_b[1])

    def _expand(self, node):
        self.visited.append(node)
        self.nodes_expanded += 1

    @abstractmethod
    def _core_search_logic(self):
        """Returns the path from start to end, or [] when no route exists."""

    def solve(self):
        self.path = []
        self.visited = []
        self.nodes_expanded = 0
        self.path_found = False

        started = time.perf_counter()
        if self.is_wall(*self.start_pos) or self.is_wall(*self.end_pos):
            path = []
        else:
            path = self._core_search_logic()
        self.solve_time_ms = (time.perf_counter() - started) * 1000.0

        self.path = list(path)
        self.path_found = bool(self.path)
        return self.get_solver_results()

    def get_solver_results(self):
        return {
            "path": self.path,
            "visited": self.visited,
            "stats": {
                "solve_time_ms": max(0.0, self.solve_time_ms),
                "nodes_explored": self.nodes_expanded,
                "path_length": len(self.path),
            },
        }
