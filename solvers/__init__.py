from .a_star_solver import AStarSolver
from .bfs_solver import BFSSolver
from .dfs_solver import DFSSolver
from .ucs_solver import UCSSolver
from .ids_solver import IDSSolver

SOLVER_CLASSES = {
    "astar": AStarSolver,
    "bfs": BFSSolver,
    "dfs": DFSSolver,
    "ucs": UCSSolver,
    "ids": IDSSolver,
}


def run_algorithm(algorithm, grid, start, end):
    """Solves start -> end on `grid`; returns {"path", "visited", "stats"}. An empty path means no route."""
    solver_class = SOLVER_CLASSES.get(algorithm)
    if solver_class is None:
        raise ValueError(f"Solver class for '{algorithm}' not found.")
    return solver_class(grid, start, end).solve()
