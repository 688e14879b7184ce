from collections import deque
from .base_solver import BaseSolver


class BFSSolver(BaseSolver):
    def _core_search_logic(self):
        """Shortest path in hops; cells are reported in the order they leave the queue."""
        queue = deque([self.start_pos])
        came_from = {self.start_pos: None}

        while queue:
            current_node = queue.popleft()
            self._expand(current_node)

            if current_node == self.end_pos:
                return self.reconstruct_path(current_node, came_from)

            for neighbor_node in self.get_neighbors(current_node):
                if neighbor_node not in came_from:
                    came_from[neighbor_node] = current_node
                    queue.append(neighbor_node)

        return []
