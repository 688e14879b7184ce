import heapq
from .base_solver import BaseSolver


class UCSSolver(BaseSolver):
    STEP_COST = 1

    def _core_search_logic(self):
        came_from = {self.start_pos: None}
        cost_so_far = {self.start_pos: 0}
        closed = set()
        frontier = [(0, 0, self.start_pos)]
        heap_entry_count = 0

        while frontier:
            cost, _, current_node = heapq.heappop(frontier)
            if current_node in closed:
                continue
            closed.add(current_node)
            self._expand(current_node)

            if current_node == self.end_pos:
                return self.reconstruct_path(current_node, came_from)

            for neighbor_node in self.get_neighbors(current_node):
                new_cost = cost + self.STEP_COST
                if new_cost < cost_so_far.get(neighbor_node, float('inf')):
                    cost_so_far[neighbor_node] = new_cost
                    came_from[neighbor_node] = current_node
                    heap_entry_count += 1
                    heapq.heappush(frontier, (new_cost, heap_entry_count, neighbor_node))

        return []
