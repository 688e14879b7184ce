import heapq
from .base_solver import BaseSolver


class AStarSolver(BaseSolver):
    def _core_search_logic(self):
        came_from = {self.start_pos: None}
        cost_so_far = {self.start_pos: 0}
        closed = set()

        local_heap = []
        heap_entry_count = 0
        heapq.heappush(local_heap,
                       (self.manhattan_heuristic(self.start_pos, self.end_pos),
                        heap_entry_count,
                        self.start_pos))

        while local_heap:
            _, _, current_node = heapq.heappop(local_heap)
            if current_node in closed:
                continue
            closed.add(current_node)
            self._expand(current_node)

            if current_node == self.end_pos:
                return self.reconstruct_path(current_node, came_from)

            for neighbor_node in self.get_neighbors(current_node):
                new_g_cost = cost_so_far[current_node] + 1
                if new_g_cost < cost_so_far.get(neighbor_node, float('inf')):
                    cost_so_far[neighbor_node] = new_g_cost
                    came_from[neighbor_node] = current_node
                    priority_f_cost = new_g_cost + self.manhattan_heuristic(neighbor_node, self.end_pos)
                    heap_entry_count += 1
                    heapq.heappush(local_heap, (priority_f_cost, heap_entry_count, neighbor_node))

        return []
