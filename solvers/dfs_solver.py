from .base_solver import BaseSolver


class DFSSolver(BaseSolver):
    def _core_search_logic(self):
        stack = [self.start_pos]
        came_from = {self.start_pos: None}
        expanded = set()

        while stack:
            current_node = stack.pop()
            if current_node in expanded:
                continue
            expanded.add(current_node)
            self._expand(current_node)

            if current_node == self.end_pos:
                return self.reconstruct_path(current_node, came_from)

            # Reversed so the first listed neighbor (north) is explored first.
            for neighbor_node in reversed(self.get_neighbors(current_node)):
                if neighbor_node not in expanded:
                    came_from[neighbor_node] = current_node
                    stack.append(neighbor_node)

        return []
