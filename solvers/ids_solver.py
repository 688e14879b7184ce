from .base_solver import BaseSolver


class IDSSolver(BaseSolver):
    """
    Iterative deepening over depth-limited DFS.

    Each iteration prunes a cell reached again at the same or a greater depth, so
    open rooms do not blow up exponentially. `visited` lists each cell once, the
    first time any iteration expands it; `nodes_expanded` counts every expansion.
    """

    def _mark(self, node, seen):
        self.nodes_expanded += 1
        if node not in seen:
            seen.add(node)
            self.visited.append(node)

    def _depth_limited_search(self, limit, seen):
        best_depth = {self.start_pos: 0}
        stack = [(self.start_pos, iter(self.get_neighbors(self.start_pos)))]
        self._mark(self.start_pos, seen)
        if self.start_pos == self.end_pos:
            return [self.start_pos], False

        cutoff = False
        while stack:
            node, neighbors = stack[-1]
            depth = len(stack) - 1
            neighbor_node = next(neighbors, None)
            if neighbor_node is None:
                stack.pop()
                continue
            if depth + 1 > limit:
                cutoff = True
                continue
            if best_depth.get(neighbor_node, float('inf')) <= depth + 1:
                continue
            best_depth[neighbor_node] = depth + 1
            self._mark(neighbor_node, seen)
            if neighbor_node == self.end_pos:
                return [entry[0] for entry in stack] + [neighbor_node], cutoff
            stack.append((neighbor_node, iter(self.get_neighbors(neighbor_node))))
        return [], cutoff

    def _core_search_logic(self):
        seen = set()
        for limit in range(self.width * self.height + 1):
            path, cutoff = self._depth_limited_search(limit, seen)
            if path:
                return path
            if not cutoff:
                break
        return []
