import random
from collections import deque

import pytest

from maze import Grid, Position, PRESET_MAZES, generate_random_maze, create_preset_maze


def _reachable(grid, start):
    """Flood fill over open cells from start."""
    seen = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in grid.open_neighbors(current):
            if neighbor not in seen:
                seen.add(neighbor)
                queue.append(neighbor)
    return seen


def _boundary(width, height):
    for x in range(width):
        yield x, 0
        yield x, height - 1
    for z in range(height):
        yield 0, z
        yield width - 1, z


@pytest.mark.parametrize("size", [(11, 11), (15, 15), (21, 21), (13, 17)])
@pytest.mark.parametrize("seed", range(5))
def test_random_maze_start_end_open_and_boundary_walled(size, seed):
    width, height = size
    result = generate_random_maze(width, height, rng=random.Random(seed))
    grid = result["grid"]

    assert (result["width"], result["height"]) == (width, height)
    assert result["start"] == Position(1, 1)
    assert result["end"] == Position(width - 2, height - 2)
    assert not grid.is_wall(*result["start"])
    assert not grid.is_wall(*result["end"])
    assert grid.cell(1, 1).is_start
    assert grid.cell(width - 2, height - 2).is_end
    assert all(grid.is_wall(x, z) for x, z in _boundary(width, height))
    assert sum(c.is_start for c in grid) == 1
    assert sum(c.is_end for c in grid) == 1


@pytest.mark.parametrize("seed", range(10))
def test_forced_end_neighbor_is_connected_to_start(seed):
    result = generate_random_maze(15, 15, rng=random.Random(seed))
    end = result["end"]
    reachable = _reachable(result["grid"], result["start"])

    assert Position(end.x, end.z - 1) in reachable
    assert end in reachable


def test_easy_maze_never_isolates_start():
    for seed in range(20):
        result = generate_random_maze(11, 11, rng=random.Random(seed))
        assert result["grid"].open_neighbors(result["start"]), f"start isolated for seed {seed}"


def test_large_maze_does_not_recurse():
    result = generate_random_maze(201, 201, rng=random.Random(0))
    assert not result["grid"].is_wall(199, 199)


@pytest.mark.parametrize("size", [(10, 11), (11, 12), (9, 9), (1, 1)])
def test_random_maze_rejects_invalid_dimensions(size):
    with pytest.raises(ValueError):
        generate_random_maze(*size)


def test_preset_zero_layout():
    result = create_preset_maze(0)
    grid = result["grid"]

    assert (result["width"], result["height"]) == (15, 15)
    assert result["start"] == Position(1, 1)
    assert result["end"] == Position(13, 13)
    assert not grid.is_wall(1, 1) and not grid.is_wall(13, 13)
    assert all(grid.is_wall(x, z) for x, z in _boundary(15, 15))
    # Catalog entries are (z, x): (2, 1) walls off x=1, z=2.
    assert grid.is_wall(1, 2)
    assert not grid.is_wall(2, 1)


def test_preset_index_wraps():
    assert create_preset_maze(len(PRESET_MAZES))["grid"] == create_preset_maze(0)["grid"]
    assert create_preset_maze(4)["grid"] == create_preset_maze(1)["grid"]
    assert create_preset_maze(-1)["grid"] == create_preset_maze(2)["grid"]


def test_preset_ignores_out_of_range_and_malformed_walls():
    presets = [{
        "width": 11,
        "height": 11,
        "walls": [(99, 99), (-50, 3), None, ("bad",), ("a", "b"), (5, 5)],
    }]
    grid = create_preset_maze(0, presets=presets)["grid"]

    walls = {(c.x, c.z) for c in grid if c.is_wall}
    boundary = set(_boundary(11, 11))
    assert walls - boundary == {(5, 5)}


def test_preset_forces_start_and_end_open_over_walls():
    presets = [{"width": 11, "height": 11, "walls": [(1, 1), (9, 9)]}]
    result = create_preset_maze(0, presets=presets)
    assert not result["grid"].is_wall(1, 1)
    assert not result["grid"].is_wall(9, 9)


def test_cell_lookup_out_of_bounds_is_none():
    grid = Grid(11, 11)
    assert grid.cell(-1, 0) is None
    assert grid.cell(11, 3) is None
    assert grid.cell(3, 11) is None
    assert grid.cell(10, 10) is not None
    assert grid.is_wall(-1, -1)


def test_mark_visited_returns_new_grid_and_is_idempotent():
    grid = create_preset_maze(0)["grid"]
    cells = [(1, 1), (2, 1), (3, 1), (40, 40), (-1, 2)]

    once = grid.mark_visited(cells)
    twice = once.mark_visited(cells)

    assert once is not grid
    assert once == twice
    assert once.visited_positions() == {Position(1, 1), Position(2, 1), Position(3, 1)}
    assert grid.visited_positions() == set()


def test_mark_path_clears_previous_overlay():
    grid = create_preset_maze(0)["grid"]
    first = grid.mark_path([(1, 1), (2, 1)])
    second = first.mark_path([(3, 1)])

    assert second.path_positions() == {Position(3, 1)}
    assert first.path_positions() == {Position(1, 1), Position(2, 1)}


def test_add_visited_is_cumulative():
    grid = Grid(11, 11, is_wall=False)
    grid = grid.add_visited((1, 1)).add_visited((2, 1)).add_visited((99, 1))
    assert grid.visited_positions() == {Position(1, 1), Position(2, 1)}
    assert grid.clear_overlays().visited_positions() == set()


def test_wall_mask_is_read_only_snapshot():
    grid = create_preset_maze(0)["grid"]
    mask = grid.wall_mask()

    assert mask.shape == (15, 15)
    assert mask[2, 1] and not mask[1, 1]
    with pytest.raises(ValueError):
        mask[1, 1] = True
