"""Tests for shortest-path reconstruction."""

from pathrace.core.grid import Coordinate
from pathrace.core.pathfinding import backtrack, path_length, shortest_path


def c(x: int, y: int) -> Coordinate:
    return Coordinate(x, y)


DETOUR_ROUTE = [
    c(0, 0), c(0, 1), c(0, 2), c(1, 2), c(2, 2),
    c(2, 3), c(2, 4), c(1, 4), c(0, 4),
]


class TestShortestPath:
    """Tests for the independent breadth-first reconstruction."""

    def test_open_grid_corner_to_corner(self, open_grid, corner_to_corner):
        """Test Manhattan-length path across an open grid."""
        start, end = corner_to_corner
        path = shortest_path(open_grid, start, end)

        assert len(path) == 9
        assert path[0] == start
        assert path[-1] == end
        assert path_length(path) == 8

    def test_path_steps_are_adjacent(self, open_grid, corner_to_corner):
        """Consecutive path cells are grid neighbours."""
        start, end = corner_to_corner
        path = shortest_path(open_grid, start, end)
        for a, b in zip(path, path[1:]):
            assert abs(a.x - b.x) + abs(a.y - b.y) == 1

    def test_detour_route(self, detour_grid):
        """Test the unique shortest route around the walls."""
        assert shortest_path(detour_grid, c(0, 0), c(0, 4)) == DETOUR_ROUTE

    def test_ignores_run_state(self, detour_grid):
        """Visited flags and stale parents left by a run do not matter."""
        for coord in detour_grid.passable_cells():
            detour_grid[coord].mark_visited(c(4, 4), 99)

        assert shortest_path(detour_grid, c(0, 0), c(0, 4)) == DETOUR_ROUTE

    def test_unreachable_returns_empty(self, divided_grid):
        """Test that disconnected endpoints yield an empty path."""
        assert shortest_path(divided_grid, c(0, 0), c(4, 4)) == []

    def test_obstacle_endpoint_returns_empty(self, detour_grid):
        """Test that a blocked endpoint yields an empty path."""
        assert shortest_path(detour_grid, c(0, 0), c(1, 1)) == []

    def test_missing_endpoint_returns_empty(self, open_grid):
        """Test that an off-grid endpoint yields an empty path."""
        assert shortest_path(open_grid, c(0, 0), c(9, 9)) == []

    def test_same_start_and_end(self, open_grid):
        """Test trivial path."""
        assert shortest_path(open_grid, c(2, 2), c(2, 2)) == [c(2, 2)]


class TestBacktrack:
    """Tests for following live parent pointers."""

    def test_follows_parent_chain(self, open_grid):
        """Test walking parents from end back to start."""
        open_grid[c(0, 0)].mark_visited(None, 1)
        open_grid[c(1, 0)].mark_visited(c(0, 0), 2)
        open_grid[c(1, 1)].mark_visited(c(1, 0), 3)

        assert backtrack(open_grid, c(0, 0), c(1, 1)) == [c(0, 0), c(1, 0), c(1, 1)]

    def test_broken_chain_returns_empty(self, open_grid):
        """Test that a chain not leading to start yields an empty path."""
        open_grid[c(1, 1)].mark_visited(c(1, 0), 3)

        assert backtrack(open_grid, c(0, 0), c(1, 1)) == []

    def test_cyclic_chain_returns_empty(self, open_grid):
        """Test that a parent cycle is detected instead of looping."""
        open_grid[c(1, 1)].mark_visited(c(1, 2), 3)
        open_grid[c(1, 2)].mark_visited(c(1, 1), 4)

        assert backtrack(open_grid, c(0, 0), c(1, 1)) == []


def test_path_length_of_empty_path():
    """An empty path has no moves."""
    assert path_length([]) == 0
    assert path_length([c(0, 0)]) == 0
