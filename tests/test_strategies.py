"""Tests for the individual search strategy steps."""

from pathrace.core.grid import Coordinate
from pathrace.core.simulation import SimulationRun
from pathrace.core.strategies import STEP_FUNCTIONS, Algorithm, viable_neighbors


def c(x: int, y: int) -> Coordinate:
    return Coordinate(x, y)


class TestAlgorithm:
    """Tests for the algorithm enumeration."""

    def test_exactly_three_algorithms(self):
        """The race always has the same three entrants."""
        assert list(Algorithm) == [
            Algorithm.BREADTH_FIRST,
            Algorithm.CORNER_SEEKING,
            Algorithm.WALL_HUGGING,
        ]

    def test_every_algorithm_has_a_step_function(self):
        """Dispatch table covers the whole enumeration."""
        assert set(STEP_FUNCTIONS) == set(Algorithm)

    def test_labels_and_values(self):
        """Test display labels and lookup by value."""
        assert Algorithm("breadth_first") is Algorithm.BREADTH_FIRST
        assert Algorithm.BREADTH_FIRST.label == "BFS"
        assert Algorithm.CORNER_SEEKING.label == "Corner"
        assert Algorithm.WALL_HUGGING.label == "Wall"

    def test_only_breadth_first_keeps_its_own_path(self):
        """Heuristic traversals have their path recomputed."""
        assert Algorithm.BREADTH_FIRST.finds_shortest_path is True
        assert Algorithm.CORNER_SEEKING.finds_shortest_path is False
        assert Algorithm.WALL_HUGGING.finds_shortest_path is False


class TestViableNeighbors:
    """Tests for neighbour filtering."""

    def test_filters_obstacles_visited_and_queued(self, detour_grid):
        """Only passable, unvisited, unqueued neighbours are viable."""
        run = SimulationRun(Algorithm.CORNER_SEEKING, detour_grid, c(0, 0), c(0, 4))
        run.step()
        run.current = c(0, 2)
        run.grid[c(0, 1)].mark_visited(c(0, 0), 2)
        run.frontier.push(c(1, 2))

        # (0, 3) is a wall, (0, 1) visited, (1, 2) already queued
        assert viable_neighbors(run) == []

    def test_open_interior(self, open_grid):
        """Test that all four neighbours are viable on an open grid."""
        run = SimulationRun(Algorithm.BREADTH_FIRST, open_grid, c(2, 2), c(4, 4))
        run.step()
        assert len(viable_neighbors(run)) == 4


class TestBreadthFirstStep:
    """Tests for the breadth-first transition."""

    def test_marks_at_discovery_and_pops_front(self, open_grid):
        """Neighbours are marked when queued; the oldest entry is taken next."""
        run = SimulationRun(Algorithm.BREADTH_FIRST, open_grid, c(2, 2), c(4, 4))
        run.step()
        run.step()

        assert run.current == c(2, 3)
        assert run.frontier.to_list() == [c(2, 1), c(3, 2), c(1, 2)]
        for coord in (c(2, 3), c(2, 1), c(3, 2), c(1, 2)):
            cell = run.grid[coord]
            assert cell.visited is True
            assert cell.parent == c(2, 2)
            assert cell.visit_step == 2

    def test_never_reorders(self, open_grid):
        """The frontier keeps insertion order across steps."""
        run = SimulationRun(Algorithm.BREADTH_FIRST, open_grid, c(2, 2), c(4, 4))
        run.step()
        run.step()
        run.step()

        # (2, 3) expanded: (2, 4) and (3, 3), (1, 3) appended behind the old entries
        assert run.current == c(2, 1)
        assert run.frontier.to_list() == [c(3, 2), c(1, 2), c(2, 4), c(3, 3), c(1, 3)]


class TestHeuristicSteps:
    """Tests for the corner-seeking and wall-hugging transitions."""

    def test_corner_seeking_heads_for_nearest_corner(self, open_grid):
        """From (1, 1) the next cell is one step closer to (0, 0)."""
        run = SimulationRun(Algorithm.CORNER_SEEKING, open_grid, c(1, 1), c(4, 4))
        run.step()
        run.step()

        assert run.current == c(0, 1)
        assert run.grid[c(0, 1)].parent == c(1, 1)
        # Queued but not visited yet
        assert run.grid[c(1, 0)].visited is False
        assert c(1, 0) in run.frontier

    def test_wall_hugging_prefers_boundary(self, open_grid):
        """From (1, 1) a zero-clearance cell is taken first."""
        run = SimulationRun(Algorithm.WALL_HUGGING, open_grid, c(1, 1), c(4, 4))
        run.step()
        run.step()

        assert run.current == c(0, 1)
        assert run.grid.clearance(run.current) == 0
        assert run.grid[c(0, 1)].parent == c(1, 1)

    def test_parent_is_previous_current(self, open_grid):
        """Heuristic parents are recorded at visit time from the previous cell."""
        for algorithm in (Algorithm.CORNER_SEEKING, Algorithm.WALL_HUGGING):
            run = SimulationRun(algorithm, open_grid, c(2, 2), c(4, 4))
            run.step()
            previous = run.current
            for _ in range(6):
                if not run.step():
                    break
                assert run.grid[run.current].parent == previous
                previous = run.current

    def test_heuristics_only_mark_the_visited_cell(self, open_grid):
        """Queued cells stay unvisited until they are popped."""
        run = SimulationRun(Algorithm.WALL_HUGGING, open_grid, c(2, 2), c(4, 4))
        run.step()
        run.step()

        assert run.grid.visited_count() == 2
        for coord in run.frontier:
            assert run.grid[coord].visited is False
