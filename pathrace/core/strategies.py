"""
Search strategies.

Each strategy is a plain function that advances a running simulation by
one cell. Dispatch goes through STEP_FUNCTIONS keyed by Algorithm.

    BREADTH_FIRST   FIFO frontier, cells marked at discovery time
    CORNER_SEEKING  frontier re-sorted toward the nearest useful corner
    WALL_HUGGING    frontier re-sorted to favour cells near the boundary
"""

from enum import Enum
from typing import TYPE_CHECKING, Callable, Optional

from pathrace.core.frontier import order_corner_seeking, order_wall_hugging
from pathrace.core.grid import Coordinate

if TYPE_CHECKING:
    from pathrace.core.simulation import SimulationRun


class Algorithm(Enum):
    """Search strategies raced against each other."""

    BREADTH_FIRST = "breadth_first"
    CORNER_SEEKING = "corner_seeking"
    WALL_HUGGING = "wall_hugging"

    @property
    def label(self) -> str:
        """Short display name."""
        labels = {
            Algorithm.BREADTH_FIRST: "BFS",
            Algorithm.CORNER_SEEKING: "Corner",
            Algorithm.WALL_HUGGING: "Wall",
        }
        return labels[self]

    @property
    def finds_shortest_path(self) -> bool:
        """Whether the live parent chain is already a shortest path."""
        return self is Algorithm.BREADTH_FIRST


StepFunction = Callable[["SimulationRun"], Optional[Coordinate]]


def viable_neighbors(run: "SimulationRun") -> list[Coordinate]:
    """Neighbours of current that are passable, unvisited and not yet queued."""
    grid = run.grid
    return [
        coord
        for coord in grid.neighbors4(run.current)
        if grid[coord].is_passable
        and not grid[coord].visited
        and coord not in run.frontier
    ]


def step_breadth_first(run: "SimulationRun") -> Optional[Coordinate]:
    """
    Queue unvisited neighbours and take the oldest queued cell.

    Neighbours are marked visited, with current as parent, as soon as they
    are discovered. That keeps every parent chain a shortest path.

    Returns:
        The next current cell, or None if the frontier is empty.
    """
    for coord in viable_neighbors(run):
        run.grid[coord].mark_visited(run.current, run.step_count)
        run.frontier.push(coord)
    return run.frontier.pop_front()


def _visit_from_back(run: "SimulationRun") -> Optional[Coordinate]:
    """Pop the best unvisited cell and record current as its parent."""
    next_coord = run.frontier.pop_back_unvisited(run.grid)
    if next_coord is not None:
        run.grid[next_coord].mark_visited(run.current, run.step_count)
    return next_coord


def step_corner_seeking(run: "SimulationRun") -> Optional[Coordinate]:
    """Queue neighbours, re-sort toward a corner, then visit from the back."""
    run.frontier.extend(viable_neighbors(run))
    order_corner_seeking(run.frontier, run.grid, run.current)
    return _visit_from_back(run)


def step_wall_hugging(run: "SimulationRun") -> Optional[Coordinate]:
    """Queue neighbours, re-sort by wall clearance, then visit from the back."""
    run.frontier.extend(viable_neighbors(run))
    order_wall_hugging(run.frontier, run.grid, run.current)
    return _visit_from_back(run)


STEP_FUNCTIONS: dict[Algorithm, StepFunction] = {
    Algorithm.BREADTH_FIRST: step_breadth_first,
    Algorithm.CORNER_SEEKING: step_corner_seeking,
    Algorithm.WALL_HUGGING: step_wall_hugging,
}
