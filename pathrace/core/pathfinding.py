"""Shortest-path reconstruction over a grid."""

from collections import deque
from typing import Optional

from pathrace.core.grid import Coordinate, Grid


def shortest_path(grid: Grid, start: Coordinate, end: Coordinate) -> list[Coordinate]:
    """
    Find a shortest path with a fresh breadth-first search.

    Only passability is consulted; visited/parent marks left on the grid
    by a run are ignored.

    Args:
        grid: Grid to search.
        start: Path origin.
        end: Path goal.

    Returns:
        Coordinates from start to end inclusive, or [] if end is unreachable.
    """
    if start not in grid or end not in grid:
        return []
    if not grid[start].is_passable or not grid[end].is_passable:
        return []
    if start == end:
        return [start]

    parents: dict[Coordinate, Optional[Coordinate]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()
        for neighbor in grid.neighbors4(current):
            if neighbor in parents or not grid[neighbor].is_passable:
                continue
            parents[neighbor] = current
            if neighbor == end:
                return _walk_back(parents, end)
            queue.append(neighbor)

    return []


def backtrack(grid: Grid, start: Coordinate, end: Coordinate) -> list[Coordinate]:
    """
    Follow the parent pointers stored on the grid from end back to start.

    Returns:
        Coordinates from start to end inclusive, or [] if the chain does
        not lead back to start.
    """
    path = [end]
    seen = {end}
    current = end
    while current != start:
        parent = grid[current].parent
        if parent is None or parent in seen:
            return []
        path.append(parent)
        seen.add(parent)
        current = parent
    path.reverse()
    return path


def path_length(path: list[Coordinate]) -> int:
    """Number of moves along a path (cells minus one)."""
    return max(len(path) - 1, 0)


def _walk_back(parents: dict[Coordinate, Optional[Coordinate]], end: Coordinate) -> list[Coordinate]:
    path = [end]
    while parents[path[-1]] is not None:
        path.append(parents[path[-1]])
    path.reverse()
    return path
