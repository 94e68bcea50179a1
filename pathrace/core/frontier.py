"""Frontier of discovered-but-unvisited cells, plus the heuristic orderings."""

from collections import deque
from typing import Callable, Iterable, Iterator, Optional

from pathrace.core.grid import Coordinate, Grid


class Frontier:
    """
    Ordered, duplicate-free collection of pending coordinates.

    The front is index 0, the back is the last element. Membership is
    tracked in a set so "already queued" checks are cheap.
    """

    def __init__(self, items: Optional[Iterable[Coordinate]] = None):
        self._items: deque[Coordinate] = deque()
        self._members: set[Coordinate] = set()
        if items:
            self.extend(items)

    def __contains__(self, coord: Coordinate) -> bool:
        return coord in self._members

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def push(self, coord: Coordinate) -> bool:
        """Append to the back. Returns False if already queued."""
        if coord in self._members:
            return False
        self._items.append(coord)
        self._members.add(coord)
        return True

    def extend(self, coords: Iterable[Coordinate]) -> None:
        """Append several coordinates to the back, skipping duplicates."""
        for coord in coords:
            self.push(coord)

    def pop_front(self) -> Optional[Coordinate]:
        """Remove and return the front element (FIFO), or None when empty."""
        if not self._items:
            return None
        coord = self._items.popleft()
        self._members.discard(coord)
        return coord

    def pop_back(self) -> Optional[Coordinate]:
        """Remove and return the back element (LIFO), or None when empty."""
        if not self._items:
            return None
        coord = self._items.pop()
        self._members.discard(coord)
        return coord

    def pop_back_unvisited(self, grid: Grid) -> Optional[Coordinate]:
        """
        Pop from the back until an unvisited cell comes up.

        Entries that were visited after being queued are dropped.

        Returns:
            The first unvisited coordinate, or None if the frontier ran dry.
        """
        while self._items:
            coord = self.pop_back()
            if not grid[coord].visited:
                return coord
        return None

    def sort(self, key: Callable[[Coordinate], object], reverse: bool = False) -> None:
        """Stable in-place sort of the whole frontier."""
        self._items = deque(sorted(self._items, key=key, reverse=reverse))

    def to_list(self) -> list[Coordinate]:
        """Copy of the current order, front first."""
        return list(self._items)


def corners_by_distance(grid: Grid, origin: Coordinate) -> list[Coordinate]:
    """Grid corners ordered nearest-first from origin (stable on ties)."""
    return sorted(grid.corners(), key=origin.distance_to)


def order_corner_seeking(frontier: Frontier, grid: Grid, current: Coordinate) -> Coordinate:
    """
    Re-sort the frontier toward the nearest corner that still offers progress.

    The nearest corner is the primary target. If any queued cell is
    strictly closer to it than current, the frontier is sorted by
    descending distance to the primary corner; otherwise by descending
    distance to the second-nearest corner. The best cell ends at the back.

    Returns:
        The corner that was used as the sort target.
    """
    primary, secondary = corners_by_distance(grid, current)[:2]
    current_distance = current.distance_to(primary)

    if any(coord.distance_to(primary) < current_distance for coord in frontier):
        target = primary
    else:
        target = secondary

    frontier.sort(key=target.distance_to, reverse=True)
    return target


def order_wall_hugging(frontier: Frontier, grid: Grid, current: Coordinate) -> None:
    """
    Re-sort the frontier so cells nearest the boundary are popped first.

    Sorted by descending clearance, so the smallest clearance lands at the
    back. Equal clearance falls back to descending distance to the corner
    nearest current.
    """
    primary = corners_by_distance(grid, current)[0]
    frontier.sort(
        key=lambda coord: (grid.clearance(coord), coord.distance_to(primary)),
        reverse=True,
    )
