"""
Grid model for the path race engine.

A grid is a square of cells keyed by coordinate. Each cell is either
passable or an obstacle; runs mark cells visited as they explore.

Maze text format (used by Grid.from_rows):
    # or X = Obstacle
    anything else = Passable
"""

import math
import random
from dataclasses import dataclass, field
from typing import Iterator, Optional


# Fixed neighbour order keeps traversals deterministic.
NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))

OBSTACLE_CHARS = {"#", "X"}


class MazeConfigError(ValueError):
    """Exception raised when maze generation parameters are invalid."""

    pass


@dataclass(frozen=True)
class Coordinate:
    """2D position on the grid."""

    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Coordinate":
        """Return the coordinate shifted by (dx, dy)."""
        return Coordinate(self.x + dx, self.y + dy)

    def distance_to(self, other: "Coordinate") -> float:
        """Euclidean distance to another coordinate."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y}


@dataclass
class Cell:
    """State of a single grid cell."""

    is_passable: bool
    visited: bool = False
    parent: Optional[Coordinate] = None
    visit_step: Optional[int] = None

    def mark_visited(self, parent: Optional[Coordinate], step: int) -> None:
        """Mark the cell visited, recording where it was reached from."""
        self.visited = True
        self.parent = parent
        self.visit_step = step


class Grid:
    """
    Square grid of cells.

    Cells outside [0, size) are absent rather than impassable, so
    neighbour lookups simply skip them.
    """

    def __init__(self, size: int, cells: Optional[dict[Coordinate, Cell]] = None):
        self.size = size
        self.cells: dict[Coordinate, Cell] = cells if cells is not None else {}

    @classmethod
    def from_rows(cls, rows: list[str] | str) -> "Grid":
        """
        Build a grid from text rows.

        Args:
            rows: List of equal-length strings (or one multi-line string).

        Returns:
            Grid with obstacles where the text has '#' or 'X'.

        Raises:
            MazeConfigError: If the rows do not describe a square.
        """
        if isinstance(rows, str):
            rows = rows.strip().split("\n")
        size = len(rows)
        if size == 0 or any(len(row) != size for row in rows):
            raise MazeConfigError("Maze rows must form a non-empty square")

        cells = {}
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                cells[Coordinate(x, y)] = Cell(is_passable=char not in OBSTACLE_CHARS)
        return cls(size, cells)

    def __contains__(self, coord: Coordinate) -> bool:
        return coord in self.cells

    def __getitem__(self, coord: Coordinate) -> Cell:
        return self.cells[coord]

    def __len__(self) -> int:
        return len(self.cells)

    def coordinates(self) -> Iterator[Coordinate]:
        """Iterate coordinates in row-major order."""
        for y in range(self.size):
            for x in range(self.size):
                coord = Coordinate(x, y)
                if coord in self.cells:
                    yield coord

    def neighbors4(self, coord: Coordinate) -> list[Coordinate]:
        """Axis-aligned neighbours of coord that exist on the grid."""
        neighbors = []
        for dx, dy in NEIGHBOR_OFFSETS:
            candidate = coord.offset(dx, dy)
            if candidate in self.cells:
                neighbors.append(candidate)
        return neighbors

    def passable_cells(self) -> list[Coordinate]:
        """All passable coordinates in row-major order."""
        return [c for c in self.coordinates() if self.cells[c].is_passable]

    def visited_count(self) -> int:
        """Number of cells marked visited."""
        return sum(1 for cell in self.cells.values() if cell.visited)

    def clearance(self, coord: Coordinate) -> int:
        """Axis-aligned distance from coord to the nearest boundary edge."""
        return min(
            coord.x,
            self.size - 1 - coord.x,
            coord.y,
            self.size - 1 - coord.y,
        )

    def corners(self) -> tuple[Coordinate, ...]:
        """The four outer corner points of the square."""
        return (
            Coordinate(0, 0),
            Coordinate(0, self.size),
            Coordinate(self.size, 0),
            Coordinate(self.size, self.size),
        )

    def clone(self) -> "Grid":
        """Deep copy with fresh cell objects; no state is shared."""
        return Grid(
            self.size,
            {
                coord: Cell(
                    is_passable=cell.is_passable,
                    visited=cell.visited,
                    parent=cell.parent,
                    visit_step=cell.visit_step,
                )
                for coord, cell in self.cells.items()
            },
        )

    def to_rows(self) -> list[str]:
        """Render passability as text rows ('#' obstacle, '.' open)."""
        return [
            "".join(
                "." if self.cells[Coordinate(x, y)].is_passable else "#"
                for x in range(self.size)
            )
            for y in range(self.size)
        ]


@dataclass
class MazeLayout:
    """A freshly generated maze with its endpoints."""

    grid: Grid
    start: Optional[Coordinate] = None
    end: Optional[Coordinate] = None
    size: int = field(init=False)

    def __post_init__(self) -> None:
        self.size = self.grid.size

    @property
    def has_endpoints(self) -> bool:
        """True when both start and end were placed."""
        return self.start is not None and self.end is not None


def validate_parameters(size: int, obstacle_probability: float) -> None:
    """
    Check maze generation parameters.

    Raises:
        MazeConfigError: If size is not an integer >= 1, or the probability
            is not a number within [0, 1].
    """
    if isinstance(size, bool) or not isinstance(size, int):
        raise MazeConfigError(f"Grid size must be an integer, got {size!r}")
    if size < 1:
        raise MazeConfigError(f"Grid size must be at least 1, got {size}")
    if isinstance(obstacle_probability, bool) or not isinstance(obstacle_probability, (int, float)):
        raise MazeConfigError(
            f"Obstacle probability must be a number, got {obstacle_probability!r}"
        )
    if not 0.0 <= obstacle_probability <= 1.0:
        raise MazeConfigError(
            f"Obstacle probability must be within [0, 1], got {obstacle_probability}"
        )


def generate_maze(
    size: int,
    obstacle_probability: float,
    rng: Optional[random.Random] = None,
) -> MazeLayout:
    """
    Generate a random obstacle grid and pick start/end cells.

    Args:
        size: Side length of the square grid.
        obstacle_probability: Chance that any given cell is an obstacle.
        rng: Random source. Pass a seeded random.Random for reproducible mazes.

    Returns:
        MazeLayout. Start and end are None when fewer than two cells are passable.

    Raises:
        MazeConfigError: If the parameters are invalid.
    """
    validate_parameters(size, obstacle_probability)
    if rng is None:
        rng = random.Random()

    cells: dict[Coordinate, Cell] = {}
    passable: list[Coordinate] = []
    for x in range(size):
        for y in range(size):
            coord = Coordinate(x, y)
            is_passable = rng.random() >= obstacle_probability
            if is_passable:
                passable.append(coord)
            cells[coord] = Cell(is_passable=is_passable)

    layout = MazeLayout(grid=Grid(size, cells))
    if len(passable) < 2:
        return layout

    start_idx = rng.randrange(len(passable))
    end_idx = rng.randrange(len(passable))
    while end_idx == start_idx:
        end_idx = rng.randrange(len(passable))

    layout.start = passable[start_idx]
    layout.end = passable[end_idx]
    return layout
