"""
Run coordinator.

Owns the canonical maze and one SimulationRun per Algorithm, drives them
on a shared tick, and records the order in which they reach the goal.
"""

import logging
import random
from dataclasses import dataclass
from typing import Optional

from pathrace.core.grid import Coordinate, Grid, MazeLayout, generate_maze, validate_parameters
from pathrace.core.simulation import RunState, SimulationRun
from pathrace.core.strategies import Algorithm

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 75
DEFAULT_OBSTACLE_PROBABILITY = 0.2


@dataclass(frozen=True)
class RunSnapshot:
    """Read-only view of a run for a renderer. Matrices are indexed [y][x]."""

    algorithm: Algorithm
    size: int
    passable: tuple[tuple[bool, ...], ...]
    visited: tuple[tuple[bool, ...], ...]
    visit_steps: tuple[tuple[Optional[int], ...], ...]
    start: Optional[Coordinate]
    end: Optional[Coordinate]
    current: Optional[Coordinate]
    final_path: tuple[Coordinate, ...]
    state: RunState
    rank: Optional[int]
    step_count: int
    completion_steps: Optional[int]
    frontier_size: int

    @property
    def visited_count(self) -> int:
        return sum(sum(row) for row in self.visited)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "algorithm": self.algorithm.value,
            "label": self.algorithm.label,
            "size": self.size,
            "passable": [list(row) for row in self.passable],
            "visited": [list(row) for row in self.visited],
            "visit_steps": [list(row) for row in self.visit_steps],
            "start": self.start.to_dict() if self.start else None,
            "end": self.end.to_dict() if self.end else None,
            "current": self.current.to_dict() if self.current else None,
            "final_path": [c.to_dict() for c in self.final_path],
            "state": self.state.value,
            "rank": self.rank,
            "step_count": self.step_count,
            "completion_steps": self.completion_steps,
            "frontier_size": self.frontier_size,
        }


class RunCoordinator:
    """
    Races every Algorithm over the same maze.

    Example usage:
        coordinator = RunCoordinator(size=20, obstacle_probability=0.2)
        coordinator.set_running(True)
        while not coordinator.all_finished:
            coordinator.tick()
        print(coordinator.completion_order)
    """

    def __init__(
        self,
        size: int = DEFAULT_GRID_SIZE,
        obstacle_probability: float = DEFAULT_OBSTACLE_PROBABILITY,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the coordinator and generate the first maze.

        Args:
            size: Side length of the square grid.
            obstacle_probability: Chance that any given cell is an obstacle.
            rng: Random source used for every maze this coordinator generates.

        Raises:
            MazeConfigError: If the parameters are invalid.
        """
        self.rng = rng if rng is not None else random.Random()
        self.running = False
        self.size = size
        self.obstacle_probability = obstacle_probability
        self.maze: Optional[MazeLayout] = None
        self.runs: dict[Algorithm, SimulationRun] = {}
        self._completion_order: list[Algorithm] = []

        self.reconfigure(size, obstacle_probability)

    @property
    def start(self) -> Optional[Coordinate]:
        return self.maze.start if self.maze else None

    @property
    def end(self) -> Optional[Coordinate]:
        return self.maze.end if self.maze else None

    @property
    def completion_order(self) -> list[Algorithm]:
        """Algorithms in the order they reached the goal."""
        return list(self._completion_order)

    @property
    def all_finished(self) -> bool:
        """True when no run can advance any further."""
        return all(
            run.state.is_terminal or not run.can_start for run in self.runs.values()
        )

    def reconfigure(self, size: int, obstacle_probability: float) -> MazeLayout:
        """
        Generate a new maze and reset every run.

        Parameters are validated before anything changes, so a rejected
        call leaves the current maze and runs as they were. The simulation
        is paused afterwards.

        Raises:
            MazeConfigError: If size < 1 or the probability is outside [0, 1].
        """
        validate_parameters(size, obstacle_probability)
        layout = generate_maze(size, obstacle_probability, self.rng)

        self.size = size
        self.obstacle_probability = obstacle_probability
        self._install(layout)

        logger.info(
            f"Generated {size}x{size} maze (obstacle_probability={obstacle_probability}, "
            f"passable={len(layout.grid.passable_cells())}, "
            f"start={layout.start}, end={layout.end})"
        )
        return layout

    def randomize(self) -> MazeLayout:
        """Regenerate the maze with the current parameters."""
        return self.reconfigure(self.size, self.obstacle_probability)

    def load_maze(
        self,
        grid: Grid,
        start: Optional[Coordinate],
        end: Optional[Coordinate],
    ) -> MazeLayout:
        """
        Install a fixed maze instead of a random one.

        Raises:
            ValueError: If start or end is not a passable cell of the grid.
        """
        for label, coord in (("start", start), ("end", end)):
            if coord is not None and (coord not in grid or not grid[coord].is_passable):
                raise ValueError(f"The {label} cell {coord} is not a passable grid cell")

        layout = MazeLayout(grid=grid.clone(), start=start, end=end)
        self.size = grid.size
        self._install(layout)
        return layout

    def _install(self, layout: MazeLayout) -> None:
        """Swap in a new maze; every run is rebuilt from a fresh clone."""
        self.maze = layout
        self.runs = {
            algorithm: SimulationRun(algorithm, layout.grid, layout.start, layout.end)
            for algorithm in Algorithm
        }
        self._completion_order = []
        self.running = False

    def set_running(self, running: bool) -> None:
        """Pause or resume ticking. Run state is kept either way."""
        self.running = running

    def tick(self) -> int:
        """
        Step every active run once.

        Returns:
            Number of runs that advanced (0 when paused).
        """
        if not self.running:
            return 0

        advanced = 0
        for algorithm, run in self.runs.items():
            if not run.step():
                continue
            advanced += 1
            if run.state is RunState.COMPLETED:
                self._record_completion(algorithm)
            elif run.state is RunState.EXHAUSTED:
                logger.info(f"{algorithm.label} exhausted its frontier after {run.step_count} steps")
        return advanced

    def _record_completion(self, algorithm: Algorithm) -> None:
        if algorithm in self._completion_order:
            return
        self._completion_order.append(algorithm)
        run = self.runs[algorithm]
        logger.info(
            f"{algorithm.label} reached the goal in {run.completion_steps} steps "
            f"(rank {len(self._completion_order)}, path {len(run.final_path)} cells)"
        )

    def rank(self, algorithm: Algorithm) -> Optional[int]:
        """1-based finishing position, or None if not finished."""
        if algorithm not in self._completion_order:
            return None
        return self._completion_order.index(algorithm) + 1

    def snapshot(self, algorithm: Algorithm) -> RunSnapshot:
        """Read-only view of one run."""
        run = self.runs[algorithm]
        grid = run.grid
        rows = range(grid.size)
        cols = range(grid.size)

        return RunSnapshot(
            algorithm=algorithm,
            size=grid.size,
            passable=tuple(
                tuple(grid[Coordinate(x, y)].is_passable for x in cols) for y in rows
            ),
            visited=tuple(
                tuple(grid[Coordinate(x, y)].visited for x in cols) for y in rows
            ),
            visit_steps=tuple(
                tuple(grid[Coordinate(x, y)].visit_step for x in cols) for y in rows
            ),
            start=run.start,
            end=run.end,
            current=run.current,
            final_path=tuple(run.final_path),
            state=run.state,
            rank=self.rank(algorithm),
            step_count=run.step_count,
            completion_steps=run.completion_steps,
            frontier_size=len(run.frontier),
        )

    def snapshots(self) -> dict[Algorithm, RunSnapshot]:
        """Snapshots of every run."""
        return {algorithm: self.snapshot(algorithm) for algorithm in self.runs}

    def visualize(self, algorithm: Algorithm) -> str:
        """ASCII rendering of one run."""
        return self.runs[algorithm].visualize()


def ordinal(rank: int) -> str:
    """Format a 1-based rank as '1st', '2nd', '3rd', '4th', ..."""
    if 10 <= rank % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(rank % 10, "th")
    return f"{rank}{suffix}"


if __name__ == "__main__":
    # Quick race on a small maze
    coordinator = RunCoordinator(size=12, obstacle_probability=0.2, rng=random.Random(7))
    coordinator.set_running(True)
    ticks = 0
    while not coordinator.all_finished:
        coordinator.tick()
        ticks += 1

    print(f"Finished after {ticks} ticks")
    for algorithm in Algorithm:
        snap = coordinator.snapshot(algorithm)
        place = ordinal(snap.rank) if snap.rank else "-"
        print(f"\n{algorithm.label}: {snap.state.value} ({place}), path {len(snap.final_path)} cells")
        print(coordinator.visualize(algorithm))
