"""
Simulation run: one strategy racing on its own copy of the maze.

State machine:
    NOT_STARTED -> RUNNING -> COMPLETED
                           -> EXHAUSTED

A run without start/end stays NOT_STARTED forever. COMPLETED and
EXHAUSTED are terminal; stepping them does nothing.
"""

from enum import Enum
from typing import Optional

from pathrace.core.frontier import Frontier
from pathrace.core.grid import Coordinate, Grid
from pathrace.core.pathfinding import backtrack, shortest_path
from pathrace.core.strategies import STEP_FUNCTIONS, Algorithm


class RunState(Enum):
    """Lifecycle states of a simulation run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        """True once the run can no longer advance."""
        return self in (RunState.COMPLETED, RunState.EXHAUSTED)


class SimulationRun:
    """
    A single strategy's search over a private grid.

    The grid passed in is cloned, so callers may hand over the canonical
    maze without risk of it being marked.

    Example usage:
        run = SimulationRun(Algorithm.BREADTH_FIRST, grid, start, end)
        while not run.state.is_terminal:
            run.step()
        print(run.final_path)
    """

    def __init__(
        self,
        algorithm: Algorithm,
        grid: Grid,
        start: Optional[Coordinate],
        end: Optional[Coordinate],
    ):
        self.algorithm = algorithm
        self.grid = grid.clone()
        self.start = start
        self.end = end
        self.current: Optional[Coordinate] = None
        self.frontier = Frontier()
        self.state = RunState.NOT_STARTED
        self.final_path: list[Coordinate] = []
        self.step_count = 0
        self.completion_steps: Optional[int] = None
        self.trail: list[Coordinate] = []

    @property
    def can_start(self) -> bool:
        """Whether the maze this run was given has both endpoints."""
        return self.start is not None and self.end is not None

    @property
    def completed(self) -> bool:
        return self.state is RunState.COMPLETED

    def step(self) -> bool:
        """
        Advance the search by one cell.

        Returns:
            True if the run changed, False if it was terminal or could not start.
        """
        if self.state.is_terminal or not self.can_start:
            return False

        self.step_count += 1

        if self.current is None:
            self.state = RunState.RUNNING
            self.grid[self.start].mark_visited(None, self.step_count)
            self._advance_to(self.start)
            return True

        next_coord = STEP_FUNCTIONS[self.algorithm](self)
        if next_coord is None:
            self.state = RunState.EXHAUSTED
            return True

        self._advance_to(next_coord)
        return True

    def _advance_to(self, coord: Coordinate) -> None:
        self.current = coord
        self.trail.append(coord)
        if coord == self.end:
            self._complete()

    def _complete(self) -> None:
        self.state = RunState.COMPLETED
        self.completion_steps = self.step_count
        if self.algorithm.finds_shortest_path:
            self.final_path = backtrack(self.grid, self.start, self.end)
        else:
            self.final_path = shortest_path(self.grid, self.start, self.end)

    def run_to_end(self, max_steps: Optional[int] = None) -> RunState:
        """
        Step until the run is terminal.

        Args:
            max_steps: Optional cap on the number of steps taken.

        Returns:
            The state the run stopped in.
        """
        taken = 0
        while self.step():
            taken += 1
            if max_steps is not None and taken >= max_steps:
                break
        return self.state

    def visualize(self) -> str:
        """
        ASCII rendering of the run.

        Legend: '#' obstacle, '.' open, 'o' visited, '*' final path,
        'S' start, 'E' end, '@' current.
        """
        path = set(self.final_path)
        lines = []
        for y in range(self.grid.size):
            line = ""
            for x in range(self.grid.size):
                coord = Coordinate(x, y)
                cell = self.grid[coord]
                if not cell.is_passable:
                    line += "#"
                elif coord == self.start:
                    line += "S"
                elif coord == self.end:
                    line += "E"
                elif coord == self.current:
                    line += "@"
                elif coord in path:
                    line += "*"
                elif cell.visited:
                    line += "o"
                else:
                    line += "."
            lines.append(line)
        return "\n".join(lines)
