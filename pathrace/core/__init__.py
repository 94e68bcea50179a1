# Core module
from .grid import (
    Cell,
    Coordinate,
    Grid,
    MazeConfigError,
    MazeLayout,
    generate_maze,
    validate_parameters,
)
from .frontier import Frontier, order_corner_seeking, order_wall_hugging
from .strategies import Algorithm, STEP_FUNCTIONS
from .pathfinding import backtrack, path_length, shortest_path
from .simulation import RunState, SimulationRun
from .coordinator import RunCoordinator, RunSnapshot, ordinal

__all__ = [
    "Cell",
    "Coordinate",
    "Grid",
    "MazeConfigError",
    "MazeLayout",
    "generate_maze",
    "validate_parameters",
    "Frontier",
    "order_corner_seeking",
    "order_wall_hugging",
    "Algorithm",
    "STEP_FUNCTIONS",
    "backtrack",
    "path_length",
    "shortest_path",
    "RunState",
    "SimulationRun",
    "RunCoordinator",
    "RunSnapshot",
    "ordinal",
]
