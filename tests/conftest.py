"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from pathrace.core.grid import Coordinate, Grid
from pathrace.main import app
from pathrace.services import simulation_service as simulation_service_module
from pathrace.services.simulation_service import SimulationService


# Open 5x5 maze, no obstacles
OPEN_MAZE = """
.....
.....
.....
.....
.....
"""

# Walls force a detour; the shortest route from (0,0) to (0,4) is 9 cells
DETOUR_MAZE = """
.....
.###.
...#.
##.#.
.....
"""

# A full wall splits the grid into two components
DIVIDED_MAZE = """
..#..
..#..
..#..
..#..
..#..
"""


@pytest.fixture
def open_grid() -> Grid:
    """Obstacle-free 5x5 grid."""
    return Grid.from_rows(OPEN_MAZE)


@pytest.fixture
def detour_grid() -> Grid:
    """5x5 grid whose shortest path has to wind around walls."""
    return Grid.from_rows(DETOUR_MAZE)


@pytest.fixture
def divided_grid() -> Grid:
    """5x5 grid split in two by a wall down column 2."""
    return Grid.from_rows(DIVIDED_MAZE)


@pytest.fixture
def corner_to_corner() -> tuple[Coordinate, Coordinate]:
    """Opposite corners of a 5x5 grid."""
    return Coordinate(0, 0), Coordinate(4, 4)


@pytest.fixture
def simulation_service(monkeypatch) -> SimulationService:
    """Fresh simulation service installed as the singleton."""
    service = SimulationService(size=10, obstacle_probability=0.0, seed=1234)
    monkeypatch.setattr(simulation_service_module, "_simulation_service", service)
    return service


@pytest_asyncio.fixture(scope="function")
async def client(simulation_service) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
