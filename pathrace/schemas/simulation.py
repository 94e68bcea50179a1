"""Simulation schemas for request/response validation."""

from typing import Optional

from pydantic import BaseModel, Field


class GridPosition(BaseModel):
    """Schema for a position on the grid."""

    x: int
    y: int


class ReconfigureRequest(BaseModel):
    """Schema for regenerating the maze."""

    size: int = Field(..., ge=1)
    obstacle_probability: float = Field(..., ge=0.0, le=1.0)


class RunningRequest(BaseModel):
    """Schema for starting or pausing the race."""

    running: bool


class TickRequest(BaseModel):
    """Schema for manual ticks."""

    count: int = Field(1, ge=1, le=10_000)


class TickResponse(BaseModel):
    """Schema for tick response."""

    requested: int
    advanced: int
    tick_count: int
    finished: bool


class RunSummary(BaseModel):
    """Schema for one run in the race overview."""

    algorithm: str
    label: str
    state: str  # not_started, running, completed, exhausted
    rank: Optional[int] = None
    step_count: int
    completion_steps: Optional[int] = None
    current: Optional[GridPosition] = None
    visited_count: int
    path_length: int


class SimulationOverview(BaseModel):
    """Schema for the race overview."""

    size: int
    obstacle_probability: float
    running: bool
    tick_count: int
    start: Optional[GridPosition] = None
    end: Optional[GridPosition] = None
    completion_order: list[str]
    finished: bool
    runs: list[RunSummary]


class RunSnapshotResponse(BaseModel):
    """Schema for a full run snapshot. Matrices are indexed [y][x]."""

    algorithm: str
    label: str
    size: int
    passable: list[list[bool]]
    visited: list[list[bool]]
    visit_steps: list[list[Optional[int]]]
    start: Optional[GridPosition] = None
    end: Optional[GridPosition] = None
    current: Optional[GridPosition] = None
    final_path: list[GridPosition]
    state: str
    rank: Optional[int] = None
    step_count: int
    completion_steps: Optional[int] = None
    frontier_size: int


class SimulationUpdateMessage(BaseModel):
    """Schema for WebSocket simulation update message."""

    type: str = "simulation_update"
    data: SimulationOverview
