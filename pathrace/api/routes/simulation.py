"""Simulation routes for controlling and observing the race."""

import logging

from fastapi import APIRouter, HTTPException, Request, WebSocket, WebSocketDisconnect, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from pathrace.config import get_settings
from pathrace.core.grid import MazeConfigError
from pathrace.core.strategies import Algorithm
from pathrace.schemas.simulation import (
    ReconfigureRequest,
    RunningRequest,
    RunSnapshotResponse,
    SimulationOverview,
    TickRequest,
    TickResponse,
)
from pathrace.services.simulation_service import get_simulation_service

logger = logging.getLogger(__name__)

settings = get_settings()
limiter = Limiter(key_func=get_remote_address)

router = APIRouter(prefix="/simulation", tags=["Simulation"])


@router.get(
    "",
    response_model=SimulationOverview,
)
async def get_overview() -> SimulationOverview:
    """Get the race overview.

    Returns maze parameters, the running flag, the completion order and a
    summary per algorithm. Cell matrices are not included - use
    GET /v1/simulation/{algorithm} for a full snapshot.
    """
    service = get_simulation_service()
    return SimulationOverview(**service.overview())


@router.post(
    "/reconfigure",
    response_model=SimulationOverview,
)
@limiter.limit(f"{settings.rate_limit_requests}/minute")
async def reconfigure(
    request: Request,
    config: ReconfigureRequest,
) -> SimulationOverview:
    """Generate a new maze with the given parameters.

    All runs and the completion order are reset and the race is paused.
    On invalid parameters the current maze is kept.
    """
    if config.size > settings.max_grid_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Grid size must be at most {settings.max_grid_size}",
        )

    service = get_simulation_service()
    try:
        service.reconfigure(config.size, config.obstacle_probability)
    except MazeConfigError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    service.broadcast()
    return SimulationOverview(**service.overview())


@router.post(
    "/randomize",
    response_model=SimulationOverview,
)
@limiter.limit(f"{settings.rate_limit_requests}/minute")
async def randomize(request: Request) -> SimulationOverview:
    """Generate a new maze with the current parameters."""
    service = get_simulation_service()
    service.randomize()
    service.broadcast()
    return SimulationOverview(**service.overview())


@router.post(
    "/running",
    response_model=SimulationOverview,
)
async def set_running(running_data: RunningRequest) -> SimulationOverview:
    """Start or pause the race. Pausing keeps every run where it is."""
    service = get_simulation_service()
    service.set_running(running_data.running)
    service.broadcast()
    return SimulationOverview(**service.overview())


@router.post(
    "/tick",
    response_model=TickResponse,
)
@limiter.limit(f"{settings.rate_limit_ticks}/minute")
async def tick(
    request: Request,
    tick_data: TickRequest,
) -> TickResponse:
    """Advance the race manually.

    Ticks only advance runs while the race is running.
    """
    service = get_simulation_service()
    advanced = service.tick(tick_data.count)
    if advanced:
        service.broadcast()

    return TickResponse(
        requested=tick_data.count,
        advanced=advanced,
        tick_count=service.tick_count,
        finished=service.coordinator.all_finished,
    )


@router.websocket("/ws")
async def simulation_websocket(websocket: WebSocket):
    """WebSocket endpoint for live race updates.

    The current overview is sent on connect, then again whenever the race
    changes. Messages are JSON with format:
    {
        "type": "simulation_update",
        "data": { ...same shape as GET /v1/simulation... }
    }
    """
    await websocket.accept()

    service = get_simulation_service()
    queue = service.subscribe()

    try:
        await websocket.send_json(service.update_message())
        while True:
            # Wait for updates
            message = await queue.get()
            await websocket.send_json(message)
    except WebSocketDisconnect:
        pass
    finally:
        service.unsubscribe(queue)


@router.get(
    "/{algorithm}",
    response_model=RunSnapshotResponse,
)
async def get_snapshot(algorithm: Algorithm) -> RunSnapshotResponse:
    """Get a full snapshot of one algorithm's run.

    Includes passable/visited matrices indexed [y][x], the current cell,
    the final path (empty until completed) and the rank once finished.
    """
    service = get_simulation_service()
    return RunSnapshotResponse(**service.snapshot(algorithm).to_dict())
