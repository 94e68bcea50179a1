"""Simulation service: holds the shared race and drives it in the background."""

import asyncio
import logging
import random
from typing import Optional

from pathrace.config import get_settings
from pathrace.core.coordinator import RunCoordinator, RunSnapshot
from pathrace.core.grid import MazeLayout
from pathrace.core.strategies import Algorithm
from pathrace.schemas.simulation import SimulationUpdateMessage

logger = logging.getLogger(__name__)


class SimulationService:
    """Service wrapping the RunCoordinator for the API layer."""

    def __init__(
        self,
        size: Optional[int] = None,
        obstacle_probability: Optional[float] = None,
        seed: Optional[int] = None,
    ):
        self.settings = get_settings()
        if size is None:
            size = self.settings.default_grid_size
        if obstacle_probability is None:
            obstacle_probability = self.settings.default_obstacle_probability
        if seed is None:
            seed = self.settings.random_seed

        self.coordinator = RunCoordinator(
            size=size,
            obstacle_probability=obstacle_probability,
            rng=random.Random(seed),
        )
        self.tick_count = 0
        self._subscribers: list[asyncio.Queue] = []

    @property
    def running(self) -> bool:
        return self.coordinator.running

    def reconfigure(self, size: int, obstacle_probability: float) -> MazeLayout:
        """
        Regenerate the maze with new parameters.

        Raises:
            MazeConfigError: If the parameters are invalid; nothing changes.
        """
        layout = self.coordinator.reconfigure(size, obstacle_probability)
        self.tick_count = 0
        return layout

    def randomize(self) -> MazeLayout:
        """Regenerate the maze with the current parameters."""
        layout = self.coordinator.randomize()
        self.tick_count = 0
        return layout

    def set_running(self, running: bool) -> None:
        """Start or pause the race."""
        self.coordinator.set_running(running)
        logger.info(f"Simulation {'started' if running else 'paused'}")

    def tick(self, count: int = 1) -> int:
        """
        Advance the race by up to count ticks.

        Stops early once every run has finished.

        Returns:
            Number of ticks that advanced at least one run.
        """
        effective = 0
        for _ in range(count):
            if self.coordinator.tick() == 0:
                break
            effective += 1
        self.tick_count += effective
        return effective

    def snapshot(self, algorithm: Algorithm) -> RunSnapshot:
        """Full snapshot of one run."""
        return self.coordinator.snapshot(algorithm)

    def overview(self) -> dict:
        """Summary of the whole race, without cell matrices."""
        coordinator = self.coordinator
        runs = []
        for algorithm, snap in coordinator.snapshots().items():
            runs.append(
                {
                    "algorithm": algorithm.value,
                    "label": algorithm.label,
                    "state": snap.state.value,
                    "rank": snap.rank,
                    "step_count": snap.step_count,
                    "completion_steps": snap.completion_steps,
                    "current": snap.current.to_dict() if snap.current else None,
                    "visited_count": snap.visited_count,
                    "path_length": len(snap.final_path),
                }
            )

        return {
            "size": coordinator.size,
            "obstacle_probability": coordinator.obstacle_probability,
            "running": coordinator.running,
            "tick_count": self.tick_count,
            "start": coordinator.start.to_dict() if coordinator.start else None,
            "end": coordinator.end.to_dict() if coordinator.end else None,
            "completion_order": [a.value for a in coordinator.completion_order],
            "finished": coordinator.all_finished,
            "runs": runs,
        }

    # WebSocket subscription management
    def subscribe(self) -> asyncio.Queue:
        """Subscribe to simulation updates."""
        queue: asyncio.Queue = asyncio.Queue(maxsize=32)
        self._subscribers.append(queue)
        return queue

    def unsubscribe(self, queue: asyncio.Queue) -> None:
        """Unsubscribe from simulation updates."""
        if queue in self._subscribers:
            self._subscribers.remove(queue)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def update_message(self) -> dict:
        """Overview wrapped in the WebSocket update envelope."""
        return SimulationUpdateMessage(data=self.overview()).model_dump(mode="json")

    def broadcast(self) -> None:
        """Push the current overview to all subscribers."""
        if not self._subscribers:
            return

        message = self.update_message()

        for queue in self._subscribers:
            try:
                queue.put_nowait(message)
            except asyncio.QueueFull:
                pass  # Slow consumer, drop this frame


async def simulation_ticker(
    service: SimulationService,
    interval_seconds: float,
    steps_per_tick: int,
) -> None:
    """
    Background worker that advances the race on a fixed interval.

    Args:
        service: Simulation service to drive
        interval_seconds: Sleep between rounds
        steps_per_tick: Ticks performed per round
    """
    while True:
        try:
            if service.running and service.tick(steps_per_tick):
                service.broadcast()
            await asyncio.sleep(interval_seconds)

        except asyncio.CancelledError:
            break
        except Exception as e:
            # Log error but keep ticking
            logger.error(f"Error advancing simulation: {type(e).__name__}: {e}")
            await asyncio.sleep(interval_seconds)


# Singleton instance
_simulation_service: Optional[SimulationService] = None


def get_simulation_service() -> SimulationService:
    """Get singleton simulation service."""
    global _simulation_service
    if _simulation_service is None:
        _simulation_service = SimulationService()
    return _simulation_service
