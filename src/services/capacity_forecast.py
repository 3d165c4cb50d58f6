"""
Yard Capacity Forecast Service.

Generates hour-granular occupancy forecasts for a yard from its snapshot
history. Implements tiered fallback: persistence when there is no history,
hour-of-day averaging when it is sparse, regression once it is large enough.
"""

import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional, Protocol, TypeVar
from uuid import UUID

from src.domain import ForecastResult, ForecastTier, OccupancySnapshot, as_utc
from src.forecasting import (
    ForecastContext,
    HeuristicAverageEngine,
    InvalidForecastArgument,
    ModelFitFailure,
    PersistenceEngine,
    RegressionEngine,
    select_tier,
)
from src.forecasting.engines import ForecastEngine
from src.shared import ForecastSettings, get_logger


logger = get_logger(__name__)

T = TypeVar("T")


class SnapshotSource(Protocol):
    """Protocol for the read side of the snapshot store."""

    async def list_snapshots(self, yard_id: UUID) -> list[OccupancySnapshot]:
        """All snapshots for a yard, ordered by captured_at ascending."""
        ...

    async def count_active_vehicles(self, yard_id: UUID) -> int:
        """Number of vehicles in the yard with no departure time."""
        ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class YardCapacityForecastService:
    """
    Service for forecasting yard occupancy.

    Stateless across calls: each forecast loads its own copy of the
    history and refits from scratch, so concurrent calls need no locking.
    Storage errors propagate unchanged and are never retried here.

    Usage:
        service = YardCapacityForecastService(source)
        result = await service.forecast(yard_id, horizon_hours=24, capacity=50)
    """

    def __init__(
        self,
        source: SnapshotSource,
        settings: Optional[ForecastSettings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.source = source
        self.settings = settings or ForecastSettings()
        self.clock = clock

        self._engines: dict[ForecastTier, ForecastEngine] = {
            ForecastTier.PERSISTENCE: PersistenceEngine(),
            ForecastTier.HEURISTIC_AVERAGE: HeuristicAverageEngine(),
            ForecastTier.REGRESSION: RegressionEngine(
                seed=self.settings.seed, alpha=self.settings.ridge_alpha
            ),
        }

    async def forecast(
        self, yard_id: UUID, horizon_hours: int, capacity: int
    ) -> ForecastResult:
        """
        Forecast occupancy for the next horizon_hours hours.

        Args:
            yard_id: Yard identifier
            horizon_hours: Number of hourly points, within the configured range
            capacity: Current yard capacity, used for expected vehicle counts

        Returns:
            ForecastResult with one point per hour

        Raises:
            InvalidForecastArgument: If horizon or capacity is out of range
        """
        self._validate(horizon_hours, capacity)

        snapshots = await self._read(self.source.list_snapshots(yard_id))
        snapshots = sorted(snapshots, key=lambda s: s.captured_at)

        tier = select_tier(len(snapshots), self.settings.min_snapshots_for_training)
        logger.info(
            "forecast_tier_selected",
            yard_id=str(yard_id),
            tier=tier.value,
            snapshot_count=len(snapshots),
            horizon_hours=horizon_hours,
        )

        base_ratio = 0.0
        if tier is ForecastTier.PERSISTENCE:
            active = await self._read(self.source.count_active_vehicles(yard_id))
            base_ratio = active / capacity

        generated_at = as_utc(self.clock())
        context = ForecastContext(
            generated_at=generated_at,
            snapshots=tuple(snapshots),
            base_ratio=base_ratio,
        )

        if tier is ForecastTier.REGRESSION:
            # Checkpoint: a pending cancellation is delivered here, never mid-fit
            await asyncio.sleep(0)

        try:
            points = self._engines[tier].produce(horizon_hours, capacity, context)
        except ModelFitFailure as exc:
            logger.warning(
                "model_fit_failure",
                yard_id=str(yard_id),
                snapshot_count=len(snapshots),
                reason=str(exc),
                fallback=ForecastTier.HEURISTIC_AVERAGE.value,
            )
            tier = ForecastTier.HEURISTIC_AVERAGE
            points = self._engines[tier].produce(horizon_hours, capacity, context)

        logger.debug(
            "forecast_generated",
            yard_id=str(yard_id),
            tier=tier.value,
            points=len(points),
        )

        return ForecastResult(
            yard_id=yard_id,
            generated_at=generated_at,
            capacity=capacity,
            points=points,
            tier=tier,
        )

    def _validate(self, horizon_hours: int, capacity: int) -> None:
        lo = self.settings.min_horizon_hours
        hi = self.settings.max_horizon_hours

        if isinstance(horizon_hours, bool) or not isinstance(horizon_hours, int):
            raise InvalidForecastArgument("Horizon must be an integer number of hours.")
        if horizon_hours < lo or horizon_hours > hi:
            raise InvalidForecastArgument(
                f"Horizon must be between {lo} and {hi} hours."
            )
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise InvalidForecastArgument("Capacity must be an integer.")
        if capacity <= 0:
            raise InvalidForecastArgument("Capacity must be greater than zero.")

    async def _read(self, call: Awaitable[T]) -> T:
        timeout = self.settings.read_timeout_seconds
        if timeout is None:
            return await call
        return await asyncio.wait_for(call, timeout)
