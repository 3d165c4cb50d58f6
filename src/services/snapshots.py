"""
Yard Capacity Snapshot Service.

Records occupancy snapshots for a yard. Called whenever the number of
active vehicles changes materially: a vehicle is created, or a vehicle
moves to a terminal status.
"""

from datetime import datetime
from typing import Callable, Optional, Protocol
from uuid import UUID

from src.domain import OccupancySnapshot, Yard, VehicleStatus
from src.shared import get_logger
from .capacity_forecast import utc_now


logger = get_logger(__name__)


class SnapshotStore(Protocol):
    """Protocol for snapshot storage, read and write."""

    async def list_snapshots(self, yard_id: UUID) -> list[OccupancySnapshot]:
        ...

    async def count_active_vehicles(self, yard_id: UUID) -> int:
        ...

    async def append_snapshot(self, snapshot: OccupancySnapshot) -> None:
        ...


class InMemorySnapshotStore:
    """In-memory implementation for development/testing."""

    def __init__(self):
        self._snapshots: dict[UUID, list[OccupancySnapshot]] = {}
        self._vehicles: dict[UUID, dict[str, Optional[datetime]]] = {}

    async def list_snapshots(self, yard_id: UUID) -> list[OccupancySnapshot]:
        return sorted(
            self._snapshots.get(yard_id, []), key=lambda s: s.captured_at
        )

    async def count_active_vehicles(self, yard_id: UUID) -> int:
        vehicles = self._vehicles.get(yard_id, {})
        return sum(1 for left_at in vehicles.values() if left_at is None)

    async def append_snapshot(self, snapshot: OccupancySnapshot) -> None:
        self._snapshots.setdefault(snapshot.yard_id, []).append(snapshot)

    def add_snapshots(self, snapshots: list[OccupancySnapshot]) -> None:
        """Seed snapshot history for testing."""
        for snapshot in snapshots:
            self._snapshots.setdefault(snapshot.yard_id, []).append(snapshot)

    def park_vehicle(self, yard_id: UUID, plate: str) -> None:
        self._vehicles.setdefault(yard_id, {})[plate] = None

    def release_vehicle(self, yard_id: UUID, plate: str, left_at: datetime) -> None:
        self._vehicles.setdefault(yard_id, {})[plate] = left_at


class YardCapacitySnapshotService:
    """
    Captures the current occupancy of a yard as a snapshot.

    Usage:
        service = YardCapacitySnapshotService(store)
        snapshot = await service.capture(yard)
    """

    def __init__(
        self,
        store: SnapshotStore,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.clock = clock

    async def capture(self, yard: Optional[Yard]) -> OccupancySnapshot:
        """
        Append a snapshot of the yard's active vehicle count and capacity.

        Raises:
            ValueError: If no yard is given
        """
        if yard is None:
            raise ValueError("yard is required to capture a snapshot")

        active = await self.store.count_active_vehicles(yard.id)
        snapshot = OccupancySnapshot(
            yard_id=yard.id,
            captured_at=self.clock(),
            vehicles_in_yard=active,
            capacity=yard.capacity,
        )
        await self.store.append_snapshot(snapshot)

        logger.debug(
            "capacity_snapshot_captured",
            yard_id=str(yard.id),
            vehicles_in_yard=active,
            capacity=yard.capacity,
        )
        return snapshot

    async def on_vehicle_status_change(
        self, yard: Yard, previous: VehicleStatus, current: VehicleStatus
    ) -> Optional[OccupancySnapshot]:
        """Capture a snapshot when a vehicle enters a terminal status."""
        if current.is_terminal and not previous.is_terminal:
            return await self.capture(yard)
        return None
