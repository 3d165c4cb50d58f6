"""
Repository pattern for database access.

Provides clean abstraction over SQLAlchemy queries with async support.
"""

from typing import Any, Generic, TypeVar, Optional, List
from uuid import UUID

from sqlalchemy import select, func, and_
from sqlalchemy.ext.asyncio import AsyncSession

from .models import (
    Base,
    YardRecord,
    VehicleRecord,
    YardCapacitySnapshotRecord,
)
from src.domain import OccupancySnapshot, Yard


T = TypeVar("T", bound=Base)


class DatabaseRepository(Generic[T]):
    """
    Generic repository with common CRUD operations.
    """

    def __init__(self, session: AsyncSession, model_class: type[T]):
        self.session = session
        self.model_class = model_class

    async def get_by_id(self, id: Any) -> Optional[T]:
        """Get a record by ID."""
        result = await self.session.execute(
            select(self.model_class).where(self.model_class.id == id)
        )
        return result.scalar_one_or_none()

    async def add(self, entity: T) -> T:
        """Add a new record."""
        self.session.add(entity)
        await self.session.flush()
        return entity

    async def add_many(self, entities: List[T]) -> List[T]:
        """Add multiple records."""
        self.session.add_all(entities)
        await self.session.flush()
        return entities


class YardRepository(DatabaseRepository[YardRecord]):
    """
    Repository for yard records.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, YardRecord)

    async def get_yard(self, yard_id: UUID) -> Optional[Yard]:
        """Get a yard as a domain model."""
        record = await self.get_by_id(yard_id)
        if record is None:
            return None
        return Yard(
            id=record.id,
            name=record.name,
            owner_id=record.owner_id,
            capacity=record.capacity,
        )


class VehicleRepository(DatabaseRepository[VehicleRecord]):
    """
    Repository for vehicle records.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, VehicleRecord)

    async def count_active(self, yard_id: UUID) -> int:
        """Count vehicles in a yard that have not left."""
        result = await self.session.execute(
            select(func.count())
            .select_from(VehicleRecord)
            .where(
                and_(
                    VehicleRecord.yard_id == yard_id,
                    VehicleRecord.left_at.is_(None),
                )
            )
        )
        return int(result.scalar_one())


class YardCapacitySnapshotRepository(DatabaseRepository[YardCapacitySnapshotRecord]):
    """
    Repository for yard capacity snapshots.
    """

    def __init__(self, session: AsyncSession):
        super().__init__(session, YardCapacitySnapshotRecord)

    async def get_history(self, yard_id: UUID) -> List[YardCapacitySnapshotRecord]:
        """Get all snapshots for a yard, oldest first."""
        result = await self.session.execute(
            select(YardCapacitySnapshotRecord)
            .where(YardCapacitySnapshotRecord.yard_id == yard_id)
            .order_by(YardCapacitySnapshotRecord.captured_at)
        )
        return list(result.scalars().all())

    async def get_latest(self, yard_id: UUID) -> Optional[YardCapacitySnapshotRecord]:
        """Get the most recent snapshot for a yard."""
        result = await self.session.execute(
            select(YardCapacitySnapshotRecord)
            .where(YardCapacitySnapshotRecord.yard_id == yard_id)
            .order_by(YardCapacitySnapshotRecord.captured_at.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def save_snapshot(
        self, snapshot: OccupancySnapshot
    ) -> YardCapacitySnapshotRecord:
        """Save a snapshot from domain model."""
        record = YardCapacitySnapshotRecord(
            yard_id=snapshot.yard_id,
            captured_at=snapshot.captured_at,
            vehicles_in_yard=snapshot.vehicles_in_yard,
            capacity=snapshot.capacity,
        )
        return await self.add(record)


class SqlSnapshotStore:
    """
    Snapshot store backed by an async SQLAlchemy session.

    Satisfies both the forecast read interface and the snapshot capture
    write interface.
    """

    def __init__(self, session: AsyncSession):
        self.snapshots = YardCapacitySnapshotRepository(session)
        self.vehicles = VehicleRepository(session)

    async def list_snapshots(self, yard_id: UUID) -> list[OccupancySnapshot]:
        records = await self.snapshots.get_history(yard_id)
        return [
            OccupancySnapshot(
                yard_id=record.yard_id,
                captured_at=record.captured_at,
                vehicles_in_yard=record.vehicles_in_yard,
                capacity=record.capacity,
            )
            for record in records
        ]

    async def count_active_vehicles(self, yard_id: UUID) -> int:
        return await self.vehicles.count_active(yard_id)

    async def append_snapshot(self, snapshot: OccupancySnapshot) -> None:
        await self.snapshots.save_snapshot(snapshot)
