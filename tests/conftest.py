"""Pytest fixtures for Yard Capacity Forecasting tests."""

import pytest
from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

from src.data.synthetic import OccupancyHistoryGenerator
from src.domain import OccupancySnapshot, Yard
from src.services import (
    InMemorySnapshotStore,
    YardCapacityForecastService,
    YardCapacitySnapshotService,
)


# Monday 07:00 UTC; the first forecast hour is 08:00
ANCHOR = datetime(2024, 3, 4, 7, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return ANCHOR


@pytest.fixture
def anchor() -> datetime:
    """Fixed generation time used by the service fixtures."""
    return ANCHOR


@pytest.fixture
def yard_id() -> UUID:
    return uuid4()


@pytest.fixture
def sample_yard() -> Yard:
    """Create a sample yard for testing."""
    return Yard(name="Test Yard", owner_id="owner-1", capacity=25)


@pytest.fixture
def snapshot_store() -> InMemorySnapshotStore:
    """Create an in-memory snapshot store for testing."""
    return InMemorySnapshotStore()


@pytest.fixture
def forecast_service(snapshot_store) -> YardCapacityForecastService:
    """Create a forecast service with a fixed clock."""
    return YardCapacityForecastService(snapshot_store, clock=fixed_clock)


@pytest.fixture
def snapshot_service(snapshot_store) -> YardCapacitySnapshotService:
    """Create a snapshot capture service with a fixed clock."""
    return YardCapacitySnapshotService(snapshot_store, clock=fixed_clock)


@pytest.fixture
def generator() -> OccupancyHistoryGenerator:
    return OccupancyHistoryGenerator(seed=42)


@pytest.fixture
def hourly_history(yard_id, generator) -> list[OccupancySnapshot]:
    """Two weeks of hourly snapshots ending just before ANCHOR."""
    return generator.generate_hourly(
        yard_id,
        start=ANCHOR - timedelta(days=14),
        hours=14 * 24,
        capacity=50,
    )
