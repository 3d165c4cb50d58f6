"""
Core services for the Yard Capacity Forecasting system.

Business logic layer containing:
- Capacity forecast: tiered occupancy forecasting per yard
- Snapshots: occupancy snapshot capture and in-memory storage
"""

from .capacity_forecast import SnapshotSource, YardCapacityForecastService
from .snapshots import (
    InMemorySnapshotStore,
    SnapshotStore,
    YardCapacitySnapshotService,
)

__all__ = [
    "SnapshotSource",
    "YardCapacityForecastService",
    "InMemorySnapshotStore",
    "SnapshotStore",
    "YardCapacitySnapshotService",
]
