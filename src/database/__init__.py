"""
Database layer for the Yard Capacity Forecasting system.

Provides async SQLAlchemy models and repositories for persistence.
"""

from .models import Base, YardRecord, VehicleRecord, YardCapacitySnapshotRecord
from .repository import (
    DatabaseRepository,
    YardRepository,
    VehicleRepository,
    YardCapacitySnapshotRepository,
    SqlSnapshotStore,
)
from .session import get_session, get_snapshot_store, init_db, close_db, get_engine

__all__ = [
    "Base",
    "YardRecord",
    "VehicleRecord",
    "YardCapacitySnapshotRecord",
    "DatabaseRepository",
    "YardRepository",
    "VehicleRepository",
    "YardCapacitySnapshotRepository",
    "SqlSnapshotStore",
    "get_session",
    "get_snapshot_store",
    "init_db",
    "close_db",
    "get_engine",
]
