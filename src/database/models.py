"""
SQLAlchemy database models for the Yard Capacity Forecasting system.

Provides persistent storage for:
- Yards and their capacity
- Vehicles and their arrival/departure times
- Yard capacity snapshots (occupancy history)
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import (
    Column,
    String,
    Integer,
    DateTime,
    ForeignKey,
    Index,
    Uuid,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


class YardRecord(Base):
    """Yard with its current vehicle capacity."""
    __tablename__ = "yards"

    id = Column(Uuid, primary_key=True, default=uuid4)
    name = Column(String(100), nullable=False)
    owner_id = Column(String(100), nullable=False, index=True)
    capacity = Column(Integer, nullable=False, default=0)

    vehicles = relationship("VehicleRecord", back_populates="yard")
    snapshots = relationship("YardCapacitySnapshotRecord", back_populates="yard")


class VehicleRecord(Base):
    """
    Vehicle parked in a yard.

    A vehicle is active while left_at is NULL.
    """
    __tablename__ = "vehicles"

    id = Column(Uuid, primary_key=True, default=uuid4)
    plate = Column(String(20), nullable=False, unique=True)
    model = Column(String(40), nullable=False)
    status = Column(String(20), nullable=False, default="scheduled")
    entered_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    left_at = Column(DateTime(timezone=True), nullable=True)
    yard_id = Column(Uuid, ForeignKey("yards.id"), nullable=False)

    yard = relationship("YardRecord", back_populates="vehicles")

    __table_args__ = (
        Index("ix_vehicles_yard_left_at", "yard_id", "left_at"),
    )


class YardCapacitySnapshotRecord(Base):
    """
    Occupancy snapshot.

    Captures the active vehicle count and the yard capacity at a point in
    time. Rows are append-only.
    """
    __tablename__ = "yard_capacity_snapshots"

    id = Column(Uuid, primary_key=True, default=uuid4)
    yard_id = Column(Uuid, ForeignKey("yards.id"), nullable=False)
    captured_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    vehicles_in_yard = Column(Integer, nullable=False)
    capacity = Column(Integer, nullable=False)

    yard = relationship("YardRecord", back_populates="snapshots")

    __table_args__ = (
        Index("ix_snapshots_yard_captured_at", "yard_id", "captured_at"),
    )
