"""
Yard domain models.

Represents yards, the vehicles parked in them, and the periodic
occupancy snapshots used for capacity forecasting.
"""

from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, computed_field, field_validator


def as_utc(value: datetime) -> datetime:
    """Return an aware UTC datetime. Naive values are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class VehicleStatus(str, Enum):
    """Lifecycle status of a vehicle inside a yard."""

    SCHEDULED = "scheduled"
    WAITING = "waiting"
    ON_SERVICE = "on_service"
    FINISHED = "finished"  # Terminal
    CANCELLED = "cancelled"  # Terminal

    @property
    def is_terminal(self) -> bool:
        return self in (VehicleStatus.FINISHED, VehicleStatus.CANCELLED)


class Yard(BaseModel):
    """A yard with a fixed vehicle capacity."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    owner_id: str
    capacity: int = Field(ge=0)

    model_config = {"frozen": True}


class OccupancySnapshot(BaseModel):
    """
    Occupancy observation for a yard at a point in time.

    Over-capacity is representable: vehicles_in_yard may exceed capacity.
    Capacity is carried per snapshot since a yard's capacity can change.
    """

    yard_id: UUID
    captured_at: datetime
    vehicles_in_yard: int = Field(ge=0)
    capacity: int = Field(ge=0)

    model_config = {"frozen": True}

    @field_validator("captured_at")
    @classmethod
    def _normalize_captured_at(cls, value: datetime) -> datetime:
        return as_utc(value)

    @computed_field
    @property
    def ratio(self) -> float:
        """Observed occupancy ratio, 0 when capacity is unknown."""
        if self.capacity <= 0:
            return 0.0
        return self.vehicles_in_yard / self.capacity
