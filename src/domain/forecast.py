"""
Capacity forecast domain models.

Forecast results are ephemeral: built per request and never persisted.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class ForecastTier(str, Enum):
    """Forecasting strategy, selected from the size of the snapshot history."""

    PERSISTENCE = "persistence"  # No history, current ratio held constant
    HEURISTIC_AVERAGE = "heuristic_average"  # Hour-of-day averages
    REGRESSION = "regression"  # Trained model on cyclical features


class ForecastPoint(BaseModel):
    """Expected occupancy for a single future hour."""

    timestamp: datetime
    expected_vehicles: int = Field(ge=0)
    occupancy_ratio: float = Field(ge=0.0, le=1.0)

    model_config = {"frozen": True}


class ForecastResult(BaseModel):
    """
    Hour-granular capacity forecast for a yard.

    capacity is the value supplied by the caller and is authoritative for
    expected_vehicles, regardless of the capacity stored on snapshots.
    """

    yard_id: UUID
    generated_at: datetime
    capacity: int = Field(gt=0)
    points: list[ForecastPoint]
    tier: ForecastTier

    model_config = {"frozen": True}


class ForecastPointResponse(BaseModel):
    """Forecast point as presented to API clients."""

    timestamp: datetime
    expected_vehicles: int
    occupancy_ratio: float


class CapacityForecastResponse(BaseModel):
    """
    Presentation shape of a capacity forecast.

    Ratios are rounded to 4 decimal places here; the core keeps full
    precision.
    """

    yard_id: UUID
    generated_at: datetime
    capacity: int
    points: list[ForecastPointResponse]

    @classmethod
    def from_result(cls, result: ForecastResult) -> "CapacityForecastResponse":
        return cls(
            yard_id=result.yard_id,
            generated_at=result.generated_at,
            capacity=result.capacity,
            points=[
                ForecastPointResponse(
                    timestamp=p.timestamp,
                    expected_vehicles=p.expected_vehicles,
                    occupancy_ratio=round(p.occupancy_ratio, 4),
                )
                for p in result.points
            ],
        )
