"""
Domain models for the Yard Capacity Forecasting system.

Core business entities representing yards, vehicles and occupancy.
All models use Pydantic for validation and serialization.
"""

from .yard import Yard, VehicleStatus, OccupancySnapshot, as_utc
from .forecast import (
    ForecastTier,
    ForecastPoint,
    ForecastResult,
    ForecastPointResponse,
    CapacityForecastResponse,
)

__all__ = [
    # Yard
    "Yard",
    "VehicleStatus",
    "OccupancySnapshot",
    "as_utc",
    # Forecast
    "ForecastTier",
    "ForecastPoint",
    "ForecastResult",
    "ForecastPointResponse",
    "CapacityForecastResponse",
]
