"""
Synthetic data generation for Yard Capacity Forecasting.

Generates yard occupancy histories with daily and weekly patterns.

Use for:
- Model behaviour checks
- System testing and demos
"""

from .occupancy_generator import OccupancyHistoryGenerator

__all__ = [
    "OccupancyHistoryGenerator",
]
