"""
Occupancy history generator for synthetic data.

Generates yard snapshot histories with:
- Daily cycle (morning peak, overnight trough)
- Weekend dip
- Linear trend
- Random noise
"""

from datetime import datetime, timedelta
import math
from uuid import UUID

import numpy as np

from src.domain import OccupancySnapshot


class OccupancyHistoryGenerator:
    """
    Generate realistic synthetic occupancy snapshots for a yard.

    ratio(t) = base + amplitude * cos(2*pi*(hour - peak_hour)/24)
               - weekend_dip * I[weekend] + trend * days + noise
    """

    def __init__(self, seed: int | None = None):
        """Initialize generator with optional random seed."""
        self.rng = np.random.default_rng(seed)

    def generate_hourly(
        self,
        yard_id: UUID,
        start: datetime,
        hours: int,
        capacity: int = 50,
        base_ratio: float = 0.5,
        amplitude: float = 0.3,
        peak_hour: int = 9,
        weekend_dip: float = 0.1,
        trend_per_day: float = 0.0,
        noise_std: float = 0.03,
    ) -> list[OccupancySnapshot]:
        """
        Generate one snapshot per hour.

        Args:
            yard_id: Yard the snapshots belong to
            start: Timestamp of the first snapshot
            hours: Number of snapshots
            capacity: Capacity recorded on each snapshot
            base_ratio: Mean occupancy ratio
            amplitude: Size of the daily swing
            peak_hour: Hour of day with the highest occupancy
            weekend_dip: Ratio removed on Saturdays and Sundays
            trend_per_day: Ratio added per elapsed day
            noise_std: Standard deviation of Gaussian noise

        Returns:
            Snapshots ordered by captured_at
        """
        snapshots = []

        for i in range(hours):
            captured_at = start + timedelta(hours=i)
            ratio = self._ratio_at(
                captured_at,
                elapsed_days=i / 24,
                base_ratio=base_ratio,
                amplitude=amplitude,
                peak_hour=peak_hour,
                weekend_dip=weekend_dip,
                trend_per_day=trend_per_day,
            )
            ratio += float(self.rng.normal(0, noise_std)) if noise_std > 0 else 0.0

            # Over-capacity is allowed, negative counts are not
            vehicles = max(0, int(round(ratio * capacity)))

            snapshots.append(
                OccupancySnapshot(
                    yard_id=yard_id,
                    captured_at=captured_at,
                    vehicles_in_yard=vehicles,
                    capacity=capacity,
                )
            )

        return snapshots

    def generate_at_hours(
        self,
        yard_id: UUID,
        start: datetime,
        ratios_by_hour: dict[int, float],
        days: int = 1,
        capacity: int = 100,
    ) -> list[OccupancySnapshot]:
        """
        Generate snapshots only at the given hours of day, with fixed ratios.

        Useful for building sparse histories with a known diurnal shape.
        """
        day_start = start.replace(hour=0, minute=0, second=0, microsecond=0)
        snapshots = []

        for day in range(days):
            for hour, ratio in sorted(ratios_by_hour.items()):
                snapshots.append(
                    OccupancySnapshot(
                        yard_id=yard_id,
                        captured_at=day_start + timedelta(days=day, hours=hour),
                        vehicles_in_yard=int(round(ratio * capacity)),
                        capacity=capacity,
                    )
                )

        return snapshots

    @staticmethod
    def _ratio_at(
        timestamp: datetime,
        elapsed_days: float,
        base_ratio: float,
        amplitude: float,
        peak_hour: int,
        weekend_dip: float,
        trend_per_day: float,
    ) -> float:
        daily = amplitude * math.cos(2 * math.pi * (timestamp.hour - peak_hour) / 24)
        weekend = weekend_dip if timestamp.weekday() >= 5 else 0.0
        return base_ratio + daily - weekend + trend_per_day * elapsed_days
