"""
Feature Engineering for Yard Capacity Forecasting

Encodes timestamps into the fixed feature vector consumed by the
regression tier.

Mathematical foundation:
- Cyclical encoding: sin(2*pi*t/T), cos(2*pi*t/T)
    hour of day (T = 24), day of week (T = 7, Sunday = 0),
    ISO week of year (t = week - 1, T = 53)
- Trend: (t - t_ref) / baseline_hours, clamped to [-1, 2]
"""

import math
from dataclasses import astuple, dataclass
from datetime import datetime
from typing import Sequence

import numpy as np
import pandas as pd

from src.domain import OccupancySnapshot, as_utc


FEATURE_NAMES: tuple[str, ...] = (
    "hour_sin",
    "hour_cos",
    "day_sin",
    "day_cos",
    "week_sin",
    "week_cos",
    "trend",
)

TREND_MIN = -1.0
TREND_MAX = 2.0


@dataclass(frozen=True)
class CapacityFeatures:
    """Feature vector for a single timestamp."""

    hour_sin: float
    hour_cos: float
    day_sin: float
    day_cos: float
    week_sin: float
    week_cos: float
    trend: float

    def as_array(self) -> np.ndarray:
        return np.array(astuple(self), dtype=float)


def hours_between(start: datetime, end: datetime) -> float:
    return (as_utc(end) - as_utc(start)).total_seconds() / 3600.0


def baseline_hours(first: datetime, last: datetime) -> float:
    """Span of the observed history in hours, never below one hour."""
    return max(1.0, hours_between(first, last))


def normalize_trend(
    timestamp: datetime, reference: datetime, baseline: float
) -> float:
    """
    Linear position of a timestamp relative to the observed history.

    0 at the reference, 1 at the end of the baseline span. Non-finite
    values (including a zero baseline) resolve to 0.
    """
    if not baseline > 0:
        return 0.0
    value = hours_between(reference, timestamp) / baseline
    if not math.isfinite(value):
        return 0.0
    return min(max(value, TREND_MIN), TREND_MAX)


class FeatureEncoder:
    """
    Encodes timestamps against a fixed reference and baseline span.

    The reference and baseline are taken from the training history and
    reused unchanged for inference, so future timestamps land on the same
    trend scale as the observations the model was fitted on.
    """

    def __init__(self, reference: datetime, baseline: float):
        self.reference = as_utc(reference)
        self.baseline = baseline

    @classmethod
    def from_snapshots(
        cls, snapshots: Sequence[OccupancySnapshot]
    ) -> "FeatureEncoder":
        """Build an encoder spanning the earliest to the latest snapshot."""
        if not snapshots:
            raise ValueError("Cannot build a feature encoder from no snapshots")
        captured = [s.captured_at for s in snapshots]
        first, last = min(captured), max(captured)
        return cls(reference=first, baseline=baseline_hours(first, last))

    def encode_frame(self, timestamps: Sequence[datetime]) -> pd.DataFrame:
        """
        Encode many timestamps at once.

        Returns:
            DataFrame with one row per timestamp and FEATURE_NAMES columns
        """
        dt = pd.Series(
            pd.to_datetime([as_utc(t) for t in timestamps], utc=True)
        )

        hour = dt.dt.hour.to_numpy(dtype=float)
        # pandas counts Monday = 0; the encoding counts Sunday = 0
        day = ((dt.dt.dayofweek + 1) % 7).to_numpy(dtype=float)
        week = dt.dt.isocalendar().week.astype(int).to_numpy(dtype=float)

        hour_angle = 2 * np.pi * hour / 24
        day_angle = 2 * np.pi * day / 7
        week_angle = 2 * np.pi * (week - 1) / 53

        frame = pd.DataFrame(
            {
                "hour_sin": np.sin(hour_angle),
                "hour_cos": np.cos(hour_angle),
                "day_sin": np.sin(day_angle),
                "day_cos": np.cos(day_angle),
                "week_sin": np.sin(week_angle),
                "week_cos": np.cos(week_angle),
                "trend": self._trend(dt),
            },
            columns=list(FEATURE_NAMES),
        )
        return frame

    def encode(self, timestamp: datetime) -> CapacityFeatures:
        """Encode a single timestamp."""
        row = self.encode_frame([timestamp]).iloc[0]
        return CapacityFeatures(**{name: float(row[name]) for name in FEATURE_NAMES})

    def _trend(self, dt: pd.Series) -> np.ndarray:
        if not self.baseline > 0:
            return np.zeros(len(dt))
        offset_hours = (dt - pd.Timestamp(self.reference)).dt.total_seconds()
        with np.errstate(divide="ignore", invalid="ignore"):
            raw = offset_hours.to_numpy(dtype=float) / 3600.0 / self.baseline
        return np.where(np.isfinite(raw), np.clip(raw, TREND_MIN, TREND_MAX), 0.0)
