"""
Forecast Engines for Yard Capacity

Three strategies, selected once per call from the size of the history:
1. Persistence - current occupancy ratio held for the whole horizon
2. Heuristic average - mean ratio per hour of day
3. Regression - MinMax-scaled ridge regression on cyclical features

Every engine implements the same contract:
    produce(horizon_hours, capacity, context) -> list[ForecastPoint]

and emits ratio r in [0, 1] with round(r * capacity) expected vehicles.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol, Sequence

import numpy as np
import pandas as pd
from sklearn.linear_model import Ridge
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import MinMaxScaler

from src.domain import ForecastPoint, ForecastTier, OccupancySnapshot
from .exceptions import ModelFitFailure
from .features import FeatureEncoder


DEFAULT_MIN_SNAPSHOTS_FOR_TRAINING = 24


@dataclass(frozen=True)
class ForecastContext:
    """
    Per-call inputs shared by the engines.

    snapshots must be sorted by captured_at ascending.
    """

    generated_at: datetime
    snapshots: Sequence[OccupancySnapshot] = field(default_factory=tuple)
    base_ratio: float = 0.0


class ForecastEngine(Protocol):
    """Protocol for forecasting strategies."""

    tier: ForecastTier

    def produce(
        self, horizon_hours: int, capacity: int, context: ForecastContext
    ) -> list[ForecastPoint]:
        ...


def select_tier(
    snapshot_count: int,
    min_snapshots_for_training: int = DEFAULT_MIN_SNAPSHOTS_FOR_TRAINING,
) -> ForecastTier:
    """Pick a forecasting strategy from the number of available snapshots."""
    if snapshot_count == 0:
        return ForecastTier.PERSISTENCE
    if snapshot_count < min_snapshots_for_training:
        return ForecastTier.HEURISTIC_AVERAGE
    return ForecastTier.REGRESSION


def clamp_ratio(value: float) -> float:
    """Clamp to [0, 1]; non-finite values resolve to 0."""
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def target_timestamps(generated_at: datetime, horizon_hours: int) -> list[datetime]:
    """Hourly timestamps starting one hour after generated_at."""
    return [generated_at + timedelta(hours=offset) for offset in range(1, horizon_hours + 1)]


def build_point(timestamp: datetime, ratio: float, capacity: int) -> ForecastPoint:
    ratio = clamp_ratio(ratio)
    return ForecastPoint(
        timestamp=timestamp,
        expected_vehicles=int(round(ratio * capacity)),
        occupancy_ratio=ratio,
    )


class PersistenceEngine:
    """Naive forecast: the current ratio holds for every future hour."""

    tier = ForecastTier.PERSISTENCE

    def produce(
        self, horizon_hours: int, capacity: int, context: ForecastContext
    ) -> list[ForecastPoint]:
        ratio = clamp_ratio(context.base_ratio)
        return [
            build_point(timestamp, ratio, capacity)
            for timestamp in target_timestamps(context.generated_at, horizon_hours)
        ]


class HeuristicAverageEngine:
    """
    Hour-of-day averaging for sparse histories.

    Captures the diurnal shape without a trained model. Hours that were
    never observed, and hours whose snapshots all carry a zero capacity,
    use the latest snapshot's ratio.
    """

    tier = ForecastTier.HEURISTIC_AVERAGE

    @staticmethod
    def fallback_ratio(snapshots: Sequence[OccupancySnapshot]) -> float:
        if not snapshots:
            return 0.0
        return snapshots[-1].ratio

    @staticmethod
    def hourly_averages(
        snapshots: Sequence[OccupancySnapshot], fallback: float
    ) -> dict[int, float]:
        """Mean ratio per observed hour of day (0-23)."""
        if not snapshots:
            return {}

        frame = pd.DataFrame(
            {
                "hour": [s.captured_at.hour for s in snapshots],
                "ratio": [s.ratio for s in snapshots],
                "valid": [s.capacity > 0 for s in snapshots],
            }
        )
        means = frame[frame["valid"]].groupby("hour")["ratio"].mean()

        return {
            int(hour): float(means[hour]) if hour in means.index else fallback
            for hour in frame["hour"].unique()
        }

    def produce(
        self, horizon_hours: int, capacity: int, context: ForecastContext
    ) -> list[ForecastPoint]:
        fallback = self.fallback_ratio(context.snapshots)
        averages = self.hourly_averages(context.snapshots, fallback)

        return [
            build_point(timestamp, averages.get(timestamp.hour, fallback), capacity)
            for timestamp in target_timestamps(context.generated_at, horizon_hours)
        ]


@dataclass
class FittedCapacityModel:
    """A fitted pipeline together with the encoder it was trained against."""

    pipeline: Pipeline
    encoder: FeatureEncoder

    def predict(self, timestamps: Sequence[datetime]) -> np.ndarray:
        return self.pipeline.predict(self.encoder.encode_frame(timestamps))


class RegressionEngine:
    """
    Ridge regression on engineered time features.

    Pipeline: MinMaxScaler -> Ridge. The model is refitted on every call;
    histories are small (one yard, at most a few thousand snapshots) so
    training cost stays bounded. Ridge is solved in closed form (cholesky),
    so identical histories and anchors give identical forecasts. The seed is
    still handed to the regressor as random_state; the closed-form solver
    does not consume it.
    """

    tier = ForecastTier.REGRESSION

    def __init__(self, seed: int = 7321, alpha: float = 1e-3):
        self.seed = seed
        self.alpha = alpha

    def fit(self, snapshots: Sequence[OccupancySnapshot]) -> FittedCapacityModel:
        """
        Fit the regression pipeline on a snapshot history.

        Raises:
            ModelFitFailure: If the feature matrix is degenerate or the
                solver produces non-finite coefficients.
        """
        if not snapshots:
            raise ModelFitFailure("no snapshots to train on")

        encoder = FeatureEncoder.from_snapshots(snapshots)
        X = encoder.encode_frame([s.captured_at for s in snapshots])
        y = np.array([s.ratio for s in snapshots], dtype=float)

        spread = (X.max() - X.min()).to_numpy(dtype=float)
        if not np.any(spread > 0):
            raise ModelFitFailure(
                "degenerate feature matrix: every feature is constant"
            )
        if not (np.all(np.isfinite(X.to_numpy())) and np.all(np.isfinite(y))):
            raise ModelFitFailure("non-finite values in training data")

        pipeline = Pipeline(
            [
                ("scale", MinMaxScaler()),
                (
                    "regressor",
                    Ridge(
                        alpha=self.alpha,
                        solver="cholesky",
                        random_state=self.seed,
                    ),
                ),
            ]
        )
        try:
            pipeline.fit(X, y)
        except (ValueError, np.linalg.LinAlgError) as exc:
            raise ModelFitFailure(f"regression fit failed: {exc}") from exc

        regressor = pipeline.named_steps["regressor"]
        if not (
            np.all(np.isfinite(regressor.coef_))
            and np.isfinite(regressor.intercept_)
        ):
            raise ModelFitFailure("regression produced non-finite coefficients")

        return FittedCapacityModel(pipeline=pipeline, encoder=encoder)

    def produce(
        self, horizon_hours: int, capacity: int, context: ForecastContext
    ) -> list[ForecastPoint]:
        model = self.fit(context.snapshots)
        timestamps = target_timestamps(context.generated_at, horizon_hours)

        scores = model.predict(timestamps)
        if not np.all(np.isfinite(scores)):
            raise ModelFitFailure("regression produced non-finite predictions")

        return [
            build_point(timestamp, score, capacity)
            for timestamp, score in zip(timestamps, scores)
        ]
