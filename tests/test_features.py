"""Tests for feature encoding."""

import math

import numpy as np
import pytest
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from src.domain import OccupancySnapshot
from src.forecasting import FEATURE_NAMES, FeatureEncoder
from src.forecasting.features import baseline_hours, normalize_trend


# Sunday of ISO week 1
SUNDAY = datetime(2024, 1, 7, 6, 0, tzinfo=timezone.utc)


class TestCyclicalFeatures:
    """Tests for sin/cos encodings."""

    @pytest.fixture
    def encoder(self):
        return FeatureEncoder(reference=SUNDAY, baseline=24.0)

    def test_hour_encoding(self, encoder):
        features = encoder.encode(SUNDAY)
        assert features.hour_sin == pytest.approx(1.0)
        assert features.hour_cos == pytest.approx(0.0, abs=1e-12)

    def test_sunday_is_day_zero(self, encoder):
        features = encoder.encode(SUNDAY)
        assert features.day_sin == pytest.approx(0.0, abs=1e-12)
        assert features.day_cos == pytest.approx(1.0)

    def test_saturday_is_day_six(self, encoder):
        features = encoder.encode(SUNDAY - timedelta(days=1))
        angle = 2 * math.pi * 6 / 7
        assert features.day_sin == pytest.approx(math.sin(angle))
        assert features.day_cos == pytest.approx(math.cos(angle))

    def test_iso_week_one_is_angle_zero(self, encoder):
        features = encoder.encode(SUNDAY)
        assert features.week_sin == pytest.approx(0.0, abs=1e-12)
        assert features.week_cos == pytest.approx(1.0)

    def test_iso_week_uses_53_periods(self, encoder):
        # 2024-01-08 is the Monday of ISO week 2
        features = encoder.encode(datetime(2024, 1, 8, tzinfo=timezone.utc))
        assert features.week_sin == pytest.approx(math.sin(2 * math.pi / 53))

    def test_frame_matches_scalar_encoding(self, encoder):
        timestamps = [SUNDAY + timedelta(hours=h) for h in range(0, 40, 7)]
        frame = encoder.encode_frame(timestamps)

        assert list(frame.columns) == list(FEATURE_NAMES)
        assert len(frame) == len(timestamps)
        for i, ts in enumerate(timestamps):
            np.testing.assert_allclose(
                frame.iloc[i].to_numpy(), encoder.encode(ts).as_array()
            )

    def test_naive_timestamps_are_utc(self, encoder):
        aware = encoder.encode(SUNDAY)
        naive = encoder.encode(SUNDAY.replace(tzinfo=None))
        assert aware == naive


class TestTrendFeature:
    """Tests for the linear trend feature."""

    def test_trend_spans_zero_to_one(self):
        encoder = FeatureEncoder(reference=SUNDAY, baseline=10.0)
        assert encoder.encode(SUNDAY).trend == pytest.approx(0.0)
        assert encoder.encode(SUNDAY + timedelta(hours=5)).trend == pytest.approx(0.5)
        assert encoder.encode(SUNDAY + timedelta(hours=10)).trend == pytest.approx(1.0)

    def test_trend_is_clamped(self):
        encoder = FeatureEncoder(reference=SUNDAY, baseline=10.0)
        assert encoder.encode(SUNDAY + timedelta(hours=100)).trend == 2.0
        assert encoder.encode(SUNDAY - timedelta(hours=100)).trend == -1.0

    def test_zero_baseline_gives_zero_trend(self):
        encoder = FeatureEncoder(reference=SUNDAY, baseline=0.0)
        assert encoder.encode(SUNDAY + timedelta(hours=3)).trend == 0.0
        assert normalize_trend(SUNDAY + timedelta(hours=3), SUNDAY, 0.0) == 0.0

    def test_non_finite_baseline_gives_zero_trend(self):
        assert normalize_trend(SUNDAY + timedelta(hours=3), SUNDAY, math.inf) == 0.0
        assert normalize_trend(SUNDAY, SUNDAY, math.nan) == 0.0

    def test_normalize_trend_matches_encoder(self):
        encoder = FeatureEncoder(reference=SUNDAY, baseline=8.0)
        ts = SUNDAY + timedelta(hours=6)
        assert encoder.encode(ts).trend == pytest.approx(
            normalize_trend(ts, SUNDAY, 8.0)
        )

    def test_baseline_is_at_least_one_hour(self):
        assert baseline_hours(SUNDAY, SUNDAY) == 1.0
        assert baseline_hours(SUNDAY, SUNDAY + timedelta(minutes=20)) == 1.0
        assert baseline_hours(SUNDAY, SUNDAY + timedelta(hours=48)) == 48.0


class TestEncoderFromSnapshots:
    """Tests for building an encoder from history."""

    def test_reference_and_baseline(self):
        yard_id = uuid4()
        snapshots = [
            OccupancySnapshot(
                yard_id=yard_id,
                captured_at=SUNDAY + timedelta(hours=h),
                vehicles_in_yard=1,
                capacity=2,
            )
            for h in (12, 0, 36)
        ]
        encoder = FeatureEncoder.from_snapshots(snapshots)

        assert encoder.reference == SUNDAY
        assert encoder.baseline == 36.0

    def test_empty_history_rejected(self):
        with pytest.raises(ValueError):
            FeatureEncoder.from_snapshots([])
