#!/usr/bin/env python3
"""
Yard Capacity Forecasting Demo.

Demonstrates the three forecasting tiers:
1. Persistence (no snapshot history)
2. Heuristic average (sparse history)
3. Regression (two weeks of hourly snapshots)
"""

import asyncio
from datetime import datetime, timedelta, timezone
from uuid import uuid4

from src.data.synthetic import OccupancyHistoryGenerator
from src.domain import CapacityForecastResponse, Yard
from src.services import (
    InMemorySnapshotStore,
    YardCapacityForecastService,
    YardCapacitySnapshotService,
)
from src.shared import configure_logging


def print_section(title: str):
    """Print a section header."""
    print()
    print("=" * 60)
    print(f"  {title}")
    print("=" * 60)


def print_forecast(response: CapacityForecastResponse, limit: int = 6):
    for point in response.points[:limit]:
        print(
            f"  {point.timestamp:%a %H:%M}  "
            f"{point.expected_vehicles:3d} vehicles  "
            f"ratio {point.occupancy_ratio:.4f}"
        )


async def main():
    configure_logging(level="WARNING")

    print()
    print("*" * 60)
    print("*        Yard Capacity Forecasting System Demo         *")
    print("*" * 60)

    store = InMemorySnapshotStore()
    service = YardCapacityForecastService(store)
    capture = YardCapacitySnapshotService(store)
    generator = OccupancyHistoryGenerator(seed=42)
    now = datetime.now(timezone.utc).replace(minute=0, second=0, microsecond=0)

    # 1. No history
    print_section("1. Persistence (no history)")
    empty_yard = Yard(name="North Yard", owner_id="owner-1", capacity=40)
    for i in range(12):
        store.park_vehicle(empty_yard.id, f"NRT{i:04d}")
    result = await service.forecast(empty_yard.id, horizon_hours=6, capacity=40)
    print(f"Tier: {result.tier.value}")
    print_forecast(CapacityForecastResponse.from_result(result))

    # 2. Sparse history
    print_section("2. Heuristic average (sparse history)")
    sparse_yard = Yard(name="East Yard", owner_id="owner-1", capacity=60)
    for i in range(30):
        store.park_vehicle(sparse_yard.id, f"EST{i:04d}")
    for hours_ago in (10, 6, 3, 1):
        capture.clock = lambda h=hours_ago: now - timedelta(hours=h)
        await capture.capture(sparse_yard)
    result = await service.forecast(sparse_yard.id, horizon_hours=6, capacity=60)
    print(f"Tier: {result.tier.value}")
    print_forecast(CapacityForecastResponse.from_result(result))

    # 3. Two weeks of hourly history
    print_section("3. Regression (two weeks of history)")
    busy_yard_id = uuid4()
    store.add_snapshots(
        generator.generate_hourly(
            busy_yard_id,
            start=now - timedelta(days=14),
            hours=14 * 24,
            capacity=80,
            trend_per_day=0.005,
        )
    )
    result = await service.forecast(busy_yard_id, horizon_hours=24, capacity=80)
    print(f"Tier: {result.tier.value}")
    peak = max(p.occupancy_ratio for p in result.points)
    print(f"Peak ratio over 24h: {peak:.4f}")
    print_forecast(CapacityForecastResponse.from_result(result), limit=12)

    print()


if __name__ == "__main__":
    asyncio.run(main())
