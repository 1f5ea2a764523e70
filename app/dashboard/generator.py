"""Synthetic trip generation.

Each trip is sampled independently from the catalog using a caller-owned
``random.Random`` so that concurrent exports never share random state and
tests can seed the sequence.
"""

from __future__ import annotations

import datetime
import logging
import random
from collections.abc import Sequence
from typing import TypeVar

from app.core.models import MAX_DELAY_MINUTES, MIN_DELAY_MINUTES, Trip
from app.dashboard.catalog import TripCatalog

logger = logging.getLogger(__name__)

T = TypeVar("T")

DELAY_PROBABILITY = 0.25
BREAKDOWN_PROBABILITY = 0.15  # conditional on the trip being delayed

# Days stop at 26 so every month, February included, has a valid date.
MAX_DAY_OF_MONTH = 26

# Vehicle ids come from a fixed pool TRK-1000 .. TRK-1300 shared by all vendors.
VEHICLE_ID_BASE = 1000
VEHICLE_ID_SPAN = 300
VEHICLE_ID_PREFIX = "TRK-"


def _rng_choice(rng: random.Random, items: Sequence[T]) -> T:
    return items[rng.randrange(len(items))]


def _maybe(rng: random.Random, p: float) -> bool:
    return rng.random() < p


def _parse_month(label: str) -> tuple[int, int]:
    year, month = label.split("-")
    return int(year), int(month)


def generate_trip(rng: random.Random, months: Sequence[str], catalog: TripCatalog) -> Trip:
    """Sample a single trip."""
    month = _rng_choice(rng, months)
    year, month_number = _parse_month(month)
    day = rng.randint(1, MAX_DAY_OF_MONTH)
    vendor = _rng_choice(rng, catalog.vendors)
    truck_type = _rng_choice(rng, catalog.truck_types)
    origin = _rng_choice(rng, catalog.origins)

    delayed = _maybe(rng, DELAY_PROBABILITY)
    breakdown = delayed and _maybe(rng, BREAKDOWN_PROBABILITY)
    delay_minutes = rng.randint(MIN_DELAY_MINUTES, MAX_DELAY_MINUTES) if delayed else 0
    reason = _rng_choice(rng, catalog.reasons) if delayed else ""

    vehicle_id = f"{VEHICLE_ID_PREFIX}{VEHICLE_ID_BASE + rng.randint(0, VEHICLE_ID_SPAN)}"

    return Trip(
        date=datetime.date(year, month_number, day),
        month=month,
        vendor=vendor,
        vehicle_id=vehicle_id,
        truck_type=truck_type,
        origin=origin,
        on_time=not delayed,
        reason_for_delay=reason,
        breakdown=breakdown,
        delay_minutes=delay_minutes,
    )


def generate_trips(
    months: Sequence[str],
    catalog: TripCatalog,
    rows: int,
    rng: random.Random,
) -> list[Trip]:
    """Generate exactly ``rows`` synthetic trips.

    Args:
        months: Month labels (``YYYY-MM``) trips may fall in.
        catalog: Categorical enumerations to sample from.
        rows: Number of trips to produce.
        rng: Random source owned by the caller.

    Returns:
        Trips in generation order.

    Raises:
        ValueError: If ``rows`` is negative or ``months`` is empty.
    """
    if rows < 0:
        raise ValueError(f"rows must be non-negative, got {rows}")
    if not months:
        raise ValueError("at least one month is required")

    trips = [generate_trip(rng, months, catalog) for _ in range(rows)]

    logger.debug(
        "Generated trips rows=%d delayed=%d breakdowns=%d",
        len(trips),
        sum(1 for t in trips if not t.on_time),
        sum(1 for t in trips if t.breakdown),
    )
    return trips
