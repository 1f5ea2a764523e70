"""Projection of trips into the lookup lists used by the dashboard."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from typing import TypeVar

from app.core.models import LookupLists, Trip
from app.dashboard.catalog import TripCatalog

H = TypeVar("H", bound=Hashable)


def unique_in_order(values: Iterable[H]) -> list[H]:
    """De-duplicate values, keeping the first occurrence of each."""
    seen: set[H] = set()
    unique: list[H] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return unique


def build_lookup_lists(trips: Sequence[Trip], catalog: TripCatalog) -> LookupLists:
    """Build the five Lists sheet columns.

    Months and vendors only contain values that actually occur in ``trips``;
    the remaining lists are the full catalog so every breakdown row exists
    even when a category was never sampled.
    """
    return LookupLists(
        months=unique_in_order(t.month for t in trips),
        vendors=unique_in_order(t.vendor for t in trips),
        reasons=unique_in_order(catalog.reasons),
        truck_types=unique_in_order(catalog.truck_types),
        origins=unique_in_order(catalog.origins),
    )
