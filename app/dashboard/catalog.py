"""Fixed categorical enumerations used to synthesize trips."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TripCatalog:
    """Immutable set of the categories a trip can be drawn from.

    Values are kept in declaration order; that order is reused for the
    Lists sheet and the dashboard breakdown rows.
    """

    vendors: tuple[str, ...]
    truck_types: tuple[str, ...]
    origins: tuple[str, ...]
    reasons: tuple[str, ...]

    def __post_init__(self) -> None:
        for name in ("vendors", "truck_types", "origins", "reasons"):
            values = getattr(self, name)
            if not values:
                raise ValueError(f"{name} must not be empty")
            if len(set(values)) != len(values):
                raise ValueError(f"{name} contains duplicate values: {values!r}")
            if any(not value for value in values):
                raise ValueError(f"{name} contains an empty value")


DEFAULT_CATALOG = TripCatalog(
    vendors=("Acme Logistics", "TransGo", "RoadRunner", "CargoX"),
    truck_types=("Flatbed", "Reefer", "Box", "Tanker"),
    origins=("NYC", "LAX", "DAL", "ATL", "SEA"),
    reasons=("Traffic", "Weather", "Mechanical", "Route", "Loading Delay", "Other"),
)
