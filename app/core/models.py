"""Pydantic models for the Logistics Dashboard exporter.

This module defines the domain and response models:
- Trip: A single synthetic logistics trip record
- LookupLists: De-duplicated value lists that drive dropdowns and breakdowns
- ErrorResponse: Error response for failed requests
"""

from __future__ import annotations

import datetime
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Bounds on the delay of a late trip, in minutes.
MIN_DELAY_MINUTES = 10
MAX_DELAY_MINUTES = 240


class Trip(BaseModel):
    """Represents a single synthetic trip.

    Trips are write-once: the model is frozen and the delay fields are
    checked against the on-time flag when the record is built.
    """

    model_config = ConfigDict(frozen=True)

    date: datetime.date = Field(description="Calendar day of the trip")
    month: str = Field(
        description="Month label in YYYY-MM form",
        pattern=r"^\d{4}-\d{2}$",
    )
    vendor: str = Field(description="Carrier operating the trip")
    vehicle_id: str = Field(description="Fleet vehicle label, e.g. 'TRK-1042'")
    truck_type: str = Field(description="Truck body type")
    origin: str = Field(description="Origin hub code")
    on_time: bool = Field(description="True when the trip arrived on schedule")
    reason_for_delay: str = Field(
        default="",
        description="Delay cause; empty for on-time trips",
    )
    breakdown: bool = Field(
        default=False,
        description="True when the delay was caused by a vehicle breakdown",
    )
    delay_minutes: int = Field(default=0, ge=0, description="Minutes late")

    @model_validator(mode="after")
    def _check_delay_consistency(self) -> "Trip":
        if self.date.strftime("%Y-%m") != self.month:
            raise ValueError(f"date {self.date.isoformat()} is outside month {self.month}")

        if self.on_time:
            if self.reason_for_delay or self.breakdown or self.delay_minutes:
                raise ValueError("on-time trips cannot carry delay details")
            return self

        if not MIN_DELAY_MINUTES <= self.delay_minutes <= MAX_DELAY_MINUTES:
            raise ValueError(
                f"delay_minutes must be within [{MIN_DELAY_MINUTES}, {MAX_DELAY_MINUTES}] "
                f"for delayed trips, got {self.delay_minutes}"
            )
        if not self.reason_for_delay:
            raise ValueError("delayed trips need a reason_for_delay")
        return self


class LookupLists(BaseModel):
    """Ordered, de-duplicated value lists written to the Lists sheet.

    Months and vendors come from the generated trips; reasons, truck types
    and origins are the full configured enumerations.
    """

    model_config = ConfigDict(frozen=True)

    months: list[str]
    vendors: list[str]
    reasons: list[str]
    truck_types: list[str]
    origins: list[str]

    def columns(self) -> Iterator[tuple[str, list[str]]]:
        """Yield (title, values) pairs in Lists sheet column order."""
        yield "Months", self.months
        yield "Vendors", self.vendors
        yield "Reasons", self.reasons
        yield "TruckTypes", self.truck_types
        yield "Origins", self.origins


class ErrorResponse(BaseModel):
    """Error response for failed requests.

    Returned with HTTP 500 when a workbook export fails.
    """

    error: str = Field(
        description="Brief error message describing what went wrong"
    )
    detail: str | None = Field(
        default=None,
        description="Additional error details (if available)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "Failed to generate workbook",
                    "detail": "WorkbookBuildError: Failed to serialize workbook",
                },
            ]
        }
    }
