"""Dashboard export service module.

Provides the DashboardExporter OOP service and DashboardExportConfig
dataclass for configuring export behavior, separating runtime config from
app-level settings.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from app.dashboard.catalog import DEFAULT_CATALOG, TripCatalog
from app.dashboard.generator import generate_trips
from app.dashboard.months import recent_months
from app.dashboard.projector import build_lookup_lists
from app.dashboard.workbook import DEFAULT_CREATOR, build_workbook, workbook_to_bytes

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@dataclass
class DashboardExportConfig:
    """Configuration for the DashboardExporter service.

    Allows different export configurations per exporter (e.g. in tests or
    the CLI tool), independent of global application settings.
    """

    row_count: int = 400
    month_window: int = 6
    filename: str = "Logistics_Dashboard.xlsx"
    creator: str = DEFAULT_CREATOR
    seed: int | None = None

    @classmethod
    def from_settings(cls, settings: "Settings") -> "DashboardExportConfig":
        return cls(
            row_count=settings.row_count,
            month_window=settings.month_window,
            filename=settings.export_filename,
            creator=settings.workbook_creator,
            seed=settings.random_seed,
        )


@dataclass(frozen=True)
class ExportResult:
    """A finished workbook ready to be sent to the client."""

    content: bytes
    filename: str
    row_count: int
    months: tuple[str, ...] = ()
    media_type: str = XLSX_MEDIA_TYPE


class DashboardExporter:
    """OOP service encapsulating the whole export pipeline.

    Usage:
        exporter = DashboardExporter(DashboardExportConfig(row_count=400))
        result = exporter.export()
        Path(result.filename).write_bytes(result.content)

    The exporter itself holds no mutable state: every call to ``export``
    creates its own random source, trips and workbook, so one instance can
    serve concurrent requests.
    """

    def __init__(
        self,
        config: DashboardExportConfig | None = None,
        catalog: TripCatalog = DEFAULT_CATALOG,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the exporter.

        Args:
            config: Export configuration. Uses defaults if not provided.
            catalog: Categorical enumerations trips are drawn from.
            clock: Returns "now"; defaults to the current UTC time. Tests
                inject a fixed clock to pin the month window.
        """
        self.config = config or DashboardExportConfig()
        self.catalog = catalog
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def _new_rng(self) -> random.Random:
        # Seeded exporters repeat the same dataset; unseeded ones draw from OS entropy.
        return random.Random(self.config.seed)

    def export(self) -> ExportResult:
        """Run the full pipeline and return the serialized workbook.

        Orchestrates:
          - Build the recent month window
          - Generate synthetic trips
          - Project lookup lists
          - Lay out the workbook and serialize it

        Raises:
            ValueError: If the configuration cannot produce a dataset.
            WorkbookBuildError: If the workbook cannot be built or written.
        """
        now = self._clock()
        months = recent_months(self.config.month_window, now=now)
        trips = generate_trips(months, self.catalog, self.config.row_count, self._new_rng())
        lookups = build_lookup_lists(trips, self.catalog)

        wb = build_workbook(trips, lookups, creator=self.config.creator, created=now)
        content = workbook_to_bytes(wb)

        logger.debug(
            "Exported workbook rows=%d months=%s bytes=%d",
            len(trips),
            ",".join(months),
            len(content),
        )
        return ExportResult(
            content=content,
            filename=self.config.filename,
            row_count=len(trips),
            months=tuple(months),
        )
