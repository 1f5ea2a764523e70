from __future__ import annotations

import random
from collections.abc import Iterator
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from app.api.routes import get_exporter
from app.core.models import LookupLists, Trip
from app.dashboard.catalog import DEFAULT_CATALOG
from app.dashboard.generator import generate_trips
from app.dashboard.months import recent_months
from app.dashboard.projector import build_lookup_lists
from app.dashboard.service import DashboardExportConfig, DashboardExporter
from app.main import create_app

FIXED_NOW = datetime(2024, 3, 18, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def client() -> Iterator[TestClient]:
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def months(fixed_now: datetime) -> list[str]:
    return recent_months(6, now=fixed_now)


@pytest.fixture()
def trips(months: list[str], rng: random.Random) -> list[Trip]:
    return generate_trips(months, DEFAULT_CATALOG, 400, rng)


@pytest.fixture()
def lookups(trips: list[Trip]) -> LookupLists:
    return build_lookup_lists(trips, DEFAULT_CATALOG)


@pytest.fixture()
def seeded_exporter(fixed_now: datetime) -> DashboardExporter:
    return DashboardExporter(
        DashboardExportConfig(row_count=400, month_window=6, seed=99),
        clock=lambda: fixed_now,
    )


@pytest.fixture()
def client_with_exporter() -> Iterator[tuple[TestClient, dict]]:
    """Client whose export dependency can be swapped per test via the returned dict."""
    app = create_app()
    holder: dict = {}
    app.dependency_overrides[get_exporter] = lambda: holder["exporter"]
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client, holder

