"""API integration tests.

These tests exercise the FastAPI app end-to-end:
- GET /health
- GET / download page
- GET /api/export workbook download and error handling

Workbook contents are covered in detail by test_workbook.py; here we check
the HTTP contract and that the attachment is a readable dashboard workbook.
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from app.dashboard.service import DashboardExportConfig, DashboardExporter
from app.dashboard.workbook import WorkbookBuildError
from tests.workbook_helpers import data_records, get_export, reload_workbook


class _FailingExporter(DashboardExporter):
    def __init__(self, error: Exception):
        super().__init__(DashboardExportConfig(seed=1))
        self.error = error

    def export(self):
        raise self.error


def test_health_returns_ok(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_index_serves_download_page(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")

    body = response.text
    assert "<title>Logistics Operations Excel Dashboard</title>" in body
    assert "Download Excel Dashboard" in body
    assert 'fetch("/api/export"' in body
    assert "Logistics_Dashboard.xlsx" in body
    assert "Microsoft 365" in body


def test_export_headers(client: TestClient) -> None:
    response = client.get("/api/export")
    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="Logistics_Dashboard.xlsx"'
    assert response.headers["cache-control"] == "no-store"


def test_export_returns_dashboard_workbook(client: TestClient) -> None:
    wb = reload_workbook(get_export(client))

    assert wb.sheetnames == ["Data", "Lists", "Dashboard"]
    assert wb.active.title == "Dashboard"
    assert len(data_records(wb)) == 400
    assert wb["Dashboard"]["C10"].value.startswith("=IFERROR(ROWS(")


def test_each_export_generates_new_data(client: TestClient) -> None:
    first = data_records(reload_workbook(get_export(client)))
    second = data_records(reload_workbook(get_export(client)))
    assert first != second


def test_openapi_documents_export_errors(client: TestClient) -> None:
    schema = client.get("/openapi.json").json()
    responses = schema["paths"]["/api/export"]["get"]["responses"]
    assert "500" in responses
    assert "/" not in schema["paths"]


def test_export_workbook_error_returns_500(client_with_exporter) -> None:
    client, holder = client_with_exporter
    holder["exporter"] = _FailingExporter(
        WorkbookBuildError("Failed to serialize workbook", "OSError: no space left")
    )

    response = client.get("/api/export")
    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to serialize workbook",
        "detail": "OSError: no space left",
    }


def test_export_unexpected_error_returns_500(client_with_exporter) -> None:
    client, holder = client_with_exporter
    holder["exporter"] = _FailingExporter(ValueError("months must be at least 1"))

    response = client.get("/api/export")
    assert response.status_code == 500
    data = response.json()
    assert data["error"] == "Failed to generate workbook"
    assert data["detail"] == "ValueError: months must be at least 1"
    assert "content-disposition" not in response.headers


def test_export_uses_injected_exporter(client_with_exporter, seeded_exporter) -> None:
    client, holder = client_with_exporter
    holder["exporter"] = seeded_exporter

    first = data_records(reload_workbook(get_export(client)))
    second = data_records(reload_workbook(get_export(client)))
    assert first == second
    assert {r["Month"] for r in first} <= {"2023-10", "2023-11", "2023-12", "2024-01", "2024-02", "2024-03"}
