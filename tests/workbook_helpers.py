from __future__ import annotations

import io
from typing import Any

from fastapi.testclient import TestClient
from openpyxl import Workbook, load_workbook

from app.dashboard.service import XLSX_MEDIA_TYPE


def reload_workbook(content: bytes) -> Workbook:
    """Load xlsx bytes back with formulas preserved."""
    return load_workbook(io.BytesIO(content), data_only=False)


def get_export(client: TestClient) -> bytes:
    response = client.get("/api/export")
    assert response.status_code == 200, response.text[:400]
    assert response.headers.get("content-type", "").startswith(XLSX_MEDIA_TYPE)
    return response.content


def data_records(wb: Workbook) -> list[dict[str, Any]]:
    """Data sheet body rows as header -> value dicts."""
    rows = list(wb["Data"].iter_rows(values_only=True))
    header = rows[0]
    return [dict(zip(header, row)) for row in rows[1:]]


def list_column(wb: Workbook, column: str) -> list[Any]:
    """Values below the title of a Lists sheet column."""
    ws = wb["Lists"]
    values = [cell.value for cell in ws[column][1:]]
    return [v for v in values if v is not None]
