"""API routes for the Logistics Dashboard exporter.

This module defines the HTTP endpoints:
- GET /: Download page with a single export button
- GET /api/export: Generate a fresh workbook and return it as an attachment
- GET /health: Health check endpoint
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, JSONResponse, Response

from app.api.page import render_index_page
from app.core.config import settings
from app.core.models import ErrorResponse
from app.dashboard.service import XLSX_MEDIA_TYPE, DashboardExportConfig, DashboardExporter
from app.dashboard.workbook import WorkbookBuildError

# Create router instance
router = APIRouter()
logger = logging.getLogger(__name__)

# Create exporter instance at startup using app settings.
dashboard_exporter = DashboardExporter(config=DashboardExportConfig.from_settings(settings))


def get_exporter() -> DashboardExporter:
    """Dependency returning the shared (stateless) exporter."""
    return dashboard_exporter


@router.get(
    "/health",
    summary="Health Check",
    description="Returns the health status of the API service.",
    response_description="Health status object",
    responses={
        200: {
            "description": "Service is healthy",
            "content": {
                "application/json": {
                    "example": {"status": "ok"}
                }
            }
        }
    }
)
async def health_check() -> dict:
    """Health check endpoint.

    Returns:
        dict: Health status with "status": "ok"
    """
    return {"status": "ok"}


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index() -> HTMLResponse:
    """Serve the download page."""
    return HTMLResponse(
        render_index_page(settings.app_title, filename=settings.export_filename)
    )


@router.get(
    "/api/export",
    summary="Export Excel Dashboard",
    description=(
        "Generate a fresh synthetic logistics dataset and return it as an Excel "
        "workbook with Data, Lists and Dashboard sheets. Every call produces new "
        "data. The dashboard uses dynamic-array formulas (FILTER, UNIQUE, LET) and "
        "needs a spreadsheet application that supports them, e.g. Microsoft 365."
    ),
    response_description="The workbook as an .xlsx attachment",
    responses={
        200: {
            "description": "Workbook generated",
            "content": {XLSX_MEDIA_TYPE: {}},
        },
        500: {
            "description": "Workbook generation failed",
            "model": ErrorResponse,
        },
    },
)
def export_dashboard(
    exporter: DashboardExporter = Depends(get_exporter),
) -> Response:
    """Build and return a new dashboard workbook.

    Declared as a plain function so FastAPI runs it in the threadpool and
    workbook construction does not block the event loop.
    """
    try:
        result = exporter.export()
    except WorkbookBuildError as e:
        logger.exception("Workbook construction failed")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=e.message,
                detail=e.detail,
            ).model_dump(),
        )
    except Exception as e:
        logger.exception("Dataset generation failed")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error="Failed to generate workbook",
                detail=f"{type(e).__name__}: {e}",
            ).model_dump(),
        )

    logger.info(
        "Exported workbook filename=%s rows=%d months=%d bytes=%d",
        result.filename,
        result.row_count,
        len(result.months),
        len(result.content),
    )

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{result.filename}"',
            "Cache-Control": "no-store",
        },
    )
