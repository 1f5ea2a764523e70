"""Logistics Dashboard Exporter - FastAPI Application Entry Point.

This module creates and configures the FastAPI application instance,
sets up CORS middleware and logging, and includes the API routes.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import router
from app.core.config import settings


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    logging.getLogger("app").setLevel(settings.log_level.upper())

    app = FastAPI(
        title=settings.app_title,
        description=(
            "Generates synthetic logistics trip data and returns it as an Excel "
            "workbook with an interactive, formula-driven dashboard."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # Configure CORS middleware (allow all origins for development)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

    # Include API routes
    app.include_router(router)

    return app


# Create the application instance
app = create_app()
