"""Core models and configuration for the Logistics Dashboard exporter."""

from app.core.models import ErrorResponse, LookupLists, Trip

__all__ = ["Trip", "LookupLists", "ErrorResponse"]
