"""API Pydantic models."""

from .requests import (
    AgendaRequest,
    DropRequest,
    EventIn,
    ExportRequest,
    RenderRequest,
    SettingsIn,
    ViewStateIn,
)
from .responses import (
    AgendaItemOut,
    AgendaResponse,
    DropResponse,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    RenderResponse,
    SettingsResponse,
)

__all__ = [
    "AgendaItemOut",
    "AgendaRequest",
    "AgendaResponse",
    "DropRequest",
    "DropResponse",
    "ErrorCodes",
    "ErrorResponse",
    "EventIn",
    "ExportRequest",
    "HealthResponse",
    "RenderRequest",
    "RenderResponse",
    "SettingsIn",
    "SettingsResponse",
    "ViewStateIn",
]
