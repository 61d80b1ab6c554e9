"""Pydantic response models for API endpoints."""

import datetime as dt

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    database_available: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    TOO_MANY_EVENTS = "TOO_MANY_EVENTS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# CALENDAR VIEWS (read from the renderer's dataclasses)
# =============================================================================


class ViewModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class EventChipOut(ViewModel):
    event_id: int
    title: str
    status: str
    status_label: str
    color: str
    time_label: str
    client_name: str | None = None
    draggable: bool


class MonthCellOut(ViewModel):
    date: dt.date
    key: str
    day_number: int
    chips: list[EventChipOut]
    overflow_count: int
    overflow_label: str | None = None
    in_current_month: bool
    is_today: bool
    is_selected: bool
    is_drag_over: bool
    droppable: bool


class MonthViewOut(ViewModel):
    title: str
    weekday_labels: list[str]
    cells: list[MonthCellOut]


class WeekCellOut(ViewModel):
    date: dt.date
    hour: int
    key: str
    chips: list[EventChipOut]
    is_today: bool
    is_drag_over: bool
    droppable: bool


class NowIndicatorOut(ViewModel):
    date: dt.date
    hour: int
    offset: float


class WeekViewOut(ViewModel):
    title: str
    days: list[dt.date]
    day_labels: list[str]
    hours: list[int]
    rows: list[list[WeekCellOut]]
    now_indicator: NowIndicatorOut | None = None
    initial_scroll_hour: int


class DetailEntryOut(ViewModel):
    event_id: int
    title: str
    client_name: str | None = None
    time_range: str
    status_label: str
    color: str


class DetailPanelOut(ViewModel):
    title: str
    date: dt.date | None = None
    entries: list[DetailEntryOut] = []
    empty_message: str | None = None


class LegendItem(BaseModel):
    label: str
    color: str


class RenderResponse(BaseModel):
    granularity: str
    month: MonthViewOut | None = None
    week: WeekViewOut | None = None
    detail_panel: DetailPanelOut
    legend: list[LegendItem]
    unscheduled_event_ids: list[int] = []


class DropResponse(BaseModel):
    event_id: int
    new_start: dt.datetime


class SettingsResponse(BaseModel):
    default_granularity: str
    max_chips_per_day: int
    day_start_hour: int
    day_end_hour: int
    scroll_to_hour: int
    timezone: str


class AgendaItemOut(BaseModel):
    event_id: int
    title: str
    start: dt.datetime | None = None
    status_label: str
    color: str
    client_name: str | None = None
    technician_name: str | None = None
    address: str | None = None


class AgendaResponse(BaseModel):
    """Dashboard widget: today's interventions and the rest of the week."""

    date: dt.date
    today: list[AgendaItemOut]
    today_count: int
    week: list[AgendaItemOut]
