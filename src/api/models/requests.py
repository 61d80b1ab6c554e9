"""Pydantic request models for API endpoints."""

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from core.config import CALENDAR_TIMEZONE, DAY_END_HOUR, DAY_START_HOUR, MAX_CHIPS_PER_DAY, SCROLL_TO_HOUR
from models.events import ScheduledEvent


class ClientIn(BaseModel):
    name: str
    first_name: str | None = None


class EventIn(BaseModel):
    """Intervention as sent by the scheduling data layer."""

    id: int
    title: str = "Intervention"
    start: str | None = None  # ISO 8601; malformed values leave the event unscheduled
    end: str | None = None
    status: str = "planifiee"
    client: ClientIn | None = None
    technician_id: int | None = None
    technician_name: str | None = None
    address: str | None = None
    description: str | None = None

    def to_event(self) -> ScheduledEvent:
        return ScheduledEvent.from_dict(self.model_dump())


class ViewStateIn(BaseModel):
    anchor_date: date
    granularity: Literal["month", "week"] = "month"
    selected_date: date | None = None
    drag_over_key: str | None = None


class RenderRequest(BaseModel):
    events: list[EventIn] = []
    view: ViewStateIn
    now: datetime | None = None
    droppable: bool = False


class DropRequest(BaseModel):
    event: EventIn
    target_date: date
    hour: int | None = Field(default=None, ge=0, le=23)


class ExportRequest(BaseModel):
    events: list[EventIn] = []
    anchor_date: date | None = None
    technician_id: int | None = None
    status: str | None = None


class AgendaRequest(BaseModel):
    events: list[EventIn] = []
    today: date | None = None  # defaults to today in the calendar timezone


class SettingsIn(BaseModel):
    default_granularity: Literal["month", "week"] = "month"
    max_chips_per_day: int = MAX_CHIPS_PER_DAY
    day_start_hour: int = DAY_START_HOUR
    day_end_hour: int = DAY_END_HOUR
    scroll_to_hour: int = SCROLL_TO_HOUR
    timezone: str = CALENDAR_TIMEZONE
