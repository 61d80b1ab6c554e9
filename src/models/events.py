"""
Data models for scheduled events and calendar view state.

Events are immutable from the calendar's point of view; only the view
state changes in response to user input.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from core.config import DEFAULT_GRANULARITY


class EventStatus:
    """Intervention status wire values."""

    PLANNED = "planifiee"
    IN_PROGRESS = "en_cours"
    COMPLETED = "terminee"
    CANCELLED = "annulee"

    ALL = (PLANNED, IN_PROGRESS, COMPLETED, CANCELLED)


class Granularity:
    """Calendar display granularities."""

    MONTH = "month"
    WEEK = "week"

    ALL = (MONTH, WEEK)


def parse_instant(value) -> datetime | None:
    """Parse an ISO 8601 instant, returning None when missing or malformed."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass(frozen=True)
class ClientRef:
    """Client attached to an intervention."""

    name: str
    first_name: str | None = None

    @property
    def display_name(self) -> str:
        return f"{self.first_name or ''} {self.name}".strip()


@dataclass(frozen=True)
class ScheduledEvent:
    """An intervention as consumed by the calendar."""

    id: int
    title: str
    start: datetime | None
    end: datetime | None = None
    status: str = EventStatus.PLANNED
    client: ClientRef | None = None
    technician_id: int | None = None
    technician_name: str | None = None
    address: str | None = None
    description: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ScheduledEvent":
        """
        Build an event from a loosely-typed record (JSON, API payload).

        A missing or unparseable start is kept as None so the event is
        simply left out of the grids.
        """
        client = data.get("client")
        client_ref = None
        if isinstance(client, dict) and client.get("name"):
            client_ref = ClientRef(name=client["name"], first_name=client.get("first_name"))

        return cls(
            id=int(data["id"]),
            title=data.get("title") or "Intervention",
            start=parse_instant(data.get("start")),
            end=parse_instant(data.get("end")),
            status=data.get("status") or EventStatus.PLANNED,
            client=client_ref,
            technician_id=data.get("technician_id"),
            technician_name=data.get("technician_name"),
            address=data.get("address"),
            description=data.get("description"),
        )


@dataclass
class ViewState:
    """What the calendar currently shows and what is selected/hovered."""

    anchor_date: date
    granularity: str = DEFAULT_GRANULARITY
    selected_date: date | None = None
    drag_over_key: str | None = None


@dataclass(frozen=True)
class DragPayload:
    """Source channel of a drag gesture: which event is being moved."""

    event_id: int | None
    original_start: datetime | None = None


@dataclass
class AgendaSummary:
    """Today's and this week's interventions for the dashboard widget."""

    today: list[ScheduledEvent] = field(default_factory=list)
    today_count: int = 0
    week: list[ScheduledEvent] = field(default_factory=list)
