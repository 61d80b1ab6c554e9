"""
Month and week renderers for the intervention calendar.

Renderers are pure: they read the view state and the events, rebuild the
day/hour indexes for the pass, and return plain view objects. Nothing here
mutates the state; user input goes back through the calendar controller.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, tzinfo

from core.config import (
    MONTH_NAMES,
    STATUS_COLORS,
    STATUS_LABELS,
    UNKNOWN_STATUS_COLOR,
    WEEKDAY_LABELS,
    WEEKDAY_NAMES,
)
from models.events import ScheduledEvent, ViewState
from services.event_index import (
    build_day_index,
    build_hour_index,
    day_key,
    local_end,
    local_start,
    resolve_timezone,
    slot_key,
)
from services.grid import month_grid, week_grid
from services.settings import CalendarSettings


@dataclass
class EventChip:
    event_id: int
    title: str
    status: str
    status_label: str
    color: str
    time_label: str
    client_name: str | None = None
    draggable: bool = False


@dataclass
class MonthCell:
    date: date
    key: str
    day_number: int
    chips: list[EventChip]
    overflow_count: int
    in_current_month: bool
    is_today: bool
    is_selected: bool
    is_drag_over: bool
    droppable: bool

    @property
    def overflow_label(self) -> str | None:
        if self.overflow_count <= 0:
            return None
        return f"+{self.overflow_count} autres"


@dataclass
class MonthView:
    title: str
    weekday_labels: list[str]
    cells: list[MonthCell]

    @property
    def weeks(self) -> list[list[MonthCell]]:
        return [self.cells[i:i + 7] for i in range(0, len(self.cells), 7)]


@dataclass
class WeekCell:
    date: date
    hour: int
    key: str
    chips: list[EventChip]
    is_today: bool
    is_drag_over: bool
    droppable: bool


@dataclass
class NowIndicator:
    """Current-time marker: row `hour`, column `date`, `offset` in [0, 1)."""

    date: date
    hour: int
    offset: float


@dataclass
class WeekView:
    title: str
    days: list[date]
    day_labels: list[str]
    hours: list[int]
    rows: list[list[WeekCell]]
    now_indicator: NowIndicator | None
    initial_scroll_hour: int

    def cell(self, d: date, hour: int) -> WeekCell:
        return self.rows[self.hours.index(hour)][self.days.index(d)]


@dataclass
class DetailEntry:
    event_id: int
    title: str
    client_name: str | None
    time_range: str
    status_label: str
    color: str


@dataclass
class DetailPanel:
    title: str
    date: date | None
    entries: list[DetailEntry] = field(default_factory=list)
    empty_message: str | None = None


# =============================================================================
# FORMATTING HELPERS
# =============================================================================


def status_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, UNKNOWN_STATUS_COLOR)


def status_legend() -> list[tuple[str, str]]:
    """(label, color) pairs in display order."""
    return [(STATUS_LABELS[s], STATUS_COLORS[s]) for s in STATUS_LABELS]


def format_month_title(d: date) -> str:
    """e.g. 'Mars 2024'."""
    return f"{MONTH_NAMES[d.month - 1]} {d.year}"


def format_day_title(d: date) -> str:
    """e.g. 'vendredi 15 mars'."""
    return f"{WEEKDAY_NAMES[d.weekday()]} {d.day} {MONTH_NAMES[d.month - 1].lower()}"


def format_time(dt: datetime | None) -> str:
    return dt.strftime("%H:%M") if dt else ""


def _chip(event: ScheduledEvent, tz: tzinfo | None, draggable: bool) -> EventChip:
    return EventChip(
        event_id=event.id,
        title=event.title,
        status=event.status,
        status_label=status_label(event.status),
        color=status_color(event.status),
        time_label=format_time(local_start(event, tz)),
        client_name=event.client.display_name if event.client else None,
        draggable=draggable,
    )


def _settings_tz(settings: CalendarSettings) -> tzinfo:
    return resolve_timezone(settings.timezone)


def _as_local(now: datetime, tz: tzinfo) -> datetime:
    if now.tzinfo is not None:
        return now.astimezone(tz)
    return now


# =============================================================================
# MONTH VIEW
# =============================================================================


def render_month(
    state: ViewState,
    events: list[ScheduledEvent],
    today: date,
    settings: CalendarSettings | None = None,
    droppable: bool = False,
) -> MonthView:
    """
    One cell per day of the month grid.

    Each cell carries at most `max_chips_per_day` chips plus an overflow
    count. Days outside the anchor month stay selectable and droppable.
    """
    settings = settings or CalendarSettings()
    tz = _settings_tz(settings)
    day_index = build_day_index(events, tz)
    limit = settings.max_chips_per_day

    cells = []
    for d in month_grid(state.anchor_date):
        key = day_key(d)
        day_events = day_index.get(key, [])
        cells.append(
            MonthCell(
                date=d,
                key=key,
                day_number=d.day,
                chips=[_chip(e, tz, droppable) for e in day_events[:limit]],
                overflow_count=max(len(day_events) - limit, 0),
                in_current_month=(d.year, d.month) == (state.anchor_date.year, state.anchor_date.month),
                is_today=d == today,
                is_selected=state.selected_date == d,
                is_drag_over=droppable and state.drag_over_key == key,
                droppable=droppable,
            )
        )

    return MonthView(
        title=format_month_title(state.anchor_date),
        weekday_labels=list(WEEKDAY_LABELS),
        cells=cells,
    )


# =============================================================================
# WEEK VIEW
# =============================================================================


def render_week(
    state: ViewState,
    events: list[ScheduledEvent],
    now: datetime,
    settings: CalendarSettings | None = None,
    droppable: bool = False,
) -> WeekView:
    """
    Hour rows crossed with the 7 days of the anchor's week.

    Every event of a (day, hour) slot is shown, in input order. Events
    starting outside the hour axis are not drawn in the grid.
    """
    settings = settings or CalendarSettings()
    tz = _settings_tz(settings)
    now = _as_local(now, tz)
    today = now.date()

    days = week_grid(state.anchor_date)
    hours = settings.hours
    hour_index = build_hour_index(events, days, tz)

    rows = []
    for hour in hours:
        row = []
        for d in days:
            key = slot_key(d, hour)
            slot_events = hour_index.get((day_key(d), hour), [])
            row.append(
                WeekCell(
                    date=d,
                    hour=hour,
                    key=key,
                    chips=[_chip(e, tz, droppable) for e in slot_events],
                    is_today=d == today,
                    is_drag_over=droppable and state.drag_over_key == key,
                    droppable=droppable,
                )
            )
        rows.append(row)

    now_indicator = None
    if today in days and now.hour in hours:
        now_indicator = NowIndicator(date=today, hour=now.hour, offset=now.minute / 60)

    return WeekView(
        title=f"Semaine du {days[0].strftime('%d/%m/%Y')}",
        days=days,
        day_labels=[f"{WEEKDAY_LABELS[d.weekday()]} {d.day}" for d in days],
        hours=hours,
        rows=rows,
        now_indicator=now_indicator,
        initial_scroll_hour=settings.scroll_to_hour,
    )


# =============================================================================
# DETAIL PANEL
# =============================================================================


def render_detail_panel(
    state: ViewState,
    events: list[ScheduledEvent],
    settings: CalendarSettings | None = None,
) -> DetailPanel:
    """Interventions of the selected day, whatever the visible grid."""
    if state.selected_date is None:
        return DetailPanel(
            title="Sélectionnez une date",
            date=None,
            empty_message="Cliquez sur une date pour voir les interventions",
        )

    settings = settings or CalendarSettings()
    tz = _settings_tz(settings)
    day_events = build_day_index(events, tz).get(day_key(state.selected_date), [])

    entries = []
    for event in day_events:
        time_range = format_time(local_start(event, tz))
        end = local_end(event, tz)
        if end is not None:
            time_range += f" - {format_time(end)}"
        entries.append(
            DetailEntry(
                event_id=event.id,
                title=event.title,
                client_name=event.client.display_name if event.client else None,
                time_range=time_range,
                status_label=status_label(event.status),
                color=status_color(event.status),
            )
        )

    return DetailPanel(
        title=format_day_title(state.selected_date),
        date=state.selected_date,
        entries=entries,
        empty_message=None if entries else "Aucune intervention prévue",
    )
