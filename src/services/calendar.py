"""
Calendar controller: view state, selection, navigation and rescheduling.

CalendarView is what a UI layer (or the API) drives. It owns the ViewState,
delegates drag gestures to the DragDropController and reports every user
action through the callbacks it was given.
"""

from collections.abc import Callable
from datetime import date, datetime, time

from models.events import DragPayload, Granularity, ScheduledEvent, ViewState
from services.dragdrop import DragDropController, RescheduleCallback
from services.event_index import resolve_timezone
from services.grid import grid_for, shift_anchor
from services.renderer import (
    DetailPanel,
    MonthView,
    WeekView,
    render_detail_panel,
    render_month,
    render_week,
)
from services.settings import CalendarSettings, SettingsStore


class CalendarView:
    """Month/week calendar over a read-only list of interventions."""

    def __init__(
        self,
        events: list[ScheduledEvent] | None = None,
        settings: CalendarSettings | None = None,
        anchor_date: date | None = None,
        settings_store: SettingsStore | None = None,
        on_date_click: Callable[[date], object] | None = None,
        on_intervention_click: Callable[[ScheduledEvent], object] | None = None,
        on_add_click: Callable[[date | datetime], object] | None = None,
        on_intervention_drop: RescheduleCallback | None = None,
    ):
        self.settings = (settings or CalendarSettings()).validate()
        self.settings_store = settings_store
        self.tz = resolve_timezone(self.settings.timezone)
        self.events = list(events or [])
        self.state = ViewState(
            anchor_date=anchor_date or date.today(),
            granularity=self.settings.default_granularity,
        )
        self.on_date_click = on_date_click
        self.on_intervention_click = on_intervention_click
        self.on_add_click = on_add_click
        self.dragdrop = DragDropController(on_drop=on_intervention_drop, tz=self.tz)

    # -------------------------------------------------------------------------
    # Data
    # -------------------------------------------------------------------------

    def set_events(self, events: list[ScheduledEvent]) -> None:
        self.events = list(events)

    @property
    def visible_days(self) -> list[date]:
        return grid_for(self.state.anchor_date, self.state.granularity)

    # -------------------------------------------------------------------------
    # Selection and clicks
    # -------------------------------------------------------------------------

    def click_date(self, d: date) -> None:
        """Select a day; the detail panel follows the selection."""
        self.state.selected_date = d
        if self.on_date_click:
            self.on_date_click(d)

    def click_event(self, event: ScheduledEvent) -> None:
        if self.on_intervention_click:
            self.on_intervention_click(event)

    def click_add(self, d: date, hour: int | None = None) -> None:
        """Request a new intervention on a day, or on a day and hour."""
        if not self.on_add_click:
            return
        if hour is None:
            self.on_add_click(d)
        else:
            self.on_add_click(datetime.combine(d, time(hour)))

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def set_granularity(self, granularity: str) -> None:
        """Switch month/week on the same anchor; selection is kept."""
        if granularity not in Granularity.ALL:
            raise ValueError(f"Unknown granularity '{granularity}'")
        self.state.granularity = granularity
        if self.settings_store is not None:
            self.settings.default_granularity = granularity
            self.settings_store.save(self.settings)

    def previous(self) -> None:
        self.state.anchor_date = shift_anchor(self.state.anchor_date, self.state.granularity, -1)

    def next(self) -> None:
        self.state.anchor_date = shift_anchor(self.state.anchor_date, self.state.granularity, 1)

    def today(self, today: date | None = None) -> None:
        self.state.anchor_date = today or date.today()

    # -------------------------------------------------------------------------
    # Drag and drop
    # -------------------------------------------------------------------------

    def drag_start(self, event: ScheduledEvent) -> DragPayload | None:
        return self.dragdrop.start_drag(event)

    def drag_enter(self, key: str) -> None:
        self.dragdrop.drag_enter(key)
        self.state.drag_over_key = self.dragdrop.hover_key

    def drag_leave(self) -> None:
        self.dragdrop.drag_leave()
        self.state.drag_over_key = self.dragdrop.hover_key

    def drop(
        self, payload: DragPayload | None, target_date: date, hour: int | None = None
    ) -> datetime | None:
        """Commit a drop on a month cell (hour=None) or a week cell."""
        new_start = self.dragdrop.drop(payload, target_date, hour)
        self.state.drag_over_key = self.dragdrop.hover_key
        return new_start

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render(self, now: datetime | None = None) -> MonthView | WeekView:
        now = now or datetime.now(self.tz)
        if self.state.granularity == Granularity.WEEK:
            return render_week(
                self.state, self.events, now, self.settings, self.dragdrop.droppable
            )
        today = now.astimezone(self.tz).date() if now.tzinfo else now.date()
        return render_month(
            self.state, self.events, today, self.settings, self.dragdrop.droppable
        )

    def detail_panel(self) -> DetailPanel:
        return render_detail_panel(self.state, self.events, self.settings)
