"""CalendarView: selection, navigation and drag-and-drop wiring."""

from datetime import date, datetime

import pytest

from models.events import Granularity
from services.calendar import CalendarView
from services.renderer import MonthView, WeekView
from services.settings import CalendarSettings, memory_store


@pytest.fixture
def calls():
    return []


@pytest.fixture
def calendar(sample_event, make_event, calls):
    return CalendarView(
        events=[sample_event, make_event(7, "2024-03-14T14:00:00"), make_event(8, "2024-03-10T10:00:00")],
        anchor_date=date(2024, 3, 15),
        on_date_click=lambda d: calls.append(("date", d)),
        on_intervention_click=lambda e: calls.append(("event", e.id)),
        on_add_click=lambda d: calls.append(("add", d)),
        on_intervention_drop=lambda event_id, start: calls.append(("drop", event_id, start)),
    )


def test_click_date_selects_and_notifies(calendar, calls):
    calendar.click_date(date(2024, 3, 15))

    assert calendar.state.selected_date == date(2024, 3, 15)
    assert calls == [("date", date(2024, 3, 15))]
    assert [e.event_id for e in calendar.detail_panel().entries] == [42]


def test_selection_survives_navigation(calendar):
    calendar.click_date(date(2024, 3, 10))
    calendar.next()

    assert calendar.state.anchor_date == date(2024, 4, 15)
    assert calendar.state.selected_date == date(2024, 3, 10)
    view = calendar.render(now=datetime(2024, 4, 1, 9))
    assert view.title == "Avril 2024"
    assert not any(c.is_selected for c in view.cells)
    panel = calendar.detail_panel()
    assert panel.date == date(2024, 3, 10)
    assert [e.event_id for e in panel.entries] == [8]


def test_selection_survives_granularity_switch(calendar):
    calendar.click_date(date(2024, 3, 14))
    calendar.set_granularity(Granularity.WEEK)

    assert calendar.state.selected_date == date(2024, 3, 14)
    assert calendar.state.anchor_date == date(2024, 3, 15)
    assert calendar.visible_days[0] == date(2024, 3, 11)
    assert isinstance(calendar.render(now=datetime(2024, 3, 15, 9)), WeekView)

    calendar.set_granularity(Granularity.MONTH)
    assert isinstance(calendar.render(now=datetime(2024, 3, 15, 9)), MonthView)
    assert len(calendar.visible_days) == 35


def test_unknown_granularity(calendar):
    with pytest.raises(ValueError):
        calendar.set_granularity("day")


def test_week_navigation(calendar):
    calendar.set_granularity(Granularity.WEEK)
    calendar.previous()
    assert calendar.state.anchor_date == date(2024, 3, 8)
    calendar.today(date(2024, 6, 1))
    assert calendar.state.anchor_date == date(2024, 6, 1)


def test_click_event_and_add(calendar, calls, sample_event):
    calendar.click_event(sample_event)
    calendar.click_add(date(2024, 3, 20))
    calendar.click_add(date(2024, 3, 20), hour=14)

    assert calls == [
        ("event", 42),
        ("add", date(2024, 3, 20)),
        ("add", datetime(2024, 3, 20, 14, 0)),
    ]


def test_month_drop_scenario(calendar, calls, make_event):
    moved = make_event(7, "2024-03-14T14:00:00")
    payload = calendar.drag_start(moved)
    calendar.drag_enter("2024-03-20")
    assert calendar.state.drag_over_key == "2024-03-20"
    assert next(c for c in calendar.render(now=datetime(2024, 3, 1)).cells if c.key == "2024-03-20").is_drag_over

    calendar.drop(payload, date(2024, 3, 20))

    assert calls == [("drop", 7, datetime(2024, 3, 20, 14, 0))]
    assert calendar.state.drag_over_key is None


def test_week_drop_scenario(calendar, calls, make_event):
    calendar.set_granularity(Granularity.WEEK)
    moved = make_event(7, "2024-03-14T14:20:00")
    payload = calendar.drag_start(moved)
    calendar.drag_enter("2024-03-20-10")
    calendar.drop(payload, date(2024, 3, 20), hour=10)

    assert calls == [("drop", 7, datetime(2024, 3, 20, 10, 0))]


def test_drag_leave_clears_hover(calendar):
    calendar.drag_enter("2024-03-20")
    calendar.drag_leave()
    assert calendar.state.drag_over_key is None


def test_without_drop_callback_no_drop_targets(sample_event):
    calendar = CalendarView(events=[sample_event], anchor_date=date(2024, 3, 15))

    assert calendar.drag_start(sample_event) is None
    calendar.drag_enter("2024-03-20")
    assert calendar.state.drag_over_key is None

    month = calendar.render(now=datetime(2024, 3, 1))
    assert not any(c.droppable or c.is_drag_over for c in month.cells)

    calendar.set_granularity(Granularity.WEEK)
    calendar.drag_enter("2024-03-20-10")
    week = calendar.render(now=datetime(2024, 3, 1))
    assert not any(c.droppable or c.is_drag_over for row in week.rows for c in row)


def test_granularity_persisted_through_store():
    store = memory_store()
    calendar = CalendarView(settings=store.load(), settings_store=store, anchor_date=date(2024, 3, 15))

    calendar.set_granularity(Granularity.WEEK)

    assert store.load().default_granularity == "week"
    reopened = CalendarView(settings=store.load(), anchor_date=date(2024, 3, 15))
    assert reopened.state.granularity == Granularity.WEEK


def test_set_events_rebuilds_views(calendar, make_event):
    calendar.set_events([make_event(99, "2024-03-02T08:00:00")])
    view = calendar.render(now=datetime(2024, 3, 1))
    chips = [chip.event_id for cell in view.cells for chip in cell.chips]
    assert chips == [99]


def test_invalid_settings_rejected():
    with pytest.raises(ValueError):
        CalendarView(settings=CalendarSettings(default_granularity="year"))
