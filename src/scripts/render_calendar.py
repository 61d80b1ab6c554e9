#!/usr/bin/env python3
"""
Print the intervention calendar (month or week) as text.

Reads a JSON file holding a list of interventions, e.g.
    [{"id": 1, "title": "Pose chauffe-eau", "start": "2024-03-15T09:30:00",
      "status": "planifiee", "client": {"name": "Martin", "first_name": "Léa"}}]

Usage:
    uv run python src/scripts/render_calendar.py events.json --date 2024-03-15 --view week
"""

import argparse
import json
import sys
from datetime import date, datetime
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.config import DB_PATH
from models.events import AgendaSummary, Granularity, ScheduledEvent
from services.calendar import CalendarView
from services.event_index import local_start, resolve_timezone
from services.renderer import MonthView, WeekView, status_label, status_legend
from services.reports import agenda_summary
from services.settings import CalendarSettings, sqlite_store

CELL_WIDTH = 16


def load_events(path: Path) -> list[ScheduledEvent]:
    """Read events from a JSON list; malformed starts are kept unscheduled."""
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, list):
        raise ValueError(f"Expected a JSON list of events in {path}")
    return [ScheduledEvent.from_dict(item) for item in raw]


def _fit(text: str) -> str:
    return text[: CELL_WIDTH - 1].ljust(CELL_WIDTH)


def print_month(view: MonthView):
    print(view.title)
    print("".join(_fit(label) for label in view.weekday_labels))
    for week in view.weeks:
        lines = [[] for _ in range(4)]
        for cell in week:
            marks = ("*" if cell.is_today else "") + (">" if cell.is_selected else "")
            day = f"{cell.day_number}{marks}" if cell.in_current_month else f"({cell.day_number})"
            lines[0].append(_fit(day))
            chips = [c.title for c in cell.chips] + ["", ""]
            lines[1].append(_fit(chips[0]))
            lines[2].append(_fit(chips[1]))
            lines[3].append(_fit(cell.overflow_label or ""))
        for line in lines:
            print("".join(line).rstrip())
        print("-" * (CELL_WIDTH * 7))


def print_week(view: WeekView):
    print(view.title)
    print(" " * 6 + "".join(_fit(label) for label in view.day_labels))
    for hour, row in zip(view.hours, view.rows):
        texts = []
        for cell in row:
            text = ", ".join(f"{c.time_label} {c.title}" for c in cell.chips)
            indicator = view.now_indicator
            if indicator and indicator.date == cell.date and indicator.hour == hour:
                text = f"@{indicator.offset:.2f} " + text
            texts.append(_fit(text))
        print(f"{hour:02d}:00 " + "".join(texts).rstrip())


def print_agenda(summary: AgendaSummary, tz):
    print(f"\nAujourd'hui: {summary.today_count} intervention(s)")
    for event in summary.today:
        print(f"  {local_start(event, tz):%H:%M}  {event.title}  [{status_label(event.status)}]")
    print("Cette semaine:")
    for event in summary.week:
        print(f"  {local_start(event, tz):%d/%m %H:%M}  {event.title}  [{status_label(event.status)}]")


def main(events_file: str, as_of: str | None, view_mode: str, selected: str | None):
    events = load_events(Path(events_file))
    anchor = datetime.strptime(as_of, "%Y-%m-%d").date() if as_of else date.today()

    settings = sqlite_store().load() if DB_PATH.exists() else CalendarSettings()
    calendar = CalendarView(events=events, settings=settings, anchor_date=anchor)
    calendar.set_granularity(view_mode)
    if selected:
        calendar.click_date(datetime.strptime(selected, "%Y-%m-%d").date())

    unscheduled = [e.id for e in events if e.start is None]
    if unscheduled:
        print(f"Skipping {len(unscheduled)} event(s) without a valid start: {unscheduled}")

    view = calendar.render()
    if isinstance(view, WeekView):
        print_week(view)
    else:
        print_month(view)

    print("\n" + "  ".join(f"[{color}] {label}" for label, color in status_legend()))

    panel = calendar.detail_panel()
    print(f"\n{panel.title}")
    for entry in panel.entries:
        client = f" ({entry.client_name})" if entry.client_name else ""
        print(f"  {entry.time_range}  {entry.title}{client}  [{entry.status_label}]")
    if panel.empty_message:
        print(f"  {panel.empty_message}")

    tz = resolve_timezone(settings.timezone)
    print_agenda(agenda_summary(events, anchor, tz), tz)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Print the intervention calendar")
    parser.add_argument("events_file", help="JSON file with a list of interventions")
    parser.add_argument("--date", help="Anchor date (YYYY-MM-DD). Defaults to today.")
    parser.add_argument(
        "--view",
        choices=Granularity.ALL,
        default=Granularity.MONTH,
        help="Month grid or week/hour grid",
    )
    parser.add_argument("--select", help="Selected date for the detail panel (YYYY-MM-DD)")
    args = parser.parse_args()

    main(args.events_file, args.date, args.view, args.select)
