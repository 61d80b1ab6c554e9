"""
Visible day sequences for the month and week grids (weeks start on Monday).
"""

import calendar
from datetime import date, timedelta

from models.events import Granularity


def month_bounds(anchor: date) -> tuple[date, date]:
    """First and last day of the anchor's month."""
    last_day = calendar.monthrange(anchor.year, anchor.month)[1]
    return anchor.replace(day=1), anchor.replace(day=last_day)


def week_start(d: date) -> date:
    """Monday on or before d."""
    return d - timedelta(days=d.weekday())


def week_end(d: date) -> date:
    """Sunday on or after d."""
    return d + timedelta(days=6 - d.weekday())


def month_grid(anchor: date) -> list[date]:
    """
    Full weeks covering the anchor's month.

    Starts on the Monday on/before the 1st and ends on the Sunday on/after
    the last day, so the length is always a multiple of 7.
    """
    first, last = month_bounds(anchor)
    start = week_start(first)
    end = week_end(last)
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]


def week_grid(anchor: date) -> list[date]:
    """The 7 days of the anchor's week, Monday first."""
    monday = week_start(anchor)
    return [monday + timedelta(days=i) for i in range(7)]


def grid_for(anchor: date, granularity: str) -> list[date]:
    if granularity == Granularity.MONTH:
        return month_grid(anchor)
    if granularity == Granularity.WEEK:
        return week_grid(anchor)
    raise ValueError(f"Unknown granularity '{granularity}'")


def add_months(d: date, months: int) -> date:
    """Shift by whole months, clamping the day to the target month length."""
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    day = min(d.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def shift_anchor(anchor: date, granularity: str, step: int) -> date:
    """Move the anchor by `step` months or weeks (negative goes back)."""
    if granularity == Granularity.MONTH:
        return add_months(anchor, step)
    if granularity == Granularity.WEEK:
        return anchor + timedelta(weeks=step)
    raise ValueError(f"Unknown granularity '{granularity}'")
