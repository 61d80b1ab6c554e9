"""
Day and hour-slot indexes over scheduled events.

Indexes are rebuilt from scratch on every render pass and never stored.
"""

from collections import defaultdict
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import tzlocal

from models.events import ScheduledEvent


def resolve_timezone(name: str | None) -> tzinfo:
    """
    Resolve a timezone name to a tzinfo.

    "local" (or empty) means the machine's IANA zone, so instants on either
    side of a DST change get their own offset. Raises ValueError for unknown
    identifiers.
    """
    if not name or name.lower() == "local":
        return tzlocal.get_localzone()
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: '{name}'") from e


def day_key(d: date) -> str:
    """Locale-independent day key, e.g. '2024-03-15'."""
    return d.strftime("%Y-%m-%d")


def slot_key(d: date, hour: int) -> str:
    """Week cell key, e.g. '2024-03-15-09'."""
    return f"{day_key(d)}-{hour:02d}"


def local_start(event: ScheduledEvent, tz: tzinfo | None = None) -> datetime | None:
    """Start instant in the viewer's zone; naive starts are already local."""
    if event.start is None:
        return None
    if event.start.tzinfo is not None and tz is not None:
        return event.start.astimezone(tz)
    return event.start


def local_end(event: ScheduledEvent, tz: tzinfo | None = None) -> datetime | None:
    if event.end is None:
        return None
    if event.end.tzinfo is not None and tz is not None:
        return event.end.astimezone(tz)
    return event.end


def build_day_index(
    events: list[ScheduledEvent], tz: tzinfo | None = None
) -> dict[str, list[ScheduledEvent]]:
    """
    Group events by the local calendar date of their start.

    Input order is preserved inside a bucket. Events without a usable start
    are left out.
    """
    index: dict[str, list[ScheduledEvent]] = defaultdict(list)
    for event in events:
        start = local_start(event, tz)
        if start is None:
            continue
        index[day_key(start.date())].append(event)
    return dict(index)


def build_hour_index(
    events: list[ScheduledEvent], days: list[date], tz: tzinfo | None = None
) -> dict[tuple[str, int], list[ScheduledEvent]]:
    """Group events by (day key, start hour), restricted to the given days."""
    visible = {day_key(d) for d in days}
    index: dict[tuple[str, int], list[ScheduledEvent]] = defaultdict(list)
    for event in events:
        start = local_start(event, tz)
        if start is None:
            continue
        key = day_key(start.date())
        if key in visible:
            index[(key, start.hour)].append(event)
    return dict(index)


# =============================================================================
# FILTERS
# =============================================================================


def filter_events(
    events: list[ScheduledEvent],
    technician_id: int | None = None,
    status: str | None = None,
) -> list[ScheduledEvent]:
    """Keep events assigned to a technician and/or in a given status."""
    filtered = []
    for event in events:
        if technician_id is not None and event.technician_id != technician_id:
            continue
        if status is not None and event.status != status:
            continue
        filtered.append(event)
    return filtered


def events_on(
    events: list[ScheduledEvent], d: date, tz: tzinfo | None = None
) -> list[ScheduledEvent]:
    return build_day_index(events, tz).get(day_key(d), [])


def events_in_week(
    events: list[ScheduledEvent],
    anchor: date,
    tz: tzinfo | None = None,
    limit: int | None = None,
) -> list[ScheduledEvent]:
    """Events starting in the Monday-to-Sunday week containing anchor."""
    monday = anchor - timedelta(days=anchor.weekday())
    sunday = monday + timedelta(days=6)
    week = []
    for event in events:
        start = local_start(event, tz)
        if start is not None and monday <= start.date() <= sunday:
            week.append(event)
    if limit is not None:
        return week[:limit]
    return week
