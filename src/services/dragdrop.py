"""
Drag-and-drop rescheduling of interventions.

A drag gesture is modelled as three channels:
  - source: start_drag() builds the payload naming the dragged event
  - target: drag_enter()/drag_leave() track the hovered cell
  - commit: drop() maps payload + target cell to a new start instant

The controller never persists anything; it hands (event_id, new_start) to
the reschedule callback and forgets about it.
"""

from collections.abc import Callable
from datetime import date, datetime, time, tzinfo

from models.events import DragPayload, ScheduledEvent

RescheduleCallback = Callable[[int, datetime], object]

IDLE = "idle"
HOVERING = "hovering"


class DragDropController:
    """Idle/Hovering state machine for a single pointer drag."""

    def __init__(self, on_drop: RescheduleCallback | None = None, tz: tzinfo | None = None):
        self.on_drop = on_drop
        self.tz = tz
        self.hover_key: str | None = None

    @property
    def droppable(self) -> bool:
        """Cells accept drops only when a reschedule callback exists."""
        return self.on_drop is not None

    @property
    def state(self) -> str:
        return HOVERING if self.hover_key is not None else IDLE

    def start_drag(self, event: ScheduledEvent) -> DragPayload | None:
        if not self.droppable:
            return None
        return DragPayload(event_id=event.id, original_start=event.start)

    def drag_enter(self, key: str) -> None:
        if not self.droppable:
            return
        self.hover_key = key

    def drag_leave(self) -> None:
        if not self.droppable:
            return
        self.hover_key = None

    def target_instant(
        self, payload: DragPayload, target_date: date, hour: int | None = None
    ) -> datetime:
        """
        New start for a drop on a cell.

        Month cells keep the event's local time of day; week cells use the
        row hour with minutes, seconds and microseconds zeroed.
        """
        original = payload.original_start
        if original is not None and original.tzinfo is not None and self.tz is not None:
            original = original.astimezone(self.tz)
        zone = original.tzinfo if original is not None else self.tz

        if hour is not None:
            if not 0 <= hour <= 23:
                raise ValueError(f"Hour out of range: {hour}")
            return datetime.combine(target_date, time(hour), tzinfo=zone)
        if original is None:
            return datetime.combine(target_date, time(0), tzinfo=zone)
        return datetime.combine(target_date, original.time(), tzinfo=zone)

    def drop(
        self, payload: DragPayload | None, target_date: date, hour: int | None = None
    ) -> datetime | None:
        """
        Commit a drop. Returns the proposed start, or None when nothing fired.

        Dropping on the cell the event already occupies still fires the
        callback; its return value is ignored.
        """
        if not self.droppable:
            return None
        self.hover_key = None
        if payload is None or payload.event_id is None:
            return None

        new_start = self.target_instant(payload, target_date, hour)
        self.on_drop(payload.event_id, new_start)
        return new_start
