"""
Calendar widget display preferences.

Settings are an explicit object handed to the calendar; persistence goes
through load/save hooks supplied by the caller.
"""

from collections.abc import Callable
from dataclasses import asdict, dataclass
from pathlib import Path

from core.config import (
    CALENDAR_TIMEZONE,
    DAY_END_HOUR,
    DAY_START_HOUR,
    DEFAULT_GRANULARITY,
    MAX_CHIPS_PER_DAY,
    SCROLL_TO_HOUR,
)
from core.database import SETTINGS_KEY, get_connection, init_schema, load_settings, save_settings
from models.events import Granularity


@dataclass
class CalendarSettings:
    """Display preferences of the calendar widget."""

    default_granularity: str = DEFAULT_GRANULARITY
    max_chips_per_day: int = MAX_CHIPS_PER_DAY
    day_start_hour: int = DAY_START_HOUR
    day_end_hour: int = DAY_END_HOUR
    scroll_to_hour: int = SCROLL_TO_HOUR
    timezone: str = CALENDAR_TIMEZONE

    @property
    def hours(self) -> list[int]:
        """Rows of the week view hour axis."""
        return list(range(self.day_start_hour, self.day_end_hour + 1))

    def validate(self) -> "CalendarSettings":
        """Raise ValueError on inconsistent values, return self otherwise."""
        errors = []
        if self.default_granularity not in Granularity.ALL:
            errors.append(f"Invalid granularity '{self.default_granularity}'")
        if self.max_chips_per_day < 1:
            errors.append("max_chips_per_day must be at least 1")
        if not 0 <= self.day_start_hour <= self.day_end_hour <= 23:
            errors.append(
                f"Invalid hour range {self.day_start_hour}-{self.day_end_hour}"
            )
        elif not self.day_start_hour <= self.scroll_to_hour <= self.day_end_hour:
            errors.append(f"scroll_to_hour {self.scroll_to_hour} outside hour range")
        if errors:
            raise ValueError("\n".join(errors))
        return self

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict | None) -> "CalendarSettings":
        """Build settings from stored values, ignoring unknown keys."""
        if not data:
            return cls()
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        try:
            settings = cls(**known)
            for name in ("max_chips_per_day", "day_start_hour", "day_end_hour", "scroll_to_hour"):
                setattr(settings, name, int(getattr(settings, name)))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid calendar settings: {e}") from e
        return settings.validate()


LoadHook = Callable[[], dict | None]
SaveHook = Callable[[dict], None]


class SettingsStore:
    """Load/save hooks around CalendarSettings."""

    def __init__(self, load: LoadHook, save: SaveHook):
        self._load = load
        self._save = save

    def load(self) -> CalendarSettings:
        return CalendarSettings.from_dict(self._load())

    def save(self, settings: CalendarSettings) -> None:
        self._save(settings.validate().to_dict())


def memory_store(initial: dict | None = None) -> SettingsStore:
    """In-process store, mostly for tests and one-off scripts."""
    data = {"value": dict(initial) if initial else None}

    def load() -> dict | None:
        return data["value"]

    def save(values: dict) -> None:
        data["value"] = dict(values)

    return SettingsStore(load, save)


def sqlite_store(db_path: Path | None = None, key: str = SETTINGS_KEY) -> SettingsStore:
    """Store whose hooks read/write the calendar_settings table."""

    def load() -> dict | None:
        conn = get_connection(db_path)
        try:
            init_schema(conn)
            return load_settings(conn, key)
        finally:
            conn.close()

    def save(values: dict) -> None:
        conn = get_connection(db_path)
        try:
            init_schema(conn)
            save_settings(conn, values, key)
        finally:
            conn.close()

    return SettingsStore(load, save)
