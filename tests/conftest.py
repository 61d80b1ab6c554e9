"""
Pytest configuration and shared fixtures.
"""

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

# Settings and request logs go to a throwaway database
_TMP_DIR = Path(tempfile.mkdtemp(prefix="artisan-calendar-tests-"))
os.environ["ARTISAN_DB_PATH"] = str(_TMP_DIR / "test.db")
os.environ["ARTISAN_API_KEY"] = "test-key"
os.environ["CALENDAR_TIMEZONE"] = "Europe/Paris"

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from faker import Faker

from models.events import ClientRef, EventStatus, ScheduledEvent


@pytest.fixture
def make_event():
    """Factory for naive (already local) events."""

    def _make(event_id=1, start="2024-03-15T09:30:00", title=None, **kwargs):
        return ScheduledEvent(
            id=event_id,
            title=title or f"Intervention {event_id}",
            start=datetime.fromisoformat(start) if isinstance(start, str) else start,
            **kwargs,
        )

    return _make


@pytest.fixture
def sample_event(make_event):
    """Sample intervention for testing."""
    return make_event(
        event_id=42,
        start="2024-03-15T09:30:00",
        title="Remplacement chauffe-eau",
        end=datetime(2024, 3, 15, 11, 0),
        status=EventStatus.PLANNED,
        client=ClientRef(name="Martin", first_name="Léa"),
    )


@pytest.fixture
def random_events():
    """A year of randomly timed interventions, reproducible across runs."""
    Faker.seed(1234)
    fake = Faker("fr_FR")
    events = []
    for event_id in range(1, 301):
        events.append(
            ScheduledEvent(
                id=event_id,
                title=fake.sentence(nb_words=3),
                start=fake.date_time_between(
                    start_date=datetime(2024, 1, 1), end_date=datetime(2024, 12, 31)
                ),
                status=fake.random_element(EventStatus.ALL),
                client=ClientRef(name=fake.last_name(), first_name=fake.first_name()),
            )
        )
    return events
