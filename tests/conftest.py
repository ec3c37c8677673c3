# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides reusable events and controllers for all tests.
"""

import os
import sys
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest
import pytz

# Keep test runs from writing log files
os.environ.setdefault("DAYGRID_LOG_DIR", "")

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from daygrid.models import CalendarEvent, LayoutParams, SnapParams, TrackGeometry, ViewKind
from daygrid.core.layout_engine import LayoutEngine
from daygrid.core.reschedule_controller import RescheduleController


# ==================== Date/Time Fixtures ====================

@pytest.fixture
def day():
    """A fixed Tuesday, far from any DST switch."""
    return date(2025, 11, 18)


@pytest.fixture
def next_day(day):
    return day + timedelta(days=1)


@pytest.fixture
def amsterdam():
    return pytz.timezone("Europe/Amsterdam")


# ==================== Event Fixtures ====================

@pytest.fixture
def make_event(day):
    """Factory fixture: make_event("a", "09:00", "10:00")."""
    def _create(event_id, start: str, end: str, on: date = None, **kwargs) -> CalendarEvent:
        on = on or day
        sh, sm = map(int, start.split(":"))
        eh, em = map(int, end.split(":"))
        return CalendarEvent(
            event_id=event_id,
            start=datetime(on.year, on.month, on.day, sh, sm),
            end=datetime(on.year, on.month, on.day, eh, em),
            title=kwargs.pop("title", f"Event {event_id}"),
            **kwargs
        )

    return _create


@pytest.fixture
def meeting(make_event):
    """A 90 minute meeting."""
    return make_event("meeting", "10:00", "11:30")


@pytest.fixture
def all_day_event(day):
    return CalendarEvent(
        event_id="holiday",
        start=datetime(day.year, day.month, day.day, 0, 0),
        end=datetime(day.year, day.month, day.day, 23, 59),
        all_day=True,
        title="Holiday",
    )


# ==================== Engine Fixtures ====================

@pytest.fixture
def layout_params():
    return LayoutParams()


@pytest.fixture
def engine(layout_params):
    return LayoutEngine(layout_params)


@pytest.fixture
def snap_params():
    return SnapParams()


@pytest.fixture
def week_controller(snap_params):
    return RescheduleController(ViewKind.WEEK, snap_params)


@pytest.fixture
def track():
    """Track at the top of the viewport, not scrolled, 60px per hour, 40px header."""
    return TrackGeometry(top_y=0, scroll_offset=0, cell_height_px=60, header_offset_px=40)


@pytest.fixture
def pointer_at():
    """Pointer y over the given clock time on the default track."""
    def _pointer(hour: int, minute: int = 0) -> float:
        return 40 + hour * 60 + minute

    return _pointer


# ==================== Helper Fixtures ====================

@pytest.fixture
def assert_layout_valid():
    """Helper checking the placement invariants."""
    def _assert_valid(placements, events):
        valid_ids = {e.event_id for e in events if e.is_valid()}
        assert set(placements) == valid_ids, "Every valid event is placed exactly once"

        for event_id, p in placements.items():
            assert 0 <= p.column < p.total_columns, f"{event_id}: column out of range"
            assert p.left_pct + p.width_pct <= 100.0 + 1e-9, f"{event_id}: overflows track"
            assert 0 <= p.opacity < 1, f"{event_id}: opacity out of range"

    return _assert_valid


# ==================== Pytest Markers ====================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
