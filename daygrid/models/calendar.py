# File: daygrid/models/calendar.py

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Hashable, Optional

from .common import parse_iso_datetime
from daygrid.utils.interval import span
from .errors import InvalidEventError


@dataclass(frozen=True)
class CalendarEvent:
    """
    A calendar event as handed over by the host.

    Read-only from the grid's point of view: rescheduling derives a new
    instance with ``moved_to`` instead of touching this one.
    """
    event_id: Hashable
    start: datetime
    end: datetime
    all_day: bool = False
    title: str = ""
    # Fixed length in minutes, used when start/end cannot give one during a drag
    duration_minutes: Optional[int] = None
    color: Optional[str] = None

    def is_valid(self) -> bool:
        """Half-open interval [start, end) needs end >= start."""
        return span(self.start, self.end) >= timedelta(0)

    @property
    def duration(self) -> timedelta:
        """Length of the event; the fixed duration stands in when start/end are unusable."""
        if self.is_valid():
            return span(self.start, self.end)
        if self.duration_minutes is not None:
            return timedelta(minutes=self.duration_minutes)
        raise InvalidEventError(
            f"Event {self.event_id!r} ends before it starts and has no fixed duration",
            field='end_time',
        )

    def moved_to(self, start: datetime, end: datetime) -> 'CalendarEvent':
        """Return a copy of this event spanning the new interval."""
        return replace(self, start=start, end=end)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the record shape used by the host API."""
        return {
            'id': self.event_id,
            'title': self.title,
            'start_time': self.start.isoformat(),
            'end_time': self.end.isoformat(),
            'all_day': self.all_day,
            'duration': self.duration_minutes,
            'color': self.color,
        }


def _parse_bool(value: Any) -> bool:
    return str(value).strip().lower() in ['yes', 'true', '1', 'y', 't']


def event_from_dict(data: dict) -> CalendarEvent:
    """
    Create CalendarEvent from a host API record.

    Accepts both ``all_day`` and ``isAllDay`` flags. Raises
    InvalidEventError naming the field that could not be read; an end
    before the start is NOT rejected here, the layout skips those.
    """
    event_id = data.get('id', data.get('event_id'))
    if event_id is None:
        raise InvalidEventError("Event record has no id", field='id')

    start = parse_iso_datetime(data.get('start_time', data.get('start')))
    if start is None:
        raise InvalidEventError(f"Event {event_id} has no readable start_time", field='start_time')

    end = parse_iso_datetime(data.get('end_time', data.get('end')))
    if end is None:
        raise InvalidEventError(f"Event {event_id} has no readable end_time", field='end_time')

    raw_duration = data.get('duration')
    try:
        duration_minutes = int(float(raw_duration)) if raw_duration not in (None, '') else None
    except (TypeError, ValueError):
        raise InvalidEventError(f"Event {event_id} has a non-numeric duration", field='duration')

    return CalendarEvent(
        event_id=event_id,
        start=start,
        end=end,
        all_day=_parse_bool(data.get('all_day', data.get('isAllDay', False))),
        title=str(data.get('title', 'Untitled Event')),
        duration_minutes=duration_minutes,
        color=data.get('color'),
    )
