# File: daygrid/models/drag.py
"""
Data models for pointer-driven rescheduling.
"""

from dataclasses import dataclass, fields, replace
from datetime import datetime, timedelta
from typing import Any, Dict, Hashable, Optional

from .calendar import CalendarEvent
from daygrid.utils.interval import span


@dataclass(frozen=True)
class TrackGeometry:
    """Where the hour track sits on screen, supplied by the host per pointer event."""
    top_y: float
    scroll_offset: float = 0.0
    cell_height_px: float = 60.0
    header_offset_px: Optional[float] = None  # default: SnapParams.header_offset_px


@dataclass(frozen=True)
class SnappedTime:
    """A clock time on the snap grid."""
    hour: int
    minute: int

    @property
    def total_minutes(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass
class SnapParams:
    """Parameters of the time grid drags snap against."""
    snap_minutes: int = 15
    header_offset_px: float = 40.0
    # Subtract where the event was grabbed so its top edge follows the pointer
    anchor_to_grab: bool = False

    def __post_init__(self):
        if self.snap_minutes <= 0 or 60 % self.snap_minutes != 0:
            raise ValueError(f"snap_minutes must divide an hour, got {self.snap_minutes}")

    @classmethod
    def from_dict(cls, data: dict) -> 'SnapParams':
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True)
class DragSession:
    """
    State of one drag gesture.

    Owned by the host; every drag-move produces a new session through
    ``with_preview`` and a cancelled drag is simply dropped.
    """
    event: CalendarEvent
    original_start: datetime
    original_end: datetime
    duration: timedelta
    grab_offset_y: float = 0.0
    preview: Optional[CalendarEvent] = None
    drop_column: Optional[int] = None

    @property
    def event_id(self) -> Hashable:
        return self.event.event_id

    def with_preview(self, preview: Optional[CalendarEvent], drop_column: Optional[int]) -> 'DragSession':
        return replace(self, preview=preview, drop_column=drop_column)


@dataclass(frozen=True)
class CommitIntent:
    """The authoritative {id, newStart, newEnd} a host applies and persists."""
    event_id: Hashable
    new_start: datetime
    new_end: datetime

    @property
    def duration(self) -> timedelta:
        return span(self.new_start, self.new_end)

    def to_update_payload(self) -> Dict[str, Any]:
        """Body for the external persistence call."""
        return {
            'start_time': self.new_start.isoformat(),
            'end_time': self.new_end.isoformat(),
        }
