from .enums import ViewKind
from .errors import InvalidEventError
from .common import parse_iso_datetime
from .calendar import CalendarEvent, event_from_dict
from .placement import Placement, LayoutParams
from .drag import TrackGeometry, SnappedTime, SnapParams, DragSession, CommitIntent
from .day_column import DayColumn

__all__ = [
    "ViewKind",
    "InvalidEventError",
    "parse_iso_datetime",
    "CalendarEvent",
    "event_from_dict",
    "Placement",
    "LayoutParams",
    "TrackGeometry",
    "SnappedTime",
    "SnapParams",
    "DragSession",
    "CommitIntent",
    "DayColumn"
]
