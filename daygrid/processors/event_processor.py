# File: daygrid/processors/event_processor.py
"""
Day column processing module.
Parses host event records, picks the events of one day, separates all-day
events from timed ones and computes the geometry of each timed event box.
"""

import datetime
from typing import Iterable, List, Optional, Tuple

from daygrid.core.config_manager import Config
from daygrid.core.layout_engine import LayoutEngine
from daygrid.models import CalendarEvent, DayColumn, InvalidEventError, event_from_dict
from daygrid.utils.interval import span
from daygrid.utils.logger import setup_logger

logger = setup_logger(__name__)

MINUTES_PER_DAY = 24 * 60


def parse_events(records: Iterable[dict]) -> List[CalendarEvent]:
    """
    Convert host API records to CalendarEvent objects.

    Records that cannot be read are logged and skipped; records whose end
    precedes their start are kept so the layout can report them.
    """
    events: List[CalendarEvent] = []
    skipped = 0

    for record in records:
        try:
            events.append(event_from_dict(record))
        except InvalidEventError as e:
            skipped += 1
            logger.warning(f"Skipping event record ({e.field}): {e}")

    logger.debug(f"Parsed {len(events)} events ({skipped} skipped)")
    return events


def is_all_day(event: CalendarEvent) -> bool:
    """
    Whether an event belongs in the all-day strip.

    True for flagged events and for events running from 00:00 to 23:59
    of the same day, which is how some clients store all-day events.
    """
    if event.all_day:
        return True
    start, end = event.start, event.end
    return (
        start.hour == 0 and start.minute == 0
        and end.hour == 23 and end.minute == 59
        and start.date() == end.date()
    )


def events_for_day(events: Iterable[CalendarEvent], day: datetime.date) -> List[CalendarEvent]:
    """Events starting on the given calendar day, in their own timezone."""
    return [e for e in events if e.start.date() == day]


def split_all_day(events: Iterable[CalendarEvent]) -> Tuple[List[CalendarEvent], List[CalendarEvent]]:
    """Split events into (all_day, timed)."""
    all_day: List[CalendarEvent] = []
    timed: List[CalendarEvent] = []
    for event in events:
        (all_day if is_all_day(event) else timed).append(event)
    return all_day, timed


def vertical_extent(event: CalendarEvent, cell_height_px: float = Config.CELL_HEIGHT_PX) -> Tuple[float, float]:
    """
    Top offset and height of an event box in the hour track.

    Events running past midnight are cut at the bottom of the track.
    """
    start_minutes = event.start.hour * 60 + event.start.minute
    duration_minutes = max(span(event.start, event.end).total_seconds() / 60, 0)
    visible_minutes = min(duration_minutes, MINUTES_PER_DAY - start_minutes)

    top = start_minutes / 60 * cell_height_px
    height = visible_minutes / 60 * cell_height_px
    return top, height


def current_time_offset(now: Optional[datetime.datetime] = None,
                        cell_height_px: float = Config.CELL_HEIGHT_PX) -> float:
    """Pixel offset of the current-time line, wall clock in Config.TIMEZONE."""
    if now is None:
        now = datetime.datetime.now(Config.timezone())
    return (now.hour + now.minute / 60) * cell_height_px


class DayColumnProcessor:
    """Prepares one day column of a day or week grid for rendering."""

    def __init__(self, layout_engine: Optional[LayoutEngine] = None,
                 cell_height_px: float = Config.CELL_HEIGHT_PX):
        """
        Initialize the processor.

        Args:
            layout_engine: Engine used for horizontal placement
            cell_height_px: Height of one hour row
        """
        self.layout_engine = layout_engine or LayoutEngine()
        self.cell_height_px = cell_height_px

    def prepare(self, events: Iterable[CalendarEvent], day: datetime.date,
                preview: Optional[CalendarEvent] = None) -> DayColumn:
        """
        Build the DayColumn for a day.

        Args:
            events: All events the host knows about
            day: Day to render
            preview: Drag preview; replaces the event with the same id so
                the preview is drawn with its real overlap geometry

        Returns:
            DayColumn with placements and extents for the timed events
        """
        candidates = list(events)
        if preview is not None:
            candidates = [e for e in candidates if e.event_id != preview.event_id]
            candidates.append(preview)

        all_day, timed = split_all_day(events_for_day(candidates, day))
        placements = self.layout_engine.layout(timed)

        # Events the layout rejected are not drawn
        timed = [e for e in timed if e.event_id in placements]
        extents = {e.event_id: vertical_extent(e, self.cell_height_px) for e in timed}

        logger.debug(
            f"Prepared {day.isoformat()}: {len(all_day)} all-day, {len(timed)} timed"
        )
        return DayColumn(
            day=day,
            all_day_events=all_day,
            timed_events=timed,
            placements=placements,
            extents=extents,
        )
