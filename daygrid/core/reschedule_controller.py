# File: daygrid/core/reschedule_controller.py
"""
Drag-and-drop rescheduling module.
Turns pointer positions over a rendered grid into snapped calendar times,
live previews and the final commit intent for the host.
"""

import datetime
import math
from typing import Optional, Union

from daygrid.core.config_manager import Config
from daygrid.models import (
    CalendarEvent, CommitIntent, DragSession, SnappedTime, SnapParams,
    TrackGeometry, ViewKind, InvalidEventError
)
from daygrid.utils.interval import combine_in_zone, shift_instant
from daygrid.utils.logger import LoggerMixin

DateLike = Union[datetime.date, datetime.datetime]


def compute_snapped_time(
    pointer_y: float,
    track_top_y: float,
    scroll_offset: float,
    cell_height_px: float,
    header_offset_px: float = 40.0,
    snap_minutes: int = 15
) -> Optional[SnappedTime]:
    """
    Convert a vertical pointer position into a clock time on the snap grid.

    Args:
        pointer_y: Pointer position in the same coordinates as track_top_y
        track_top_y: Top edge of the scrolling time grid
        scroll_offset: How far the grid is scrolled
        cell_height_px: Height of one hour row; no track when not positive
        header_offset_px: Header strip above the 00:00 row
        snap_minutes: Snap granularity, must divide 60

    Returns:
        SnappedTime clamped to [00:00, last slot], or None without a track

    Example:
        >>> compute_snapped_time(127, 0, 0, 60)
        SnappedTime(hour=1, minute=30)
    """
    if not cell_height_px or cell_height_px <= 0:
        return None

    relative_y = pointer_y - track_top_y + scroll_offset - header_offset_px
    total_minutes = relative_y / cell_height_px * 60

    hour = math.floor(total_minutes / 60)
    raw_minute = total_minutes - hour * 60
    # Round half up, the way a pointer halfway between slots should land
    minute = int(math.floor(raw_minute / snap_minutes + 0.5)) * snap_minutes
    if minute == 60:
        hour += 1
        minute = 0

    last_slot = 24 * 60 - snap_minutes
    snapped = max(0, min(hour * 60 + minute, last_slot))
    return SnappedTime(hour=snapped // 60, minute=snapped % 60)


def _as_date(target_date: DateLike) -> datetime.date:
    if isinstance(target_date, datetime.datetime):
        return target_date.date()
    return target_date


class RescheduleController(LoggerMixin):
    """
    Pure drag-and-drop computations for one calendar view.

    Holds only the view kind and snap parameters; the drag state lives in
    the DragSession values the host passes in and gets back.
    """

    def __init__(self, view_kind: ViewKind = ViewKind.WEEK,
                 snap_params: Optional[SnapParams] = None):
        """
        Initialize the controller.

        Args:
            view_kind: Grid the host renders; month views have no time track
            snap_params: Snap grid settings (default: from Config)
        """
        self.view_kind = view_kind
        self.snap_params = snap_params or Config.snap_params()

    def begin_drag(self, event: CalendarEvent, grab_offset_y: float = 0.0) -> DragSession:
        """
        Start a drag gesture for an event.

        Raises:
            InvalidEventError: The event has no usable duration
        """
        duration = event.duration
        if duration < datetime.timedelta(0):
            raise InvalidEventError(f"Event {event.event_id!r} has a negative duration", field='duration')

        self.logger.debug(f"Drag started for {event.event_id!r} ({duration})")
        return DragSession(
            event=event,
            original_start=event.start,
            original_end=event.end,
            duration=duration,
            grab_offset_y=grab_offset_y,
        )

    def compute_snapped_time(self, pointer_y: Optional[float],
                             track: Optional[TrackGeometry]) -> Optional[SnappedTime]:
        """Snapped clock time under the pointer, or None when there is no time track."""
        if pointer_y is None or track is None or not self.view_kind.has_time_track:
            return None
        return compute_snapped_time(
            pointer_y,
            track.top_y,
            track.scroll_offset,
            track.cell_height_px,
            header_offset_px=(track.header_offset_px if track.header_offset_px is not None
                              else self.snap_params.header_offset_px),
            snap_minutes=self.snap_params.snap_minutes,
        )

    def drag_move(
        self,
        session: DragSession,
        target_date: DateLike,
        column_index: Optional[int] = None,
        pointer_y: Optional[float] = None,
        track: Optional[TrackGeometry] = None,
        slot_hour: Optional[int] = None
    ) -> DragSession:
        """
        Update a drag for a new pointer position.

        Returns a new session carrying the preview event and the
        highlighted drop column. Day views have a single column, so
        nothing is highlighted there.
        """
        preview = self.preview_drop(session, target_date, pointer_y, track, slot_hour)
        drop_column = None if self.view_kind is ViewKind.DAY else column_index
        return session.with_preview(preview, drop_column)

    def preview_drop(
        self,
        session: DragSession,
        target_date: DateLike,
        pointer_y: Optional[float] = None,
        track: Optional[TrackGeometry] = None,
        slot_hour: Optional[int] = None
    ) -> CalendarEvent:
        """Synthetic copy of the dragged event at the drop position, never persisted."""
        new_start, new_end = self._target_interval(session, target_date, pointer_y, track, slot_hour)
        return session.event.moved_to(new_start, new_end)

    def commit_drop(
        self,
        session: DragSession,
        target_date: DateLike,
        pointer_y: Optional[float] = None,
        track: Optional[TrackGeometry] = None,
        slot_hour: Optional[int] = None
    ) -> CommitIntent:
        """
        Final update intent for a drop.

        The host applies it optimistically and persists it; restoring the
        pre-drag state on a failed persist is the host's job.
        """
        new_start, new_end = self._target_interval(session, target_date, pointer_y, track, slot_hour)
        self.logger.info(
            f"Rescheduling {session.event_id!r}: "
            f"{session.original_start.isoformat()} -> {new_start.isoformat()}"
        )
        return CommitIntent(event_id=session.event_id, new_start=new_start, new_end=new_end)

    def _target_interval(self, session, target_date, pointer_y, track, slot_hour):
        day = _as_date(target_date)
        start = session.original_start
        end = session.original_end

        if session.event.all_day:
            # Stays a full-day span, shifted by whole days
            day_span = end.date() - start.date()
            return (
                combine_in_zone(day, start.time(), start),
                combine_in_zone(day + day_span, end.time(), end),
            )

        if pointer_y is not None and self.snap_params.anchor_to_grab:
            pointer_y -= session.grab_offset_y

        snapped = self.compute_snapped_time(pointer_y, track)
        if snapped is not None:
            new_start = combine_in_zone(day, datetime.time(snapped.hour, snapped.minute), start)
        elif slot_hour is not None:
            new_start = combine_in_zone(day, datetime.time(slot_hour), start)
        else:
            new_start = combine_in_zone(day, start.time(), start)

        return new_start, shift_instant(new_start, session.duration)
