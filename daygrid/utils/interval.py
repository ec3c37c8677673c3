# File: daygrid/utils/interval.py
"""
Interval math shared by the layout engine and the reschedule controller.

All comparisons and duration arithmetic happen on instants (UTC), so a
naive timestamp is read as UTC and aware ones keep their own offset.
"""

import datetime
from typing import Optional

import pytz


def to_instant(dt: datetime.datetime) -> datetime.datetime:
    """Return dt as an aware UTC datetime."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def span(start: datetime.datetime, end: datetime.datetime) -> datetime.timedelta:
    """Elapsed time between two timestamps, independent of wall-clock shifts."""
    return to_instant(end) - to_instant(start)


def overlaps(start1, end1, start2, end2) -> bool:
    """Half-open intersection test; touching endpoints do not overlap."""
    return to_instant(start1) < to_instant(end2) and to_instant(start2) < to_instant(end1)


def contains(outer_start, outer_end, inner_start, inner_end) -> bool:
    """True when [inner_start, inner_end) lies within [outer_start, outer_end)."""
    return (to_instant(inner_start) >= to_instant(outer_start)
            and to_instant(inner_end) <= to_instant(outer_end))


def _zone_of(dt: datetime.datetime) -> Optional[datetime.tzinfo]:
    tzinfo = dt.tzinfo
    if tzinfo is None:
        return None
    # pytz attaches a fixed-offset tzinfo per datetime; recover the full zone
    zone_name = getattr(tzinfo, 'zone', None)
    if zone_name:
        return pytz.timezone(zone_name)
    return tzinfo


def shift_instant(dt: datetime.datetime, delta: datetime.timedelta) -> datetime.datetime:
    """
    Move dt by delta of absolute time.

    Aware datetimes are shifted in UTC and converted back to their zone,
    so crossing a DST boundary keeps the elapsed duration exact.
    """
    zone = _zone_of(dt)
    if zone is None:
        return dt + delta
    return (dt.astimezone(pytz.utc) + delta).astimezone(zone)


def combine_in_zone(day: datetime.date, time_of_day: datetime.time,
                    like: datetime.datetime) -> datetime.datetime:
    """
    Build a timestamp on ``day`` at ``time_of_day`` in the same zone as ``like``.

    A wall time skipped by a spring-forward transition is moved past the
    gap (02:30 becomes 03:30 on the night clocks jump from 02:00 to 03:00).
    """
    naive = datetime.datetime.combine(day, time_of_day.replace(tzinfo=None))
    zone = _zone_of(like)
    if zone is None:
        return naive
    if hasattr(zone, 'localize'):
        return zone.normalize(zone.localize(naive))
    return naive.replace(tzinfo=zone)
