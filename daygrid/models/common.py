# File: daygrid/models/common.py

from datetime import date, datetime, time
from typing import Optional, Union

TimeValue = Union[str, date, datetime, None]


def parse_iso_datetime(value: TimeValue) -> Optional[datetime]:
    """
    Read an event timestamp from an API record.

    Strings may carry a 'Z' suffix, an offset, or only a date. Date values
    mean midnight of that day. Returns None for anything unreadable.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        return None

    text = value.strip()
    # fromisoformat only accepts 'Z' from Python 3.11 on
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.strptime(text, "%Y-%m-%d")
    except ValueError:
        return None
