# File: daygrid/models/enums.py

from enum import Enum

class ViewKind(Enum):
    """Calendar grid the host is rendering."""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"

    @property
    def has_time_track(self) -> bool:
        """Only day and week grids have an hour track to snap against."""
        return self in (ViewKind.DAY, ViewKind.WEEK)
