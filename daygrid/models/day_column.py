# File: daygrid/models/day_column.py

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Hashable, List, Tuple

from .calendar import CalendarEvent
from .placement import Placement

@dataclass
class DayColumn:
    """Everything the renderer needs to draw one day of a day/week grid."""
    day: date
    all_day_events: List[CalendarEvent] = field(default_factory=list)
    timed_events: List[CalendarEvent] = field(default_factory=list)
    placements: Dict[Hashable, Placement] = field(default_factory=dict)
    # event id -> (top_px, height_px)
    extents: Dict[Hashable, Tuple[float, float]] = field(default_factory=dict)

    def boxes(self) -> List[dict]:
        """Merge placement and vertical extent per timed event, in draw order."""
        result = []
        for event in self.timed_events:
            placement = self.placements.get(event.event_id)
            if placement is None:
                continue
            top, height = self.extents[event.event_id]
            box = placement.to_dict()
            box.update({'id': event.event_id, 'topPx': top, 'heightPx': height})
            result.append(box)
        return sorted(result, key=lambda b: b['zIndex'])
