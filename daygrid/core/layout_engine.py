# File: daygrid/core/layout_engine.py
"""
Event layout module.
Assigns side-by-side columns to the events of one day column so that
overlapping events do not hide each other and long events wrapping
shorter ones are drawn as a background block with the short ones inset.
"""

from typing import Dict, Hashable, Iterable, List, Optional

from daygrid.core.config_manager import Config
from daygrid.models import CalendarEvent, Placement, LayoutParams
from daygrid.utils.interval import to_instant, span, overlaps, contains
from daygrid.utils.logger import setup_logger

logger = setup_logger(__name__)


def _start_order(event: CalendarEvent):
    """Start ascending, longer first on ties so containers come before their children."""
    return (to_instant(event.start), -span(event.start, event.end), str(event.event_id))


def _length_order(event: CalendarEvent):
    return (-span(event.start, event.end), to_instant(event.start), str(event.event_id))


def _overlap(a: CalendarEvent, b: CalendarEvent) -> bool:
    return overlaps(a.start, a.end, b.start, b.end)


def _nests_inside(inner: CalendarEvent, outer: CalendarEvent) -> bool:
    # An empty event sitting on the container's edge shares no visible time with it
    return contains(outer.start, outer.end, inner.start, inner.end) and _overlap(inner, outer)


class LayoutEngine:
    """Computes per-event placements for one day column."""

    def __init__(self, params: Optional[LayoutParams] = None):
        """
        Initialize the layout engine.

        Args:
            params: Presentation heuristics (default: from Config)
        """
        self.params = params or Config.layout_params()

    def layout(self, events: Iterable[CalendarEvent]) -> Dict[Hashable, Placement]:
        """
        Lay out the events of one day column.

        Never fails: invalid intervals and duplicate ids are logged and
        left out, an empty input gives an empty map. The result does not
        depend on the order events are supplied in.

        Args:
            events: Events sharing one day column

        Returns:
            Mapping of event id to Placement
        """
        valid = self._filter_valid(events)
        placements: Dict[Hashable, Placement] = {}
        if not valid:
            return placements

        processed = set()
        container_count = 0

        # Containers first: the longest event that wraps other events
        for container in sorted(valid, key=_length_order):
            if container.event_id in processed:
                continue

            children = [
                e for e in valid
                if e.event_id != container.event_id
                and e.event_id not in processed
                and _nests_inside(e, container)
            ]
            if not children:
                continue

            placements[container.event_id] = Placement(
                column=0,
                total_columns=1,
                width_pct=100.0,
                left_pct=0.0,
                z_index=self.params.container_z_index,
                opacity=self.params.container_opacity,
                is_container=True,
            )
            processed.add(container.event_id)
            container_count += 1

            inner = pack_columns(children, self.params, self.params.contained_z_base)
            for child in children:
                pos = inner[child.event_id]
                placements[child.event_id] = Placement(
                    column=pos.column,
                    total_columns=pos.total_columns,
                    width_pct=pos.width_pct * self.params.inset_scale,
                    left_pct=self.params.inset_left_pct + pos.left_pct * self.params.inset_scale,
                    z_index=pos.z_index,
                    opacity=pos.opacity,
                    is_contained=True,
                )
                processed.add(child.event_id)

        remaining = [e for e in valid if e.event_id not in processed]
        placements.update(pack_columns(remaining, self.params, self.params.general_z_base))

        logger.debug(
            f"Laid out {len(placements)} events "
            f"({container_count} containers, {len(remaining)} in general pass)"
        )
        return placements

    def _filter_valid(self, events: Iterable[CalendarEvent]) -> List[CalendarEvent]:
        """
        Drop events with end before start and repeated ids.

        Runs in start order, so the earliest occurrence of an id is kept
        whatever order the events arrived in.
        """
        valid: List[CalendarEvent] = []
        seen = set()
        for event in sorted(events, key=_start_order):
            if not event.is_valid():
                logger.warning(
                    f"Skipping event {event.event_id!r}: end {event.end.isoformat()} "
                    f"is before start {event.start.isoformat()}"
                )
                continue
            if event.event_id in seen:
                logger.warning(f"Skipping duplicate event id {event.event_id!r}")
                continue
            seen.add(event.event_id)
            valid.append(event)
        return valid


def pack_columns(events: Iterable[CalendarEvent], params: Optional[LayoutParams] = None,
                 z_base: Optional[int] = None) -> Dict[Hashable, Placement]:
    """
    Single-hop column packing.

    Each not yet grouped event that overlaps anything takes every
    remaining event overlapping it directly as its group; members get
    consecutive columns in start order. This keeps a stable left to
    right order rather than the minimal number of columns.

    Args:
        events: Valid events to pack
        params: Presentation heuristics (default: from Config)
        z_base: Stacking order of column 0 (default: params.general_z_base)

    Returns:
        Mapping of event id to Placement
    """
    params = params or Config.layout_params()
    if z_base is None:
        z_base = params.general_z_base
    ordered = sorted(events, key=_start_order)

    flagged = set()
    for i, first in enumerate(ordered):
        for second in ordered[i + 1:]:
            if _overlap(first, second):
                flagged.add(first.event_id)
                flagged.add(second.event_id)

    placements: Dict[Hashable, Placement] = {}
    grouped = set()

    for event in ordered:
        if event.event_id in grouped:
            continue

        if event.event_id not in flagged:
            placements[event.event_id] = Placement(
                column=0,
                total_columns=1,
                width_pct=100.0,
                left_pct=0.0,
                z_index=z_base,
                opacity=params.base_opacity,
            )
            grouped.add(event.event_id)
            continue

        group = [event] + [
            other for other in ordered
            if other.event_id != event.event_id
            and other.event_id not in grouped
            and _overlap(event, other)
        ]
        grouped.update(member.event_id for member in group)

        width = params.group_width_pct / len(group)
        for column, member in enumerate(group):
            placements[member.event_id] = Placement(
                column=column,
                total_columns=len(group),
                width_pct=width,
                left_pct=column * width,
                z_index=z_base + column,
                opacity=params.opacity_for(column),
            )

    return placements


def layout(events: Iterable[CalendarEvent],
           params: Optional[LayoutParams] = None) -> Dict[Hashable, Placement]:
    """
    Lay out one day column.

    Without params the heuristics come from Config.layout_params(), the
    same default LayoutEngine uses, so env and layout.json overrides apply.
    """
    return LayoutEngine(params).layout(events)
