# File: tests/integration/test_drag_flow.py
"""
Integration tests for a full drag gesture.
Tests render -> drag -> preview layout -> drop -> optimistic update with a
mocked persistence call.
"""

import pytest
from datetime import datetime, timedelta
from unittest.mock import Mock

from daygrid.core.layout_engine import LayoutEngine
from daygrid.core.reschedule_controller import RescheduleController
from daygrid.models import LayoutParams, SnapParams, ViewKind
from daygrid.processors.event_processor import DayColumnProcessor, parse_events
from daygrid.services.event_store import EventStore

pytestmark = pytest.mark.integration


@pytest.fixture
def api_records():
    """Event records as the host API returns them."""
    return [
        {'id': 1, 'title': 'Focus block', 'start_time': '2025-11-18T09:00:00', 'end_time': '2025-11-18T12:00:00'},
        {'id': 2, 'title': 'Standup', 'start_time': '2025-11-18T09:30:00', 'end_time': '2025-11-18T09:45:00'},
        {'id': 3, 'title': 'Review', 'start_time': '2025-11-18T14:00:00', 'end_time': '2025-11-18T15:30:00'},
        {'id': 4, 'title': 'Interview', 'start_time': '2025-11-19T10:00:00', 'end_time': '2025-11-19T11:00:00'},
        {'id': 5, 'title': 'Broken', 'start_time': '2025-11-18T18:00:00', 'end_time': '2025-11-18T17:00:00'},
    ]


@pytest.fixture
def store(api_records):
    return EventStore(parse_events(api_records))


@pytest.fixture
def processor():
    return DayColumnProcessor(LayoutEngine(LayoutParams()), cell_height_px=60)


@pytest.fixture
def controller():
    return RescheduleController(ViewKind.WEEK, SnapParams())


class TestDragFlow:
    """Drag the 90 minute review onto the next day's interview."""

    def test_preview_is_laid_out_with_overlaps(self, store, processor, controller, track, pointer_at, next_day):
        review = store.get(3)
        session = controller.begin_drag(review)

        session = controller.drag_move(session, next_day, column_index=2, pointer_y=pointer_at(10, 20), track=track)
        column = processor.prepare(store.events, next_day, preview=session.preview)

        assert session.drop_column == 2
        assert session.preview.start == datetime(2025, 11, 19, 10, 15)
        assert column.placements[3].total_columns == 2
        assert column.placements[4].total_columns == 2
        assert {column.placements[3].column, column.placements[4].column} == {0, 1}

        # The source day no longer shows the dragged event in the preview
        source = processor.prepare(store.events, review.start.date(), preview=session.preview)
        assert 3 not in source.placements
        assert source.placements[1].is_container
        assert 5 not in source.placements

    def test_successful_drop_updates_store(self, store, controller, track, pointer_at, next_day):
        persist = Mock(return_value=True)
        session = controller.begin_drag(store.get(3))

        intent = controller.commit_drop(session, next_day, pointer_at(13), track)
        assert store.apply_intent(intent, persist) is True

        moved = store.get(3)
        assert moved.start == datetime(2025, 11, 19, 13, 0)
        assert moved.end - moved.start == timedelta(minutes=90)
        persist.assert_called_once_with(3, {
            'start_time': '2025-11-19T13:00:00',
            'end_time': '2025-11-19T14:30:00',
        })

    def test_failed_persist_rolls_back(self, store, controller, track, pointer_at, next_day):
        before = store.events
        persist = Mock(side_effect=ConnectionError("backend unavailable"))
        session = controller.begin_drag(store.get(3))

        intent = controller.commit_drop(session, next_day, pointer_at(13), track)

        assert store.apply_intent(intent, persist) is False
        assert store.events == before
        persist.assert_called_once()

    def test_falsy_persist_result_rolls_back(self, store, controller, next_day):
        before = store.events
        session = controller.begin_drag(store.get(2))

        intent = controller.commit_drop(session, next_day)

        assert store.apply_intent(intent, Mock(return_value=False)) is False
        assert store.events == before

    def test_optimistic_state_visible_during_persist(self, store, controller, track, pointer_at, next_day):
        seen = {}

        def persist(event_id, payload):
            seen['start'] = store.get(event_id).start
            return True

        session = controller.begin_drag(store.get(3))
        intent = controller.commit_drop(session, next_day, pointer_at(16), track)
        store.apply_intent(intent, persist)

        assert seen['start'] == datetime(2025, 11, 19, 16, 0)

    def test_unknown_event_is_not_applied(self, store, controller, next_day):
        session = controller.begin_drag(store.get(3))
        intent = controller.commit_drop(session, next_day)
        store.replace_all([e for e in store.events if e.event_id != 3])
        persist = Mock(return_value=True)

        assert store.apply_intent(intent, persist) is False
        persist.assert_not_called()

    def test_cancelled_drag_leaves_store_untouched(self, store, controller, track, pointer_at, next_day):
        before = store.events
        session = controller.begin_drag(store.get(3))
        controller.drag_move(session, next_day, column_index=1, pointer_y=pointer_at(8), track=track)

        # Cancelling simply drops the session
        del session

        assert store.events == before
