# File: daygrid/services/event_store.py

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional

from daygrid.models import CalendarEvent, CommitIntent
from daygrid.utils.logger import setup_logger

logger = setup_logger(__name__)

# persist(event_id, {"start_time": ..., "end_time": ...}) -> truthy on success
PersistFn = Callable[[Hashable, Dict[str, Any]], Any]


class EventStore:
    """
    The host's in-memory event list with optimistic rescheduling.

    Persistence stays external: apply_intent calls the injected persist
    callable and restores the pre-drop list when it fails.
    """

    def __init__(self, events: Optional[Iterable[CalendarEvent]] = None):
        self._events: List[CalendarEvent] = list(events or [])

    @property
    def events(self) -> List[CalendarEvent]:
        return list(self._events)

    def get(self, event_id: Hashable) -> Optional[CalendarEvent]:
        for event in self._events:
            if event.event_id == event_id:
                return event
        return None

    def replace_all(self, events: Iterable[CalendarEvent]) -> None:
        """Swap in a freshly fetched event list."""
        self._events = list(events)

    def apply_intent(self, intent: CommitIntent, persist: PersistFn) -> bool:
        """
        Apply a commit intent optimistically, then persist it.

        Args:
            intent: Commit intent from the reschedule controller
            persist: External update call; failure is an exception or a falsy result

        Returns:
            True if the update was persisted, False if it was rolled back
        """
        current = self.get(intent.event_id)
        if current is None:
            logger.warning(f"Cannot apply update for unknown event {intent.event_id!r}")
            return False

        snapshot = list(self._events)
        updated = current.moved_to(intent.new_start, intent.new_end)
        self._events = [updated if e.event_id == intent.event_id else e for e in self._events]

        try:
            if not persist(intent.event_id, intent.to_update_payload()):
                raise RuntimeError("persistence call reported failure")
        except Exception as e:
            logger.error(f"Error updating event {intent.event_id!r}, rolling back: {e}", exc_info=True)
            self._events = snapshot
            return False

        logger.info(f"Event {intent.event_id!r} updated successfully")
        return True
