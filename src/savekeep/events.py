import logging
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)

SAVE_COMPLETED = "save.completed"
LOAD_COMPLETED = "load.completed"
LOAD_NOT_FOUND = "load.not_found"
LOAD_RECOVERED_FROM_BACKUP = "load.recovered_from_backup"
PROFILE_CHANGED = "profile.changed"
AUTOSAVE_FAILED = "autosave.failed"

Subscriber = Callable[[Optional[dict]], None]


class EventBus:
    """Minimal synchronous pub/sub event bus.

    Lets UX and telemetry observe persistence signals (such as a recovery
    from backup) without the core knowing about them.
    """

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[Subscriber]] = {}

    def subscribe(self, event_name: str, callback: Subscriber) -> None:
        logger.debug("Subscribing to event '%s': %s", event_name, callback)
        self._subscribers.setdefault(event_name, []).append(callback)

    def unsubscribe(self, event_name: str, callback: Subscriber) -> None:
        callbacks = self._subscribers.get(event_name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def publish(self, event_name: str, payload: Optional[dict] = None) -> None:
        logger.debug("Publishing event '%s' to %d subscribers", event_name, len(self._subscribers.get(event_name, [])))
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(payload)
            except Exception as exc:
                logger.exception("Error in event subscriber for '%s': %s", event_name, exc)
