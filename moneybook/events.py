from datetime import datetime
from typing import Callable, Dict, List, NamedTuple

__all__ = [
    'RECORD_ADDED', 'ACCOUNT_CREATED', 'CATEGORY_CREATED', 'VALIDATION_FAILED',
    'Event', 'EventBus', 'history_handler',
]

RECORD_ADDED = "RECORD_ADDED"
ACCOUNT_CREATED = "ACCOUNT_CREATED"
CATEGORY_CREATED = "CATEGORY_CREATED"
VALIDATION_FAILED = "VALIDATION_FAILED"


class Event(NamedTuple):
    name: str
    ts: str
    payload: dict


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[Event, dict], dict]]] = {}

    def subscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        self._subscribers.setdefault(name, []).append(handler)

    def publish(self, name: str, payload: dict) -> List[dict]:
        handlers = self._subscribers.get(name)
        if not handlers:
            return []

        event = Event(name=name, ts=datetime.now().isoformat(), payload=payload)
        return [handler(event, payload) for handler in list(handlers)]

    def unsubscribe(self, name: str, handler: Callable[[Event, dict], dict]) -> None:
        if handler in self._subscribers.get(name, []):
            self._subscribers[name].remove(handler)


def history_handler(history: list):
    """Handler that appends every event it sees to `history` (newest last)."""
    def _handle(event: Event, payload: dict) -> dict:
        entry = {"event": event.name, "timestamp": event.ts, **payload}
        history.append(entry)
        return entry

    return _handle
