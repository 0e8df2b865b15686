# roundvote/core/events.py
import logging
from collections import deque
from typing import Callable, Deque, List, Optional

from roundvote.models.event_model import EventKind, Notification

logger = logging.getLogger(__name__)

Subscriber = Callable[[Notification], None]


class EventBus:
    """
    Fan-out of notification records to external observers.

    Events are emitted only after an operation has committed. Delivery is
    best effort: a failing subscriber is logged and the remaining
    subscribers still run.
    """

    def __init__(self, history_size: int = 1000):
        self._subscribers: List[Subscriber] = []
        # recent notifications only; durable audit trails belong to subscribers
        self.history: Deque[Notification] = deque(maxlen=history_size)

    def subscribe(self, callback: Subscriber) -> None:
        self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def emit(self, kind: EventKind, round_id: int, at: int, **data) -> Notification:
        note = Notification(kind=kind, round_id=round_id, at=at, data=data)
        logger.info(f"[round {round_id}] {kind.value} {data}")
        self.history.append(note)
        for callback in list(self._subscribers):
            try:
                callback(note)
            except Exception:
                logger.exception(f"Subscriber failed on {kind.value} for round {round_id}")
        return note

    def of_kind(self, kind: EventKind, round_id: Optional[int] = None) -> List[Notification]:
        return [
            n for n in self.history
            if n.kind == kind and (round_id is None or n.round_id == round_id)
        ]
