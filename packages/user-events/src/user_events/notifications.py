"""Synchronous observer registration and event dispatch."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol, runtime_checkable

from .exceptions import ObserverError

logger = logging.getLogger(__name__)

# Observers attached under this name receive every event.
WILDCARD = "*"

# Standard event names
ENTITY_INIT = "entity:init"
ENTITY_CREATED = "entity:created"
ENTITY_UPDATED = "entity:updated"
ENTITY_DELETED = "entity:deleted"


@runtime_checkable
class Observer(Protocol):
    """Anything with an `update(subject, event, data)` method."""

    def update(self, subject: Any, event: str, data: Any = None) -> None: ...


class CallbackObserver:
    """Adapts a plain function to the observer protocol."""

    def __init__(self, callback: Callable[[Any, str, Any], None]) -> None:
        self.callback = callback

    def update(self, subject: Any, event: str, data: Any = None) -> None:
        self.callback(subject, event, data)

    def __repr__(self) -> str:
        name = getattr(self.callback, "__qualname__", repr(self.callback))
        return f"CallbackObserver({name})"


class EventDispatcher:
    """Event bus keyed by event name, plus a wildcard bucket.

    Delivery order is the specific bucket first, then the wildcard bucket,
    each in attach order. Observers run on the caller's stack; the first
    one that raises stops delivery.
    """

    def __init__(self, subject: Any = None, lock: Any = None) -> None:
        self._subject = self if subject is None else subject
        self._lock = lock if lock is not None else threading.RLock()
        self._observers: dict[str, list[Observer]] = {WILDCARD: []}

    @property
    def lock(self) -> Any:
        return self._lock

    def attach(self, observer: Observer, event: str = WILDCARD) -> None:
        """Register an observer for an event. Duplicates are kept."""
        with self._lock:
            self._observers.setdefault(event, []).append(observer)

    def detach(self, observer: Observer, event: str = WILDCARD) -> None:
        """Remove an observer from the bucket for `event` only."""
        with self._lock:
            bucket = self._observers.get(event)
            if not bucket:
                return
            bucket[:] = [o for o in bucket if o is not observer]
            if not bucket and event != WILDCARD:
                del self._observers[event]

    def notify(self, event: str = WILDCARD, data: Any = None) -> None:
        """Deliver an event to every matching observer."""
        with self._lock:
            recipients = self._recipients(event)
            logger.debug("Broadcasting %r to %d observer(s)", event, len(recipients))
            for observer in recipients:
                try:
                    observer.update(self._subject, event, data)
                except ObserverError:
                    raise
                except Exception as exc:
                    logger.error("Observer %r failed on %r: %s", observer, event, exc)
                    raise ObserverError(observer, event, str(exc)) from exc

    def _recipients(self, event: str) -> list[Observer]:
        # Copy so attach/detach from inside a callback can't alter this delivery.
        if event == WILDCARD:
            return list(self._observers[WILDCARD])
        return [*self._observers.get(event, []), *self._observers[WILDCARD]]

    def observers(self, event: str = WILDCARD) -> list[Observer]:
        with self._lock:
            return list(self._observers.get(event, []))

    def events(self) -> list[str]:
        with self._lock:
            return list(self._observers)

    def __len__(self) -> int:
        with self._lock:
            return sum(len(bucket) for bucket in self._observers.values())
