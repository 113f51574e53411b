"""Custom exceptions for the user event system."""

from __future__ import annotations

from typing import Any


class UserEventsError(Exception):
    """Base exception for user event system errors."""


class EntityNotFoundError(UserEventsError):
    """Raised when an update or delete references an unknown identifier."""

    def __init__(self, entity_id: str | None) -> None:
        super().__init__(f"Entity not found: {entity_id}")
        self.entity_id = entity_id


class MalformedRecordError(UserEventsError):
    """Raised when a bootstrap row is missing required fields."""

    def __init__(self, source: str, line: int, reason: str) -> None:
        super().__init__(f"Malformed record in {source} at line {line}: {reason}")
        self.source = source
        self.line = line
        self.reason = reason


class SourceError(UserEventsError):
    """Raised when the bootstrap source cannot be read or written."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"Bootstrap source {source} unusable: {reason}")
        self.source = source
        self.reason = reason


class ObserverError(UserEventsError):
    """Raised when an observer fails while an event is being delivered."""

    def __init__(self, observer: Any, event: str, reason: str) -> None:
        super().__init__(f"Observer {observer!r} failed on {event}: {reason}")
        self.observer = observer
        self.event = event
        self.reason = reason


class ConfigError(UserEventsError):
    """Raised when the settings file cannot be read or validated."""


class IdentifierReassignmentError(UserEventsError, ValueError):
    """Raised when a merge would change an entity's identifier."""

    def __init__(self, current: str, requested: Any) -> None:
        super().__init__(f"Identifier {current} cannot be reassigned to {requested}")
        self.current = current
        self.requested = requested
