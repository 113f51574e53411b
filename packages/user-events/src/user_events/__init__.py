"""User Events — a user repository that notifies observers of its lifecycle."""

from .exceptions import (
    ConfigError,
    EntityNotFoundError,
    IdentifierReassignmentError,
    MalformedRecordError,
    ObserverError,
    SourceError,
    UserEventsError,
)
from .models import Entity, UserRecord
from .notifications import (
    ENTITY_CREATED,
    ENTITY_DELETED,
    ENTITY_INIT,
    ENTITY_UPDATED,
    WILDCARD,
    CallbackObserver,
    EventDispatcher,
    Observer,
)
from .observers import LogFileObserver, OnboardingNotification
from .store import EntityStore

__all__ = [
    "EntityStore",
    "EventDispatcher",
    "Observer",
    "CallbackObserver",
    "Entity",
    "UserRecord",
    "LogFileObserver",
    "OnboardingNotification",
    "UserEventsError",
    "EntityNotFoundError",
    "MalformedRecordError",
    "ObserverError",
    "SourceError",
    "ConfigError",
    "IdentifierReassignmentError",
    "WILDCARD",
    "ENTITY_INIT",
    "ENTITY_CREATED",
    "ENTITY_UPDATED",
    "ENTITY_DELETED",
]
