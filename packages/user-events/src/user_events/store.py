"""User repository — the subject observers subscribe to."""

from __future__ import annotations

import logging
import secrets
import threading
from pathlib import Path
from typing import Any

from . import source as csv_source
from .exceptions import EntityNotFoundError
from .models import Entity
from .notifications import (
    ENTITY_CREATED,
    ENTITY_DELETED,
    ENTITY_INIT,
    ENTITY_UPDATED,
    WILDCARD,
    EventDispatcher,
    Observer,
)

logger = logging.getLogger(__name__)

EntityRef = Entity | str


def new_identifier() -> str:
    """128 random bits from the OS CSPRNG, hex encoded."""
    return secrets.token_hex(16)


class EntityStore:
    """In-memory user collection that broadcasts its lifecycle events.

    Every mutation is committed before observers are notified, so an
    observer failure propagates to the caller with the change in place.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._entities: dict[str, Entity] = {}
        self.events = EventDispatcher(subject=self, lock=self._lock)

    # ── Observer Registration ──

    def attach(self, observer: Observer, event: str = WILDCARD) -> None:
        self.events.attach(observer, event)

    def detach(self, observer: Observer, event: str = WILDCARD) -> None:
        self.events.detach(observer, event)

    def notify(self, event: str = WILDCARD, data: Any = None) -> None:
        self.events.notify(event, data)

    # ── Lifecycle ──

    def bootstrap_load(self, source: str | Path) -> int:
        """Load users from a CSV source, seeding it first if it is missing.

        Rows are validated before anything is stored, so a malformed row
        leaves the collection untouched. Returns the number of users loaded.
        """
        logger.info("Loading user records from %s", source)
        with self._lock:
            if csv_source.is_missing(source):
                logger.info("Source %s does not exist, creating it with sample users", source)
                records = csv_source.write_seed(source)
            else:
                records = [record for _, record in csv_source.read_records(source)]

            for record in records:
                self._entities[record.id] = record.to_entity()
            loaded = len({record.id for record in records})
            logger.info("Loaded %d user(s) from %s", loaded, source)

            self.notify(ENTITY_INIT, source)
        return loaded

    def create(self, attributes: dict[str, Any] | None = None) -> Entity:
        """Create a user with a fresh identifier."""
        logger.info("Creating a user")
        with self._lock:
            entity = Entity()
            entity.merge({k: v for k, v in (attributes or {}).items() if k != "id"})
            entity_id = new_identifier()
            while entity_id in self._entities:
                entity_id = new_identifier()
            entity.merge({"id": entity_id})
            self._entities[entity_id] = entity

            self.notify(ENTITY_CREATED, entity)
        return entity

    def update(self, ref: EntityRef, attributes: dict[str, Any]) -> Entity:
        """Merge `attributes` into a stored user."""
        logger.info("Updating a user")
        with self._lock:
            entity = self.get(self._resolve(ref))
            entity.merge(attributes)

            self.notify(ENTITY_UPDATED, entity)
        return entity

    def delete(self, ref: EntityRef) -> Entity:
        """Remove a user. The removed entity is the event payload."""
        logger.info("Deleting a user")
        with self._lock:
            entity_id = self._resolve(ref)
            try:
                entity = self._entities.pop(entity_id)
            except KeyError:
                raise EntityNotFoundError(entity_id)

            self.notify(ENTITY_DELETED, entity)
        return entity

    # ── Lookup ──

    def get(self, entity_id: str) -> Entity:
        with self._lock:
            try:
                return self._entities[entity_id]
            except KeyError:
                raise EntityNotFoundError(entity_id)

    def all(self) -> list[Entity]:
        with self._lock:
            return list(self._entities.values())

    def _resolve(self, ref: EntityRef) -> str:
        entity_id = ref.id if isinstance(ref, Entity) else ref
        if entity_id is None:
            raise EntityNotFoundError(None)
        return entity_id

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._entities

    def __len__(self) -> int:
        with self._lock:
            return len(self._entities)
