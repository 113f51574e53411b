"""Data models for the user event system."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .exceptions import IdentifierReassignmentError


class Entity(BaseModel):
    """A user record with an open attribute map.

    The identifier lives in `attributes["id"]`. Updates merge into the
    existing attributes instead of replacing them.
    """

    attributes: dict[str, Any] = Field(default_factory=dict)

    @property
    def id(self) -> str | None:
        return self.attributes.get("id")

    def merge(self, data: dict[str, Any]) -> None:
        """Merge `data` into the attributes. The id, once set, is fixed."""
        current = self.id
        if current is not None and "id" in data and data["id"] != current:
            raise IdentifierReassignmentError(current, data["id"])
        self.attributes = {**self.attributes, **data}

    def to_dict(self) -> dict[str, Any]:
        return dict(self.attributes)

    def get(self, key: str, default: Any = None) -> Any:
        return self.attributes.get(key, default)


class UserRecord(BaseModel):
    """One row of the bootstrap source."""

    id: str
    name: str
    email: str

    @field_validator("id")
    @classmethod
    def _id_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("id must not be empty")
        return value

    def to_entity(self) -> Entity:
        return Entity(attributes=self.model_dump())
