"""
Base Entity class for all domain entities.

Entities have identity and lifecycle.
Two entities are equal if they have the same ID.
"""

from __future__ import annotations
from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID, uuid4


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(eq=False)
class Entity(ABC):
    """
    Base class for all domain entities.

    Entities are objects that have a distinct identity that runs through time
    and different representations. They are defined by their identity, not their attributes.
    """

    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} id={self.id}>"

    def touch(self) -> None:
        """Refresh the modification timestamp."""
        self.updated_at = utcnow()


@dataclass(eq=False)
class VersionedEntity(Entity):
    """
    Entity with optimistic locking support.

    The version is owned by the persistence layer: it is the version the
    entity was loaded at, and a repository bumps it after a successful write.
    """

    version: int = 1

    def increment_version(self) -> None:
        """Increment version after a successful persist."""
        self.version += 1


@dataclass(eq=False)
class AuditableEntity(VersionedEntity):
    """
    Entity with audit trail support.
    Tracks who created and last modified the entity.
    """

    created_by: Optional[str] = None
    updated_by: Optional[str] = None

    def mark_updated(self, user_id: Optional[str] = None) -> None:
        """Record a modification by ``user_id``."""
        if user_id is not None:
            self.updated_by = user_id
        self.touch()
