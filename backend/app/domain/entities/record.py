"""Domain entity — one persisted instance of a resource (contact, post, comment, user)."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# Wire names of the attributes every record carries outside ``data``.
SYSTEM_FIELDS = ("id", "ownerRef", "createdAt", "updatedAt")


@dataclass
class Record:
    """Core domain entity: resource-specific fields live in ``data``.

    ``data`` is keyed by wire (camelCase) field names so that it can be
    stored as a document and returned as-is.
    """

    resource: str
    data: dict[str, Any]
    id: str = field(default_factory=lambda: str(uuid4()))
    owner_ref: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.updated_at is None:
            self.updated_at = self.created_at

    def apply_patch(self, patch: dict[str, Any]) -> None:
        """Merge ``patch`` onto ``data`` and refresh the updated_at timestamp."""
        self.data = {**self.data, **patch}
        self.touch()

    def touch(self) -> None:
        now = _utcnow()
        # updated_at strictly increases, even within one clock tick
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def field_value(self, name: str) -> Any:
        """Look up a field by wire name, including the system fields."""
        if name == "id":
            return self.id
        if name == "ownerRef":
            return self.owner_ref
        if name == "createdAt":
            return self.created_at.isoformat(timespec="microseconds")
        if name == "updatedAt":
            return self.updated_at.isoformat(timespec="microseconds")
        return self.data.get(name)

    def to_document(self, hidden_fields: Iterable[str] = ()) -> dict[str, Any]:
        """Render the record as a JSON-ready mapping, dropping ``hidden_fields``."""
        hidden = set(hidden_fields)
        document: dict[str, Any] = {"id": self.id}
        document.update({k: v for k, v in self.data.items() if k not in hidden})
        if self.owner_ref is not None:
            document["ownerRef"] = self.owner_ref
        document["createdAt"] = self.created_at.isoformat(timespec="microseconds")
        document["updatedAt"] = self.updated_at.isoformat(timespec="microseconds")
        return document

    def copy(self) -> "Record":
        return Record(
            resource=self.resource,
            data=dict(self.data),
            id=self.id,
            owner_ref=self.owner_ref,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
