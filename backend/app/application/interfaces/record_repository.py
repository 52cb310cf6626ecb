"""Abstract repository interface (port) for Record persistence."""

from abc import ABC, abstractmethod
from typing import Any

from app.domain.entities import ListQuery, Record


class RecordRepository(ABC):
    """Port for one resource's records — implemented in the infrastructure layer.

    Lookups that can miss return ``None`` rather than raising; callers decide
    what a miss means.
    """

    @abstractmethod
    async def create(self, record: Record) -> Record:
        """Persist a new record and return the stored copy.

        Raises:
            ValueError: if a record with the same id already exists.
        """
        ...

    @abstractmethod
    async def get_by_id(self, record_id: str) -> Record | None:
        """Retrieve a single record by its id."""
        ...

    @abstractmethod
    async def find_all(self, query: ListQuery) -> tuple[list[Record], int]:
        """Return one page of matching records and the total match count."""
        ...

    @abstractmethod
    async def find_by_field(
        self, field: str, value: Any, *, exclude_id: str | None = None
    ) -> Record | None:
        """Return a record whose ``field`` equals ``value`` ignoring case."""
        ...

    @abstractmethod
    async def update_by_id(self, record_id: str, patch: dict[str, Any]) -> Record | None:
        """Merge ``patch`` into the record's data. Returns None if not found."""
        ...

    @abstractmethod
    async def delete_by_id(self, record_id: str) -> Record | None:
        """Remove a record permanently. Returns the removed record or None."""
        ...

    @abstractmethod
    async def count(self, owner_ref: str | None = None) -> int:
        """Count records, optionally only those owned by ``owner_ref``."""
        ...
