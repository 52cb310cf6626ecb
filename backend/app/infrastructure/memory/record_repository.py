"""In-memory repository implementation — volatile, process-wide record storage."""

from typing import Any

from app.application.interfaces import RecordRepository, RecordStore
from app.domain.entities import ListQuery, Record
from app.domain.pagination import as_text, paginate, search_items, sort_items


def _value_of(record: Record, name: str) -> Any:
    return record.field_value(name)


class InMemoryRecordRepository(RecordRepository):
    """Implements the RecordRepository port over a dict keyed by record id.

    Every mutation is a single dict operation with no await in between, so
    concurrent requests on the event loop cannot observe a half-applied
    write. Records are copied in and out so callers never alias stored state.
    """

    def __init__(self, resource: str):
        self._resource = resource
        self._records: dict[str, Record] = {}

    async def create(self, record: Record) -> Record:
        if record.id in self._records:
            raise ValueError(f"{self._resource} record {record.id} already exists")
        self._records[record.id] = record.copy()
        return record.copy()

    async def get_by_id(self, record_id: str) -> Record | None:
        record = self._records.get(record_id)
        return record.copy() if record else None

    async def find_all(self, query: ListQuery) -> tuple[list[Record], int]:
        records = list(self._records.values())
        if query.owner_ref is not None:
            records = [r for r in records if r.owner_ref == query.owner_ref]
        for field, expected in query.filters.items():
            records = [r for r in records if as_text(r.field_value(field)) == expected]

        records = search_items(records, query.search, query.search_fields, _value_of)
        records = sort_items(records, query.sort_by, query.sort_order, _value_of)
        page = paginate(records, query.page, query.limit)
        return [r.copy() for r in page.items], page.info.total_items

    async def find_by_field(
        self, field: str, value: Any, *, exclude_id: str | None = None
    ) -> Record | None:
        needle = as_text(value).lower()
        for record in self._records.values():
            if record.id == exclude_id:
                continue
            if as_text(record.field_value(field)).lower() == needle:
                return record.copy()
        return None

    async def update_by_id(self, record_id: str, patch: dict[str, Any]) -> Record | None:
        current = self._records.get(record_id)
        if current is None:
            return None
        updated = current.copy()
        updated.apply_patch(patch)
        self._records[record_id] = updated
        return updated.copy()

    async def delete_by_id(self, record_id: str) -> Record | None:
        return self._records.pop(record_id, None)

    async def count(self, owner_ref: str | None = None) -> int:
        if owner_ref is None:
            return len(self._records)
        return sum(1 for r in self._records.values() if r.owner_ref == owner_ref)


class InMemoryRecordStore(RecordStore):
    """One InMemoryRecordRepository per resource, created on first use."""

    def __init__(self):
        self._repositories: dict[str, InMemoryRecordRepository] = {}

    def repository(self, resource: str) -> InMemoryRecordRepository:
        if resource not in self._repositories:
            self._repositories[resource] = InMemoryRecordRepository(resource)
        return self._repositories[resource]
