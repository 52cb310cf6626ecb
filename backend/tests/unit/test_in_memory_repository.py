"""Unit tests for the in-memory record repository."""

import pytest

from app.domain.entities import ListQuery, Record, SortOrder
from app.infrastructure.memory import InMemoryRecordRepository, InMemoryRecordStore


def _record(owner: str = "user-1", **data) -> Record:
    return Record(resource="contacts", data=data, owner_ref=owner)


@pytest.fixture
def repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository("contacts")


@pytest.mark.asyncio
async def test_create_rejects_existing_id(repository: InMemoryRecordRepository):
    record = await repository.create(_record(firstName="Jo"))

    with pytest.raises(ValueError):
        await repository.create(Record(resource="contacts", data={}, id=record.id))
    assert (await repository.get_by_id(record.id)).data == {"firstName": "Jo"}


@pytest.mark.asyncio
async def test_returned_records_do_not_alias_stored_state(repository: InMemoryRecordRepository):
    record = await repository.create(_record(firstName="Jo"))
    record.data["firstName"] = "Changed"

    fetched = await repository.get_by_id(record.id)
    assert fetched.data["firstName"] == "Jo"


@pytest.mark.asyncio
async def test_update_merges_and_preserves_system_fields(repository: InMemoryRecordRepository):
    record = await repository.create(_record(firstName="Jo", company="Old"))
    updated = await repository.update_by_id(record.id, {"company": "New"})

    assert updated.data == {"firstName": "Jo", "company": "New"}
    assert updated.id == record.id
    assert updated.owner_ref == record.owner_ref
    assert updated.created_at == record.created_at
    assert updated.updated_at > record.updated_at


@pytest.mark.asyncio
async def test_update_and_delete_report_missing_ids(repository: InMemoryRecordRepository):
    assert await repository.update_by_id("nope", {"a": 1}) is None
    assert await repository.delete_by_id("nope") is None


@pytest.mark.asyncio
async def test_find_all_applies_owner_filter_search_sort_and_page(repository: InMemoryRecordRepository):
    for name in ("Charlie", "alice", "Bob"):
        await repository.create(_record(firstName=name))
    await repository.create(_record(owner="user-2", firstName="Alicia"))

    query = ListQuery(
        search="LI",
        search_fields=("firstName",),
        sort_by="firstName",
        sort_order=SortOrder.ASC,
        owner_ref="user-1",
    )
    records, total = await repository.find_all(query)

    assert [r.data["firstName"] for r in records] == ["Charlie", "alice"]
    assert total == 2


@pytest.mark.asyncio
async def test_find_all_equality_filters(repository: InMemoryRecordRepository):
    await repository.create(_record(category="Food", published=True))
    await repository.create(_record(category="Travel", published=False))

    records, total = await repository.find_all(ListQuery(filters={"category": "Food"}))
    assert total == 1
    assert records[0].data["category"] == "Food"


@pytest.mark.asyncio
async def test_find_by_field_ignores_case_and_excluded_id(repository: InMemoryRecordRepository):
    record = await repository.create(_record(email="jo@example.com"))

    assert (await repository.find_by_field("email", "JO@EXAMPLE.COM")).id == record.id
    assert await repository.find_by_field("email", "jo@example.com", exclude_id=record.id) is None


@pytest.mark.asyncio
async def test_count_by_owner(repository: InMemoryRecordRepository):
    await repository.create(_record())
    await repository.create(_record())
    await repository.create(_record(owner="user-2"))

    assert await repository.count() == 3
    assert await repository.count(owner_ref="user-1") == 2


def test_store_keeps_one_repository_per_resource():
    store = InMemoryRecordStore()
    assert store.repository("contacts") is store.repository("contacts")
    assert store.repository("contacts") is not store.repository("posts")
