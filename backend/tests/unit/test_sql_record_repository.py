"""Tests for the SQLAlchemy record repository against a throwaway SQLite file."""

from contextlib import asynccontextmanager

import pytest
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from app.domain.entities import ListQuery, Record, SortOrder
from app.infrastructure.database import Base
from app.infrastructure.database.repositories import SQLAlchemyRecordStore


@asynccontextmanager
async def sqlite_store(path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    try:
        async with session_factory() as session:
            yield SQLAlchemyRecordStore(session)
            await session.commit()
    finally:
        await engine.dispose()


def _contact(owner: str = "user-1", **data) -> Record:
    return Record(resource="contacts", data=data, owner_ref=owner)


@pytest.mark.asyncio
async def test_create_and_get_round_trip(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        repository = store.repository("contacts")
        created = await repository.create(_contact(firstName="Jo", tags=["a", "b"]))
        fetched = await repository.get_by_id(created.id)

    assert fetched.data == {"firstName": "Jo", "tags": ["a", "b"]}
    assert fetched.owner_ref == "user-1"
    assert fetched.created_at.tzinfo is not None
    assert fetched.created_at == created.created_at


@pytest.mark.asyncio
async def test_resources_are_isolated(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        contact = await store.repository("contacts").create(_contact(firstName="Jo"))
        posts = store.repository("posts")

        assert await posts.get_by_id(contact.id) is None
        assert await posts.count() == 0
        assert await store.repository("contacts").count() == 1


@pytest.mark.asyncio
async def test_create_rejects_existing_id(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        repository = store.repository("contacts")
        created = await repository.create(_contact())
        with pytest.raises(ValueError):
            await repository.create(Record(resource="contacts", data={}, id=created.id))


@pytest.mark.asyncio
async def test_find_all_search_sort_and_paging(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        repository = store.repository("contacts")
        for i in range(25):
            await repository.create(_contact(firstName=f"Name{i:02d}", company="Acme"))
        await repository.create(_contact(owner="user-2", firstName="Other", company="Acme"))

        query = ListQuery(
            sort_by="firstName",
            sort_order=SortOrder.ASC,
            page=2,
            limit=10,
            owner_ref="user-1",
        )
        records, total = await repository.find_all(query)
        assert total == 25
        assert [r.data["firstName"] for r in records] == [f"Name{i:02d}" for i in range(10, 20)]

        found, found_total = await repository.find_all(
            ListQuery(search="NAME2", search_fields=("firstName", "company"), owner_ref="user-1")
        )
        assert found_total == 5
        assert {r.data["firstName"] for r in found} == {f"Name2{i}" for i in range(5)}


@pytest.mark.asyncio
async def test_find_all_descending_and_filters(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        repository = store.repository("comments")
        for post_id, text in (("p1", "b"), ("p1", "c"), ("p2", "a")):
            await repository.create(
                Record(resource="comments", data={"postId": post_id, "content": text}, owner_ref="u")
            )

        records, total = await repository.find_all(
            ListQuery(sort_by="content", sort_order=SortOrder.DESC, filters={"postId": "p1"})
        )
        assert total == 2
        assert [r.data["content"] for r in records] == ["c", "b"]


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        repository = store.repository("contacts")
        await repository.create(_contact(company="100% Organic"))
        await repository.create(_contact(company="1000 Things"))

        records, total = await repository.find_all(
            ListQuery(search="100%", search_fields=("company",))
        )
        assert total == 1
        assert records[0].data["company"] == "100% Organic"


@pytest.mark.asyncio
async def test_find_by_field_is_case_insensitive(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        repository = store.repository("contacts")
        created = await repository.create(_contact(email="jo@example.com"))

        assert (await repository.find_by_field("email", "JO@example.COM")).id == created.id
        assert await repository.find_by_field("email", "jo@example.com", exclude_id=created.id) is None


@pytest.mark.asyncio
async def test_update_and_delete(tmp_path):
    async with sqlite_store(tmp_path / "records.db") as store:
        repository = store.repository("contacts")
        created = await repository.create(_contact(firstName="Jo", company="Old"))

        updated = await repository.update_by_id(created.id, {"company": "New"})
        assert updated.data == {"firstName": "Jo", "company": "New"}
        assert updated.created_at == created.created_at
        assert updated.updated_at > created.updated_at

        assert (await repository.get_by_id(created.id)).data["company"] == "New"

        removed = await repository.delete_by_id(created.id)
        assert removed.id == created.id
        assert await repository.get_by_id(created.id) is None
        assert await repository.delete_by_id(created.id) is None
        assert await repository.update_by_id(created.id, {"company": "x"}) is None
