"""Unit tests for the ResourceService pipeline."""

import pytest

from app.application.resources import COMMENTS, CONTACTS, POSTS, USERS
from app.application.services import ResourceService
from app.domain.entities import Principal, SortOrder
from app.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from app.domain.security import verify_password
from app.infrastructure.memory import InMemoryRecordStore

OWNER = Principal(id="user-1")
STRANGER = Principal(id="user-2")
ADMIN = Principal(id="admin", is_admin=True)


def _contact(**overrides) -> dict:
    payload = {
        "firstName": "Jo",
        "lastName": "Lee",
        "email": "jo@example.com",
        "phone": "+1-555-0101",
    }
    payload.update(overrides)
    return payload


def _service(store: InMemoryRecordStore, definition) -> ResourceService:
    return ResourceService(
        definition,
        store.repository(definition.name),
        resolve_repository=store.repository,
    )


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def contacts(store: InMemoryRecordStore) -> ResourceService:
    return _service(store, CONTACTS)


@pytest.mark.asyncio
async def test_create_assigns_identity_owner_and_timestamps(contacts: ResourceService):
    record = await contacts.create_record(_contact(), OWNER)

    assert record.id
    assert record.owner_ref == "user-1"
    assert record.created_at == record.updated_at
    assert record.data["email"] == "jo@example.com"


@pytest.mark.asyncio
async def test_create_then_read_returns_same_fields(contacts: ResourceService):
    created = await contacts.create_record(_contact(company="Acme"), OWNER)
    fetched = await contacts.get_record(created.id, OWNER)

    assert contacts.render(fetched) == contacts.render(created)


@pytest.mark.asyncio
async def test_anonymous_caller_cannot_touch_scoped_resource(contacts: ResourceService):
    with pytest.raises(AuthenticationError):
        await contacts.create_record(_contact(), None)
    with pytest.raises(AuthenticationError):
        await contacts.list_records(None)


@pytest.mark.asyncio
async def test_invalid_payload_leaves_store_untouched(store, contacts: ResourceService):
    with pytest.raises(ValidationError) as excinfo:
        await contacts.create_record({"firstName": "Jo"}, OWNER)

    fields = {e.field for e in excinfo.value.errors}
    assert {"lastName", "email", "phone"} <= fields
    assert await store.repository("contacts").count() == 0


@pytest.mark.asyncio
async def test_duplicate_email_is_rejected_case_insensitively(store, contacts: ResourceService):
    await contacts.create_record(_contact(email="jo@example.com"), OWNER)

    with pytest.raises(DuplicateEntityError):
        await contacts.create_record(_contact(email="JO@Example.com"), STRANGER)
    assert await store.repository("contacts").count() == 1


@pytest.mark.asyncio
async def test_update_keeps_identity_and_advances_updated_at(contacts: ResourceService):
    created = await contacts.create_record(_contact(), OWNER)
    updated = await contacts.update_record(created.id, {"company": "New Co"}, OWNER)

    assert updated.id == created.id
    assert updated.created_at == created.created_at
    assert updated.updated_at > created.updated_at
    assert updated.data["company"] == "New Co"
    assert updated.data["firstName"] == "Jo"


@pytest.mark.asyncio
async def test_update_to_own_email_is_not_a_conflict(contacts: ResourceService):
    created = await contacts.create_record(_contact(), OWNER)
    updated = await contacts.update_record(created.id, {"email": "JO@example.com"}, OWNER)
    assert updated.data["email"] == "JO@example.com"


@pytest.mark.asyncio
async def test_update_to_taken_email_conflicts(contacts: ResourceService):
    await contacts.create_record(_contact(email="a@example.com"), OWNER)
    second = await contacts.create_record(_contact(email="b@example.com"), OWNER)

    with pytest.raises(DuplicateEntityError):
        await contacts.update_record(second.id, {"email": "a@example.com"}, OWNER)


@pytest.mark.asyncio
async def test_foreign_record_is_rejected_not_hidden(contacts: ResourceService):
    created = await contacts.create_record(_contact(), OWNER)

    with pytest.raises(AuthorizationError):
        await contacts.get_record(created.id, STRANGER)
    with pytest.raises(AuthorizationError):
        await contacts.update_record(created.id, {"company": "Mine"}, STRANGER)
    with pytest.raises(AuthorizationError):
        await contacts.delete_record(created.id, STRANGER)

    fetched = await contacts.get_record(created.id, OWNER)
    assert fetched.data.get("company") == ""


@pytest.mark.asyncio
async def test_list_only_shows_own_records(contacts: ResourceService):
    await contacts.create_record(_contact(email="mine@example.com"), OWNER)
    await contacts.create_record(_contact(email="theirs@example.com"), STRANGER)

    records, info = await contacts.list_records(OWNER)
    assert [r.data["email"] for r in records] == ["mine@example.com"]
    assert info.total_items == 1


@pytest.mark.asyncio
async def test_list_searches_sorts_and_pages(contacts: ResourceService):
    for i in range(25):
        await contacts.create_record(
            _contact(firstName=f"Name{i:02d}", email=f"c{i}@example.com"), OWNER
        )

    records, info = await contacts.list_records(
        OWNER, page=2, limit=10, sort_by="firstName", sort_order=SortOrder.ASC
    )
    assert [r.data["firstName"] for r in records] == [f"Name{i:02d}" for i in range(10, 20)]
    assert info.total_pages == 3
    assert info.has_next and info.has_prev

    found, found_info = await contacts.list_records(OWNER, search="name07")
    assert [r.data["firstName"] for r in found] == ["Name07"]
    assert found_info.total_items == 1


@pytest.mark.asyncio
async def test_list_rejects_unknown_sort_field(contacts: ResourceService):
    with pytest.raises(ValidationError) as excinfo:
        await contacts.list_records(OWNER, sort_by="salary")
    assert excinfo.value.errors[0].field == "sortBy"


@pytest.mark.asyncio
async def test_delete_then_read_is_not_found(contacts: ResourceService):
    created = await contacts.create_record(_contact(), OWNER)
    removed, remaining = await contacts.delete_record(created.id, OWNER)

    assert removed.id == created.id
    assert remaining == 0
    with pytest.raises(EntityNotFoundError):
        await contacts.get_record(created.id, OWNER)
    with pytest.raises(EntityNotFoundError):
        await contacts.delete_record(created.id, OWNER)


@pytest.mark.asyncio
async def test_comment_must_reference_existing_post(store):
    posts = _service(store, POSTS)
    comments = _service(store, COMMENTS)

    with pytest.raises(ValidationError) as excinfo:
        await comments.create_record({"postId": "missing", "content": "Hi"}, OWNER)
    assert excinfo.value.errors[0].field == "postId"

    post = await posts.create_record({"title": "Hello", "content": "World"}, OWNER)
    comment = await comments.create_record({"postId": post.id, "content": "Hi"}, OWNER)
    assert comment.data["postId"] == post.id

    listed, _ = await comments.list_records(OWNER, filters={"postId": post.id})
    assert [c.id for c in listed] == [comment.id]


@pytest.mark.asyncio
async def test_user_password_is_hashed_and_hidden(store):
    users = _service(store, USERS)
    user = await users.create_record(
        {"name": "Ann", "email": "ann@example.com", "age": 30, "password": "Secret123"}, None
    )

    assert user.owner_ref is None
    assert user.data["password"] != "Secret123"
    assert verify_password("Secret123", user.data["password"])
    assert "password" not in users.render(user)


@pytest.mark.asyncio
async def test_user_delete_requires_admin(store):
    users = _service(store, USERS)
    user = await users.create_record(
        {"name": "Ann", "email": "ann@example.com", "age": 30, "password": "Secret123"}, None
    )

    with pytest.raises(AuthenticationError):
        await users.delete_record(user.id, None)
    with pytest.raises(AuthorizationError):
        await users.delete_record(user.id, OWNER)

    removed, remaining = await users.delete_record(user.id, ADMIN)
    assert removed.id == user.id
    assert remaining == 0


@pytest.mark.asyncio
async def test_user_update_requires_authentication(store):
    users = _service(store, USERS)
    user = await users.create_record(
        {"name": "Ann", "email": "ann@example.com", "age": 30, "password": "Secret123"}, None
    )

    with pytest.raises(AuthenticationError):
        await users.update_record(user.id, {"name": "Anne"}, None)
    updated = await users.update_record(user.id, {"name": "Anne"}, OWNER)
    assert updated.data["name"] == "Anne"
