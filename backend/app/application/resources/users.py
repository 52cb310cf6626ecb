"""Users: public registration, authenticated edits, admin-only removal."""

from typing import Any

from app.application.resources.definition import Operation, ResourceDefinition
from app.application.schemas.user import UserCreate, UserUpdate
from app.domain.security import hash_password


def _hash_password(values: dict[str, Any], operation: Operation) -> dict[str, Any]:
    if values.get("password"):
        return {**values, "password": hash_password(values["password"])}
    return values


USERS = ResourceDefinition(
    name="users",
    label="User",
    create_schema=UserCreate,
    update_schema=UserUpdate,
    unique_fields=("email",),
    searchable_fields=("name", "email"),
    hidden_fields=("password",),
    auth_required=frozenset({Operation.UPDATE}),
    admin_required=frozenset({Operation.DELETE}),
    prepare=_hash_password,
)
