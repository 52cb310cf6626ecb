"""Per-resource declaration that parameterizes the generic CRUD pipeline."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.domain.entities import SYSTEM_FIELDS, SortOrder


class Operation(str, Enum):
    CREATE = "create"
    READ = "read"
    LIST = "list"
    UPDATE = "update"
    DELETE = "delete"


PrepareHook = Callable[[dict[str, Any], Operation], dict[str, Any]]


@dataclass(frozen=True)
class ResourceDefinition:
    """Everything that differs between two CRUD resources.

    Attributes:
        name: Plural URL segment and store key, e.g. ``contacts``.
        label: Singular display name, e.g. ``Contact``.
        create_schema: Payload schema for create (required fields enforced).
        update_schema: Payload schema for update (every field optional).
        owner_scoped: Records belong to the creating principal; every
            operation needs authentication and foreign records are rejected.
        unique_fields: Wire fields that must be unique ignoring case.
        searchable_fields: Wire fields matched by ``?search=``.
        filterable_fields: Wire fields accepted as exact-match query params.
        references: Wire field -> resource name whose record must exist.
        hidden_fields: Stored but never returned.
        auth_required: Operations needing a principal on public resources.
        admin_required: Operations needing an admin principal.
        prepare: Hook applied to a validated payload before it is stored.
    """

    name: str
    label: str
    create_schema: type[BaseModel]
    update_schema: type[BaseModel]
    owner_scoped: bool = False
    unique_fields: tuple[str, ...] = ()
    searchable_fields: tuple[str, ...] = ()
    filterable_fields: tuple[str, ...] = ()
    references: Mapping[str, str] = field(default_factory=dict)
    hidden_fields: tuple[str, ...] = ()
    default_sort: str = "createdAt"
    default_order: SortOrder = SortOrder.DESC
    auth_required: frozenset[Operation] = frozenset()
    admin_required: frozenset[Operation] = frozenset()
    prepare: PrepareHook | None = None

    @property
    def item_key(self) -> str:
        """Envelope key for a single record, e.g. ``contact``."""
        return self.label.lower()

    @property
    def field_names(self) -> tuple[str, ...]:
        """Wire names declared by the create schema."""
        return tuple(
            info.alias or to_camel(name) for name, info in self.create_schema.model_fields.items()
        )

    @property
    def sortable_fields(self) -> frozenset[str]:
        visible = (f for f in self.field_names if f not in self.hidden_fields)
        return frozenset((*visible, *SYSTEM_FIELDS))

    def requires_auth(self, operation: Operation) -> bool:
        return (
            self.owner_scoped
            or operation in self.auth_required
            or operation in self.admin_required
        )
