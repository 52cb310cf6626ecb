"""Application service (use case) running one CRUD operation for any resource."""

from collections.abc import Callable
from typing import Any

from app.application.interfaces import RecordRepository
from app.application.resources.definition import Operation, ResourceDefinition
from app.application.services.payload_validator import validate_payload
from app.domain.entities import FieldError, ListQuery, Principal, Record, SortOrder
from app.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from app.domain.pagination import PageInfo, build_page_info
from app.infrastructure.logging.colored_logger import OperationLogger, OperationStage

RepositoryResolver = Callable[[str], RecordRepository]


class ResourceService:
    """Orchestrates auth → validation → integrity checks → store for one resource.

    Stateless across calls; all state lives behind the repository port. Each
    check raises at the point of detection, before anything is written, so a
    failed operation never leaves a partial mutation behind.
    """

    def __init__(
        self,
        definition: ResourceDefinition,
        repository: RecordRepository,
        resolve_repository: RepositoryResolver | None = None,
    ):
        self._definition = definition
        self._repository = repository
        self._resolve_repository = resolve_repository
        self._log = OperationLogger("ResourcePipeline", definition.name)

    @property
    def definition(self) -> ResourceDefinition:
        return self._definition

    def render(self, record: Record) -> dict[str, Any]:
        """JSON-ready document for a record with hidden fields removed."""
        return record.to_document(self._definition.hidden_fields)

    # ── Operations ───────────────────────────────────────────────────

    async def create_record(self, payload: Any, principal: Principal | None) -> Record:
        self._authenticate(Operation.CREATE, principal)
        values = self._validate(payload, partial=False)
        await self._check_references(values)
        await self._check_unique(values)

        values = self._prepare(values, Operation.CREATE)
        owner_ref = principal.id if self._definition.owner_scoped else None
        record = await self._repository.create(
            Record(resource=self._definition.name, data=values, owner_ref=owner_ref)
        )
        self._log.complete(OperationStage.STORE, "Created", id=record.id)
        return record

    async def get_record(self, record_id: str, principal: Principal | None) -> Record:
        self._authenticate(Operation.READ, principal)
        record = await self._find(record_id)
        self._check_owner(record, principal)
        return record

    async def list_records(
        self,
        principal: Principal | None,
        *,
        search: str | None = None,
        page: int = 1,
        limit: int = 10,
        sort_by: str | None = None,
        sort_order: SortOrder | None = None,
        filters: dict[str, str] | None = None,
    ) -> tuple[list[Record], PageInfo]:
        self._authenticate(Operation.LIST, principal)

        sort_by = sort_by or self._definition.default_sort
        if sort_by not in self._definition.sortable_fields:
            raise ValidationError(
                [FieldError(field="sortBy", message=f"Cannot sort by '{sort_by}'", value=sort_by)]
            )

        query = ListQuery(
            search=search.strip() if search else None,
            search_fields=self._definition.searchable_fields,
            sort_by=sort_by,
            sort_order=sort_order or self._definition.default_order,
            page=page,
            limit=limit,
            # scoped resources only ever list the caller's own records
            owner_ref=principal.id if self._definition.owner_scoped else None,
            filters={
                k: v for k, v in (filters or {}).items()
                if k in self._definition.filterable_fields
            },
        )
        self._log.step(OperationStage.QUERY, "Listing", search=query.search, page=page, limit=limit)
        records, total = await self._repository.find_all(query)
        return records, build_page_info(total, page, limit)

    async def update_record(self, record_id: str, payload: Any, principal: Principal | None) -> Record:
        self._authenticate(Operation.UPDATE, principal)
        record = await self._find(record_id)
        self._check_owner(record, principal)
        self._check_admin(Operation.UPDATE, principal)

        patch = self._validate(payload, partial=True)
        await self._check_references(patch)
        await self._check_unique(patch, exclude_id=record.id)

        patch = self._prepare(patch, Operation.UPDATE)
        updated = await self._repository.update_by_id(record.id, patch)
        if updated is None:
            # removed between the lookup and the write
            raise EntityNotFoundError(self._definition.label, record_id)
        self._log.complete(OperationStage.STORE, "Updated", id=updated.id, fields=len(patch))
        return updated

    async def delete_record(self, record_id: str, principal: Principal | None) -> tuple[Record, int]:
        """Delete a record. Returns it along with how many records remain in scope."""
        self._authenticate(Operation.DELETE, principal)
        record = await self._find(record_id)
        self._check_owner(record, principal)
        self._check_admin(Operation.DELETE, principal)

        removed = await self._repository.delete_by_id(record.id)
        if removed is None:
            raise EntityNotFoundError(self._definition.label, record_id)
        remaining = await self._repository.count(
            owner_ref=principal.id if self._definition.owner_scoped else None
        )
        self._log.complete(OperationStage.STORE, "Deleted", id=removed.id, remaining=remaining)
        return removed, remaining

    # ── Checks ───────────────────────────────────────────────────────

    def _authenticate(self, operation: Operation, principal: Principal | None) -> None:
        if principal is None and self._definition.requires_auth(operation):
            self._log.rejected(OperationStage.AUTH, "No credential", operation=operation.value)
            raise AuthenticationError("Authorization token is required")

    def _check_owner(self, record: Record, principal: Principal | None) -> None:
        if not self._definition.owner_scoped:
            return
        if principal is None or record.owner_ref != principal.id:
            self._log.rejected(OperationStage.AUTH, "Owner mismatch", id=record.id)
            raise AuthorizationError()

    def _check_admin(self, operation: Operation, principal: Principal | None) -> None:
        if operation not in self._definition.admin_required:
            return
        if principal is None or not principal.is_admin:
            self._log.rejected(OperationStage.AUTH, "Admin required", operation=operation.value)
            raise AuthorizationError("Admin access required")

    def _validate(self, payload: Any, *, partial: bool) -> dict[str, Any]:
        schema = self._definition.update_schema if partial else self._definition.create_schema
        self._log.step(OperationStage.VALIDATE, "Validating payload", schema=schema.__name__)
        result = validate_payload(
            payload, schema, partial=partial, redact=self._definition.hidden_fields
        )
        if not result.ok:
            self._log.rejected(OperationStage.VALIDATE, "Invalid payload", errors=len(result.errors))
            raise ValidationError(list(result.errors))
        return result.value

    async def _check_references(self, values: dict[str, Any]) -> None:
        if not self._definition.references or self._resolve_repository is None:
            return
        errors: list[FieldError] = []
        for field, resource in self._definition.references.items():
            ref_id = values.get(field)
            if ref_id is None:
                continue
            self._log.step(OperationStage.REFERENCES, "Resolving reference", field=field, id=ref_id)
            if await self._resolve_repository(resource).get_by_id(ref_id) is None:
                errors.append(
                    FieldError(field=field, message=f"Referenced {resource} record does not exist", value=ref_id)
                )
        if errors:
            self._log.rejected(OperationStage.REFERENCES, "Dangling reference", errors=len(errors))
            raise ValidationError(errors)

    async def _check_unique(self, values: dict[str, Any], exclude_id: str | None = None) -> None:
        for field in self._definition.unique_fields:
            value = values.get(field)
            if value is None:
                continue
            self._log.step(OperationStage.UNIQUE, "Checking uniqueness", field=field)
            clash = await self._repository.find_by_field(field, value, exclude_id=exclude_id)
            if clash is not None:
                self._log.rejected(OperationStage.UNIQUE, "Duplicate value", field=field)
                raise DuplicateEntityError(self._definition.label, field, str(value))

    def _prepare(self, values: dict[str, Any], operation: Operation) -> dict[str, Any]:
        if self._definition.prepare is None:
            return values
        return self._definition.prepare(values, operation)

    async def _find(self, record_id: str) -> Record:
        record = await self._repository.get_by_id(record_id)
        if record is None:
            raise EntityNotFoundError(self._definition.label, record_id)
        return record
