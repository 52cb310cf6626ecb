"""Concrete repository implementation for Record backed by SQLAlchemy."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import String, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.application.interfaces import RecordRepository, RecordStore
from app.domain.entities import ListQuery, Record, SortOrder
from app.infrastructure.database.models import RecordModel

_COLUMNS = {
    "id": RecordModel.id,
    "ownerRef": RecordModel.owner_ref,
    "createdAt": RecordModel.created_at,
    "updatedAt": RecordModel.updated_at,
}


def _aware(value: datetime) -> datetime:
    """SQLite drops tzinfo; stored values are always UTC."""
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class SQLAlchemyRecordRepository(RecordRepository):
    """Implements the RecordRepository port using SQLAlchemy async sessions.

    Search, filter and sort reach into the JSON document through
    ``data[field].as_string()``, which renders as ``->>`` on PostgreSQL and
    ``JSON_EXTRACT`` on SQLite.
    """

    def __init__(self, session: AsyncSession, resource: str):
        self._session = session
        self._resource = resource

    def _to_entity(self, model: RecordModel) -> Record:
        """Map ORM model → domain entity."""
        return Record(
            id=model.id,
            resource=model.resource,
            owner_ref=model.owner_ref,
            data=dict(model.data or {}),
            created_at=_aware(model.created_at),
            updated_at=_aware(model.updated_at),
        )

    def _to_model(self, entity: Record) -> RecordModel:
        """Map domain entity → ORM model (for creation)."""
        return RecordModel(
            id=entity.id,
            resource=entity.resource,
            owner_ref=entity.owner_ref,
            data=entity.data,
            created_at=entity.created_at,
            updated_at=entity.updated_at,
        )

    def _field(self, name: str) -> ColumnElement:
        column = _COLUMNS.get(name)
        if column is not None:
            return column
        return RecordModel.data[name].as_string()

    async def _get_model(self, record_id: str) -> RecordModel | None:
        model = await self._session.get(RecordModel, record_id)
        if model is None or model.resource != self._resource:
            return None
        return model

    async def create(self, record: Record) -> Record:
        if await self._session.get(RecordModel, record.id) is not None:
            raise ValueError(f"{self._resource} record {record.id} already exists")
        model = self._to_model(record)
        self._session.add(model)
        await self._session.flush()
        return self._to_entity(model)

    async def get_by_id(self, record_id: str) -> Record | None:
        model = await self._get_model(record_id)
        return self._to_entity(model) if model else None

    async def find_all(self, query: ListQuery) -> tuple[list[Record], int]:
        stmt = select(RecordModel).where(RecordModel.resource == self._resource)

        if query.owner_ref is not None:
            stmt = stmt.where(RecordModel.owner_ref == query.owner_ref)
        for field, expected in query.filters.items():
            stmt = stmt.where(self._field(field) == expected)
        if query.search and query.search_fields:
            term = query.search.lower()
            stmt = stmt.where(
                or_(
                    *(
                        func.lower(self._field(f), type_=String).contains(term, autoescape=True)
                        for f in query.search_fields
                    )
                )
            )

        total = await self._session.scalar(
            select(func.count()).select_from(stmt.subquery())
        )

        sort_column = self._field(query.sort_by)
        ordering = sort_column.desc() if query.sort_order is SortOrder.DESC else sort_column.asc()
        stmt = stmt.order_by(ordering, RecordModel.id).offset(query.offset).limit(query.limit)
        result = await self._session.execute(stmt)
        return [self._to_entity(row) for row in result.scalars().all()], total or 0

    async def find_by_field(
        self, field: str, value: Any, *, exclude_id: str | None = None
    ) -> Record | None:
        stmt = select(RecordModel).where(
            RecordModel.resource == self._resource,
            func.lower(self._field(field), type_=String) == str(value).lower(),
        )
        if exclude_id is not None:
            stmt = stmt.where(RecordModel.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def update_by_id(self, record_id: str, patch: dict[str, Any]) -> Record | None:
        model = await self._get_model(record_id)
        if model is None:
            return None
        entity = self._to_entity(model)
        entity.apply_patch(patch)
        # reassign so the JSON column is flagged dirty
        model.data = entity.data
        model.updated_at = entity.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def delete_by_id(self, record_id: str) -> Record | None:
        model = await self._get_model(record_id)
        if model is None:
            return None
        entity = self._to_entity(model)
        await self._session.delete(model)
        await self._session.flush()
        return entity

    async def count(self, owner_ref: str | None = None) -> int:
        stmt = select(func.count()).select_from(RecordModel).where(
            RecordModel.resource == self._resource
        )
        if owner_ref is not None:
            stmt = stmt.where(RecordModel.owner_ref == owner_ref)
        return await self._session.scalar(stmt) or 0


class SQLAlchemyRecordStore(RecordStore):
    """All resources share one session, so one request sees one transaction."""

    def __init__(self, session: AsyncSession):
        self._session = session

    def repository(self, resource: str) -> SQLAlchemyRecordRepository:
        return SQLAlchemyRecordRepository(self._session, resource)
