"""SQLAlchemy ORM model for the Record entity."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.database.base import Base


class RecordModel(Base):
    """ORM model — maps to the 'records' table.

    One table serves every resource: ``resource`` names the collection and
    ``data`` holds the resource-specific fields as a JSON document.
    """

    __tablename__ = "records"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    resource: Mapped[str] = mapped_column(String(100), nullable=False)
    owner_ref: Mapped[str | None] = mapped_column(String(255), nullable=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_records_resource", "resource"),
        Index("ix_records_resource_owner", "resource", "owner_ref"),
    )

    def __repr__(self) -> str:
        return f"<RecordModel(id={self.id}, resource='{self.resource}')>"
