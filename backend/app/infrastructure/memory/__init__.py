"""In-memory storage package."""

from .record_repository import InMemoryRecordRepository, InMemoryRecordStore

__all__ = ["InMemoryRecordRepository", "InMemoryRecordStore"]
