from .record_repository import SQLAlchemyRecordRepository, SQLAlchemyRecordStore

__all__ = [
    "SQLAlchemyRecordRepository",
    "SQLAlchemyRecordStore",
]
