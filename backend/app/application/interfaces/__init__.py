from .record_repository import RecordRepository
from .record_store import RecordStore

__all__ = [
    "RecordRepository",
    "RecordStore",
]
