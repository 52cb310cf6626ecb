"""Abstract interface (port) for a backing store holding every resource."""

from abc import ABC, abstractmethod

from app.application.interfaces.record_repository import RecordRepository


class RecordStore(ABC):
    """Hands out one RecordRepository per resource name."""

    @abstractmethod
    def repository(self, resource: str) -> RecordRepository:
        ...
