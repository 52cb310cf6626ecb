"""Domain entities for list queries — search, sort, equality filters and paging."""

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass
class ListQuery:
    """Everything a store needs to answer one list request.

    ``search`` is matched case-insensitively as a substring against any of
    ``search_fields``. ``filters`` are exact matches on wire field names.
    ``owner_ref`` restricts the result to one principal's records.
    """

    search: str | None = None
    search_fields: tuple[str, ...] = ()
    sort_by: str = "createdAt"
    sort_order: SortOrder = SortOrder.ASC
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    owner_ref: str | None = None
    filters: dict[str, str] = field(default_factory=dict)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit
