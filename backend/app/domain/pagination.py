"""Search, sort and page helpers over already-fetched items.

Pure functions: nothing here touches a store. The in-memory repository uses
all of them; the SQL repository only needs ``build_page_info`` because the
database does the slicing.
"""

import math
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from app.domain.entities.query import DEFAULT_LIMIT, DEFAULT_PAGE, SortOrder

T = TypeVar("T")

ValueGetter = Callable[[T, str], Any]


def _mapping_value(item: Any, name: str) -> Any:
    return item.get(name)


def as_text(value: Any) -> str:
    """Render a stored value for comparison; missing values compare as ''."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return " ".join(as_text(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class PageInfo:
    current_page: int
    total_pages: int
    total_items: int
    limit: int
    has_next: bool
    has_prev: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "currentPage": self.current_page,
            "totalPages": self.total_pages,
            "totalItems": self.total_items,
            "limit": self.limit,
            "hasNext": self.has_next,
            "hasPrev": self.has_prev,
        }


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    info: PageInfo


def build_page_info(total: int, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> PageInfo:
    """Compute paging metadata for ``total`` items.

    Raises:
        ValueError: if ``page`` or ``limit`` is below 1.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    start = (page - 1) * limit
    end = start + limit
    return PageInfo(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        limit=limit,
        has_next=end < total,
        has_prev=start > 0,
    )


def paginate(items: Sequence[T], page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT) -> Page[T]:
    """Slice ``items`` to one page. A page past the end yields an empty slice."""
    info = build_page_info(len(items), page, limit)
    start = (page - 1) * limit
    return Page(items=list(items[start : start + limit]), info=info)


def search_items(
    items: Iterable[T],
    term: str | None,
    fields: Sequence[str],
    value_of: ValueGetter = _mapping_value,
) -> list[T]:
    """Keep items where ANY of ``fields`` contains ``term``, ignoring case."""
    if not term or not fields:
        return list(items)
    needle = term.lower()
    return [
        item
        for item in items
        if any(needle in as_text(value_of(item, f)).lower() for f in fields)
    ]


def sort_items(
    items: Iterable[T],
    sort_by: str | None,
    order: SortOrder = SortOrder.ASC,
    value_of: ValueGetter = _mapping_value,
) -> list[T]:
    """Stable lexicographic sort on ``sort_by``."""
    if not sort_by:
        return list(items)
    return sorted(
        items,
        key=lambda item: as_text(value_of(item, sort_by)),
        reverse=order is SortOrder.DESC,
    )
