from .principal import Principal
from .query import DEFAULT_LIMIT, DEFAULT_PAGE, ListQuery, SortOrder
from .record import Record, SYSTEM_FIELDS
from .validation import FieldError, ValidationResult

__all__ = [
    "Principal",
    "DEFAULT_LIMIT",
    "DEFAULT_PAGE",
    "ListQuery",
    "SortOrder",
    "Record",
    "SYSTEM_FIELDS",
    "FieldError",
    "ValidationResult",
]
