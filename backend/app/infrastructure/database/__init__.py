from .base import Base
from .session import get_engine, get_session_factory, session_scope
from .models import RecordModel

__all__ = [
    "Base",
    "get_engine",
    "get_session_factory",
    "session_scope",
    "RecordModel",
]
