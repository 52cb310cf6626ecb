"""Domain entity — the authenticated caller of a request."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Principal:
    id: str
    is_admin: bool = False
