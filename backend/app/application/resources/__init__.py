"""Registry of the resources served by the API."""

from .comments import COMMENTS
from .contacts import CONTACTS
from .definition import Operation, ResourceDefinition
from .posts import POSTS
from .users import USERS

RESOURCES: tuple[ResourceDefinition, ...] = (CONTACTS, POSTS, COMMENTS, USERS)

__all__ = [
    "COMMENTS",
    "CONTACTS",
    "POSTS",
    "USERS",
    "RESOURCES",
    "Operation",
    "ResourceDefinition",
]
