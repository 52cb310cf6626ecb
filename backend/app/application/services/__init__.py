from .payload_validator import validate_payload
from .resource_service import ResourceService

__all__ = [
    "validate_payload",
    "ResourceService",
]
