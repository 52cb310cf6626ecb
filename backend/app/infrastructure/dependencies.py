"""FastAPI dependency injection — wires infrastructure to application layer."""

from collections.abc import AsyncGenerator, Callable
from functools import lru_cache

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.config import get_settings
from app.application.interfaces import RecordStore
from app.application.resources import ResourceDefinition
from app.application.services import ResourceService
from app.domain.entities import Principal
from app.domain.exceptions import AuthenticationError
from app.infrastructure.auth import StaticTokenAuthenticator
from app.infrastructure.database import session_scope
from app.infrastructure.database.repositories import SQLAlchemyRecordStore


@lru_cache
def get_authenticator() -> StaticTokenAuthenticator:
    """Singleton authenticator built from the configured token table."""
    settings = get_settings()
    return StaticTokenAuthenticator(settings.auth_tokens, settings.admin_principals)


bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    authenticator: StaticTokenAuthenticator = Depends(get_authenticator),
) -> Principal | None:
    """The caller behind the Authorization header, or None when anonymous.

    A header that is present but not ``Bearer <token>`` is rejected rather
    than treated as anonymous.
    """
    if credentials is None:
        if request.headers.get("Authorization", "").strip():
            raise AuthenticationError("Authorization header must use the Bearer scheme")
        return None
    return authenticator.authenticate(credentials.credentials)


async def get_record_store(request: Request) -> AsyncGenerator[RecordStore, None]:
    """Provides the configured record store.

    Database mode opens one session per request, committed when the handler
    returns and rolled back when it raises.
    """
    if get_settings().record_store == "database":
        async with session_scope() as session:
            yield SQLAlchemyRecordStore(session)
    else:
        yield request.app.state.record_store


def resource_service_provider(
    definition: ResourceDefinition,
) -> Callable[..., AsyncGenerator[ResourceService, None]]:
    """Build a dependency yielding a ResourceService bound to ``definition``."""

    async def get_resource_service(
        store: RecordStore = Depends(get_record_store),
    ) -> AsyncGenerator[ResourceService, None]:
        yield ResourceService(
            definition,
            store.repository(definition.name),
            resolve_repository=store.repository,
        )

    return get_resource_service
