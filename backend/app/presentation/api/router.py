"""Top-level API router — one CRUD sub-router per registered resource."""

from fastapi import APIRouter

from app.application.resources import RESOURCES
from app.presentation.api.endpoints.error_simulation import router as error_simulation_router
from app.presentation.api.endpoints.resources import build_resource_router


def build_api_router(*, include_error_simulation: bool = False) -> APIRouter:
    router = APIRouter(prefix="/api")
    for definition in RESOURCES:
        router.include_router(build_resource_router(definition))
    if include_error_simulation:
        router.include_router(error_simulation_router)
    return router
