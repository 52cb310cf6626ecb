"""Service banner listing every registered endpoint."""

from fastapi import APIRouter

from app.config import get_settings
from app.application.resources import RESOURCES
from app.application.schemas import ApiResponse

router = APIRouter(tags=["Root"])


def _resource_endpoints(name: str) -> dict[str, str]:
    base = f"/api/{name}"
    return {
        "getAll": f"GET {base}",
        "getById": f"GET {base}/:id",
        "create": f"POST {base}",
        "update": f"PUT {base}/:id",
        "delete": f"DELETE {base}/:id",
    }


@router.get("/", response_model=ApiResponse)
async def banner() -> ApiResponse:
    settings = get_settings()
    endpoints: dict[str, object] = {"health": "GET /health"}
    endpoints.update({d.name: _resource_endpoints(d.name) for d in RESOURCES})
    return ApiResponse(
        message=f"{settings.app_title} is running!",
        data={"version": settings.app_version, "endpoints": endpoints},
    )
