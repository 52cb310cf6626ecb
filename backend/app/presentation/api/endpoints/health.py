"""Health check endpoint — reports uptime and record counts per resource."""

import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from app.config import get_settings
from app.application.interfaces import RecordStore
from app.application.resources import RESOURCES
from app.application.schemas import ApiResponse
from app.infrastructure.dependencies import get_record_store

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=ApiResponse)
async def health_check(
    request: Request,
    store: RecordStore = Depends(get_record_store),
) -> ApiResponse:
    """Returns the current application health status."""
    settings = get_settings()
    counts = {
        definition.name: await store.repository(definition.name).count()
        for definition in RESOURCES
    }
    started_at = getattr(request.app.state, "started_at", time.monotonic())
    return ApiResponse(
        message=f"{settings.app_title} is healthy",
        data={
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - started_at, 3),
            "version": settings.app_version,
            "environment": settings.app_env,
            "records": counts,
            "totalRecords": sum(counts.values()),
        },
    )
