"""CRUD endpoints, generated once per resource definition."""

from typing import Any

from fastapi import APIRouter, Body, Depends, Query, Request, status

from app.application.resources import ResourceDefinition
from app.application.schemas import ApiResponse
from app.application.services import ResourceService
from app.domain.entities import DEFAULT_LIMIT, DEFAULT_PAGE, Principal, SortOrder
from app.infrastructure.dependencies import get_current_principal, resource_service_provider

MAX_LIMIT = 100


def build_resource_router(definition: ResourceDefinition) -> APIRouter:
    """Mount list/read/create/update/delete for ``definition`` at ``/<name>``."""
    router = APIRouter(prefix=f"/{definition.name}", tags=[definition.label])
    get_service = resource_service_provider(definition)
    title = definition.name.capitalize()

    @router.get("", response_model=ApiResponse)
    async def list_records(
        request: Request,
        search: str | None = Query(default=None),
        page: int = Query(default=DEFAULT_PAGE, ge=1),
        limit: int = Query(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT),
        sort_by: str | None = Query(default=None, alias="sortBy"),
        sort_order: SortOrder | None = Query(default=None, alias="sortOrder"),
        principal: Principal | None = Depends(get_current_principal),
        service: ResourceService = Depends(get_service),
    ) -> ApiResponse:
        """Search, sort and page through the resource's records."""
        filters = {
            name: request.query_params[name]
            for name in definition.filterable_fields
            if name in request.query_params
        }
        records, page_info = await service.list_records(
            principal,
            search=search,
            page=page,
            limit=limit,
            sort_by=sort_by,
            sort_order=sort_order,
            filters=filters,
        )
        return ApiResponse(
            message=f"{title} retrieved successfully",
            data={
                definition.name: [service.render(r) for r in records],
                "pagination": page_info.to_dict(),
            },
        )

    @router.get("/{record_id}", response_model=ApiResponse)
    async def get_record(
        record_id: str,
        principal: Principal | None = Depends(get_current_principal),
        service: ResourceService = Depends(get_service),
    ) -> ApiResponse:
        record = await service.get_record(record_id, principal)
        return ApiResponse(
            message=f"{definition.label} retrieved successfully",
            data={definition.item_key: service.render(record)},
        )

    @router.post(
        "",
        response_model=ApiResponse,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_record(
        payload: Any = Body(default=None),
        principal: Principal | None = Depends(get_current_principal),
        service: ResourceService = Depends(get_service),
    ) -> ApiResponse:
        record = await service.create_record({} if payload is None else payload, principal)
        return ApiResponse(
            message=f"{definition.label} created successfully",
            data={definition.item_key: service.render(record)},
        )

    @router.put("/{record_id}", response_model=ApiResponse)
    async def update_record(
        record_id: str,
        payload: Any = Body(default=None),
        principal: Principal | None = Depends(get_current_principal),
        service: ResourceService = Depends(get_service),
    ) -> ApiResponse:
        record = await service.update_record(
            record_id, {} if payload is None else payload, principal
        )
        return ApiResponse(
            message=f"{definition.label} updated successfully",
            data={definition.item_key: service.render(record)},
        )

    @router.delete("/{record_id}", response_model=ApiResponse)
    async def delete_record(
        record_id: str,
        principal: Principal | None = Depends(get_current_principal),
        service: ResourceService = Depends(get_service),
    ) -> ApiResponse:
        """Permanently remove a record; reports how many remain in scope."""
        removed, remaining = await service.delete_record(record_id, principal)
        return ApiResponse(
            message=f"{definition.label} deleted successfully",
            data={"deleted": service.render(removed), "remaining": remaining},
        )

    return router
