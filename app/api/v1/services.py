"""Public service catalog endpoints."""

from fastapi import APIRouter

from app.api.deps import DbSession
from app.schemas.service import ServiceListResponse, ServiceRead
from app.services.catalog import CatalogService

router = APIRouter()


@router.get(
    "",
    response_model=ServiceListResponse,
    summary="List services",
    description="Active bookable services, seeding the defaults on first use",
)
async def list_services(session: DbSession) -> ServiceListResponse:
    services = await CatalogService(session).list_active_services()
    return ServiceListResponse(
        services=[ServiceRead.model_validate(s) for s in services]
    )
