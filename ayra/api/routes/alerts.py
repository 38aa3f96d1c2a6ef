"""Read-only alert endpoints."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.config import get_settings
from ayra.models.alert import AlertDetailResponse, AlertResponse
from ayra.models.pagination import IntensityFilter, Page
from ayra.services.alert_manager import AlertManager
from ayra.services.database import get_db_session
from ayra.services.filters import PageRequest

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.get("", response_model=Page[AlertResponse], summary="List alerts")
async def list_alerts(
    intensity: str | None = Query(None, description="Exact intensity label to match"),
    page: int = Query(0, ge=0),
    size: int | None = Query(None, ge=1),
    sort: str | None = Query(None, description="Sort as field,direction (default alert_datetime,desc)"),
    db: AsyncSession = Depends(get_db_session),
) -> Page[AlertResponse]:
    settings = get_settings()
    size = min(size or settings.default_page_size, settings.max_page_size)

    alerts, total = await AlertManager(db).list_alerts(
        filters=IntensityFilter(intensity=intensity),
        page_request=PageRequest(page=page, size=size),
        sort=sort,
    )
    return Page[AlertResponse].build(
        content=[AlertResponse.model_validate(alert) for alert in alerts],
        page=page,
        size=size,
        total_elements=total,
    )


@router.get("/{alert_id}", response_model=AlertDetailResponse, summary="Get an alert")
async def get_alert(
    alert_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> AlertDetailResponse:
    """Get one alert with its safe routes, locations and tips."""
    alert = await AlertManager(db).get_alert(alert_id)
    return AlertDetailResponse.model_validate(alert)
