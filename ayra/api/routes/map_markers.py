"""Map marker endpoints.

Reads are public; changing or removing a marker requires a bearer token.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.api.middleware.auth import get_current_user
from ayra.config import get_settings
from ayra.models.map_marker import (
    MapMarkerCreate,
    MapMarkerResponse,
    MapMarkerUpdate,
)
from ayra.models.pagination import IntensityFilter, Page
from ayra.models.user import UserDB
from ayra.services.database import get_db_session
from ayra.services.filters import PageRequest
from ayra.services.marker_manager import MarkerManager

router = APIRouter(prefix="/map-marker", tags=["map markers"])


def _manager(db: AsyncSession) -> MarkerManager:
    return MarkerManager(db, tolerance=get_settings().coordinate_tolerance)


@router.post(
    "",
    response_model=MapMarkerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a map marker",
)
async def create_marker(
    request: MapMarkerCreate,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> MapMarkerResponse:
    """Create a marker, reusing stored coordinates within the matching window.

    Args:
        request: Marker payload with coordinates (by id or by position)
        response: Outgoing response, used to set the Location header
        db: Database session

    Returns:
        The created marker with its resolved coordinates
    """
    marker = await _manager(db).create_marker(request)
    response.headers["Location"] = f"/map-marker/{marker.id}"
    return MapMarkerResponse.model_validate(marker)


@router.get("", response_model=Page[MapMarkerResponse], summary="List map markers")
async def list_markers(
    intensity: str | None = Query(None, description="Exact intensity label to match"),
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int | None = Query(None, ge=1, description="Page size"),
    sort: str | None = Query(None, description="Sort as field,direction (default id,desc)"),
    db: AsyncSession = Depends(get_db_session),
) -> Page[MapMarkerResponse]:
    """List markers, optionally restricted to one intensity."""
    settings = get_settings()
    size = min(size or settings.default_page_size, settings.max_page_size)

    markers, total = await _manager(db).list_markers(
        filters=IntensityFilter(intensity=intensity),
        page_request=PageRequest(page=page, size=size),
        sort=sort,
    )
    return Page[MapMarkerResponse].build(
        content=[MapMarkerResponse.model_validate(marker) for marker in markers],
        page=page,
        size=size,
        total_elements=total,
    )


@router.get("/{marker_id}", response_model=MapMarkerResponse, summary="Get a map marker")
async def get_marker(
    marker_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MapMarkerResponse:
    marker = await _manager(db).get_marker(marker_id)
    return MapMarkerResponse.model_validate(marker)


@router.put("/{marker_id}", response_model=MapMarkerResponse, summary="Update a map marker")
async def update_marker(
    marker_id: int,
    request: MapMarkerUpdate,
    db: AsyncSession = Depends(get_db_session),
    current_user: UserDB = Depends(get_current_user),
) -> MapMarkerResponse:
    """Apply a partial update to a marker.

    Raises:
        EntityNotFoundError: If the marker does not exist
        CoordinatesNotFoundError: If the new coordinate id does not exist
    """
    marker = await _manager(db).update_marker(marker_id, request)
    return MapMarkerResponse.model_validate(marker)


@router.delete(
    "/{marker_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a map marker",
)
async def delete_marker(
    marker_id: int,
    db: AsyncSession = Depends(get_db_session),
    current_user: UserDB = Depends(get_current_user),
) -> Response:
    """Delete a marker no alert refers to."""
    await _manager(db).delete_marker(marker_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
