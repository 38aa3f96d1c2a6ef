"""Map marker management with coordinate deduplication."""

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.alert import AlertDB
from ayra.models.map_marker import MapMarkerCreate, MapMarkerDB, MapMarkerUpdate
from ayra.models.pagination import IntensityFilter
from ayra.services.coordinate_resolver import (
    COORDINATE_TOLERANCE,
    CoordinateResolver,
    link_coordinates,
)
from ayra.services.coordinate_store import CoordinateStore
from ayra.services.exceptions import EntityInUseError, EntityNotFoundError
from ayra.services.filters import (
    MARKER_SORT_FIELDS,
    PageRequest,
    apply_page,
    build_marker_filters,
    parse_sort,
)

logger = structlog.get_logger(__name__)

DEFAULT_MARKER_SORT = "id,desc"


class MarkerManager:
    """Creates, reads, updates and deletes map markers.

    Every marker points at exactly one coordinate row, resolved through
    the CoordinateResolver so nearby points share a row.
    """

    def __init__(self, db_session: AsyncSession, tolerance: float = COORDINATE_TOLERANCE):
        """Initialize marker manager.

        Args:
            db_session: Database session for persistence
            tolerance: Coordinate matching window in degrees
        """
        self.db_session = db_session
        self.resolver = CoordinateResolver(CoordinateStore(db_session), tolerance=tolerance)

    async def create_marker(self, request: MapMarkerCreate) -> MapMarkerDB:
        """Create a map marker linked to a resolved coordinate.

        Args:
            request: Marker fields and coordinate payload

        Returns:
            The persisted marker with its identifier assigned

        Raises:
            MissingCoordinatesError: If the request carries no coordinates
            CoordinatesNotFoundError: If the coordinate id does not exist
        """
        coordinates = await self.resolver.resolve_required(request.coordinates)

        marker = MapMarkerDB(
            title=request.title,
            description=request.description,
            intensity=request.intensity,
            radius=request.radius,
        )
        link_coordinates(marker, coordinates)

        self.db_session.add(marker)
        await self.db_session.flush()
        await self.db_session.commit()

        logger.info(
            "marker_created",
            marker_id=marker.id,
            coordinates_id=coordinates.id,
            intensity=marker.intensity,
        )
        return marker

    async def get_marker(self, marker_id: int) -> MapMarkerDB:
        """Get a marker by identifier.

        Raises:
            EntityNotFoundError: If no marker has this identifier
        """
        marker = await self.db_session.get(MapMarkerDB, marker_id)
        if marker is None:
            raise EntityNotFoundError("Map marker", marker_id)
        return marker

    async def list_markers(
        self,
        filters: IntensityFilter | None = None,
        page_request: PageRequest | None = None,
        sort: str | None = None,
    ) -> tuple[list[MapMarkerDB], int]:
        """List markers matching the filters, one page at a time.

        Args:
            filters: Optional intensity filter
            page_request: Page index and size (defaults to first page of 10)
            sort: ``field,direction`` expression (defaults to id descending)

        Returns:
            Tuple of (markers on this page, total matching markers)
        """
        page_request = page_request or PageRequest()
        clauses = build_marker_filters(filters)
        order_by = parse_sort(sort, MARKER_SORT_FIELDS, DEFAULT_MARKER_SORT)

        count_query = select(func.count(MapMarkerDB.id)).where(*clauses)
        total = (await self.db_session.execute(count_query)).scalar_one()

        # id breaks ties so pages stay stable for non-unique sort keys
        query = select(MapMarkerDB).where(*clauses).order_by(order_by, MapMarkerDB.id.desc())
        query = apply_page(query, page_request)

        result = await self.db_session.execute(query)
        return list(result.scalars().all()), total

    async def update_marker(self, marker_id: int, request: MapMarkerUpdate) -> MapMarkerDB:
        """Apply a partial update to a marker.

        Only fields present in the request are changed. New coordinates
        go through the same resolution as on creation.
        """
        marker = await self.get_marker(marker_id)

        if request.title is not None:
            marker.title = request.title
        if request.description is not None:
            marker.description = request.description
        if request.intensity is not None:
            marker.intensity = request.intensity
        if request.radius is not None:
            marker.radius = request.radius
        if request.coordinates is not None:
            coordinates = await self.resolver.resolve(request.coordinates)
            link_coordinates(marker, coordinates)

        await self.db_session.flush()
        await self.db_session.commit()
        logger.info("marker_updated", marker_id=marker.id)
        return marker

    async def delete_marker(self, marker_id: int) -> None:
        """Delete a marker that no alert references.

        Raises:
            EntityNotFoundError: If no marker has this identifier
            EntityInUseError: If alerts still point at the marker
        """
        marker = await self.get_marker(marker_id)

        referencing = await self.db_session.execute(
            select(func.count(AlertDB.id)).where(AlertDB.map_marker_id == marker_id)
        )
        alert_count = referencing.scalar_one()
        if alert_count:
            raise EntityInUseError(
                f"Map marker {marker_id} is referenced by {alert_count} alert(s)",
                details={"alerts": alert_count},
            )

        await self.db_session.delete(marker)
        await self.db_session.commit()
        logger.info("marker_deleted", marker_id=marker_id)
