"""Coordinate deduplication and entity linking.

When a marker or user is created with a coordinate payload, the payload
is resolved to a persisted row before the entity is stored:

1. a payload carrying an ``id`` must name an existing row, which is
   used as is (the bounding-box search is skipped);
2. otherwise the first stored row within +/- tolerance degrees on both
   axes is reused;
3. otherwise the payload is inserted as a new row.

The check-then-insert sequence is not atomic. Two concurrent requests
for the same new point can both insert a row.
"""

from datetime import date
from typing import Protocol

import structlog

from ayra.models.coordinates import CoordinatesDB, CoordinatesPayload
from ayra.services.coordinate_store import CoordinateStore
from ayra.services.exceptions import CoordinatesNotFoundError, MissingCoordinatesError

logger = structlog.get_logger(__name__)

# Roughly 11 m at the equator, less in longitude towards the poles
COORDINATE_TOLERANCE = 0.0001

# Absorbs binary rounding when a point sits exactly on the box edge
_EDGE_SLACK = 1e-9


class HasCoordinates(Protocol):
    coordinates_id: int | None
    coordinates: CoordinatesDB | None


def bounding_box(latitude: float, longitude: float, tolerance: float) -> tuple[float, float, float, float]:
    """Return (lat_min, lat_max, lon_min, lon_max) around a point."""
    reach = tolerance + _EDGE_SLACK
    return (
        latitude - reach,
        latitude + reach,
        longitude - reach,
        longitude + reach,
    )


class CoordinateResolver:
    """Decides whether to reuse a stored coordinate or insert a new one."""

    def __init__(self, store: CoordinateStore, tolerance: float = COORDINATE_TOLERANCE):
        """Initialize coordinate resolver.

        Args:
            store: Coordinate lookup and insert capability
            tolerance: Half-width of the matching box, in degrees
        """
        self.store = store
        self.tolerance = tolerance

    async def resolve(self, candidate: CoordinatesPayload) -> CoordinatesDB:
        """Resolve a candidate coordinate to a persisted row.

        Args:
            candidate: Coordinates from the request payload

        Returns:
            Existing or newly inserted coordinate row

        Raises:
            CoordinatesNotFoundError: If the candidate names an id that does not exist
        """
        if candidate.id is not None:
            existing = await self.store.get(candidate.id)
            if existing is None:
                raise CoordinatesNotFoundError(candidate.id)
            logger.info("coordinates_reused", coordinates_id=existing.id, match="id")
            return existing

        lat_min, lat_max, lon_min, lon_max = bounding_box(
            candidate.latitude, candidate.longitude, self.tolerance
        )
        nearby = await self.store.find_in_box(lat_min, lat_max, lon_min, lon_max)
        if nearby:
            match = nearby[0]
            logger.info(
                "coordinates_reused",
                coordinates_id=match.id,
                match="proximity",
                candidates=len(nearby),
            )
            return match

        created = CoordinatesDB(
            latitude=candidate.latitude,
            longitude=candidate.longitude,
            date_coordinate=candidate.date_coordinate or date.today(),
        )
        created = await self.store.add(created)
        logger.info(
            "coordinates_created",
            coordinates_id=created.id,
            latitude=created.latitude,
            longitude=created.longitude,
        )
        return created

    async def resolve_required(self, candidate: CoordinatesPayload | None) -> CoordinatesDB:
        """Resolve coordinates that the entity cannot exist without.

        Raises:
            MissingCoordinatesError: If no coordinates were supplied
        """
        if candidate is None:
            raise MissingCoordinatesError()
        return await self.resolve(candidate)

    async def resolve_optional(self, candidate: CoordinatesPayload | None) -> CoordinatesDB | None:
        """Resolve coordinates that may legitimately be absent."""
        if candidate is None:
            return None
        return await self.resolve(candidate)


def link_coordinates(entity: HasCoordinates, coordinates: CoordinatesDB | None) -> None:
    """Attach a resolved coordinate row to an entity before it is stored."""
    entity.coordinates = coordinates
    entity.coordinates_id = coordinates.id if coordinates is not None else None
