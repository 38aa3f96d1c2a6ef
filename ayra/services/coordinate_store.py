"""Persistence access for coordinate rows."""

from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.coordinates import CoordinatesDB


class CoordinateStore:
    """Lookup and insert operations over the coordinates table."""

    def __init__(self, db_session: AsyncSession):
        """Initialize coordinate store.

        Args:
            db_session: Database session for persistence
        """
        self.db_session = db_session

    async def get(self, coordinates_id: int) -> CoordinatesDB | None:
        """Get a coordinate row by identifier.

        Args:
            coordinates_id: Coordinate identifier

        Returns:
            The row or None if not found
        """
        return await self.db_session.get(CoordinatesDB, coordinates_id)

    async def find_in_box(
        self,
        lat_min: float,
        lat_max: float,
        lon_min: float,
        lon_max: float,
    ) -> Sequence[CoordinatesDB]:
        """Find coordinates inside an axis-aligned bounding box.

        Bounds are inclusive on both axes. Results are ordered by
        ascending identifier so the oldest row comes first.

        Args:
            lat_min: Lower latitude bound
            lat_max: Upper latitude bound
            lon_min: Lower longitude bound
            lon_max: Upper longitude bound

        Returns:
            Matching rows, oldest first
        """
        query = (
            select(CoordinatesDB)
            .where(
                CoordinatesDB.latitude.between(lat_min, lat_max),
                CoordinatesDB.longitude.between(lon_min, lon_max),
            )
            .order_by(CoordinatesDB.id.asc())
        )
        result = await self.db_session.execute(query)
        return result.scalars().all()

    async def add(self, coordinates: CoordinatesDB) -> CoordinatesDB:
        """Insert a coordinate row and assign its identifier.

        The session is flushed, not committed; the surrounding request
        decides whether the insert survives.
        """
        self.db_session.add(coordinates)
        await self.db_session.flush()
        return coordinates

    async def count(self) -> int:
        """Count stored coordinate rows."""
        result = await self.db_session.execute(select(func.count(CoordinatesDB.id)))
        return result.scalar_one()
