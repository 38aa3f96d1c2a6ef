"""Integration tests for map marker management."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.coordinates import CoordinatesPayload
from ayra.models.map_marker import MapMarkerCreate, MapMarkerUpdate
from ayra.models.pagination import IntensityFilter
from ayra.services.exceptions import (
    EntityInUseError,
    EntityNotFoundError,
    InvalidSortError,
    MissingCoordinatesError,
)
from ayra.services.filters import PageRequest
from ayra.services.marker_manager import MarkerManager


def _create_request(title: str = "Ponto de alagamento", intensity: str = "medium", **kwargs) -> MapMarkerCreate:
    return MapMarkerCreate(
        title=title,
        description="Água na pista",
        intensity=intensity,
        radius=kwargs.pop("radius", 25.0),
        coordinates=kwargs.pop("coordinates", CoordinatesPayload(latitude=-22.9, longitude=-43.2)),
    )


@pytest.mark.integration
class TestCreateMarker:
    """Integration tests for marker creation."""

    @pytest.mark.asyncio
    async def test_create_marker_persists_fields(self, async_db_session: AsyncSession) -> None:
        """Test that a created marker can be read back."""
        manager = MarkerManager(async_db_session)

        created = await manager.create_marker(_create_request())
        fetched = await manager.get_marker(created.id)

        assert fetched.title == "Ponto de alagamento"
        assert fetched.intensity == "medium"
        assert fetched.radius == 25.0
        assert fetched.coordinates.latitude == -22.9

    @pytest.mark.asyncio
    async def test_create_marker_without_coordinates_is_rejected(self, async_db_session: AsyncSession) -> None:
        """Test that a marker needs coordinates."""
        manager = MarkerManager(async_db_session)

        with pytest.raises(MissingCoordinatesError):
            await manager.create_marker(_create_request(coordinates=None))

        markers, total = await manager.list_markers()
        assert markers == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_get_unknown_marker_raises(self, async_db_session: AsyncSession) -> None:
        """Test that a missing marker is reported as not found."""
        with pytest.raises(EntityNotFoundError):
            await MarkerManager(async_db_session).get_marker(12345)


@pytest.mark.integration
class TestListMarkers:
    """Integration tests for filtered, paginated listings."""

    @pytest.mark.asyncio
    async def test_default_listing_is_newest_first(self, seeded_db_session: AsyncSession) -> None:
        """Test that markers are sorted by id descending by default."""
        markers, total = await MarkerManager(seeded_db_session).list_markers()

        ids = [marker.id for marker in markers]
        assert total == 5
        assert ids == sorted(ids, reverse=True)

    @pytest.mark.asyncio
    async def test_intensity_filter_is_exact(self, seeded_db_session: AsyncSession) -> None:
        """Test that only markers with the given intensity are returned."""
        markers, total = await MarkerManager(seeded_db_session).list_markers(
            filters=IntensityFilter(intensity="high")
        )

        assert total == 2
        assert {marker.intensity for marker in markers} == {"high"}

    @pytest.mark.asyncio
    async def test_blank_intensity_returns_everything(self, seeded_db_session: AsyncSession) -> None:
        """Test that a blank filter does not restrict results."""
        _, total = await MarkerManager(seeded_db_session).list_markers(filters=IntensityFilter(intensity=" "))

        assert total == 5

    @pytest.mark.asyncio
    async def test_unknown_intensity_returns_empty_page(self, seeded_db_session: AsyncSession) -> None:
        """Test that a label nobody uses yields no markers."""
        markers, total = await MarkerManager(seeded_db_session).list_markers(
            filters=IntensityFilter(intensity="extreme")
        )

        assert markers == []
        assert total == 0

    @pytest.mark.asyncio
    async def test_pages_partition_results(self, seeded_db_session: AsyncSession) -> None:
        """Test that consecutive pages do not overlap and cover every marker."""
        manager = MarkerManager(seeded_db_session)

        first, total = await manager.list_markers(page_request=PageRequest(page=0, size=2))
        second, _ = await manager.list_markers(page_request=PageRequest(page=1, size=2))
        third, _ = await manager.list_markers(page_request=PageRequest(page=2, size=2))

        ids = [marker.id for marker in first + second + third]
        assert total == 5
        assert [len(first), len(second), len(third)] == [2, 2, 1]
        assert len(set(ids)) == 5

    @pytest.mark.asyncio
    async def test_sort_by_radius_ascending(self, seeded_db_session: AsyncSession) -> None:
        """Test that an explicit sort expression is honoured."""
        markers, _ = await MarkerManager(seeded_db_session).list_markers(sort="radius,asc")

        radii = [marker.radius for marker in markers]
        assert radii == sorted(radii)

    @pytest.mark.asyncio
    async def test_invalid_sort_raises(self, seeded_db_session: AsyncSession) -> None:
        """Test that sorting by an unknown field is rejected."""
        with pytest.raises(InvalidSortError):
            await MarkerManager(seeded_db_session).list_markers(sort="coordinates_id,asc")


@pytest.mark.integration
class TestUpdateAndDeleteMarker:
    """Integration tests for marker changes."""

    @pytest.mark.asyncio
    async def test_partial_update_changes_only_given_fields(self, async_db_session: AsyncSession) -> None:
        """Test that omitted fields keep their values."""
        manager = MarkerManager(async_db_session)
        marker = await manager.create_marker(_create_request())

        updated = await manager.update_marker(marker.id, MapMarkerUpdate(intensity="high"))

        assert updated.intensity == "high"
        assert updated.title == "Ponto de alagamento"
        assert updated.radius == 25.0

    @pytest.mark.asyncio
    async def test_update_coordinates_goes_through_resolution(self, async_db_session: AsyncSession) -> None:
        """Test that moving a marker onto another marker's point shares the row."""
        manager = MarkerManager(async_db_session)
        anchor = await manager.create_marker(
            _create_request(coordinates=CoordinatesPayload(latitude=5.0, longitude=5.0))
        )
        marker = await manager.create_marker(_create_request())

        updated = await manager.update_marker(
            marker.id,
            MapMarkerUpdate(coordinates=CoordinatesPayload(latitude=5.00002, longitude=4.99998)),
        )

        assert updated.coordinates_id == anchor.coordinates_id

    @pytest.mark.asyncio
    async def test_delete_marker(self, async_db_session: AsyncSession) -> None:
        """Test that a deleted marker is gone."""
        manager = MarkerManager(async_db_session)
        marker = await manager.create_marker(_create_request())

        await manager.delete_marker(marker.id)

        with pytest.raises(EntityNotFoundError):
            await manager.get_marker(marker.id)

    @pytest.mark.asyncio
    async def test_delete_marker_referenced_by_alert_is_refused(self, seeded_db_session: AsyncSession) -> None:
        """Test that markers backing an alert cannot be deleted."""
        manager = MarkerManager(seeded_db_session)
        markers, _ = await manager.list_markers()

        with pytest.raises(EntityInUseError):
            await manager.delete_marker(markers[0].id)
