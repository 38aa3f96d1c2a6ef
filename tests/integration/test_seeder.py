"""Integration tests for the sample data seeder."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.models.alert import AlertDB, SafeLocationDB, SafeRouteDB, SafeTipDB
from ayra.models.coordinates import CoordinatesDB
from ayra.models.map_marker import MapMarkerDB
from ayra.models.user import UserDB
from ayra.services.seeder import SEED_PLACES, SEED_USERS, seed_database
from ayra.services.security import verify_password
from ayra.services.user_manager import UserManager


async def _count(session: AsyncSession, model) -> int:
    return (await session.execute(select(func.count(model.id)))).scalar_one()


@pytest.mark.integration
class TestSeedDatabase:
    """Integration tests for seeding an empty database."""

    @pytest.mark.asyncio
    async def test_seed_inserts_sample_data(self, async_db_session: AsyncSession) -> None:
        """Test that every sample table receives its rows."""
        inserted = await seed_database(async_db_session)
        await async_db_session.commit()

        assert inserted is True
        assert await _count(async_db_session, CoordinatesDB) == len(SEED_PLACES)
        assert await _count(async_db_session, MapMarkerDB) == len(SEED_PLACES)
        assert await _count(async_db_session, AlertDB) == len(SEED_PLACES)
        assert await _count(async_db_session, SafeRouteDB) == len(SEED_PLACES)
        assert await _count(async_db_session, SafeLocationDB) == len(SEED_PLACES)
        assert await _count(async_db_session, SafeTipDB) == len(SEED_PLACES)
        assert await _count(async_db_session, UserDB) == len(SEED_USERS)

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, async_db_session: AsyncSession) -> None:
        """Test that a second run inserts nothing."""
        await seed_database(async_db_session)
        await async_db_session.commit()

        inserted = await seed_database(async_db_session)

        assert inserted is False
        assert await _count(async_db_session, CoordinatesDB) == len(SEED_PLACES)
        assert await _count(async_db_session, UserDB) == len(SEED_USERS)

    @pytest.mark.asyncio
    async def test_reseed_after_seed_user_deleted_is_noop(self, async_db_session: AsyncSession) -> None:
        """Test that deleting a seed user does not make the database look fresh."""
        await seed_database(async_db_session)
        await async_db_session.commit()
        await UserManager(async_db_session).delete_user("joao@example.com")

        inserted = await seed_database(async_db_session)

        assert inserted is False
        assert await _count(async_db_session, CoordinatesDB) == len(SEED_PLACES)
        assert await _count(async_db_session, MapMarkerDB) == len(SEED_PLACES)
        assert await _count(async_db_session, AlertDB) == len(SEED_PLACES)
        assert await _count(async_db_session, UserDB) == len(SEED_USERS) - 1

    @pytest.mark.asyncio
    async def test_seed_skips_users_already_registered(self, async_db_session: AsyncSession) -> None:
        """Test that a taken seed email is left alone while the rest is seeded."""
        async_db_session.add(UserDB(name="Maria", email="maria@example.com", password="x"))
        await async_db_session.commit()

        inserted = await seed_database(async_db_session)
        await async_db_session.commit()

        assert inserted is True
        assert await _count(async_db_session, AlertDB) == len(SEED_PLACES)
        assert await _count(async_db_session, UserDB) == len(SEED_USERS)

    @pytest.mark.asyncio
    async def test_seed_passwords_are_hashed(self, async_db_session: AsyncSession) -> None:
        """Test that seeded users can log in with their documented passwords."""
        await seed_database(async_db_session)

        joao = (
            await async_db_session.execute(select(UserDB).where(UserDB.email == "joao@example.com"))
        ).scalar_one()

        assert joao.password != "senha123"
        assert verify_password("senha123", joao.password)

    @pytest.mark.asyncio
    async def test_markers_and_alerts_share_coordinates(self, async_db_session: AsyncSession) -> None:
        """Test that each alert points at its marker and the marker's coordinate."""
        await seed_database(async_db_session)

        alerts = (await async_db_session.execute(select(AlertDB))).scalars().all()
        for alert in alerts:
            marker = await async_db_session.get(MapMarkerDB, alert.map_marker_id)
            assert marker is not None
            assert marker.coordinates_id == alert.coordinates_id
