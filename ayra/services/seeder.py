"""Idempotent bootstrap data for a fresh database.

Seeds five points around Sao Paulo with one marker and one alert each,
a safe route, safe location and safe tip per alert, and two users.
Running it again is a no-op once any alert exists. Alerts cannot be
deleted through the API, so removing a seed user or marker does not
make the database look fresh again.

Usage:
  ayra-seed                                   # uses DATABASE_URL / .env
  ayra-seed --database-url sqlite+aiosqlite:///./ayra.db --create-tables
"""

import argparse
import asyncio
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ayra.api.middleware.logging import setup_logging
from ayra.config import get_settings
from ayra.models.alert import AlertDB, SafeLocationDB, SafeRouteDB, SafeTipDB
from ayra.models.coordinates import CoordinatesDB
from ayra.models.map_marker import Intensity, MapMarkerDB
from ayra.models.user import UserDB
from ayra.services.database import initialize_database, shutdown_database
from ayra.services.security import hash_password
from ayra.services.user_manager import UserManager

logger = structlog.get_logger(__name__)

SEED_USER_EMAIL = "joao@example.com"


@dataclass(frozen=True)
class SeedPlace:
    latitude: float
    longitude: float
    days_ago: int
    marker_title: str
    marker_description: str
    intensity: Intensity
    radius: float
    alert_title: str
    alert_description: str
    alert_hours_ago: int
    location: str
    safe_route: str
    safe_location: str
    safe_tip: str


SEED_PLACES = [
    SeedPlace(
        latitude=-23.5505,
        longitude=-46.6333,
        days_ago=1,
        marker_title="Inundação no Centro",
        marker_description="Água acumulada nas ruas do centro após chuvas fortes.",
        intensity=Intensity.HIGH,
        radius=99.99,
        alert_title="Inundação Severa no Centro",
        alert_description="Inundação severa próxima ao rio Tietê com risco para moradores no centro de São Paulo.",
        alert_hours_ago=2,
        location="Centro de São Paulo",
        safe_route="Rua Direita -> Avenida Paulista -> Praça da Sé",
        safe_location="Praça da Sé",
        safe_tip="Evite áreas próximas ao rio Tietê em dias de chuva forte.",
    ),
    SeedPlace(
        latitude=-23.4800,
        longitude=-46.6300,
        days_ago=0,
        marker_title="Alagamento em Santana",
        marker_description="Alagamento em vias secundárias de Santana após chuvas intensas.",
        intensity=Intensity.MEDIUM,
        radius=80.0,
        alert_title="Alagamento em Santana",
        alert_description="Alagamento em vias secundárias de Santana após chuvas intensas.",
        alert_hours_ago=5,
        location="Santana, São Paulo",
        safe_route="Avenida Braz Leme -> Rua Voluntários da Pátria",
        safe_location="Parque da Juventude",
        safe_tip="Não dirija por vias alagadas após chuvas intensas.",
    ),
    SeedPlace(
        latitude=-23.6000,
        longitude=-46.6700,
        days_ago=2,
        marker_title="Erosão em Moema",
        marker_description="Erosão severa em área urbana de Moema próxima a córregos.",
        intensity=Intensity.HIGH,
        radius=70.0,
        alert_title="Erosão Urbana em Moema",
        alert_description="Erosão severa em área urbana de Moema próxima a córregos.",
        alert_hours_ago=10,
        location="Moema, São Paulo",
        safe_route="Avenida Ibirapuera -> Rua dos Otonis",
        safe_location="Parque Ibirapuera",
        safe_tip="Mantenha-se longe de córregos e áreas com erosão visível.",
    ),
    SeedPlace(
        latitude=-23.5100,
        longitude=-46.8800,
        days_ago=3,
        marker_title="Inundação Leve em Barueri",
        marker_description="Água acumulada em áreas baixas de Barueri após chuvas fortes.",
        intensity=Intensity.LOW,
        radius=50.0,
        alert_title="Inundação Leve em Barueri",
        alert_description="Água acumulada em áreas baixas de Barueri após chuvas fortes.",
        alert_hours_ago=15,
        location="Barueri, São Paulo",
        safe_route="Rodovia Castelo Branco -> Alphaville",
        safe_location="Alphaville Tênis Clube",
        safe_tip="Use rotas alternativas em caso de alagamentos.",
    ),
    SeedPlace(
        latitude=-23.4600,
        longitude=-46.5300,
        days_ago=4,
        marker_title="Área Segura em Guarulhos",
        marker_description="Abrigo seguro localizado em Guarulhos.",
        intensity=Intensity.LOW,
        radius=30.0,
        alert_title="Área Segura em Guarulhos",
        alert_description="Abrigo seguro localizado em Guarulhos.",
        alert_hours_ago=20,
        location="Guarulhos, São Paulo",
        safe_route="Rodovia Presidente Dutra -> Centro de Guarulhos",
        safe_location="Prefeitura de Guarulhos",
        safe_tip="Procure abrigos designados em emergências.",
    ),
]

# (name, email, password, phone, index into SEED_PLACES)
SEED_USERS = [
    ("João Silva", SEED_USER_EMAIL, "senha123", "11999999999", 0),
    ("Maria Souza", "maria@example.com", "senha456", "11888888888", 1),
]


async def seed_database(db_session: AsyncSession) -> bool:
    """Insert the sample data unless it is already present.

    Args:
        db_session: Database session; the caller commits

    Returns:
        True if data was inserted, False if the database was already seeded
    """
    alert_count = (await db_session.execute(select(func.count(AlertDB.id)))).scalar_one()
    if alert_count:
        logger.info("database_seed_skipped", reason="already_seeded")
        return False

    today = date.today()
    now = datetime.now(timezone.utc)
    coordinates: list[CoordinatesDB] = []

    for place in SEED_PLACES:
        point = CoordinatesDB(
            latitude=place.latitude,
            longitude=place.longitude,
            date_coordinate=today - timedelta(days=place.days_ago),
        )
        marker = MapMarkerDB(
            title=place.marker_title,
            description=place.marker_description,
            intensity=place.intensity.value,
            radius=place.radius,
            coordinates=point,
        )
        db_session.add_all([point, marker])
        await db_session.flush()

        db_session.add(
            AlertDB(
                title=place.alert_title,
                description=place.alert_description,
                intensity=place.intensity.value,
                alert_datetime=now - timedelta(hours=place.alert_hours_ago),
                location=place.location,
                radius=place.radius,
                coordinates=point,
                map_marker_id=marker.id,
                safe_routes=[SafeRouteDB(route=place.safe_route)],
                safe_locations=[SafeLocationDB(location=place.safe_location)],
                safe_tips=[SafeTipDB(tip=place.safe_tip)],
            )
        )
        coordinates.append(point)

    users = UserManager(db_session)
    users_added = 0
    for name, email, password, phone, place_index in SEED_USERS:
        if await users.find_by_email(email) is not None:
            continue
        users_added += 1
        db_session.add(
            UserDB(
                name=name,
                email=email,
                password=hash_password(password),
                phone=phone,
                coordinates=coordinates[place_index],
            )
        )

    await db_session.flush()
    logger.info(
        "database_seeded",
        coordinates=len(SEED_PLACES),
        markers=len(SEED_PLACES),
        alerts=len(SEED_PLACES),
        users=users_added,
    )
    return True


async def run(database_url: str | None, create_tables: bool) -> bool:
    """Seed the configured database in its own session."""
    db_manager = initialize_database(database_url)
    await db_manager.initialize_async()
    try:
        if create_tables:
            await db_manager.create_tables()
        async with db_manager.get_async_session() as session:
            return await seed_database(session)
    finally:
        await shutdown_database()


def main() -> None:
    parser = argparse.ArgumentParser(description="Load sample flood alert data into the database.")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Database URL (defaults to DATABASE_URL / .env)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before seeding (development only; use Alembic in production)",
    )
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_format="console")

    inserted = asyncio.run(run(args.database_url, args.create_tables))
    print("Database seeded with sample data." if inserted else "Database already seeded; nothing to do.")


if __name__ == "__main__":
    main()
