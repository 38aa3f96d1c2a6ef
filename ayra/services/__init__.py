"""Business logic services for the Ayra flood alert API."""

from ayra.services.alert_manager import AlertManager
from ayra.services.coordinate_resolver import CoordinateResolver, link_coordinates
from ayra.services.coordinate_store import CoordinateStore
from ayra.services.database import DatabaseManager, get_db_session
from ayra.services.marker_manager import MarkerManager
from ayra.services.seeder import seed_database
from ayra.services.user_manager import UserManager

__all__ = [
    "AlertManager",
    "CoordinateResolver",
    "CoordinateStore",
    "DatabaseManager",
    "MarkerManager",
    "UserManager",
    "get_db_session",
    "link_coordinates",
    "seed_database",
]
