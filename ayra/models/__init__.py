"""Data models for the Ayra flood alert API."""

# Import SQLAlchemy ORM models to register them with Base.metadata
# This ensures all tables are known when create_tables() is called
from ayra.models.alert import (  # noqa: F401
    AlertDB,
    AlertDetailResponse,
    AlertResponse,
    SafeLocationDB,
    SafeRouteDB,
    SafeTipDB,
)
from ayra.models.coordinates import (  # noqa: F401
    CoordinatesDB,
    CoordinatesPayload,
    CoordinatesResponse,
)
from ayra.models.map_marker import (  # noqa: F401
    Intensity,
    MapMarkerCreate,
    MapMarkerDB,
    MapMarkerResponse,
    MapMarkerUpdate,
)
from ayra.models.pagination import IntensityFilter, Page
from ayra.models.user import (  # noqa: F401
    LoginRequest,
    TokenResponse,
    UserCreate,
    UserDB,
    UserProfile,
    UserResponse,
    UserUpdate,
)

__all__ = [
    # Coordinate models
    "CoordinatesPayload",
    "CoordinatesResponse",
    # Marker models
    "Intensity",
    "MapMarkerCreate",
    "MapMarkerUpdate",
    "MapMarkerResponse",
    # User models
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserProfile",
    "LoginRequest",
    "TokenResponse",
    # Alert models
    "AlertResponse",
    "AlertDetailResponse",
    # Listings
    "IntensityFilter",
    "Page",
]
