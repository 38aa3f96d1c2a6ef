"""Geographic coordinate data models."""

from datetime import date

from pydantic import BaseModel, Field, model_validator
from sqlalchemy import CheckConstraint, Column, Date, Float, Index, Integer

from ayra.models.base import Base

# ========== SQLAlchemy ORM Models ==========


class CoordinatesDB(Base):
    """SQLAlchemy model for coordinates table.

    No uniqueness constraint on (latitude, longitude): proximity matching
    is done at write time by the coordinate resolver.
    """

    __tablename__ = "coordinates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    date_coordinate = Column(Date, nullable=False, default=date.today)

    __table_args__ = (
        CheckConstraint("latitude >= -90 AND latitude <= 90", name="coordinates_latitude_check"),
        CheckConstraint("longitude >= -180 AND longitude <= 180", name="coordinates_longitude_check"),
        Index("idx_coordinates_lat_lon", "latitude", "longitude"),
    )

    def __repr__(self) -> str:
        return f"<Coordinates {self.id}: {self.latitude}, {self.longitude}>"


# ========== Pydantic Models ==========


class CoordinatesPayload(BaseModel):
    """Coordinates as supplied by a client when creating an entity.

    Either ``id`` references an existing row, or ``latitude`` and
    ``longitude`` describe a point to match or insert.
    """

    id: int | None = Field(None, ge=1, description="Existing coordinate identifier")
    latitude: float | None = Field(None, ge=-90, le=90, description="Latitude in degrees")
    longitude: float | None = Field(None, ge=-180, le=180, description="Longitude in degrees")
    date_coordinate: date | None = Field(None, description="Date the point was observed")

    @model_validator(mode="after")
    def require_id_or_position(self) -> "CoordinatesPayload":
        """Reject payloads that carry neither an id nor a full position."""
        if self.id is None and (self.latitude is None or self.longitude is None):
            raise ValueError("coordinates require either an id or both latitude and longitude")
        return self


class CoordinatesResponse(BaseModel):
    """Coordinates as returned by the API."""

    id: int
    latitude: float
    longitude: float
    date_coordinate: date | None = None

    class Config:
        """Pydantic configuration."""

        from_attributes = True
