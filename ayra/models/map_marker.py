"""Map marker data models."""

from enum import Enum

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ayra.models.base import Base
from ayra.models.coordinates import CoordinatesPayload, CoordinatesResponse


class Intensity(str, Enum):
    """Well-known intensity labels.

    The set is open: any non-blank label is stored as given.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ========== SQLAlchemy ORM Models ==========


class MapMarkerDB(Base):
    """SQLAlchemy model for map_markers table."""

    __tablename__ = "map_markers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    intensity = Column(String(20), nullable=False)
    radius = Column(Float, nullable=False)
    coordinates_id = Column(Integer, ForeignKey("coordinates.id"), nullable=False)

    coordinates = relationship("CoordinatesDB", lazy="selectin")

    __table_args__ = (
        CheckConstraint("radius > 0", name="map_markers_radius_check"),
        Index("idx_map_markers_intensity", "intensity"),
    )

    def __repr__(self) -> str:
        return f"<MapMarker {self.id}: {self.title} ({self.intensity})>"


# ========== Pydantic Models ==========


def _clean_label(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


class MapMarkerCreate(BaseModel):
    """Request schema for creating a map marker.

    ``coordinates`` is optional at the schema level so that a missing
    value is reported as a bad request by the resolver, not as a
    schema validation failure.
    """

    title: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    intensity: str = Field(..., max_length=20, description="Intensity label, e.g. low, medium, high")
    radius: float = Field(..., gt=0, description="Radius in meters")
    coordinates: CoordinatesPayload | None = None

    @field_validator("title", "intensity")
    @classmethod
    def not_blank(cls, v: str) -> str:
        """Strip labels and reject blank ones."""
        return _clean_label(v)


class MapMarkerUpdate(BaseModel):
    """Request schema for a partial marker update."""

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)
    intensity: str | None = Field(None, max_length=20)
    radius: float | None = Field(None, gt=0)
    coordinates: CoordinatesPayload | None = None

    @field_validator("title", "intensity")
    @classmethod
    def not_blank(cls, v: str | None) -> str | None:
        """Strip labels and reject blank ones."""
        return _clean_label(v)


class MapMarkerResponse(BaseModel):
    """Map marker as returned by the API."""

    id: int
    title: str
    description: str | None = None
    intensity: str
    radius: float
    coordinates: CoordinatesResponse

    class Config:
        """Pydantic configuration."""

        from_attributes = True

