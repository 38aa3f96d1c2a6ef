"""Alert and safety guidance data models.

Alerts point at a coordinate and a map marker. Safe routes, safe
locations and safe tips hang off an alert. These are plain records
with no behaviour beyond storage and read access.
"""

from datetime import datetime

from pydantic import BaseModel
from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from ayra.models.base import Base
from ayra.models.coordinates import CoordinatesResponse

# ========== SQLAlchemy ORM Models ==========


class AlertDB(Base):
    """SQLAlchemy model for alerts table."""

    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    intensity = Column(String(20), nullable=False)
    alert_datetime = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(255), nullable=True)
    radius = Column(Float, nullable=True)
    coordinates_id = Column(Integer, ForeignKey("coordinates.id"), nullable=True)
    map_marker_id = Column(Integer, ForeignKey("map_markers.id"), nullable=True)

    coordinates = relationship("CoordinatesDB", lazy="selectin")
    safe_routes = relationship("SafeRouteDB", back_populates="alert", lazy="selectin")
    safe_locations = relationship("SafeLocationDB", back_populates="alert", lazy="selectin")
    safe_tips = relationship("SafeTipDB", back_populates="alert", lazy="selectin")

    __table_args__ = (
        Index("idx_alerts_intensity", "intensity"),
        Index("idx_alerts_marker", "map_marker_id"),
    )


class SafeRouteDB(Base):
    """SQLAlchemy model for safe_routes table."""

    __tablename__ = "safe_routes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    route = Column(Text, nullable=False)
    alert_id = Column(Integer, ForeignKey("alerts.id"), nullable=False, index=True)

    alert = relationship("AlertDB", back_populates="safe_routes")


class SafeLocationDB(Base):
    """SQLAlchemy model for safe_locations table."""

    __tablename__ = "safe_locations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location = Column(String(255), nullable=False)
    alert_id = Column(Integer, ForeignKey("alerts.id"), nullable=False, index=True)

    alert = relationship("AlertDB", back_populates="safe_locations")


class SafeTipDB(Base):
    """SQLAlchemy model for safe_tips table."""

    __tablename__ = "safe_tips"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tip = Column(Text, nullable=False)
    alert_id = Column(Integer, ForeignKey("alerts.id"), nullable=False, index=True)

    alert = relationship("AlertDB", back_populates="safe_tips")


# ========== Pydantic Models ==========


class SafeRouteResponse(BaseModel):
    id: int
    route: str

    class Config:
        from_attributes = True


class SafeLocationResponse(BaseModel):
    id: int
    location: str

    class Config:
        from_attributes = True


class SafeTipResponse(BaseModel):
    id: int
    tip: str

    class Config:
        from_attributes = True


class AlertResponse(BaseModel):
    """Alert summary used in listings."""

    id: int
    title: str
    description: str | None = None
    intensity: str
    alert_datetime: datetime
    location: str | None = None
    radius: float | None = None
    map_marker_id: int | None = None
    coordinates: CoordinatesResponse | None = None

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class AlertDetailResponse(AlertResponse):
    """Alert with its safety guidance."""

    safe_routes: list[SafeRouteResponse] = []
    safe_locations: list[SafeLocationResponse] = []
    safe_tips: list[SafeTipResponse] = []
