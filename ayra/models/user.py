"""User account data models."""

from pydantic import BaseModel, EmailStr, Field, field_validator
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from ayra.models.base import Base
from ayra.models.coordinates import CoordinatesPayload, CoordinatesResponse

# ========== SQLAlchemy ORM Models ==========


class UserDB(Base):
    """SQLAlchemy model for users table."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password = Column(String(255), nullable=False)  # bcrypt hash
    phone = Column(String(20), nullable=True)
    coordinates_id = Column(Integer, ForeignKey("coordinates.id"), nullable=True)

    coordinates = relationship("CoordinatesDB", lazy="selectin")

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


# ========== Pydantic Models ==========

# bcrypt only hashes the first 72 bytes and rejects longer input
PASSWORD_MAX_BYTES = 72


def _check_password_bytes(value: str | None) -> str | None:
    if value is not None and len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"password must be at most {PASSWORD_MAX_BYTES} bytes in UTF-8")
    return value


class UserCreate(BaseModel):
    """Request schema for registering a user."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)
    phone: str | None = Field(None, max_length=20)
    coordinates: CoordinatesPayload | None = None

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserUpdate(BaseModel):
    """Request schema for updating the authenticated user.

    Only non-null fields are applied.
    """

    name: str | None = Field(None, min_length=1, max_length=100)
    email: EmailStr | None = None
    password: str | None = Field(None, min_length=6, max_length=72)
    phone: str | None = Field(None, max_length=20)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str | None) -> str | None:
        return _check_password_bytes(v)


class UserResponse(BaseModel):
    """Minimal user representation returned after registration."""

    id: int
    name: str
    email: str

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class UserProfile(BaseModel):
    """Full user profile (never includes the password hash)."""

    id: int
    name: str
    email: str
    phone: str | None = None
    coordinates: CoordinatesResponse | None = None

    class Config:
        """Pydantic configuration."""

        from_attributes = True


class LoginRequest(BaseModel):
    """Credentials for obtaining an access token."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(BaseModel):
    """Bearer token issued on successful login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
