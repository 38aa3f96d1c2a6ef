"""Application configuration loaded from environment variables."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    app_name: str = "Ayra Flood Alert API"
    app_version: str = "0.1.0"

    # Database
    database_url: str = "sqlite+aiosqlite:///./ayra.db"
    create_tables_on_startup: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # CORS (comma separated)
    cors_allowed_origins: str = "*"

    # Authentication
    jwt_secret_key: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # Coordinate deduplication window, in degrees on each axis
    coordinate_tolerance: float = Field(0.0001, gt=0)

    # Pagination
    default_page_size: int = Field(10, ge=1)
    max_page_size: int = Field(100, ge=1)

    @property
    def cors_origins_list(self) -> list[str]:
        """Split the CORS origin string into a list."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
