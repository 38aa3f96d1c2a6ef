"""Unit tests for application settings."""

import pytest
from pydantic import ValidationError

from ayra.config import Settings


@pytest.mark.unit
class TestSettings:
    """Unit tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the defaults used when nothing is configured."""
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("COORDINATE_TOLERANCE", raising=False)

        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite+aiosqlite:///./ayra.db"
        assert settings.coordinate_tolerance == 0.0001
        assert settings.default_page_size == 10
        assert settings.max_page_size == 100
        assert settings.create_tables_on_startup is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables override defaults."""
        monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://u:p@db/ayra")
        monkeypatch.setenv("COORDINATE_TOLERANCE", "0.001")
        monkeypatch.setenv("JWT_EXPIRE_MINUTES", "15")

        settings = Settings(_env_file=None)

        assert settings.database_url == "postgresql+asyncpg://u:p@db/ayra"
        assert settings.coordinate_tolerance == 0.001
        assert settings.jwt_expire_minutes == 15

    def test_cors_origins_are_split(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that comma-separated origins become a clean list."""
        monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://a.example, https://b.example,,")

        settings = Settings(_env_file=None)

        assert settings.cors_origins_list == ["https://a.example", "https://b.example"]

    @pytest.mark.parametrize("tolerance", ["0", "-0.0001"])
    def test_non_positive_tolerance_is_rejected(self, monkeypatch: pytest.MonkeyPatch, tolerance: str) -> None:
        """Test that a zero or negative deduplication window fails at start-up."""
        monkeypatch.setenv("COORDINATE_TOLERANCE", tolerance)

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_zero_page_size_is_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that the default page size must be at least one."""
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
