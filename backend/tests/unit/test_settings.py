"""
Unit tests for Pydantic Settings configuration.

Tests defaults, URL normalization and production safeguards.
"""

import pytest
from pydantic import ValidationError

from placement.config.settings import DEFAULT_JWT_SECRET, Settings


class TestSettings:
    """Tests for Settings configuration."""

    def test_settings_has_defaults(self):
        """Settings should have sensible defaults."""
        from placement.config.settings import settings

        assert settings.environment in ("development", "production", "testing")
        assert settings.jwt_algorithm == "HS256"
        assert settings.report_precision >= 0
        assert settings.database_url.startswith("postgresql+asyncpg://")

    def test_is_production_property(self):
        s = Settings(environment="production", jwt_secret_key="a-real-secret-with-enough-length!")
        assert s.is_production is True
        assert s.is_development is False

    def test_is_development_property(self):
        s = Settings(environment="development")
        assert s.is_production is False
        assert s.is_development is True

    def test_allowed_origins_includes_localhost(self):
        s = Settings()
        assert "http://localhost:5173" in s.allowed_origins

    @pytest.mark.parametrize("url", [
        "postgres://u:p@db:5432/placement",
        "postgresql://u:p@db:5432/placement",
    ])
    def test_database_url_normalized_to_asyncpg(self, url):
        s = Settings(database_url=url)
        assert s.database_url == "postgresql+asyncpg://u:p@db:5432/placement"

    def test_other_drivers_left_alone(self):
        s = Settings(database_url="sqlite+aiosqlite:///./placement.db")
        assert s.database_url == "sqlite+aiosqlite:///./placement.db"

    def test_default_secret_rejected_in_production(self):
        with pytest.raises(ValidationError):
            Settings(environment="production", jwt_secret_key=DEFAULT_JWT_SECRET)

    def test_default_secret_allowed_in_development(self):
        s = Settings(environment="development", jwt_secret_key=DEFAULT_JWT_SECRET)
        assert s.jwt_secret_key == DEFAULT_JWT_SECRET

    def test_negative_precision_rejected(self):
        with pytest.raises(ValidationError):
            Settings(report_precision=-1)

    def test_env_variables_override_defaults(self, monkeypatch):
        monkeypatch.setenv("REPORT_PRECISION", "3")
        monkeypatch.setenv("CTC_PRECISION", "1")
        s = Settings()
        assert s.report_precision == 3
        assert s.ctc_precision == 1
