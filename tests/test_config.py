"""Tests for settings validation and CORS origin parsing."""

import pytest
from pydantic import ValidationError

from src.config.cors import DEFAULT_DEV_ORIGIN_PATTERNS, resolve_cors_origins
from src.config.settings import Settings

SECRET = "a-long-enough-secret"


class TestResolveCorsOrigins:
    def test_trims_strips_slashes_and_dedupes(self):
        raw = " https://a.example.com/ ,https://b.example.com,, https://a.example.com//"
        assert resolve_cors_origins(raw) == ["https://a.example.com", "https://b.example.com"]

    @pytest.mark.parametrize("raw", [None, "", " , ,"])
    def test_empty_falls_back_to_localhost_in_development(self, raw):
        assert resolve_cors_origins(raw, "development") == DEFAULT_DEV_ORIGIN_PATTERNS

    def test_empty_means_no_origins_in_production(self):
        assert resolve_cors_origins("", "production") == []

    def test_explicit_list_wins_in_production(self):
        assert resolve_cors_origins("https://chat.example.com", "production") == ["https://chat.example.com"]


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None, ENVIRONMENT="test", JWT_SECRET=SECRET)
        assert settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES == 15
        assert settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS == 7
        assert settings.MESSAGES_DEFAULT_LIMIT == 30
        assert settings.AUTH_THROTTLE_LIMIT == 5

    def test_short_jwt_secret_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENVIRONMENT="test", JWT_SECRET="short")

    @pytest.mark.parametrize("environment", ["development", "production"])
    def test_database_required_outside_tests(self, environment):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                ENVIRONMENT=environment,
                JWT_SECRET=SECRET,
                SUPABASE_URL="",
                SUPABASE_SERVICE_ROLE_KEY="",
            )

    def test_database_settings_accepted(self):
        settings = Settings(
            _env_file=None,
            ENVIRONMENT="production",
            JWT_SECRET=SECRET,
            SUPABASE_URL="https://project.supabase.co",
            SUPABASE_SERVICE_ROLE_KEY="service-role-key",
        )
        assert settings.ENVIRONMENT == "production"

    @pytest.mark.parametrize("limit", [0, 101])
    def test_default_page_size_bounded(self, limit):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENVIRONMENT="test", JWT_SECRET=SECRET, MESSAGES_DEFAULT_LIMIT=limit)

    def test_unknown_environment_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENVIRONMENT="staging", JWT_SECRET=SECRET)
