"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from warehouse_tariffs.config import Settings
from warehouse_tariffs.exceptions import ConfigurationError


class TestSettingsFromEnv:
    def test_defaults_with_empty_env(self) -> None:
        settings = Settings.from_env({})
        assert settings.supabase_url == ""
        assert settings.supabase_key == ""
        assert settings.timeout_seconds == 10.0
        assert settings.cors_origins == ["http://localhost:3000"]

    def test_reads_server_names(self) -> None:
        settings = Settings.from_env(
            {
                "SUPABASE_URL": "https://example.supabase.co/",
                "SUPABASE_SERVICE_ROLE_KEY": "service-key",
                "SUPABASE_ANON_KEY": "anon-key",
            }
        )
        assert settings.supabase_url == "https://example.supabase.co"
        assert settings.supabase_key == "service-key"

    def test_falls_back_to_public_names(self) -> None:
        settings = Settings.from_env(
            {
                "NEXT_PUBLIC_SUPABASE_URL": "https://public.supabase.co",
                "NEXT_PUBLIC_SUPABASE_ANON_KEY": "public-anon",
            }
        )
        assert settings.supabase_url == "https://public.supabase.co"
        assert settings.supabase_key == "public-anon"

    def test_blank_values_skipped(self) -> None:
        settings = Settings.from_env(
            {"SUPABASE_SERVICE_ROLE_KEY": "  ", "SUPABASE_ANON_KEY": "anon-key"}
        )
        assert settings.supabase_key == "anon-key"

    def test_timeout(self) -> None:
        assert Settings.from_env({"SUPABASE_TIMEOUT_SECONDS": "2.5"}).timeout_seconds == 2.5

    def test_bad_timeout_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="SUPABASE_TIMEOUT_SECONDS"):
            Settings.from_env({"SUPABASE_TIMEOUT_SECONDS": "soon"})

    def test_cors_origins_split(self) -> None:
        settings = Settings.from_env(
            {"CORS_ORIGINS": "https://admin.example.com, https://app.example.com,"}
        )
        assert settings.cors_origins == [
            "https://admin.example.com",
            "https://app.example.com",
        ]


class TestRequireStore:
    def test_complete_settings_pass(self) -> None:
        Settings(supabase_url="https://x.supabase.co", supabase_key="k").require_store()

    def test_missing_names_reported(self) -> None:
        with pytest.raises(ConfigurationError, match="SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY"):
            Settings().require_store()

    def test_missing_key_only(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(supabase_url="https://x.supabase.co").require_store()
        assert "SUPABASE_URL" not in str(exc_info.value)
