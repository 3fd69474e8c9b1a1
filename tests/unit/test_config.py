"""Tests for settings validation."""

import pytest

from trackwell.common.config import TrackwellSettings


class TestValidateForProduction:
    def test_insecure_defaults_rejected_outside_development(self):
        settings = TrackwellSettings(environment="production")
        with pytest.raises(RuntimeError, match="TRACKWELL_API_KEY"):
            settings.validate_for_production()

    def test_insecure_defaults_warn_in_development(self):
        settings = TrackwellSettings()
        with pytest.warns(UserWarning):
            settings.validate_for_production()

    def test_secure_production_settings(self):
        settings = TrackwellSettings(
            environment="production", api_key="k" * 32, signing_key="s" * 32,
        )
        settings.validate_for_production()

    def test_unknown_clock_rejected(self):
        settings = TrackwellSettings(api_key="k", signing_key="s", clock="sundial")
        with pytest.raises(ValueError, match="TRACKWELL_CLOCK"):
            settings.validate_for_production()

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("TRACKWELL_DB_URL", "sqlite+aiosqlite:///tmp/t.db")
        monkeypatch.setenv("TRACKWELL_CLOCK", "manual")
        settings = TrackwellSettings()
        assert settings.db_url == "sqlite+aiosqlite:///tmp/t.db"
        assert settings.clock == "manual"
