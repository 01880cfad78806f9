"""Tests for environment-driven settings."""

from __future__ import annotations

from npmlens.settings import Settings


class TestSettingsFromEnv:
    def test_defaults_when_env_empty(self):
        settings = Settings.from_env({})
        assert settings.cache_ttl_ms == 60_000
        assert settings.cache_max_entries == 500
        assert settings.github_token is None

    def test_reads_values(self):
        settings = Settings.from_env(
            {"CACHE_TTL_MS": "1500", "CACHE_MAX": "20", "GITHUB_TOKEN": " ghp_abc "}
        )
        assert settings.cache_ttl_ms == 1500
        assert settings.cache_max_entries == 20
        assert settings.github_token == "ghp_abc"

    def test_blank_token_is_none(self):
        assert Settings.from_env({"GITHUB_TOKEN": "   "}).github_token is None

    def test_invalid_numbers_fall_back_with_warning(self, caplog):
        settings = Settings.from_env({"CACHE_TTL_MS": "soon", "CACHE_MAX": "-3"})
        assert settings.cache_ttl_ms == 60_000
        assert settings.cache_max_entries == 500
        assert "CACHE_TTL_MS" in caplog.text
        assert "CACHE_MAX" in caplog.text

    def test_reads_process_environment_by_default(self, monkeypatch):
        monkeypatch.setenv("CACHE_MAX", "7")
        monkeypatch.delenv("GITHUB_TOKEN", raising=False)
        settings = Settings.from_env()
        assert settings.cache_max_entries == 7
        assert settings.github_token is None
