"""Tests for environment-driven settings."""

import pytest

from storefront.infrastructure.settings import Settings, get_settings


@pytest.fixture
def clean_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:

    def test_defaults(self, clean_settings):
        settings = Settings(_env_file=None)
        assert settings.DATABASE_URL == "sqlite:///./storefront.db"
        assert settings.LOW_STOCK_THRESHOLD == 10

    def test_prefixed_environment(self, clean_settings, monkeypatch):
        monkeypatch.setenv("STOREFRONT_DATABASE_URL", "sqlite://")
        monkeypatch.setenv("STOREFRONT_LOW_STOCK_THRESHOLD", "3")
        settings = Settings(_env_file=None)
        assert settings.DATABASE_URL == "sqlite://"
        assert settings.LOW_STOCK_THRESHOLD == 3

    def test_dotenv_file(self, clean_settings, tmp_path):
        (tmp_path / ".env").write_text("STOREFRONT_PORT=8080\n")
        assert Settings().PORT == 8080

    def test_loaded_once(self, clean_settings, monkeypatch):
        monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "DEBUG")
        first = get_settings()
        monkeypatch.setenv("STOREFRONT_LOG_LEVEL", "ERROR")

        assert get_settings() is first
        assert first.LOG_LEVEL == "DEBUG"
