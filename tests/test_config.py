# ABOUTME: Contract tests for start-up configuration loading.
# ABOUTME: Validates environment variable mapping and defaults without touching a real .env file.

import pytest
from pydantic import ValidationError

from src import config as config_module
from src.config import DEFAULT_BASE_URL, DEFAULT_LOCATION, WeatherConfig, load_config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr(config_module, "load_dotenv", lambda: False)
    for name in ("WEATHER_API_BASE_URL", "WEATHER_API_KEY", "WEATHER_LOCATION", "WEATHER_TIMEOUT_MS"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    def test_defaults(self):
        """load_config falls back to the public endpoint and no key.

        Implementation: Clears every WEATHER_* variable.
        Passing implies: A missing key is represented as empty, not as an error at start-up.
        """
        cfg = load_config()

        assert cfg.base_url == DEFAULT_BASE_URL
        assert cfg.api_key == ""
        assert cfg.has_api_key is False
        assert cfg.location == DEFAULT_LOCATION
        assert cfg.timeout_ms == 10000

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("WEATHER_API_BASE_URL", "https://api.weatherstack.com/")
        monkeypatch.setenv("WEATHER_API_KEY", "abc123")
        monkeypatch.setenv("WEATHER_LOCATION", "Cape Town")
        monkeypatch.setenv("WEATHER_TIMEOUT_MS", "2500")

        cfg = load_config()

        assert cfg.base_url == "https://api.weatherstack.com"
        assert cfg.api_key == "abc123"
        assert cfg.has_api_key is True
        assert cfg.location == "Cape Town"
        assert cfg.timeout_ms == 2500


class TestWeatherConfig:
    def test_is_immutable(self):
        cfg = WeatherConfig(api_key="abc")
        with pytest.raises(ValidationError):
            cfg.api_key = "other"
