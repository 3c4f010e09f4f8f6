# ABOUTME: Start-up configuration for the weatherstack client.
# ABOUTME: Reads base URL, API key, location and timeout once from the environment into an immutable model.

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

DEFAULT_BASE_URL = "http://api.weatherstack.com"
DEFAULT_LOCATION = "Krugersdorp, Gauteng, South Africa"
DEFAULT_TIMEOUT_MS = 10000


class WeatherConfig(BaseModel):
    """Settings resolved once at process start and passed to the client."""

    model_config = ConfigDict(frozen=True)

    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    location: str = DEFAULT_LOCATION
    timeout_ms: int = DEFAULT_TIMEOUT_MS

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def load_config() -> WeatherConfig:
    """Build a WeatherConfig from environment variables, loading a .env file first if present."""
    load_dotenv()
    return WeatherConfig(
        base_url=(os.environ.get("WEATHER_API_BASE_URL") or DEFAULT_BASE_URL).rstrip("/"),
        api_key=os.environ.get("WEATHER_API_KEY", ""),
        location=os.environ.get("WEATHER_LOCATION") or DEFAULT_LOCATION,
        timeout_ms=int(os.environ.get("WEATHER_TIMEOUT_MS") or DEFAULT_TIMEOUT_MS),
    )
