# ABOUTME: Service layer for weatherstack API calls and response parsing.
# ABOUTME: Handles current, forecast, single-day historical and 3-day history retrieval.

import asyncio
import logging
from datetime import date, timedelta

import httpx
from pydantic import BaseModel

from src.config import DEFAULT_TIMEOUT_MS, WeatherConfig
from src.errors import ApiError, ConfigError, WeatherError
from src.fetch import bounded_fetch
from src.models import ForecastData, HistoricalData, WeatherData

logger = logging.getLogger(__name__)

HISTORY_DAYS = 3


def build_url(config: WeatherConfig, endpoint: str, location: str, **extra) -> str:
    """Build an endpoint URL with the access key, URL-encoded location and extra query parameters."""
    params = {"access_key": config.api_key, "query": location, **extra}
    return str(httpx.URL(f"{config.base_url}/{endpoint}", params=params))


async def _request(
    client: httpx.AsyncClient,
    config: WeatherConfig,
    endpoint: str,
    label: str,
    kind: str,
    model: type[BaseModel],
    location: str,
    timeout_ms: int,
    **extra,
):
    """Run one API call and normalize every failure into a WeatherError subclass.

    `label` names the endpoint in status errors ("Forecast API error: 500"),
    `kind` names the data in the catch-all message ("Failed to fetch forecast data").
    """
    if not config.has_api_key:
        raise ConfigError("Weather API key is not configured")

    url = build_url(config, endpoint, location, **extra)
    logger.debug("GET %s/%s query=%r %s", config.base_url, endpoint, location, extra)

    try:
        resp = await bounded_fetch(client, url, timeout_ms)

        if not resp.is_success:
            raise ApiError(f"{label} API error: {resp.status_code}")

        data = resp.json()

        error = data.get("error") if isinstance(data, dict) else None
        # An error object counts even when empty
        if isinstance(error, dict) or error:
            info = error.get("info") if isinstance(error, dict) else None
            raise ApiError(info or f"{label} API error")

        return model.model_validate(data)
    except WeatherError:
        raise
    except Exception as e:
        raise WeatherError(f"Failed to fetch {kind} data") from e


async def fetch_weather(
    client: httpx.AsyncClient,
    config: WeatherConfig,
    location: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> WeatherData:
    """Fetch current conditions and location details."""
    return await _request(client, config, "current", "Weather", "weather", WeatherData, location, timeout_ms)


async def fetch_forecast(
    client: httpx.AsyncClient,
    config: WeatherConfig,
    location: str,
    days: int = 3,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> ForecastData:
    """Fetch a date-keyed forecast for the next `days` days."""
    return await _request(
        client, config, "forecast", "Forecast", "forecast", ForecastData, location, timeout_ms, forecast_days=days
    )


async def fetch_historical(
    client: httpx.AsyncClient,
    config: WeatherConfig,
    location: str,
    day: date | str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
) -> HistoricalData:
    """Fetch observations for one past date."""
    historical_date = day.isoformat() if isinstance(day, date) else day
    return await _request(
        client,
        config,
        "historical",
        "Historical",
        "historical",
        HistoricalData,
        location,
        timeout_ms,
        historical_date=historical_date,
    )


def history_dates(today: date | None = None, count: int = HISTORY_DAYS) -> list[date]:
    """Return the `count` dates before `today`, most recent first."""
    today = today or date.today()
    return [today - timedelta(days=i) for i in range(1, count + 1)]


async def fetch_three_day_history(
    client: httpx.AsyncClient,
    config: WeatherConfig,
    location: str,
    timeout_ms: int = DEFAULT_TIMEOUT_MS,
    today: date | None = None,
) -> list[HistoricalData]:
    """Fetch yesterday, two days ago and three days ago concurrently.

    Results follow the date order, not completion order. A single failed
    date fails the whole call and no partial list is returned.
    """
    dates = history_dates(today)
    try:
        return list(
            await asyncio.gather(*(fetch_historical(client, config, location, d, timeout_ms) for d in dates))
        )
    except Exception as e:
        raise WeatherError("Failed to fetch 3-day historical data") from e
