# ABOUTME: Pydantic BaseModels for weatherstack current, forecast and historical payloads.
# ABOUTME: Forecast and history days share one optional-field record so absent values stay explicit.

import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Location(BaseModel):
    """Location block shared by all three payload kinds."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str
    region: str
    lat: str
    lon: str
    timezone_id: str
    localtime: str
    localtime_epoch: int
    utc_offset: str

    @property
    def display_name(self) -> str:
        return ", ".join(part for part in (self.name, self.region, self.country) if part)


class Astro(BaseModel):
    """Sun and moon times for a day."""

    sunrise: str | None = None
    sunset: str | None = None
    moonrise: str | None = None
    moonset: str | None = None
    moon_phase: str | None = None
    moon_illumination: float | None = None


class AirQuality(BaseModel):
    """Air-quality readings; the API sends concentrations as numeric strings."""

    model_config = ConfigDict(populate_by_name=True)

    co: float | None = None
    no2: float | None = None
    o3: float | None = None
    so2: float | None = None
    pm2_5: float | None = None
    pm10: float | None = None
    us_epa_index: int | None = Field(default=None, alias="us-epa-index")
    gb_defra_index: int | None = Field(default=None, alias="gb-defra-index")

    @field_validator("co", "no2", "o3", "so2", "pm2_5", "pm10", mode="before")
    @classmethod
    def blank_is_missing(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class RequestInfo(BaseModel):
    type: str | None = None
    query: str | None = None
    language: str | None = None
    unit: str | None = None


class CurrentObservation(BaseModel):
    """The `current` block of the current-weather endpoint."""

    observation_time: str | None = None
    temperature: float
    weather_code: int
    weather_icons: list[str] = []
    weather_descriptions: list[str] = []
    wind_speed: float | None = None
    wind_degree: float | None = None
    wind_dir: str | None = None
    pressure: float | None = None
    precip: float | None = None
    humidity: float | None = None
    cloudcover: float | None = None
    feelslike: float | None = None
    uv_index: float | None = None
    visibility: float | None = None
    is_day: Literal["yes", "no"] | None = None
    astro: Astro | None = None
    air_quality: AirQuality | None = None


class WeatherData(BaseModel):
    """Parsed response from the current-weather endpoint."""

    request: RequestInfo | None = None
    location: Location
    current: CurrentObservation


class Condition(BaseModel):
    text: str | None = None


class DayRecord(BaseModel):
    """One forecast or historical day.

    The forecast and historical endpoints return the same loosely populated
    shape; every measurement is optional and consumers apply fallbacks.
    """

    date: datetime.date | None = None
    maxtemp: float | None = None
    mintemp: float | None = None
    avgtemp: float | None = None
    wind_speed: float | None = None
    pressure: float | None = None
    uv_index: float | None = None
    humidity: float | None = None
    sunhour: float | None = None
    cloudcover: float | None = None
    totalsnow: float | None = None
    visibility: float | None = None
    air_quality: AirQuality | None = None
    astro: Astro | None = None
    condition: Condition | None = None
    weather_descriptions: list[str] = []


def _fill_dates(days):
    """Copy each map key into its record when the record carries no date of its own."""
    if not isinstance(days, dict):
        return days
    return {key: {"date": key, **day} if isinstance(day, dict) else day for key, day in days.items()}


class ForecastData(BaseModel):
    """Parsed response from the forecast endpoint, days keyed by ISO date."""

    location: Location | None = None
    forecast: dict[str, DayRecord] = {}

    @field_validator("forecast", mode="before")
    @classmethod
    def dates_from_keys(cls, value):
        return _fill_dates(value)

    def days(self, limit: int = 3) -> list[DayRecord]:
        """Return up to `limit` days in the order the API listed them."""
        return list(self.forecast.values())[:limit]


class HistoricalData(BaseModel):
    """Parsed response from the historical endpoint for a single date."""

    location: Location | None = None
    historical: dict[str, DayRecord] = {}

    @field_validator("historical", mode="before")
    @classmethod
    def dates_from_keys(cls, value):
        return _fill_dates(value)

    @property
    def date_key(self) -> str | None:
        return next(iter(self.historical), None)

    @property
    def day(self) -> DayRecord | None:
        return next(iter(self.historical.values()), None)
