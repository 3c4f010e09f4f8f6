# ABOUTME: Load sequence and selection state for one weather display.
# ABOUTME: Current weather is required; forecast and history failures are logged and leave their slots empty.

import asyncio
import logging
from datetime import date
from typing import Literal

from src.deps import WeatherDeps
from src.errors import WeatherError
from src.models import ForecastData, HistoricalData, WeatherData
from src.view import (
    FORECAST_DAYS,
    CurrentSelection,
    DayTile,
    DerivedView,
    ForecastSelection,
    HistorySelection,
    Selection,
    derive_view,
    forecast_tiles,
    history_tiles,
)
from src.weather_service import fetch_forecast, fetch_three_day_history, fetch_weather

logger = logging.getLogger(__name__)

LoadStatus = Literal["loading", "error", "ready"]


class WeatherSession:
    """Owns the three payload slots and the active selection for a location.

    Only the select_* methods change the selection; load() replaces payloads
    but leaves the user's choice alone.
    """

    def __init__(self, deps: WeatherDeps, location: str | None = None):
        self.deps = deps
        self.location = location or deps.config.location
        self.status: LoadStatus = "loading"
        self.error: str | None = None
        self.current: WeatherData | None = None
        self.forecast: ForecastData | None = None
        self.history: list[HistoricalData] = []
        self.selection: Selection = CurrentSelection()
        self._load_lock = asyncio.Lock()
        self._loaded = False

    async def ensure_loaded(self) -> LoadStatus:
        """Run the load sequence unless one has already completed; concurrent callers share it."""
        async with self._load_lock:
            if not self._loaded:
                await self._load()
            return self.status

    async def load(self) -> LoadStatus:
        """Fetch current weather, then forecast, then the 3-day history."""
        async with self._load_lock:
            return await self._load()

    async def _load(self) -> LoadStatus:
        """Run the load sequence; callers hold the load lock."""
        client, config = self.deps.http_client, self.deps.config
        timeout_ms = config.timeout_ms
        self.status = "loading"
        self.error = None
        self.current, self.forecast, self.history = None, None, []

        try:
            self.current = await fetch_weather(client, config, self.location, timeout_ms)
        except WeatherError as e:
            logger.error("Current weather unavailable for %r: %s", self.location, e)
            self.error = e.message or "Failed to load weather data"
            self.status = "error"
            self._loaded = True
            return self.status

        try:
            self.forecast = await fetch_forecast(client, config, self.location, FORECAST_DAYS, timeout_ms)
        except WeatherError as e:
            logger.warning("Forecast not available: %s", e)

        try:
            self.history = await fetch_three_day_history(client, config, self.location, timeout_ms)
        except WeatherError as e:
            logger.warning("History not available: %s", e)

        self.status = "ready"
        self._loaded = True
        return self.status

    def select(self, selection: Selection) -> None:
        self.selection = selection

    def select_current(self) -> None:
        self.select(CurrentSelection())

    def select_forecast(self, day_index: int) -> None:
        self.select(ForecastSelection(day_index=day_index))

    def select_history(self, day_index: int) -> None:
        self.select(HistorySelection(day_index=day_index))

    def view(self) -> DerivedView | None:
        """Card for the active selection, or None while nothing resolvable is loaded."""
        if self.status != "ready":
            return None
        return derive_view(self.selection, self.current, self.forecast, self.history)

    def forecast_tiles(self, today: date | None = None) -> list[DayTile]:
        return forecast_tiles(self.current, self.forecast, self.selection, today)

    def history_tiles(self) -> list[DayTile]:
        return history_tiles(self.history, self.selection)
