# ABOUTME: Derives the single weather card shown for the current, forecast or history selection.
# ABOUTME: Resolves missing forecast/history fields through fallbacks and picks icon, background and labels.

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.models import CurrentObservation, DayRecord, ForecastData, HistoricalData, Location, WeatherData

FORECAST_DAYS = 3
WINDY_THRESHOLD_KMH = 15
PLACEHOLDER_TIME = "--:--"
PLACEHOLDER_TEXT = "--"
CURRENT_LABEL = "Current"
TODAY_LABEL = "Today"

DEFAULT_ICON = "icon-Sun"
DEFAULT_BACKGROUND = "sun.jpg"

_ICON_GROUPS = {
    "icon-Sun": (113,),
    "icon-cloudy": (116, 119, 122, 143, 248, 260),
    "icon-light-rain": (
        176, 179, 182, 185, 227, 230, 263, 266, 281, 284, 293, 296, 311, 317, 320,
        323, 326, 329, 332, 335, 338, 350, 353, 362, 365, 368, 371, 374, 377,
    ),
    "icon-rain": (299, 302, 305, 308, 314, 356, 359),
    "icon-lightning": (200, 386, 389, 392, 395),
}

ICON_BY_CODE: dict[int, str] = {code: icon for icon, codes in _ICON_GROUPS.items() for code in codes}

# Rain codes switch to the windy rain image above WINDY_THRESHOLD_KMH.
RAIN_CODES = frozenset(
    (
        176, 179, 182, 185, 263, 266, 281, 284, 293, 296, 299, 302, 305, 308, 311, 314, 317,
        320, 323, 326, 329, 332, 335, 338, 350, 353, 356, 359, 362, 365, 368, 371, 374, 377,
    )
)

BACKGROUND_BY_CODE: dict[int, str] = {
    113: "sun.jpg",
    116: "cloudy.jpg",
    119: "cloudy.jpg",
    122: "cloudy.jpg",
    143: "cloudy.jpg",
    200: "rain-windy.jpg",
    227: "windy.jpg",
    230: "windy.jpg",
    248: "cloudy.jpg",
    260: "cloudy.jpg",
    386: "rain-windy.jpg",
    389: "rain-windy.jpg",
    392: "rain-windy.jpg",
    395: "rain-windy.jpg",
}


class CurrentSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["current"] = "current"


class ForecastSelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["forecast"] = "forecast"
    day_index: int = Field(ge=0)


class HistorySelection(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["history"] = "history"
    day_index: int = Field(ge=0)


Selection = CurrentSelection | ForecastSelection | HistorySelection


def parse_selection(kind: str, day_index: int | None = None) -> Selection:
    """Build a Selection from its wire form, e.g. ("forecast", 1).

    Raises ValueError for an unknown kind or a missing/negative index.
    """
    if kind == "current":
        return CurrentSelection()
    if kind not in ("forecast", "history"):
        raise ValueError(f"Unknown selection: {kind!r}")
    if day_index is None or day_index < 0:
        raise ValueError(f"A non-negative day index is required for {kind!r}")
    if kind == "forecast":
        return ForecastSelection(day_index=day_index)
    return HistorySelection(day_index=day_index)


def _fmt(value: float) -> str:
    """Format a number without a trailing .0 for whole values."""
    return f"{value:g}"


def _measure(value: float | None, unit: str, placeholder: str) -> str:
    """Render a reading with its unit, or the placeholder when it is absent."""
    return placeholder if value is None else f"{_fmt(value)}{unit}"


class DerivedView(BaseModel):
    """The normalized, fallback-resolved card for one selection.

    Numeric fields are None when neither the primary nor the fallback source
    had a value; the text helpers render those as placeholders.
    """

    model_config = ConfigDict(frozen=True)

    descriptions: list[str] = Field(min_length=1)
    temperature: float | None = None
    wind_speed: float | None = None
    pressure: float | None = None
    humidity: float | None = None
    cloudcover: float | None = None
    visibility: float | None = None
    sunrise: str = PLACEHOLDER_TIME
    sunset: str = PLACEHOLDER_TIME
    weather_code: int | None = None
    icon_class: str
    background_image: str
    date_label: str
    is_current: bool
    location: Location | None = None

    @property
    def description(self) -> str:
        return self.descriptions[0]

    @property
    def temperature_text(self) -> str:
        return _measure(self.temperature, "°C", "--°C")

    @property
    def wind_text(self) -> str:
        return _measure(self.wind_speed, " km/h", "-- km/h")

    @property
    def pressure_text(self) -> str:
        return _measure(self.pressure, " hPa", "-- hPa")

    @property
    def humidity_text(self) -> str:
        return _measure(self.humidity, "%", "--%")

    @property
    def cloudcover_text(self) -> str:
        return _measure(self.cloudcover, "%", "--%")

    @property
    def visibility_text(self) -> str:
        return _measure(self.visibility, " km", "-- km")

    def display(self) -> dict[str, str]:
        """Placeholder-aware strings for every field on the card."""
        return {
            "location": self.location.display_name if self.location else "",
            "date": self.date_label,
            "description": self.description,
            "temperature": self.temperature_text,
            "wind": self.wind_text,
            "pressure": self.pressure_text,
            "humidity": self.humidity_text,
            "cloudcover": self.cloudcover_text,
            "visibility": self.visibility_text,
            "sunrise": self.sunrise,
            "sunset": self.sunset,
        }


class DayTile(BaseModel):
    """One entry in the forecast or history strip."""

    label: str
    icon_class: str
    temperature: float | None = None
    selected: bool = False
    selection: Selection

    @property
    def temperature_text(self) -> str:
        return _measure(self.temperature, "°C", "--°C")


def weather_icon(weather_code: int | None) -> str:
    """Map a weatherstack condition code to an icon class, defaulting to the sun."""
    return ICON_BY_CODE.get(weather_code, DEFAULT_ICON)


def background_image(weather_code: int | None, wind_speed: float | None = None) -> str:
    """Pick the background for a condition code, using wind speed to split rain into windy and calm."""
    if weather_code in RAIN_CODES:
        return "rain-windy.jpg" if (wind_speed or 0) > WINDY_THRESHOLD_KMH else "rain.jpg"
    return BACKGROUND_BY_CODE.get(weather_code, DEFAULT_BACKGROUND)


def average_temperature(maxtemp: float | None, mintemp: float | None) -> float:
    """Mean of max and min, counting a missing bound as 0."""
    return ((maxtemp or 0) + (mintemp or 0)) / 2


def temperature_icon(maxtemp: float | None, mintemp: float | None) -> str:
    """Icon for days without a condition code, chosen from the average temperature alone."""
    avg = average_temperature(maxtemp, mintemp)
    if avg < 0:
        return "icon-cloudy"
    if avg < 10:
        return "icon-light-rain"
    if avg <= 20:
        return "icon-cloudy"
    return "icon-Sun"


def temperature_background(maxtemp: float | None, mintemp: float | None) -> str:
    """Background for days without a condition code, chosen from the average temperature."""
    avg = average_temperature(maxtemp, mintemp)
    if avg < 10:
        return "rain.jpg"
    if avg <= 20:
        return "cloudy.jpg"
    return "sun.jpg"


def generate_weather_description(day: DayRecord | None) -> list[str]:
    """Describe a forecast or history day.

    An existing description list is returned as is, then the condition text;
    otherwise a description is synthesized from the temperature band, snow
    and sunshine hours, with a "Very Sunny" upgrade for a high UV index.
    """
    if day is not None and day.weather_descriptions:
        return day.weather_descriptions
    if day is not None and day.condition is not None and day.condition.text:
        return [day.condition.text]

    day = day or DayRecord()
    avg = average_temperature(day.maxtemp, day.mintemp)
    sun_hours = day.sunhour or 0
    total_snow = day.totalsnow or 0

    if avg < 0:
        description = "Heavy Snow" if total_snow > 0 else "Freezing Cold"
    elif avg < 10:
        description = "Light Snow" if total_snow > 0 else "Cold and Cloudy"
    elif avg < 20:
        description = "Partly Cloudy" if sun_hours > 6 else "Overcast"
    elif avg < 30:
        description = "Sunny" if sun_hours > 8 else "Partly Cloudy"
    else:
        description = "Hot and Sunny" if sun_hours > 8 else "Warm and Cloudy"

    if (day.uv_index or 0) > 7:
        description = description.replace("Sunny", "Very Sunny")

    return [description]


def weekday_label(day: date | None) -> str:
    """Weekday name for a date, or a placeholder when the date is missing."""
    return day.strftime("%A") if day is not None else PLACEHOLDER_TEXT


def _first_present(*values: float | None) -> float | None:
    """Return the first value that is not None."""
    return next((v for v in values if v is not None), None)


def _current_view(weather: WeatherData) -> DerivedView:
    obs: CurrentObservation = weather.current
    astro = obs.astro
    return DerivedView(
        descriptions=list(obs.weather_descriptions) or [PLACEHOLDER_TEXT],
        temperature=obs.temperature,
        wind_speed=obs.wind_speed,
        pressure=obs.pressure,
        humidity=obs.humidity,
        cloudcover=obs.cloudcover,
        visibility=obs.visibility,
        sunrise=(astro and astro.sunrise) or PLACEHOLDER_TIME,
        sunset=(astro and astro.sunset) or PLACEHOLDER_TIME,
        weather_code=obs.weather_code,
        icon_class=weather_icon(obs.weather_code),
        background_image=background_image(obs.weather_code, obs.wind_speed),
        date_label=CURRENT_LABEL,
        is_current=True,
        location=weather.location,
    )


def _day_view(day: DayRecord, location: Location | None) -> DerivedView:
    """Synthesize a card for a forecast or history day.

    Fallbacks: wind_speed <- avgtemp, pressure <- uv_index, humidity <- sunhour,
    cloudcover <- totalsnow, visibility <- air_quality.pm2_5.
    """
    astro = day.astro
    pm2_5 = day.air_quality.pm2_5 if day.air_quality is not None else None
    return DerivedView(
        descriptions=generate_weather_description(day),
        temperature=day.maxtemp,
        wind_speed=_first_present(day.wind_speed, day.avgtemp),
        pressure=_first_present(day.pressure, day.uv_index),
        humidity=_first_present(day.humidity, day.sunhour),
        cloudcover=_first_present(day.cloudcover, day.totalsnow),
        visibility=_first_present(day.visibility, pm2_5),
        sunrise=(astro and astro.sunrise) or PLACEHOLDER_TIME,
        sunset=(astro and astro.sunset) or PLACEHOLDER_TIME,
        icon_class=temperature_icon(day.maxtemp, day.mintemp),
        background_image=temperature_background(day.maxtemp, day.mintemp),
        date_label=weekday_label(day.date),
        is_current=False,
        location=location,
    )


def _at(items: list, index: int):
    """Safely get the item at index, returning None when out of range."""
    return items[index] if 0 <= index < len(items) else None


def derive_view(
    selection: Selection,
    current: WeatherData | None,
    forecast: ForecastData | None = None,
    history: list[HistoricalData] | None = None,
) -> DerivedView | None:
    """Build the card for `selection`, or None when its data is not available."""
    location = current.location if current is not None else None
    if location is None and forecast is not None:
        location = forecast.location

    if isinstance(selection, CurrentSelection):
        return _current_view(current) if current is not None else None

    if isinstance(selection, ForecastSelection):
        days = forecast.days(FORECAST_DAYS) if forecast is not None else []
        day = _at(days, selection.day_index)
        return _day_view(day, location) if day is not None else None

    if isinstance(selection, HistorySelection):
        entry = _at(history or [], selection.day_index)
        day = entry.day if entry is not None else None
        return _day_view(day, location) if day is not None else None

    raise TypeError(f"Unknown selection: {selection!r}")


def select_forecast_day(forecast: ForecastData, index: int, today: date | None = None) -> Selection:
    """Selection produced by picking a forecast day; today's entry pivots to current conditions."""
    today = today or date.today()
    day = _at(forecast.days(FORECAST_DAYS), index)
    if day is not None and day.date == today:
        return CurrentSelection()
    return ForecastSelection(day_index=index)


def forecast_tiles(
    current: WeatherData | None,
    forecast: ForecastData | None,
    selection: Selection,
    today: date | None = None,
) -> list[DayTile]:
    """Tiles for the forecast strip; the first tile uses the live condition code when available."""
    if forecast is None:
        return []
    today = today or date.today()
    tiles = []
    for index, day in enumerate(forecast.days(FORECAST_DAYS)):
        if index == 0 and current is not None:
            icon = weather_icon(current.current.weather_code)
        else:
            icon = temperature_icon(day.maxtemp, day.mintemp)
        target = select_forecast_day(forecast, index, today)
        tiles.append(
            DayTile(
                label=TODAY_LABEL if day.date == today else weekday_label(day.date),
                icon_class=icon,
                temperature=day.maxtemp,
                selected=target == selection,
                selection=target,
            )
        )
    return tiles


def history_tiles(history: list[HistoricalData] | None, selection: Selection) -> list[DayTile]:
    tiles = []
    for index, entry in enumerate(history or []):
        day = entry.day or DayRecord()
        target = HistorySelection(day_index=index)
        tiles.append(
            DayTile(
                label=weekday_label(day.date),
                icon_class=temperature_icon(day.maxtemp, day.mintemp),
                temperature=day.maxtemp,
                selected=target == selection,
                selection=target,
            )
        )
    return tiles
