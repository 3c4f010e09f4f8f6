# ABOUTME: Shared test fixtures for the weather card test suite.
# ABOUTME: Provides configuration and weatherstack payload samples.

import pytest

from src.config import WeatherConfig
from tests.helpers import LONDON


@pytest.fixture
def config() -> WeatherConfig:
    return WeatherConfig(base_url="http://api.weatherstack.com", api_key="test-key", location="London")


@pytest.fixture
def current_payload() -> dict:
    return {
        "request": {"type": "City", "query": "London, United Kingdom", "language": "en", "unit": "m"},
        "location": dict(LONDON),
        "current": {
            "observation_time": "02:30 PM",
            "temperature": 15,
            "weather_code": 116,
            "weather_icons": ["https://cdn.worldweatheronline.com/images/wsymbols01_png_64/wsymbol_0002.png"],
            "weather_descriptions": ["Partly cloudy"],
            "wind_speed": 10,
            "wind_degree": 180,
            "wind_dir": "S",
            "pressure": 1013,
            "precip": 0,
            "humidity": 60,
            "cloudcover": 25,
            "feelslike": 14,
            "uv_index": 3,
            "visibility": 10,
            "is_day": "yes",
            "astro": {
                "sunrise": "07:59 AM",
                "sunset": "04:22 PM",
                "moonrise": "09:48 AM",
                "moonset": "08:02 PM",
                "moon_phase": "Waxing Crescent",
                "moon_illumination": 19,
            },
            "air_quality": {
                "co": "230.3",
                "no2": "13.2",
                "o3": "54",
                "so2": "1.4",
                "pm2_5": "4.5",
                "pm10": "5.1",
                "us-epa-index": "1",
                "gb-defra-index": "1",
            },
        },
    }


@pytest.fixture
def forecast_payload() -> dict:
    return {
        "location": dict(LONDON),
        "forecast": {
            "2024-01-15": {"date": "2024-01-15", "maxtemp": 16, "mintemp": 8, "avgtemp": 12, "sunhour": 5.2},
            "2024-01-16": {
                "date": "2024-01-16",
                "maxtemp": 25,
                "mintemp": 15,
                "sunhour": 9,
                "uv_index": 8,
            },
            "2024-01-17": {
                "date": "2024-01-17",
                "maxtemp": -2,
                "mintemp": -6,
                "totalsnow": 3.1,
                "astro": {"sunrise": "08:01 AM", "sunset": "04:25 PM"},
            },
        },
    }
