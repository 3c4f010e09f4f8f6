# ABOUTME: Mock HTTP client and payload helpers shared by the test modules.
# ABOUTME: Builds real httpx.Response objects behind AsyncMock clients.

from unittest.mock import AsyncMock

import httpx

LONDON = {
    "name": "London",
    "country": "United Kingdom",
    "region": "City of London, Greater London",
    "lat": "51.517",
    "lon": "-0.106",
    "timezone_id": "Europe/London",
    "localtime": "2024-01-15 14:30",
    "localtime_epoch": 1705329000,
    "utc_offset": "0.0",
}


def response(json_data, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code=status_code, json=json_data, request=httpx.Request("GET", "https://test"))


def mock_client(json_data=None, status_code: int = 200) -> AsyncMock:
    """Create a mock httpx.AsyncClient whose get() returns the given JSON response."""
    mock = AsyncMock(spec=httpx.AsyncClient)
    mock.get.return_value = response(json_data if json_data is not None else {}, status_code)
    return mock


def routing_client(routes: dict) -> AsyncMock:
    """Create a mock client that answers by endpoint path ("current", "forecast", "historical").

    A route value may be a JSON body, an httpx.Response, an exception to raise,
    or a callable taking the request URL and returning one of those.
    """
    mock = AsyncMock(spec=httpx.AsyncClient)

    async def get(url):
        endpoint = httpx.URL(url).path.rsplit("/", 1)[-1]
        result = routes[endpoint]
        if callable(result) and not isinstance(result, Exception):
            result = result(httpx.URL(url))
        if isinstance(result, Exception):
            raise result
        if isinstance(result, httpx.Response):
            return result
        return response(result)

    mock.get.side_effect = get
    return mock


def historical_payload(day: str, **fields) -> dict:
    record = {"date": day, "maxtemp": 12, "mintemp": 4, "avgtemp": 8, "sunhour": 3}
    record.update(fields)
    return {"location": dict(LONDON), "historical": {day: record}}
