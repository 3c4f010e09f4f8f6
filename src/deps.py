# ABOUTME: Dependency container for the weather session using Pydantic BaseModel.
# ABOUTME: Holds the httpx.AsyncClient and start-up configuration passed to the service layer.

import httpx
from pydantic import BaseModel, ConfigDict

from src.config import WeatherConfig, load_config


class WeatherDeps(BaseModel):
    """Dependencies injected into the session and web surface."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    http_client: httpx.AsyncClient
    config: WeatherConfig


def create_http_client() -> httpx.AsyncClient:
    """Create the shared httpx client.

    Request timeouts are enforced per call by bounded_fetch, so the client
    itself carries none, and failures are never retried.
    """
    return httpx.AsyncClient(timeout=None)


def create_deps(config: WeatherConfig | None = None) -> WeatherDeps:
    return WeatherDeps(http_client=create_http_client(), config=config or load_config())
