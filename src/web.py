# ABOUTME: Starlette web entry point exposing the weather card as JSON.
# ABOUTME: Serves GET /api/weather with an optional selection, loading the session on first use.

import logging
from contextlib import asynccontextmanager

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from src.deps import WeatherDeps, create_deps
from src.session import WeatherSession
from src.view import DayTile, parse_selection

logger = logging.getLogger(__name__)

WEATHER_PATH = "/api/weather"


def tile_payload(tile: DayTile) -> dict:
    """Serialize a day tile along with its placeholder-aware temperature text."""
    return {**tile.model_dump(mode="json"), "temperature_text": tile.temperature_text}


async def weather_card(request: Request) -> JSONResponse:
    """Apply the requested selection, loading data first if needed, and return the card.

    `?selection=forecast&day=1` pivots the selection before rendering;
    `?reload=1` re-runs the load sequence.
    """
    session: WeatherSession = request.app.state.session
    query = request.query_params

    if "selection" in query:
        try:
            day = int(query["day"]) if "day" in query else None
            session.select(parse_selection(query["selection"], day))
        except ValueError as e:
            return JSONResponse({"error": str(e)}, status_code=400)

    if query.get("reload") == "1":
        await session.load()
    else:
        await session.ensure_loaded()

    if session.status == "error":
        return JSONResponse({"status": "error", "error": session.error}, status_code=503)

    view = session.view()
    if view is None:
        return JSONResponse({"status": "ready", "error": "Selected day is not available"}, status_code=404)

    return JSONResponse(
        {
            "status": "ready",
            "selection": session.selection.model_dump(),
            "view": view.model_dump(mode="json"),
            "display": view.display(),
            "forecast": [tile_payload(t) for t in session.forecast_tiles()],
            "history": [tile_payload(t) for t in session.history_tiles()],
        }
    )


def create_app(deps: WeatherDeps | None = None, location: str | None = None) -> Starlette:
    """Build the Starlette app around a single WeatherSession."""
    deps = deps or create_deps()
    if not deps.config.has_api_key:
        logger.warning("WEATHER_API_KEY is not set, every weather request will fail")

    @asynccontextmanager
    async def lifespan(app: Starlette):
        yield
        await deps.http_client.aclose()

    app = Starlette(routes=[Route(WEATHER_PATH, weather_card, methods=["GET"])], lifespan=lifespan)
    app.state.session = WeatherSession(deps, location)
    return app
