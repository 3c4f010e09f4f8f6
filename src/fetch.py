# ABOUTME: Single HTTP GET bounded by a caller-supplied timeout.
# ABOUTME: Translates cancellation and transport failures into RequestTimeoutError and NetworkError.

import asyncio
import logging

import httpx

from src.config import DEFAULT_TIMEOUT_MS
from src.errors import NetworkError, RequestTimeoutError

logger = logging.getLogger(__name__)


async def bounded_fetch(client: httpx.AsyncClient, url: str, timeout_ms: int = DEFAULT_TIMEOUT_MS) -> httpx.Response:
    """Issue a GET that is cancelled after `timeout_ms` milliseconds.

    The response is returned as received; status codes are left to the caller.
    Only this call is cancelled on timeout, concurrent requests on the same
    client are unaffected.
    """
    try:
        return await asyncio.wait_for(client.get(url), timeout=timeout_ms / 1000)
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        logger.debug("Request cancelled after %sms", timeout_ms)
        raise RequestTimeoutError(f"Request timeout after {timeout_ms}ms") from e
    except httpx.HTTPError as e:
        raise NetworkError(str(e) or type(e).__name__) from e
