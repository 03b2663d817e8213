"""OpenWeatherMap Client — single-shot current-weather lookups with error mapping.

Invariants:
    - fetch_current() issues exactly ONE GET {base_url}/weather per call (no retry)
    - Query is always q=<location>, appid=<api_key>, units=metric
    - Payload returned as decoded JSON, never normalized
    - All failures mapped to tagged errors (core/errors.py):
        timeout -> UpstreamTimeoutError, transport -> UpstreamUnavailableError,
        404 -> LocationNotFoundError, any other non-2xx (3xx included) / bad JSON -> UpstreamRejectedError

Design Decisions:
    - Credential injected at construction, not read from env per call (ADR: testability)
    - Optional shared httpx.AsyncClient: lifespan owns pooling, tests pass a MockTransport
    - No backoff: retry policy toward the provider is out of scope for this service
"""

import logging
import time
from typing import Any

import httpx

from weatherpass.core.domain_types import Location, Units
from weatherpass.core.errors import (
    ErrorContext,
    LocationNotFoundError,
    UpstreamRejectedError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"


def _provider_message(response: httpx.Response) -> str:
    """Extract OpenWeatherMap's {"cod": ..., "message": ...} text, else a status line."""
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"Request failed with status code {response.status_code}"


class OpenWeatherMapClient:
    """WeatherProvider implementation for the OpenWeatherMap current-weather API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float | None = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self._owns_client = http_client is None
        self.client = http_client or httpx.AsyncClient(timeout=timeout_seconds)

    async def fetch_current(self, location: Location) -> dict[str, Any]:
        """Fetch current weather for a free-text location."""
        context = ErrorContext(location=location)
        params = {
            "q": location,
            "appid": self.api_key,
            "units": Units.METRIC.value,
        }
        started = time.perf_counter()
        try:
            response = await self.client.get(
                f"{self.base_url}/weather", params=params,
            )
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                str(e) or "Weather provider timed out", context=context,
            ) from e
        except httpx.TransportError as e:
            raise UpstreamUnavailableError(
                str(e) or type(e).__name__, context=context,
            ) from e

        self._log_response(response, location, started)
        if response.status_code == httpx.codes.NOT_FOUND:
            raise LocationNotFoundError(
                _provider_message(response), location=location,
            )
        if not response.is_success:
            raise UpstreamRejectedError(
                _provider_message(response),
                upstream_status=response.status_code,
                context=context,
            )
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamRejectedError(
                f"Invalid JSON from weather provider: {e}",
                upstream_status=response.status_code,
                context=context,
            ) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    def _log_response(
        self, response: httpx.Response, location: str, started: float,
    ) -> None:
        logger.info(
            "Weather provider responded",
            extra={
                "location": location,
                "upstream_status": response.status_code,
                "elapsed_ms": int((time.perf_counter() - started) * 1000),
            },
        )
