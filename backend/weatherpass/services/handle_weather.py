"""Weather Lookup Handler — relays the provider's payload for the principal's location.

Invariants:
    - Exactly one provider.fetch_current() per get_weather(); never a second attempt
    - Location forwarded as stored: no trimming, no emptiness check (None sent as "")
    - Success body is {"weather": <payload>} with the payload unmodified
    - Every failure leaves as a WeatherPassError tagged "Error fetching weather data"

Design Decisions:
    - Provider injected at construction: the credential lives inside the provider,
      the handler never touches configuration (ADR: testability)
    - Pass-through, not an adapter: provider schema changes reach clients as-is
"""

import logging

from weatherpass.core.domain_types import Location
from weatherpass.core.errors import ErrorContext, InternalError, WeatherPassError
from weatherpass.core.repository_protocols import WeatherProvider
from weatherpass.core.response_messages import WEATHER_FAILED, weather_envelope
from weatherpass.schemas.account import AuthenticatedPrincipal

logger = logging.getLogger(__name__)


class WeatherLookupHandler:
    """Fetches current weather on behalf of an authenticated principal."""

    def __init__(self, provider: WeatherProvider):
        self.provider = provider

    async def get_weather(self, principal: AuthenticatedPrincipal) -> dict:
        location = Location(principal.location or "")
        try:
            payload = await self.provider.fetch_current(location)
        except WeatherPassError as e:
            e.context.user_message = WEATHER_FAILED
            e.context.account_id = principal.id
            logger.error(
                f"Weather lookup failed: {e.message}",
                extra={
                    "error_code": e.code,
                    "account_id": principal.id,
                    "location": location,
                },
            )
            raise
        except Exception as e:
            logger.error(f"Weather lookup failed unexpectedly: {e}", exc_info=True)
            raise InternalError(
                str(e),
                ErrorContext(
                    account_id=principal.id, location=location,
                    user_message=WEATHER_FAILED,
                ),
            ) from e
        return weather_envelope(payload)
