"""Weather Routes — current weather for the authenticated principal's location.

Invariants:
    - GET /api/v1/weather (and legacy GET /weather) requires Basic credentials
    - Response is {"weather": <provider payload>} exactly as the provider sent it
"""

from fastapi import APIRouter, Depends

from weatherpass.api.dependencies import get_current_principal, get_weather_handler
from weatherpass.schemas.account import AuthenticatedPrincipal
from weatherpass.schemas.errors import WEATHER_ERROR_RESPONSES
from weatherpass.schemas.weather import WeatherEnvelope
from weatherpass.services.handle_weather import WeatherLookupHandler

router = APIRouter(prefix="/api/v1/weather", tags=["weather"])
legacy_router = APIRouter(tags=["weather"], include_in_schema=False)


@router.get(
    "", response_model=WeatherEnvelope, responses=WEATHER_ERROR_RESPONSES,
)
@legacy_router.get("/weather", response_model=WeatherEnvelope)
async def get_weather(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
    handler: WeatherLookupHandler = Depends(get_weather_handler),
):
    """Fetch current weather for the stored location."""
    return await handler.get_weather(principal)
