"""Response Messages — fixed user-facing strings and success envelopes.

Invariants:
    - Success bodies are {"message": ..., "data": ...} or {"weather": ...}
    - Strings here are part of the public API; clients match on them

Design Decisions:
    - Pure functions, no IO: handlers call these to build bodies (ADR: ExMA impureim sandwich)
"""

from typing import Any

REGISTER_SUCCESS = "User registered successfully!"
REGISTER_FAILED = "Error registering user"
LOGIN_SUCCESS = "User logged in successfully!"
WEATHER_FAILED = "Error fetching weather data"
INVALID_REQUEST = "Invalid request data"
INTERNAL_FAILURE = "Internal server error"


def data_envelope(message: str, data: Any) -> dict:
    """Wrap a payload with a confirmation message."""
    return {"message": message, "data": data}


def weather_envelope(payload: Any) -> dict:
    """Wrap the provider payload untouched in a single field."""
    return {"weather": payload}
