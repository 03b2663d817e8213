"""Weather Schemas — response wrappers for the weather lookup endpoint."""

from typing import Any

from pydantic import BaseModel


class WeatherEnvelope(BaseModel):
    """Provider payload passed through untouched."""
    weather: Any
