"""Error Schemas — the {message, error} body shared by every handled failure."""

from pydantic import BaseModel


class ErrorEnvelope(BaseModel):
    message: str
    error: str


# OpenAPI "responses" maps for routes, keyed by the statuses their handlers can produce
REGISTER_ERROR_RESPONSES = {
    code: {"model": ErrorEnvelope} for code in (400, 409, 500, 503)
}
WEATHER_ERROR_RESPONSES = {
    code: {"model": ErrorEnvelope} for code in (404, 500, 502, 504)
}
