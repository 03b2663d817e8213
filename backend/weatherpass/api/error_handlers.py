"""Error Handlers — global exception handlers for the WeatherPass API.

Invariants:
    - WeatherPassError → {message, error} with the variant's http_status
    - collapse_error_status=True → same body, status always 500
    - RequestValidationError → 400 {message: "Invalid request data", error: <field errors>}
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (WeatherPassError), validation (Pydantic), catch-all (Exception)
    - Settings read per error, not at registration: tests and ops can flip the status mode
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from weatherpass.config import get_settings
from weatherpass.core.errors import WeatherPassError
from weatherpass.core.response_messages import INTERNAL_FAILURE, INVALID_REQUEST

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_weatherpass_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def resolve_status(exc: WeatherPassError) -> int:
    """Status for a handled failure under the configured status mode."""
    if get_settings().collapse_error_status:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return exc.http_status


def _register_weatherpass_error_handler(app: FastAPI) -> None:
    """Register WeatherPass domain/infrastructure error handler."""

    @app.exception_handler(WeatherPassError)
    async def weatherpass_error_handler(request: Request, exc: WeatherPassError):
        """Handle all tagged errors raised through a handler boundary."""
        logger.error(
            f"WeatherPassError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=resolve_status(exc), content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "message": INTERNAL_FAILURE,
                "error": "An unexpected error occurred",
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Flatten field errors into the {message, error} envelope."""
    details = "; ".join(
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    )
    return {"message": INVALID_REQUEST, "error": details}
