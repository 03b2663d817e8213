"""WeatherPass API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map WeatherPassError → {message, error} JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and weather provider initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Weather credential read once here and injected into OpenWeatherMapClient
      (ADR: handlers never read configuration)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from weatherpass.api.error_handlers import register_error_handlers
from weatherpass.api.routes import auth, health, weather
from weatherpass.config import get_settings
from weatherpass.infrastructure.database import init_db
from weatherpass.infrastructure.observability import setup_logging
from weatherpass.infrastructure.weather_client import OpenWeatherMapClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if not settings.openweathermap_api_key:
        logger.warning("OPENWEATHERMAP_API_KEY is empty; weather lookups will be rejected")
    app.state.weather_provider = OpenWeatherMapClient(
        api_key=settings.openweathermap_api_key,
        base_url=settings.openweathermap_base_url,
        timeout_seconds=settings.weather_timeout_seconds,
    )
    logger.info("WeatherPass API started")
    yield
    logger.info("WeatherPass API shutting down")
    await app.state.weather_provider.aclose()
    await manager.dispose()


app = FastAPI(
    title="WeatherPass API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(weather.router)
app.include_router(auth.legacy_router)
app.include_router(weather.legacy_router)

register_error_handlers(app)
