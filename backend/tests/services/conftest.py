"""Service test fixtures — async DB, mocked weather provider, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - get_weather_provider overridden with an OpenWeatherMapClient on httpx.MockTransport
    - db_manager initialized for readiness probes that bypass get_db

Design Decisions:
    - SQLite in-memory + StaticPool: every session sees the same connection
    - Provider mocked at the transport, not the client: URL building, params,
      and error mapping run for real in route tests
"""

import httpx
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from weatherpass.api.dependencies import get_weather_provider
from weatherpass.config import Settings
from weatherpass.db.base import Base
from weatherpass.infrastructure.database import get_db, DatabaseSessionManager
from weatherpass.infrastructure.weather_client import OpenWeatherMapClient
from weatherpass.models.account import Account
import weatherpass.api.error_handlers as error_handlers_module
import weatherpass.infrastructure.database as db_module
from weatherpass.main import app

TEST_API_KEY = "test-key"
TEST_BASE_URL = "https://weather.test/data/2.5"


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def weather_mock():
    """Controllable provider backend.

    Returns dict with:
      - requests: list of httpx.Request received by the provider
      - respond: callable(httpx.Request) -> httpx.Response, replace to change behaviour
    """
    state = {
        "requests": [],
        "respond": lambda request: httpx.Response(200, json={"temp": 14}),
    }

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"].append(request)
        return state["respond"](request)

    state["transport"] = httpx.MockTransport(handler)
    return state


@pytest.fixture
async def weather_provider(weather_mock):
    http_client = httpx.AsyncClient(transport=weather_mock["transport"])
    provider = OpenWeatherMapClient(
        api_key=TEST_API_KEY, base_url=TEST_BASE_URL, http_client=http_client,
    )
    yield provider
    await http_client.aclose()


@pytest.fixture
async def client(test_engine, test_session_factory, weather_provider):
    """FastAPI test client with DB and provider dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_weather_provider] = lambda: weather_provider

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def legacy_status(monkeypatch):
    """Switch the error handlers to collapse every handled failure to 500."""
    monkeypatch.setattr(
        error_handlers_module, "get_settings",
        lambda: Settings(collapse_error_status=True),
    )


@pytest.fixture
async def seed_account(test_db):
    """Insert Ada with a stored location directly into the test DB."""
    account = Account(
        name="Ada", email="ada@x.com", password="secret", location="Paris",
    )
    test_db.add(account)
    await test_db.commit()
    await test_db.refresh(account)
    return account
