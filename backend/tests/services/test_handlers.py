"""Handler Tests — register/login/get_weather against in-memory fakes, no HTTP, no DB.

Invariants:
    - register calls repository.create exactly once, success or failure
    - Tagged errors re-raised with the handler's user_message attached
    - Unclassified exceptions wrapped in InternalError carrying the original text
    - login returns the same principal object it was given
    - get_weather sends "" when the principal has no location

Design Decisions:
    - Fakes satisfy the Protocols structurally (no inheritance needed)
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from weatherpass.core.errors import (
    ConflictError,
    InternalError,
    PersistenceUnavailableError,
    UpstreamUnavailableError,
)
from weatherpass.schemas.account import (
    AccountCreate,
    AccountResponse,
    AuthenticatedPrincipal,
)
from weatherpass.services.handle_accounts import login, register
from weatherpass.services.handle_weather import WeatherLookupHandler

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


class _FakeRepository:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls: list[dict] = []

    async def create(self, *, name, email, password, location):
        self.calls.append(
            {"name": name, "email": email, "password": password, "location": location},
        )
        if self.error:
            raise self.error
        return SimpleNamespace(
            id=1, name=name, email=email, password=password,
            location=location, created_at=NOW, updated_at=NOW,
        )

    async def get_by_email(self, email):
        return None


class _FakeProvider:
    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.locations: list[str] = []

    async def fetch_current(self, location):
        self.locations.append(location)
        if self.error:
            raise self.error
        return self.payload


def _principal(location: str | None = "Paris") -> AuthenticatedPrincipal:
    return AuthenticatedPrincipal(
        id=1, name="Ada", email="ada@x.com", location=location,
        created_at=NOW, updated_at=NOW,
    )


# -- register ------------------------------------------------------------------


async def test_register_returns_envelope_with_account():
    repo = _FakeRepository()
    body = AccountCreate(name="Ada", email="ada@x.com", password="secret")

    result = await register(repo, body)

    assert result["message"] == "User registered successfully!"
    assert isinstance(result["data"], AccountResponse)
    assert result["data"].id == 1
    assert result["data"].location is None
    assert len(repo.calls) == 1


async def test_register_forwards_location():
    repo = _FakeRepository()
    body = AccountCreate(
        name="Ada", email="ada@x.com", password="secret", location="Paris",
    )

    await register(repo, body)

    assert repo.calls[0]["location"] == "Paris"


async def test_register_tags_conflict_with_handler_message():
    repo = _FakeRepository(error=ConflictError("UNIQUE constraint failed: accounts.email"))
    body = AccountCreate(name="Ada", email="ada@x.com", password="secret")

    with pytest.raises(ConflictError) as exc_info:
        await register(repo, body)

    assert exc_info.value.to_response() == {
        "message": "Error registering user",
        "error": "UNIQUE constraint failed: accounts.email",
    }
    assert len(repo.calls) == 1


async def test_register_does_not_retry_on_unavailable_database():
    repo = _FakeRepository(error=PersistenceUnavailableError("database is locked"))
    body = AccountCreate(name="Ada", email="ada@x.com", password="secret")

    with pytest.raises(PersistenceUnavailableError):
        await register(repo, body)

    assert len(repo.calls) == 1


async def test_register_wraps_unexpected_exception():
    repo = _FakeRepository(error=RuntimeError("driver exploded"))
    body = AccountCreate(name="Ada", email="ada@x.com", password="secret")

    with pytest.raises(InternalError) as exc_info:
        await register(repo, body)

    assert exc_info.value.http_status == 500
    assert exc_info.value.to_response() == {
        "message": "Error registering user",
        "error": "driver exploded",
    }


# -- login ---------------------------------------------------------------------


def test_login_reflects_principal():
    principal = _principal()

    result = login(principal)

    assert result == {"message": "User logged in successfully!", "data": principal}


def test_login_is_deterministic():
    principal = _principal()
    assert login(principal) == login(principal)


# -- get_weather ---------------------------------------------------------------


async def test_get_weather_wraps_payload():
    provider = _FakeProvider(payload={"temp": 14})

    result = await WeatherLookupHandler(provider).get_weather(_principal())

    assert result == {"weather": {"temp": 14}}
    assert provider.locations == ["Paris"]


async def test_get_weather_sends_empty_string_for_missing_location():
    provider = _FakeProvider(payload={})

    await WeatherLookupHandler(provider).get_weather(_principal(location=None))

    assert provider.locations == [""]


async def test_get_weather_tags_provider_error():
    provider = _FakeProvider(error=UpstreamUnavailableError("Connection refused"))

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        await WeatherLookupHandler(provider).get_weather(_principal())

    err = exc_info.value
    assert err.to_response() == {
        "message": "Error fetching weather data",
        "error": "Connection refused",
    }
    assert err.context.account_id == 1
    assert provider.locations == ["Paris"]


async def test_get_weather_wraps_unexpected_exception():
    provider = _FakeProvider(error=ValueError("bad payload"))

    with pytest.raises(InternalError) as exc_info:
        await WeatherLookupHandler(provider).get_weather(_principal())

    assert exc_info.value.to_response()["error"] == "bad payload"
    assert exc_info.value.context.location == "Paris"
