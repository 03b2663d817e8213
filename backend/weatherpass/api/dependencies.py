"""API Dependencies — repository, provider, and authenticated-principal injection.

Invariants:
    - get_current_principal is the ONLY producer of AuthenticatedPrincipal
    - Missing or wrong credentials -> 401 with WWW-Authenticate: Basic, handler never runs
    - Secret compared with secrets.compare_digest against the stored value as-is
    - Weather provider comes from app.state (built once in lifespan), never per request

Design Decisions:
    - HTTP Basic (email:password) as the authentication collaborator: no session
      transport to manage, every login/weather request carries its own credentials
    - HTTPBase(scheme="basic") + our own decoding instead of HTTPBasic: credentials are
      decoded as UTF-8 (RFC 7617 charset), and every failure leaves through _unauthorized
      with the {message, error} body
    - Tests override get_weather_provider / get_db via app.dependency_overrides
"""

import base64
import binascii
import logging
import secrets

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBasicCredentials
from fastapi.security.http import HTTPBase
from sqlalchemy.ext.asyncio import AsyncSession

from weatherpass.core.domain_types import Email
from weatherpass.core.errors import AuthenticationError
from weatherpass.core.repository_protocols import WeatherProvider
from weatherpass.infrastructure.account_repository import SqlAccountRepository
from weatherpass.infrastructure.database import get_db
from weatherpass.schemas.account import AuthenticatedPrincipal
from weatherpass.services.handle_weather import WeatherLookupHandler

logger = logging.getLogger(__name__)
basic_auth = HTTPBase(scheme="basic", auto_error=False)


def get_account_repository(
    db: AsyncSession = Depends(get_db),
) -> SqlAccountRepository:
    return SqlAccountRepository(db)


def _unauthorized(reason: str) -> HTTPException:
    return HTTPException(
        status.HTTP_401_UNAUTHORIZED,
        detail=AuthenticationError(reason).to_response(),
        headers={"WWW-Authenticate": "Basic"},
    )


def decode_basic_credentials(
    authorization: HTTPAuthorizationCredentials | None,
) -> HTTPBasicCredentials:
    """Decode an Authorization: Basic value as UTF-8 user-id:password."""
    if authorization is None:
        raise _unauthorized("Missing credentials")
    if authorization.scheme.lower() != "basic":
        raise _unauthorized("Unsupported authorization scheme")
    try:
        decoded = base64.b64decode(
            authorization.credentials, validate=True,
        ).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        raise _unauthorized("Malformed credentials")
    username, separator, password = decoded.partition(":")
    if not separator:
        raise _unauthorized("Malformed credentials")
    return HTTPBasicCredentials(username=username, password=password)


async def get_current_principal(
    authorization: HTTPAuthorizationCredentials | None = Depends(basic_auth),
    repository: SqlAccountRepository = Depends(get_account_repository),
) -> AuthenticatedPrincipal:
    """Verify Basic credentials against the stored account and project it."""
    credentials = decode_basic_credentials(authorization)
    account = await repository.get_by_email(Email(credentials.username))
    # unknown emails still go through compare_digest (against "")
    stored = account.password if account else ""
    matches = secrets.compare_digest(
        credentials.password.encode("utf-8"), stored.encode("utf-8"),
    )
    if account is None or not matches:
        logger.warning("Authentication failed")
        raise _unauthorized("Invalid email or password")

    return AuthenticatedPrincipal.model_validate(account)


def get_weather_provider(request: Request) -> WeatherProvider:
    provider = getattr(request.app.state, "weather_provider", None)
    if provider is None:
        raise RuntimeError("Weather provider not initialized")
    return provider


def get_weather_handler(
    provider: WeatherProvider = Depends(get_weather_provider),
) -> WeatherLookupHandler:
    return WeatherLookupHandler(provider)
