"""Account Handlers — register and login.

Invariants:
    - register awaits exactly one repository.create() per call; no retries
    - Every register failure leaves as a WeatherPassError tagged "Error registering user"
    - login is pure: same principal in, identical body out; it cannot fail
    - Neither handler returns the credential secret

Design Decisions:
    - Principal is an explicit AuthenticatedPrincipal parameter, never read from request
      state (ADR: precondition enforced by the signature, not by middleware ordering)
    - Unclassified exceptions wrapped in InternalError at this boundary so the
      {message, error} shape survives even for bugs in a repository implementation
"""

import logging

from weatherpass.core.domain_types import Email, Location
from weatherpass.core.errors import ErrorContext, InternalError, WeatherPassError
from weatherpass.core.repository_protocols import AccountRepository
from weatherpass.core.response_messages import (
    LOGIN_SUCCESS,
    REGISTER_FAILED,
    REGISTER_SUCCESS,
    data_envelope,
)
from weatherpass.schemas.account import (
    AccountCreate,
    AccountResponse,
    AuthenticatedPrincipal,
)

logger = logging.getLogger(__name__)


async def register(repository: AccountRepository, payload: AccountCreate) -> dict:
    """Persist a new account and echo the stored record."""
    try:
        account = await repository.create(
            name=payload.name,
            email=Email(payload.email),
            password=payload.password,
            location=Location(payload.location) if payload.location is not None else None,
        )
    except WeatherPassError as e:
        e.context.user_message = REGISTER_FAILED
        logger.error(
            f"Registration failed: {e.message}",
            extra={"error_code": e.code},
        )
        raise
    except Exception as e:
        logger.error(f"Registration failed unexpectedly: {e}", exc_info=True)
        raise InternalError(
            str(e), ErrorContext(user_message=REGISTER_FAILED),
        ) from e

    return data_envelope(REGISTER_SUCCESS, AccountResponse.model_validate(account))


def login(principal: AuthenticatedPrincipal) -> dict:
    """Confirm an already-authenticated principal."""
    return data_envelope(LOGIN_SUCCESS, principal)
