"""Boundary Protocols — contracts between handlers and their collaborators.

Invariants:
    - Handlers NEVER import SQLAlchemy or httpx — they see only these Protocols
    - Implementations provided by the shell via dependency injection
    - Every implementation raises WeatherPassError subclasses, never driver exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance (ADR: ExMA anti-pattern)
    - Async in Protocol: implementations do IO; handlers await exactly one call
"""

from datetime import datetime
from typing import Any, Protocol

from weatherpass.core.domain_types import AccountId, Email, Location


class AccountLike(Protocol):
    """Structural contract for persisted accounts returned by the repository.

    Avoids coupling handlers to the ORM model while giving mypy
    real type information (unlike Any).
    """
    id: AccountId
    name: str
    email: str
    password: str
    location: str | None
    created_at: datetime
    updated_at: datetime


class AccountRepository(Protocol):
    """Contract for account persistence — implemented by infrastructure."""
    async def create(
        self, *, name: str, email: Email, password: str, location: Location | None,
    ) -> AccountLike: ...
    async def get_by_email(self, email: Email) -> AccountLike | None: ...


class WeatherProvider(Protocol):
    """Contract for the external weather data source."""
    async def fetch_current(self, location: Location) -> dict[str, Any]: ...
