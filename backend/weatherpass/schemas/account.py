"""Account Schemas — Pydantic models at the registration/login API boundary.

Invariants:
    - AccountCreate: name, email, password required strings; location optional (None)
    - No length or format rules here — the persistence layer is the validator of record
    - AccountResponse / AuthenticatedPrincipal never carry the credential secret

Design Decisions:
    - StrictStr for required fields: numbers/booleans in the body are rejected (400),
      not coerced into a stored string
    - location added to the input contract so registration can store it
      (ADR: the account's location drives every weather lookup)
    - from_attributes: built straight from the ORM Account
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, StrictStr


class AccountCreate(BaseModel):
    """Registration body."""
    name: StrictStr
    email: StrictStr
    password: StrictStr
    location: StrictStr | None = None


class AccountResponse(BaseModel):
    """Public-facing account data as persisted."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    location: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthenticatedPrincipal(AccountResponse):
    """Per-request projection of a verified account.

    Produced only by the authentication dependency; handlers read it.
    """
    model_config = ConfigDict(from_attributes=True, frozen=True)


class AccountEnvelope(BaseModel):
    """{"message": ..., "data": <account>} success body."""
    message: str
    data: AccountResponse
