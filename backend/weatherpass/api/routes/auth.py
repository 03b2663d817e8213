"""Auth Routes — registration and login endpoints.

Invariants:
    - POST /register never requires credentials; POST /login always does
    - Routes contain no business logic — they wire dependencies into handlers
    - Legacy unprefixed paths (/register, /login) served by legacy_router

Design Decisions:
    - Principal injected with Depends(get_current_principal): the login handler
      cannot run unless authentication produced one (ADR: explicit context passing)
"""

from fastapi import APIRouter, Depends, status

from weatherpass.api.dependencies import (
    get_account_repository,
    get_current_principal,
)
from weatherpass.infrastructure.account_repository import SqlAccountRepository
from weatherpass.schemas.account import (
    AccountCreate,
    AccountEnvelope,
    AuthenticatedPrincipal,
)
from weatherpass.schemas.errors import REGISTER_ERROR_RESPONSES
from weatherpass.services import handle_accounts

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])
legacy_router = APIRouter(tags=["auth"], include_in_schema=False)


@router.post(
    "/register", response_model=AccountEnvelope,
    status_code=status.HTTP_200_OK, responses=REGISTER_ERROR_RESPONSES,
)
@legacy_router.post("/register", response_model=AccountEnvelope)
async def register_user(
    body: AccountCreate,
    repository: SqlAccountRepository = Depends(get_account_repository),
):
    """Create an account from name, email, password and optional location."""
    return await handle_accounts.register(repository, body)


@router.post("/login", response_model=AccountEnvelope)
@legacy_router.post("/login", response_model=AccountEnvelope)
async def login_user(
    principal: AuthenticatedPrincipal = Depends(get_current_principal),
):
    """Confirm the authenticated principal."""
    return handle_accounts.login(principal)
