"""SQL Account Repository — AccountRepository implementation over an AsyncSession.

Invariants:
    - create() performs exactly one INSERT + COMMIT; never retries
    - Any SQLAlchemy failure rolls back and is re-raised as a tagged WeatherPassError
    - Returned accounts are refreshed, so DB-assigned id/timestamps are populated
    - A failed refresh after a successful COMMIT never rolls back or fails the call:
      the committed instance (expire_on_commit=False) is returned as-is

Design Decisions:
    - Session injected per request (get_db), repository holds no state of its own
    - Translation delegated to translate_db_error: one mapping shared with DatabaseSessionManager
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from weatherpass.core.domain_types import Email, Location
from weatherpass.infrastructure.database import translate_db_error
from weatherpass.models.account import Account

logger = logging.getLogger(__name__)


class SqlAccountRepository:
    """Account persistence backed by SQLAlchemy."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self, *, name: str, email: Email, password: str, location: Location | None,
    ) -> Account:
        """Insert one account and return it with generated fields."""
        account = Account(
            name=name, email=email, password=password, location=location,
        )
        try:
            self.db.add(account)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise translate_db_error(e, "insert") from e
        try:
            await self.db.refresh(account)
        except SQLAlchemyError as e:
            logger.warning(
                f"Refresh after commit failed: {e}",
                extra={"account_id": account.id},
            )
        logger.info("Account created", extra={"account_id": account.id})
        return account

    async def get_by_email(self, email: Email) -> Account | None:
        try:
            result = await self.db.execute(
                select(Account).where(Account.email == email),
            )
        except SQLAlchemyError as e:
            raise translate_db_error(e, "select") from e
        return result.scalar_one_or_none()
