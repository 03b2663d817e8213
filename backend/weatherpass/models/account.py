"""Account ORM — persists registered users and their stored weather location.

Invariants:
    - id is an autoincrement integer primary key assigned by the database
    - email is unique at the table level; the handler layer does not check it
    - password is stored exactly as submitted (opaque to this service)
    - location is nullable — registration may omit it

Design Decisions:
    - Uniqueness enforced by constraint, not a pre-insert SELECT: a duplicate surfaces
      as IntegrityError -> ConflictError (ADR: one write per registration, no race window)
    - created_at/updated_at set client-side with timezone-aware UTC defaults
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from weatherpass.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Account(Base):
    """Registered account — the source of every authenticated principal."""
    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    password: Mapped[str] = mapped_column(String(255), nullable=False)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )
