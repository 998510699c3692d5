"""Hashed session-credential records."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from sessionauth.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .account import Account


class SessionCredential(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Server-side record of an issued session credential.

    Only a salted one-way hash of the credential is stored. ``token_hash`` and
    ``expires_at`` are written once at creation and never updated; the
    record is removed by logout or by the expiry sweep.

    Fields
    ------
    account_id : int
        Owning account.
    token_hash : str
        bcrypt hash of the credential digest.
    expires_at : datetime
        Absolute expiry (UTC) used only by the sweep.
    """

    __tablename__ = "session_credentials"

    account_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    )
    token_hash: Mapped[str] = mapped_column(String(128), nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    account: Mapped[Account] = relationship(back_populates="session_credentials")

    __table_args__ = (
        Index("ix_session_credentials_account_id", "account_id"),
        Index("ix_session_credentials_expires_at", "expires_at"),
    )
