"""Repository for hashed session-credential records."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete

from sessionauth.models.session_credential import SessionCredential
from sessionauth.repositories.base import BaseRepository


class SessionCredentialRepository(BaseRepository[SessionCredential]):
    """Persistence-only access to :class:`SessionCredential` rows."""

    model = SessionCredential

    def _sortable_fields(self):
        return {
            "created_at": SessionCredential.created_at,
            "expires_at": SessionCredential.expires_at,
        }

    def _filterable_fields(self):
        return {"account_id": SessionCredential.account_id}

    def list_for_account(self, account_id: int) -> list[SessionCredential]:
        """Every record stored for ``account_id``, expired or not."""
        return self.list(filters={"account_id": account_id}, sort=["created_at"])

    def list_all(self) -> list[SessionCredential]:
        return self.list(sort=["created_at"])

    def delete_by_id(self, record_id: int) -> bool:
        """Delete a record if it exists.

        :returns: ``True`` if a row was removed, ``False`` if it was already gone.
        """
        result = self.session.execute(
            delete(SessionCredential).where(SessionCredential.id == record_id)
        )
        return bool(result.rowcount)

    def delete_expired(self, now: datetime) -> int:
        """Remove every record whose ``expires_at`` is not after ``now``."""
        result = self.session.execute(
            delete(SessionCredential).where(SessionCredential.expires_at <= now)
        )
        return int(result.rowcount or 0)

