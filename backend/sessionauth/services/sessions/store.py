"""
Hashed persistence of session credentials.

Design decisions:
  Hashing: bcrypt with an adaptive cost factor (``SESSION_HASH_ROUNDS``,
       default 10) and a per-record random salt. bcrypt only reads the first
       72 bytes of its input and a JWT is far longer, so the credential is
       first reduced to a base64 SHA-256 digest (44 bytes) and the digest is
       what gets hashed. Every byte of the credential stays significant.

  Lookup: salted hashes cannot be looked up by key, so matching a presented
       credential means scanning candidate records and comparing each one.
       ``bcrypt.checkpw`` does the comparison in constant time.

  The plaintext credential is never persisted and never logged.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from collections.abc import Iterable
from datetime import UTC, datetime

import bcrypt

from sessionauth.services._shared.ports import SessionRecord, SessionRecordStore

log = logging.getLogger(__name__)


def _digest(secret: str) -> bytes:
    return base64.b64encode(hashlib.sha256(secret.encode("utf-8")).digest())


class SessionStore:
    """
    Save, find, match and delete hashed session-credential records.

    :param records: Durable store adapter.
    :param rounds: bcrypt cost factor.
    """

    def __init__(self, records: SessionRecordStore, *, rounds: int = 10) -> None:
        self.records = records
        self.rounds = rounds

    def hash_secret(self, secret: str) -> str:
        """Return a fresh salted bcrypt hash of ``secret``."""
        return bcrypt.hashpw(_digest(secret), bcrypt.gensalt(rounds=self.rounds)).decode("ascii")

    def save(self, secret: str, account_id: str, expires_at: datetime) -> str:
        """
        Hash ``secret`` and persist a record for ``account_id``.

        :returns: The new record id.
        """
        record_id = self.records.save(
            token_hash=self.hash_secret(secret),
            account_id=str(account_id),
            expires_at=expires_at,
        )
        log.info("session.saved account_id=%s record_id=%s", account_id, record_id)
        return record_id

    def find_by_account(self, account_id: str) -> list[SessionRecord]:
        return list(self.records.find_by_account(str(account_id)))

    def find_all(self) -> list[SessionRecord]:
        return list(self.records.find_all())

    def verify_match(self, record: SessionRecord, secret: str) -> bool:
        """
        Compare ``secret`` with the record's stored hash.

        A corrupted stored hash counts as a mismatch.
        """
        try:
            return bcrypt.checkpw(_digest(secret), record.token_hash.encode("ascii"))
        except ValueError:
            log.warning("session.hash_unreadable record_id=%s", record.id)
            return False

    def first_match(self, candidates: Iterable[SessionRecord], secret: str) -> SessionRecord | None:
        """Scan ``candidates`` in order and return the first one matching ``secret``."""
        for record in candidates:
            if self.verify_match(record, secret):
                return record
        return None

    def delete(self, record_id: str) -> None:
        """Delete a record. Deleting an unknown id is not an error."""
        removed = self.records.delete_by_id(record_id)
        log.info("session.deleted record_id=%s removed=%s", record_id, removed)

    def purge_expired(self, now: datetime | None = None) -> int:
        """Remove every record whose ``expires_at`` has passed. Best-effort sweep."""
        count = self.records.purge_expired(now or datetime.now(UTC))
        log.info("session.purged count=%s", count)
        return count
