from __future__ import annotations

import threading
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol


@dataclass(frozen=True, slots=True)
class SessionRecord:
    """
    Read-model for a stored session credential.

    :ivar id: Record identifier (opaque string).
    :ivar account_id: Owning account id.
    :ivar token_hash: Salted one-way hash of the credential.
    :ivar expires_at: Absolute expiration (UTC), informational only.
    :ivar created_at: Creation time (UTC).
    :ivar updated_at: Last update time (UTC).
    """

    id: str
    account_id: str
    token_hash: str
    expires_at: datetime
    created_at: datetime
    updated_at: datetime


class SessionRecordStore(Protocol):
    """
    Durable store for hashed session credentials.

    Single-record writes and deletes rely on the backend's own atomicity.
    ``delete_by_id`` MUST be idempotent.
    """

    def save(self, *, token_hash: str, account_id: str, expires_at: datetime) -> str:
        """Persist a new record and return its id."""

    def find_by_account(self, account_id: str) -> list[SessionRecord]:
        """All records stored for ``account_id``, expired or not."""

    def find_all(self) -> list[SessionRecord]:
        """All records system-wide."""

    def delete_by_id(self, record_id: str) -> bool:
        """Delete-if-exists. :returns: True if a record was removed."""

    def purge_expired(self, now: datetime) -> int:
        """Remove records whose ``expires_at`` is not after ``now``. :returns: count."""


class InMemorySessionRecordStore(SessionRecordStore):
    """
    In-memory session record store.

    .. note::
       Uses a threading lock to mimic single-record atomicity in unit tests.
    """

    def __init__(self) -> None:
        self._records: dict[str, SessionRecord] = {}
        self._seq = 0
        self._lock = threading.Lock()

    def save(self, *, token_hash: str, account_id: str, expires_at: datetime) -> str:
        now = datetime.now(UTC)
        with self._lock:
            self._seq += 1
            record_id = f"sess-{self._seq}"
            self._records[record_id] = SessionRecord(
                id=record_id,
                account_id=account_id,
                token_hash=token_hash,
                expires_at=expires_at,
                created_at=now,
                updated_at=now,
            )
            return record_id

    def find_by_account(self, account_id: str) -> list[SessionRecord]:
        return [r for r in self._records.values() if r.account_id == account_id]

    def find_all(self) -> list[SessionRecord]:
        return list(self._records.values())

    def delete_by_id(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            stale = [rid for rid, r in self._records.items() if r.expires_at <= now]
            for rid in stale:
                del self._records[rid]
            return len(stale)
