# comments in English; reST docstrings
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

import redis

from sessionauth.services._shared.ports import SessionRecord, SessionRecordStore


def _s(value: bytes | str | None, default: str = "") -> str:
    if value is None:
        return default
    return value.decode() if isinstance(value, bytes) else value


@dataclass(slots=True)
class RedisSessionRecordStore(SessionRecordStore):
    """
    Redis-backed session record store.

    Layout
    ------
    - ``sess:<id>``: hash with ``account_id``, ``token_hash``, ``expires_at``,
      ``created_at`` and ``updated_at`` (epoch seconds). The key carries a TTL
      equal to the remaining lifetime, so Redis performs the expiry sweep.
    - ``sess:a:<account_id>``: set of record ids owned by the account.
    - ``sess:all``: set of every record id.

    Index sets may briefly reference ids whose hash already expired; readers
    skip and prune those entries.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    ALL_KEY = "sess:all"

    # -------------------- helpers --------------------

    @staticmethod
    def _k(record_id: str) -> str:
        return f"sess:{record_id}"

    @staticmethod
    def _ka(account_id: str) -> str:
        return f"sess:a:{account_id}"

    @staticmethod
    def _to_ts(dt: datetime) -> int:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return math.ceil(dt.timestamp())

    @staticmethod
    def _from_ts(raw: bytes | str | None) -> datetime:
        return datetime.fromtimestamp(int(_s(raw, "0")), tz=UTC)

    def _load(self, ids: list[str]) -> tuple[list[SessionRecord], list[str]]:
        """Fetch hashes for ``ids``; return live records and ids whose hash is gone."""
        if not ids:
            return [], []
        pipe = self.r.pipeline(transaction=False)
        for record_id in ids:
            pipe.hgetall(self._k(record_id))
        rows = pipe.execute()

        records: list[SessionRecord] = []
        missing: list[str] = []
        for record_id, h in zip(ids, rows, strict=True):
            if not h:
                missing.append(record_id)
                continue
            records.append(
                SessionRecord(
                    id=record_id,
                    account_id=_s(h.get(b"account_id")),
                    token_hash=_s(h.get(b"token_hash")),
                    expires_at=self._from_ts(h.get(b"expires_at")),
                    created_at=self._from_ts(h.get(b"created_at")),
                    updated_at=self._from_ts(h.get(b"updated_at")),
                )
            )
        records.sort(key=lambda rec: (rec.created_at, rec.id))
        return records, missing

    def _members(self, key: str) -> list[str]:
        return sorted(_s(m) for m in self.r.smembers(key))

    # -------------------- API ------------------------

    def save(self, *, token_hash: str, account_id: str, expires_at: datetime) -> str:
        record_id = uuid4().hex
        now_ts = self._to_ts(datetime.now(UTC))
        exp_ts = self._to_ts(expires_at)
        ttl = max(1, exp_ts - now_ts)
        key = self._k(record_id)

        pipe = self.r.pipeline(transaction=True)
        pipe.hset(
            key,
            mapping={
                "account_id": account_id,
                "token_hash": token_hash,
                "expires_at": str(exp_ts),
                "created_at": str(now_ts),
                "updated_at": str(now_ts),
            },
        )
        pipe.expire(key, ttl)
        pipe.sadd(self._ka(account_id), record_id)
        pipe.sadd(self.ALL_KEY, record_id)
        pipe.execute()
        return record_id

    def find_by_account(self, account_id: str) -> list[SessionRecord]:
        index = self._ka(account_id)
        records, missing = self._load(self._members(index))
        if missing:
            self.r.srem(index, *missing)
        return records

    def find_all(self) -> list[SessionRecord]:
        records, missing = self._load(self._members(self.ALL_KEY))
        if missing:
            self.r.srem(self.ALL_KEY, *missing)
        return records

    def delete_by_id(self, record_id: str) -> bool:
        key = self._k(record_id)
        account_id = self.r.hget(key, "account_id")
        pipe = self.r.pipeline(transaction=True)
        pipe.delete(key)
        pipe.srem(self.ALL_KEY, record_id)
        if account_id:
            pipe.srem(self._ka(_s(account_id)), record_id)
        removed = pipe.execute()[0]
        return bool(removed)

    def purge_expired(self, now: datetime) -> int:
        """
        Drop records past ``expires_at`` that Redis has not expired yet, and
        prune index entries left behind by key expiry.

        :returns: Number of records and stale index entries removed.
        """
        now_ts = self._to_ts(now)
        records, missing = self._load(self._members(self.ALL_KEY))
        removed = 0
        for rec in records:
            if self._to_ts(rec.expires_at) <= now_ts and self.delete_by_id(rec.id):
                removed += 1
        if missing:
            removed += int(self.r.srem(self.ALL_KEY, *missing))
        return removed
