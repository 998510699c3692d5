"""Session record store backed by the ``session_credentials`` table."""

from __future__ import annotations

from datetime import datetime

from sessionauth.models.base import as_utc
from sessionauth.models.session_credential import SessionCredential
from sessionauth.services._shared.ports import SessionRecord, SessionRecordStore
from sessionauth.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def _record(row: SessionCredential) -> SessionRecord:
    return SessionRecord(
        id=str(row.id),
        account_id=str(row.account_id),
        token_hash=row.token_hash,
        expires_at=as_utc(row.expires_at),
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


def _int_id(value: str) -> int | None:
    """Parse a string id back to the integer key; ``None`` if it cannot be one."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class SQLAlchemySessionRecordStore(SessionRecordStore):
    """
    :class:`SessionRecordStore` over
    :class:`~sessionauth.repositories.SessionCredentialRepository`.

    Each write runs in its own unit of work; reads use a read-only one and
    project rows to :class:`SessionRecord` before the transaction ends.
    """

    def save(self, *, token_hash: str, account_id: str, expires_at: datetime) -> str:
        owner = _int_id(account_id)
        if owner is None:
            raise ValueError(f"Account id is not a SQL key: {account_id!r}")
        with SQLAlchemyUnitOfWork() as uow:
            row = uow.session_credentials.add(
                SessionCredential(
                    account_id=owner,
                    token_hash=token_hash,
                    expires_at=as_utc(expires_at),
                )
            )
            record_id = str(row.id)
        return record_id

    def find_by_account(self, account_id: str) -> list[SessionRecord]:
        owner = _int_id(account_id)
        if owner is None:
            return []
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            return [_record(r) for r in uow.session_credentials.list_for_account(owner)]

    def find_all(self) -> list[SessionRecord]:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            return [_record(r) for r in uow.session_credentials.list_all()]

    def delete_by_id(self, record_id: str) -> bool:
        pk = _int_id(record_id)
        if pk is None:
            return False
        with SQLAlchemyUnitOfWork() as uow:
            return uow.session_credentials.delete_by_id(pk)

    def purge_expired(self, now: datetime) -> int:
        with SQLAlchemyUnitOfWork() as uow:
            return uow.session_credentials.delete_expired(as_utc(now))
