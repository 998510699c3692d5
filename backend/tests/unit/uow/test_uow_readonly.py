from __future__ import annotations

import pytest

from sessionauth.models import Account
from sessionauth.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from sessionauth.uow import SQLAlchemyUnitOfWork as RWuow
from tests.factories.account import AccountFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(AccountFactory.build())
            uow.session.flush()

    def test_allows_reads(self, session):
        with RWuow() as uow:
            uow.accounts.add(AccountFactory.build(email="reader@example.com"))

        with ROuow() as uow:
            assert uow.accounts.get_by_email("reader@example.com") is not None

    def test_disallows_commit(self, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_guard_removed_after_exit(self, session):
        with ROuow():
            pass
        with RWuow() as uow:
            uow.accounts.add(AccountFactory.build())
        assert session.query(Account).count() >= 1
