"""Account store backed by the ``accounts`` table."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from sessionauth.models.account import Account
from sessionauth.services._shared.errors import ConflictError, ValidationError
from sessionauth.services._shared.ports import AccountStore, AccountView
from sessionauth.uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork


def _view(account: Account) -> AccountView:
    return AccountView(id=str(account.id), name=account.name, email=account.email)


class SQLAlchemyAccountStore(AccountStore):
    """
    :class:`AccountStore` over :class:`~sessionauth.repositories.AccountRepository`.

    Integer primary keys are exposed to the auth core as strings.
    """

    def find_by_email(self, email: str) -> AccountView | None:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            account = uow.accounts.get_by_email(email)
            return _view(account) if account is not None else None

    def create(self, *, name: str, email: str, password: str) -> AccountView:
        """
        Insert an account; the model hashes the password.

        :raises ConflictError: If the email is taken, including a lost race
            against a concurrent registration.
        :raises ValidationError: If the model rejects a field.
        """
        try:
            with SQLAlchemyUnitOfWork() as uow:
                if uow.accounts.exists_by_email(email):
                    raise ConflictError("Account", "email already in use")
                try:
                    account = uow.accounts.create(name=name, email=email, password=password)
                except ValueError as exc:
                    raise ValidationError(str(exc)) from exc
                view = _view(account)
        except IntegrityError as exc:
            raise ConflictError("Account", "email already in use") from exc
        return view

    def verify_credential(self, email: str, password: str) -> bool:
        with SQLAlchemyReadOnlyUnitOfWork() as uow:
            return uow.accounts.authenticate(email, password) is not None
