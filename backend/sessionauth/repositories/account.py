"""Account repository for persistence and credential checks."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select
from werkzeug.security import check_password_hash, generate_password_hash

from sessionauth.models.account import Account
from sessionauth.repositories.base import BaseRepository

# Computed once at import so the first unknown-email login is not measurably
# slower than later ones.
_DUMMY_HASH: str = generate_password_hash("sessionauth-timing-dummy")


class AccountRepository(BaseRepository[Account]):
    """Persistence-only repository for :class:`Account`.

    It never issues credentials; it only looks accounts up and checks
    passwords.
    """

    model = Account

    def _sortable_fields(self):
        return {
            "id": Account.id,
            "email": Account.email,
            "created_at": Account.created_at,
        }

    def _filterable_fields(self):
        return {"email": Account.email}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: Account instance or ``None`` when not found.
        :rtype: Account | None
        """
        stmt = select(Account).where(Account.email == email.lower().strip())
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when an account with the provided email exists."""
        stmt = select(Account.id).where(Account.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())

    def create(self, *, name: str, email: str, password: str) -> Account:
        """Stage and flush a new account; the model setter hashes the password."""
        account = Account(name=name, email=email, password=password)
        return self.add(account)

    # ---------------------------- Password ops ----------------------------

    def authenticate(self, email: str, password: str) -> Account | None:
        """Authenticate an account by email and password.

        The password hash is always checked, against a dummy hash when the
        email is unknown, so response time does not reveal which emails exist.

        :returns: Authenticated account or ``None`` when credentials fail.
        :rtype: Account | None
        """
        account = self.get_by_email(email)
        if account is None:
            check_password_hash(_DUMMY_HASH, password)
            return None
        if not account.verify_password(password):
            return None
        return account
