from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol
from uuid import uuid4

from werkzeug.security import check_password_hash, generate_password_hash

from sessionauth.services._shared.errors import ConflictError


@dataclass(frozen=True, slots=True)
class AccountView:
    """
    Public-safe projection of an account.

    :ivar id: Opaque account identifier.
    :ivar name: Display name.
    :ivar email: Normalized login email.
    """

    id: str
    name: str
    email: str


class AccountStore(Protocol):
    """Port to the external account store (primary identity + password)."""

    def find_by_email(self, email: str) -> AccountView | None:
        """Return the account registered under ``email`` (case-insensitive)."""

    def create(self, *, name: str, email: str, password: str) -> AccountView:
        """
        Create an account and hash its password.

        :raises ConflictError: If the email is already registered.
        """

    def verify_credential(self, email: str, password: str) -> bool:
        """
        Check a password for ``email``.

        Implementations must do the same hashing work whether or not the
        email exists.
        """


class InMemoryAccountStore(AccountStore):
    """Dictionary-backed account store used in unit tests."""

    def __init__(self) -> None:
        self._by_email: dict[str, tuple[AccountView, str]] = {}
        self._lock = threading.Lock()
        self._dummy_hash = generate_password_hash("in-memory-dummy")

    @staticmethod
    def _norm(email: str) -> str:
        return email.strip().lower()

    def find_by_email(self, email: str) -> AccountView | None:
        entry = self._by_email.get(self._norm(email))
        return entry[0] if entry else None

    def create(self, *, name: str, email: str, password: str) -> AccountView:
        key = self._norm(email)
        with self._lock:
            if key in self._by_email:
                raise ConflictError("Account", "email already in use")
            view = AccountView(id=uuid4().hex, name=name.strip(), email=key)
            self._by_email[key] = (view, generate_password_hash(password))
            return view

    def verify_credential(self, email: str, password: str) -> bool:
        entry = self._by_email.get(self._norm(email))
        if entry is None:
            check_password_hash(self._dummy_hash, password)
            return False
        return bool(check_password_hash(entry[1], password))
