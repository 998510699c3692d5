"""
sessionauth.services._shared.ports
==================================

*Ports* (hexagonal interfaces) the auth core depends on.

Modules
-------
- :mod:`account_store`:
    :class:`~.AccountStore`: the external account store (lookup, creation,
    password check) and the :class:`~.AccountView` projection.

- :mod:`session_record_store`:
    :class:`~.SessionRecordStore`: durable storage for hashed session
    credentials, and the :class:`~.SessionRecord` read-model.

Design Notes
------------
Concrete adapters (SQLAlchemy, Redis) live under ``sessionauth.infra``.
The in-memory implementations here back the unit tests.
"""

from __future__ import annotations

from .account_store import AccountStore, AccountView, InMemoryAccountStore
from .session_record_store import (
    InMemorySessionRecordStore,
    SessionRecord,
    SessionRecordStore,
)

__all__ = [
    "AccountStore",
    "AccountView",
    "InMemoryAccountStore",
    "SessionRecord",
    "SessionRecordStore",
    "InMemorySessionRecordStore",
]
