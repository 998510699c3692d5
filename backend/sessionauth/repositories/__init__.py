"""Repository package exposing persistence-layer access for the auth models."""

from __future__ import annotations

from sessionauth.repositories.account import AccountRepository
from sessionauth.repositories.base import BaseRepository
from sessionauth.repositories.session_credential import SessionCredentialRepository

__all__ = [
    "BaseRepository",
    "AccountRepository",
    "SessionCredentialRepository",
]
