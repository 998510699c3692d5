"""Wiring of the authentication components onto the Flask app."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import Flask, current_app

from sessionauth.services._shared.errors import ConfigurationError
from sessionauth.services._shared.ports import AccountStore, SessionRecordStore
from sessionauth.services.auth.dto import AuthTokenConfig
from sessionauth.services.auth.service import AuthService
from sessionauth.services.sessions.store import SessionStore
from sessionauth.services.tokens.issuer import TokenIssuer
from sessionauth.services.tokens.verifier import CredentialVerifier

log = logging.getLogger(__name__)

EXTENSION_KEY = "auth"
SESSION_STORE_BACKENDS = ("sql", "redis")


@dataclass(frozen=True, slots=True)
class AuthComponents:
    """Process-wide, stateless auth collaborators built once per app."""

    config: AuthTokenConfig
    issuer: TokenIssuer
    access_verifier: CredentialVerifier
    session_verifier: CredentialVerifier
    sessions: SessionStore
    accounts: AccountStore

    def service(self) -> AuthService:
        return AuthService(
            accounts=self.accounts,
            sessions=self.sessions,
            issuer=self.issuer,
            session_verifier=self.session_verifier,
        )


def build_session_record_store(app: Flask) -> SessionRecordStore:
    """
    Select the durable store named by ``SESSION_STORE_BACKEND``.

    :raises ConfigurationError: On an unknown backend, or ``redis`` without
        an initialized client.
    """
    backend = str(app.config.get("SESSION_STORE_BACKEND", "sql")).strip().lower()
    if backend not in SESSION_STORE_BACKENDS:
        raise ConfigurationError(f"Unknown SESSION_STORE_BACKEND: {backend!r}")

    if backend == "redis":
        client = app.extensions.get("redis_client")
        if client is None:
            raise ConfigurationError("SESSION_STORE_BACKEND=redis requires REDIS_URL.")
        from sessionauth.infra.redis import RedisSessionRecordStore

        return RedisSessionRecordStore(client)

    from sessionauth.infra.sqlalchemy import SQLAlchemySessionRecordStore

    return SQLAlchemySessionRecordStore()


def init_app(app: Flask) -> AuthComponents:
    """
    Build the auth components from ``app.config`` and register them.

    Runs while the application is being built, so a missing or shared secret
    stops startup instead of failing the first request.

    :raises ConfigurationError: On unusable settings.
    """
    from sessionauth.infra.sqlalchemy import SQLAlchemyAccountStore

    cfg = AuthTokenConfig.from_mapping(app.config)
    components = AuthComponents(
        config=cfg,
        issuer=TokenIssuer(cfg),
        access_verifier=CredentialVerifier.for_access(cfg),
        session_verifier=CredentialVerifier.for_session(cfg),
        sessions=SessionStore(build_session_record_store(app), rounds=cfg.hash_rounds),
        accounts=SQLAlchemyAccountStore(),
    )
    app.extensions[EXTENSION_KEY] = components
    log.info(
        "auth.configured backend=%s access_ttl=%s session_ttl=%s",
        app.config.get("SESSION_STORE_BACKEND", "sql"),
        cfg.access_expires,
        cfg.session_expires,
    )
    return components


def get_auth() -> AuthComponents:
    """Return the components registered on the current app."""
    components = current_app.extensions.get(EXTENSION_KEY)
    if components is None:
        raise RuntimeError("Auth components are not initialized. Call security.init_app().")
    return components
