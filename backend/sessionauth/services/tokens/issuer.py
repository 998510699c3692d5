"""
Signing of access and session credentials.

Both credential types are HS256 JWTs carrying ``sub`` (account id), ``type``,
``jti``, ``iat`` and ``exp``. They are signed with two different secrets, so a
credential of one type never verifies as the other.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt

from sessionauth.services.auth.dto import AuthTokenConfig, IssuedToken
from sessionauth.services.tokens.claims import (
    ACCESS_TOKEN_TYPE,
    SESSION_TOKEN_TYPE,
    TYPE_CLAIM,
)

log = logging.getLogger(__name__)


class TokenIssuer:
    """
    Create and sign access and session credentials.

    :param cfg: Secrets and lifetimes. Validation happens when the config is
        built, so a misconfigured issuer cannot exist.
    """

    def __init__(self, cfg: AuthTokenConfig) -> None:
        self.cfg = cfg

    def issue_access(self, account_id: str) -> IssuedToken:
        """Sign a short-lived access credential for ``account_id``."""
        return self._issue(
            account_id,
            token_type=ACCESS_TOKEN_TYPE,
            secret=self.cfg.access_secret,
            ttl=self.cfg.access_expires,
        )

    def issue_session(self, account_id: str) -> IssuedToken:
        """Sign a long-lived session credential for ``account_id``."""
        return self._issue(
            account_id,
            token_type=SESSION_TOKEN_TYPE,
            secret=self.cfg.session_secret,
            ttl=self.cfg.session_expires,
        )

    def _issue(
        self, account_id: str, *, token_type: str, secret: str, ttl: timedelta
    ) -> IssuedToken:
        # Fractional NumericDates keep consecutive issues strictly ordered.
        now = datetime.now(UTC)
        expires_at = now + ttl
        payload = {
            "sub": str(account_id),
            TYPE_CLAIM: token_type,
            "jti": uuid4().hex,
            "iat": now.timestamp(),
            "exp": expires_at.timestamp(),
        }
        token = jwt.encode(payload, secret, algorithm=self.cfg.algorithm)
        log.debug("token.issued type=%s account_id=%s", token_type, account_id)
        return IssuedToken(token=token, expires_at=expires_at)
