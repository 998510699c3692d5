"""
Stateless verification of presented credentials.

Failures collapse into the coarse :class:`AuthErrorKind` categories so callers
cannot tell a bad signature from a malformed token.
"""

from __future__ import annotations

import logging
from typing import Any

import jwt

from sessionauth.services._shared.errors import AuthError, AuthErrorKind
from sessionauth.services.auth.dto import AuthTokenConfig
from sessionauth.services.tokens.claims import (
    ACCESS_TOKEN_TYPE,
    REQUIRED_CLAIMS,
    SESSION_TOKEN_TYPE,
    TYPE_CLAIM,
)

log = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class CredentialVerifier:
    """
    Check signature, type and freshness of one credential type.

    Pure and synchronous: no store access. Build one per signing domain with
    :meth:`for_access` or :meth:`for_session`.

    :param secret: Signing secret of the domain.
    :param token_type: Expected ``type`` claim.
    :param algorithm: Expected JWS algorithm.
    """

    def __init__(self, *, secret: str, token_type: str, algorithm: str = "HS256") -> None:
        self._secret = secret
        self.token_type = token_type
        self._algorithms = [algorithm]

    @classmethod
    def for_access(cls, cfg: AuthTokenConfig) -> CredentialVerifier:
        return cls(secret=cfg.access_secret, token_type=ACCESS_TOKEN_TYPE, algorithm=cfg.algorithm)

    @classmethod
    def for_session(cls, cfg: AuthTokenConfig) -> CredentialVerifier:
        return cls(
            secret=cfg.session_secret, token_type=SESSION_TOKEN_TYPE, algorithm=cfg.algorithm
        )

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    def verify_header(self, header: str | None) -> str:
        """
        Verify a raw ``Authorization`` header value.

        :param header: Header value, expected as ``Bearer <token>``.
        :returns: The authenticated account id.
        :raises AuthError: ``MISSING_CREDENTIAL`` when the header is absent or
            not a bearer value; otherwise see :meth:`verify`.
        """
        if not header or not header.startswith(BEARER_PREFIX):
            raise AuthError(AuthErrorKind.MISSING_CREDENTIAL)
        parts = header.split(" ")
        token = parts[1] if len(parts) > 1 else ""
        if not token:
            raise AuthError(AuthErrorKind.MISSING_CREDENTIAL)
        return self.verify(token)

    def verify(self, token: str) -> str:
        """
        Verify a credential and return the account id it carries.

        :raises AuthError: ``EXPIRED`` when the signature is valid but ``exp``
            has passed, ``INVALID`` for a bad signature, malformed token or
            wrong type, ``INTERNAL`` for anything else.
        """
        claims = self._decode(token, verify_exp=True)
        return self._account_id(claims)

    def peek_account(self, token: str) -> str | None:
        """
        Return the account id of a correctly signed credential, expired or not.

        :returns: Account id, or ``None`` if the credential does not verify.
        """
        try:
            return self._account_id(self._decode(token, verify_exp=False))
        except AuthError:
            return None

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _decode(self, token: str, *, verify_exp: bool) -> dict[str, Any]:
        try:
            claims: dict[str, Any] = jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                options={"require": REQUIRED_CLAIMS, "verify_exp": verify_exp},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError(AuthErrorKind.EXPIRED) from None
        except jwt.InvalidTokenError:
            raise AuthError(AuthErrorKind.INVALID) from None
        except Exception:
            log.exception("token.verify.unexpected type=%s", self.token_type)
            raise AuthError(AuthErrorKind.INTERNAL) from None

        if claims.get(TYPE_CLAIM) != self.token_type:
            raise AuthError(AuthErrorKind.INVALID)
        return claims

    def _account_id(self, claims: dict[str, Any]) -> str:
        subject = claims.get("sub")
        if not isinstance(subject, str) or not subject:
            log.error("token.verify.bad_subject type=%s", self.token_type)
            raise AuthError(AuthErrorKind.INTERNAL)
        return subject
