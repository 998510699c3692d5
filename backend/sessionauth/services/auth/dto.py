# sessionauth/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from sessionauth.services._shared.errors import ConfigurationError
from sessionauth.services._shared.ports import AccountView

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration.

    :param name: Display name.
    :type name: str
    :param email: Login email.
    :type email: str
    :param password: Raw password (hashed by the account store).
    :type password: str
    """

    name: str
    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: Account email.
    :type email: str
    :param password: Raw password (to be verified).
    :type password: str
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RenewIn:
    """
    Input DTO for access-credential renewal.

    :param session_token: Encoded session credential.
    :type session_token: str
    """

    session_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param session_token: Encoded session credential to revoke.
    :type session_token: str
    """

    session_token: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class IssuedToken:
    """
    A freshly signed credential.

    :param token: Encoded JWT.
    :type token: str
    :param expires_at: Value of the ``exp`` claim (UTC).
    :type expires_at: datetime
    """

    token: str
    expires_at: datetime


@dataclass(frozen=True, slots=True)
class AuthSessionOut:
    """
    Output of register/login: the account projection plus both credentials.

    :param account: Public-safe account projection (never the password hash).
    :param access_token: Short-lived access credential.
    :param session_token: Long-lived session credential.
    """

    account: AccountView
    access_token: IssuedToken
    session_token: IssuedToken


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    """
    Output of renewal.

    :param access_token: Newly issued access credential.
    """

    access_token: IssuedToken


# ------------------------------ Config DTO -------------------------------- #

MIN_SECRET_LENGTH = 32


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token emission and session hashing configuration.

    :param access_secret: Symmetric key for access credentials.
    :param session_secret: Symmetric key for session credentials.
    :param access_expires: Access credential lifetime.
    :param session_expires: Session credential lifetime.
    :param hash_rounds: bcrypt cost factor for stored session hashes.
    :param algorithm: JWS algorithm (HMAC family).
    :raises ConfigurationError: If a secret is missing, too short, or shared by both types.
    """

    access_secret: str
    session_secret: str
    access_expires: timedelta = timedelta(minutes=15)
    session_expires: timedelta = timedelta(days=7)
    hash_rounds: int = 10
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.access_secret or not self.session_secret:
            raise ConfigurationError(
                "ACCESS_TOKEN_SECRET and SESSION_TOKEN_SECRET must both be set."
            )
        if min(len(self.access_secret), len(self.session_secret)) < MIN_SECRET_LENGTH:
            raise ConfigurationError(
                f"Signing secrets must be at least {MIN_SECRET_LENGTH} characters long."
            )
        if self.access_secret == self.session_secret:
            raise ConfigurationError("Access and session signing secrets must differ.")
        if not 4 <= self.hash_rounds <= 31:
            raise ConfigurationError("SESSION_HASH_ROUNDS must be between 4 and 31.")
        if not self.algorithm.startswith("HS"):
            raise ConfigurationError("Only HMAC (HS*) signing algorithms are supported.")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """
        Build the config from a Flask-style settings mapping.

        :param config: Typically ``app.config``.
        :raises ConfigurationError: On missing or malformed values.
        """
        from sessionauth.core.config import parse_duration

        try:
            return cls(
                access_secret=config.get("ACCESS_TOKEN_SECRET") or "",
                session_secret=config.get("SESSION_TOKEN_SECRET") or "",
                access_expires=parse_duration(config.get("ACCESS_TOKEN_EXPIRES", "15m")),
                session_expires=parse_duration(config.get("SESSION_TOKEN_EXPIRES", "7d")),
                hash_rounds=int(config.get("SESSION_HASH_ROUNDS", 10)),
            )
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
