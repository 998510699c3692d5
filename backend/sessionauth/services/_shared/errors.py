"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask, HTTP, or
SQLAlchemy. They are stable contracts between the auth components, the
stores, and the API boundary.

The translation to HTTP responses (RFC 7807) is handled by
``sessionauth.core.errors``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to ``APIError`` instances.
    """


class ConfigurationError(RuntimeError):
    """Raised while the application is being built when settings are unusable."""


# --------------------------------------------------------------------------- #
# Authentication
# --------------------------------------------------------------------------- #


class AuthErrorKind(Enum):
    """Coarse, fixed categories of authentication failure."""

    MISSING_CREDENTIAL = "missing_credential"
    EXPIRED = "token_expired"
    INVALID = "invalid_token"
    INTERNAL = "authentication_failed"
    INVALID_CREDENTIALS = "invalid_credentials"


AUTH_ERROR_MESSAGES: dict[AuthErrorKind, str] = {
    AuthErrorKind.MISSING_CREDENTIAL: "Access denied. No token provided.",
    AuthErrorKind.EXPIRED: "Token expired.",
    AuthErrorKind.INVALID: "Invalid token.",
    AuthErrorKind.INTERNAL: "Authentication failed.",
    AuthErrorKind.INVALID_CREDENTIALS: "Invalid email or password.",
}


class AuthError(ServiceError):
    """
    Raised when a credential cannot be accepted.

    The message is fixed per :class:`AuthErrorKind` so callers never learn
    more than the category.

    :param kind: Failure category.
    :type kind: AuthErrorKind
    """

    def __init__(self, kind: AuthErrorKind) -> None:
        super().__init__(AUTH_ERROR_MESSAGES[kind])
        self.kind = kind

    @property
    def code(self) -> str:
        return self.kind.value

    def __repr__(self) -> str:
        return f"AuthError({self.kind.name})"


# --------------------------------------------------------------------------- #
# Specific domain-level errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """Raised when service input is malformed."""

    def __init__(self, message: str = "Invalid input", *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "Account").
    :type entity: str
    :param detail: Short human-readable explanation.
    :type detail: str
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class AuthorizationError(ServiceError):
    """Raised when the caller does not own the requested resource."""

    def __init__(self, message: str = "You can only access your own resources.") -> None:
        super().__init__(message)
