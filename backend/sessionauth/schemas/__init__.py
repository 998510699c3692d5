"""Marshmallow schemas for request validation and response shaping."""

from .auth import (
    AccountSchema,
    AuthSessionSchema,
    LoginSchema,
    RegisterSchema,
    SessionTokenSchema,
    TokenResponseSchema,
    WhoAmISchema,
)

__all__ = [
    "AccountSchema",
    "AuthSessionSchema",
    "LoginSchema",
    "RegisterSchema",
    "SessionTokenSchema",
    "TokenResponseSchema",
    "WhoAmISchema",
]
