"""Authentication-related Marshmallow schemas."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for account registration."""

    name = fields.String(required=True, validate=validate.Length(min=1, max=100))
    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=8, max=128))


class LoginSchema(Schema):
    """Input payload for authenticating an account.

    Password length is not checked here, so a short wrong password gets the
    same answer as any other wrong password.
    """

    email = fields.Email(required=True, validate=validate.Length(max=254))
    password = fields.String(required=True, validate=validate.Length(min=1, max=128))


class SessionTokenSchema(Schema):
    """Input payload carrying a session credential (renew and logout)."""

    session_token = fields.String(required=True, validate=validate.Length(min=1))


class AccountSchema(Schema):
    """Public account projection."""

    id = fields.String(required=True)
    name = fields.String(required=True)
    email = fields.Email(required=True)


class AuthSessionSchema(Schema):
    """Response payload of register and login."""

    account = fields.Nested(AccountSchema, required=True)
    access_token = fields.String(required=True)
    access_token_expires_at = fields.DateTime(required=True)
    session_token = fields.String(required=True)
    session_token_expires_at = fields.DateTime(required=True)
    token_type = fields.String(dump_default="bearer")


class TokenResponseSchema(Schema):
    """Response payload containing a renewed access token."""

    access_token = fields.String(required=True)
    token_type = fields.String(dump_default="bearer")
    expires_at = fields.DateTime(required=True)


class WhoAmISchema(Schema):
    """Response payload exposing the authenticated account id."""

    account_id = fields.String(required=True)
