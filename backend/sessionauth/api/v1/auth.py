"""Authentication endpoints using the service layer."""

from __future__ import annotations

from typing import Any

from flask import Blueprint, request

from sessionauth.api.deps import (
    current_account_id,
    get_auth_service,
    json_response,
    require_auth,
    timing,
)
from sessionauth.schemas import (
    AuthSessionSchema,
    LoginSchema,
    RegisterSchema,
    SessionTokenSchema,
    TokenResponseSchema,
    WhoAmISchema,
)
from sessionauth.services.auth.dto import (
    AuthSessionOut,
    LoginIn,
    LogoutIn,
    RegisterIn,
    RenewIn,
)

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
session_token_schema = SessionTokenSchema()
auth_session_schema = AuthSessionSchema()
token_schema = TokenResponseSchema()
whoami_schema = WhoAmISchema()


def _session_body(out: AuthSessionOut) -> dict[str, Any]:
    return {
        "data": auth_session_schema.dump(
            {
                "account": out.account,
                "access_token": out.access_token.token,
                "access_token_expires_at": out.access_token.expires_at,
                "session_token": out.session_token.token,
                "session_token_expires_at": out.session_token.expires_at,
            }
        )
    }


@bp.post("/register")
@timing
def register():
    """Create an account and return it with a fresh credential pair."""

    payload = register_schema.load(request.get_json(silent=True) or {})
    out = get_auth_service().register(RegisterIn(**payload))
    return json_response(_session_body(out), status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and open a session."""

    payload = login_schema.load(request.get_json(silent=True) or {})
    out = get_auth_service().login(LoginIn(**payload))
    return json_response(_session_body(out))


@bp.post("/refresh")
@timing
def refresh():
    """Exchange a session credential for a new access credential."""

    payload = session_token_schema.load(request.get_json(silent=True) or {})
    out = get_auth_service().renew(RenewIn(session_token=payload["session_token"]))
    body = {
        "data": token_schema.dump(
            {
                "access_token": out.access_token.token,
                "expires_at": out.access_token.expires_at,
            }
        )
    }
    return json_response(body)


@bp.post("/logout")
@timing
def logout():
    """Revoke a session credential. Succeeds whether or not it was stored."""

    payload = session_token_schema.load(request.get_json(silent=True) or {})
    get_auth_service().logout(LogoutIn(session_token=payload["session_token"]))
    return json_response({"data": {"ok": True}})


@bp.get("/me")
@require_auth
@timing
def me():
    """Return the account id carried by the access credential."""

    return json_response({"data": whoami_schema.dump({"account_id": current_account_id()})})
