"""Shared API helpers for authentication and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request

from sessionauth.core.security import get_auth
from sessionauth.services._shared.base import ServiceContext
from sessionauth.services.auth.service import AuthService

F = TypeVar("F", bound=Callable[..., Any])


def get_auth_service() -> AuthService:
    """Return an :class:`AuthService` bound to the current request context."""

    service = get_auth().service()
    service.ctx = ServiceContext(
        actor_id=g.get("account_id"),
        request_id=g.get("request_id"),
    )
    return service


def current_account_id() -> str:
    """Return the account id stored by :func:`require_auth`."""

    account_id = g.get("account_id")
    if account_id is None:
        raise RuntimeError("current_account_id() used outside a @require_auth handler.")
    return str(account_id)


def require_auth(func: F) -> F:
    """Require a valid access credential in the ``Authorization`` header.

    On success the account id is stored as ``g.account_id``. Failures raise
    :class:`~sessionauth.services._shared.errors.AuthError`, rendered by the
    error handlers.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        header = request.headers.get("Authorization")
        g.account_id = get_auth().access_verifier.verify_header(header)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
