from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time

from sessionauth.core.config import TestingConfig
from sessionauth.services._shared.errors import AuthError, AuthErrorKind


def _kind(excinfo) -> AuthErrorKind:
    return excinfo.value.kind


@pytest.mark.parametrize("account_id", ["1", "42", "8f14e45fceea167a5a36dedd4bea2543"])
def test_issued_access_verifies_to_same_account(issuer, access_verifier, account_id):
    token = issuer.issue_access(account_id).token
    assert access_verifier.verify(token) == account_id
    assert access_verifier.verify_header(f"Bearer {token}") == account_id


@pytest.mark.parametrize("header", [None, "", "Token abc", "bearer abc", "Bearer ", "Bearer"])
def test_missing_or_malformed_header(access_verifier, header):
    with pytest.raises(AuthError) as excinfo:
        access_verifier.verify_header(header)
    assert _kind(excinfo) is AuthErrorKind.MISSING_CREDENTIAL


def test_session_credential_rejected_as_access(issuer, access_verifier):
    token = issuer.issue_session("7").token
    with pytest.raises(AuthError) as excinfo:
        access_verifier.verify(token)
    assert _kind(excinfo) is AuthErrorKind.INVALID


def test_access_credential_rejected_as_session(issuer, session_verifier):
    token = issuer.issue_access("7").token
    with pytest.raises(AuthError) as excinfo:
        session_verifier.verify(token)
    assert _kind(excinfo) is AuthErrorKind.INVALID


def test_expired_access_credential(issuer, access_verifier):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        token = issuer.issue_access("7").token
        frozen.tick(timedelta(minutes=16))
        with pytest.raises(AuthError) as excinfo:
            access_verifier.verify(token)
    assert _kind(excinfo) is AuthErrorKind.EXPIRED


@pytest.mark.parametrize("token", ["", "not-a-jwt", "a.b.c"])
def test_garbage_is_invalid(access_verifier, token):
    with pytest.raises(AuthError) as excinfo:
        access_verifier.verify(token)
    assert _kind(excinfo) is AuthErrorKind.INVALID


def test_flipped_signature_byte_is_invalid(issuer, access_verifier):
    token = issuer.issue_access("7").token
    head, payload, signature = token.split(".")
    flipped = ("A" if signature[0] != "A" else "B") + signature[1:]
    with pytest.raises(AuthError) as excinfo:
        access_verifier.verify(".".join([head, payload, flipped]))
    assert _kind(excinfo) is AuthErrorKind.INVALID


def test_expired_and_forged_is_invalid_not_expired(access_verifier):
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "sub": "7",
            "type": "access",
            "jti": "x",
            "iat": now - timedelta(hours=2),
            "exp": now - timedelta(hours=1),
        },
        "some-other-secret-that-is-long-enough",
        algorithm="HS256",
    )
    with pytest.raises(AuthError) as excinfo:
        access_verifier.verify(token)
    assert _kind(excinfo) is AuthErrorKind.INVALID


def test_missing_required_claim_is_invalid(access_verifier):
    now = datetime.now(UTC)
    token = jwt.encode(
        {"sub": "7", "type": "access", "iat": now, "exp": now + timedelta(minutes=5)},
        TestingConfig.ACCESS_TOKEN_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(AuthError) as excinfo:
        access_verifier.verify(token)
    assert _kind(excinfo) is AuthErrorKind.INVALID


def test_empty_subject_is_internal(access_verifier):
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "sub": "",
            "type": "access",
            "jti": "x",
            "iat": now,
            "exp": now + timedelta(minutes=5),
        },
        TestingConfig.ACCESS_TOKEN_SECRET,
        algorithm="HS256",
    )
    with pytest.raises(AuthError) as excinfo:
        access_verifier.verify(token)
    assert _kind(excinfo) is AuthErrorKind.INTERNAL


def test_peek_account_ignores_expiry_but_not_signature(issuer, session_verifier):
    with freeze_time("2026-03-01 12:00:00") as frozen:
        token = issuer.issue_session("9").token
        frozen.tick(timedelta(days=8))
        assert session_verifier.peek_account(token) == "9"
    assert session_verifier.peek_account(issuer.issue_access("9").token) is None
    assert session_verifier.peek_account("garbage") is None
