from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time

from sessionauth.core.config import TestingConfig
from sessionauth.services._shared.errors import ConfigurationError
from sessionauth.services.auth.dto import AuthTokenConfig

ACCESS = TestingConfig.ACCESS_TOKEN_SECRET
SESSION = TestingConfig.SESSION_TOKEN_SECRET


@freeze_time("2026-03-01 12:00:00")
def test_issue_access_sets_claims_and_default_lifetime(issuer):
    issued = issuer.issue_access("42")

    claims = jwt.decode(issued.token, ACCESS, algorithms=["HS256"])
    assert claims["sub"] == "42"
    assert claims["type"] == "access"
    assert claims["jti"]
    assert issued.expires_at == datetime(2026, 3, 1, 12, 15, tzinfo=UTC)
    assert claims["exp"] == issued.expires_at.timestamp()


@freeze_time("2026-03-01 12:00:00")
def test_issue_session_uses_session_secret_and_seven_days(issuer):
    issued = issuer.issue_session("42")

    claims = jwt.decode(issued.token, SESSION, algorithms=["HS256"])
    assert claims["type"] == "session"
    assert issued.expires_at == datetime(2026, 3, 8, 12, 0, tzinfo=UTC)
    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(issued.token, ACCESS, algorithms=["HS256"])


def test_two_credentials_issued_in_the_same_second_differ(issuer):
    with freeze_time("2026-03-01 12:00:00"):
        first = issuer.issue_session("1")
        second = issuer.issue_session("1")
    assert first.token != second.token


def test_config_rejects_missing_secret():
    with pytest.raises(ConfigurationError):
        AuthTokenConfig(access_secret="", session_secret=SESSION)


def test_config_rejects_shared_secret():
    with pytest.raises(ConfigurationError):
        AuthTokenConfig(access_secret=ACCESS, session_secret=ACCESS)


def test_config_rejects_short_secret():
    with pytest.raises(ConfigurationError):
        AuthTokenConfig(access_secret="short", session_secret=SESSION)


def test_config_from_mapping_parses_durations():
    cfg = AuthTokenConfig.from_mapping(
        {
            "ACCESS_TOKEN_SECRET": ACCESS,
            "SESSION_TOKEN_SECRET": SESSION,
            "ACCESS_TOKEN_EXPIRES": "5m",
            "SESSION_TOKEN_EXPIRES": "1d",
            "SESSION_HASH_ROUNDS": "6",
        }
    )
    assert cfg.access_expires == timedelta(minutes=5)
    assert cfg.session_expires == timedelta(days=1)
    assert cfg.hash_rounds == 6


def test_config_from_mapping_wraps_bad_duration():
    with pytest.raises(ConfigurationError):
        AuthTokenConfig.from_mapping(
            {
                "ACCESS_TOKEN_SECRET": ACCESS,
                "SESSION_TOKEN_SECRET": SESSION,
                "ACCESS_TOKEN_EXPIRES": "soon",
            }
        )


def test_expiry_keeps_sub_second_precision(issuer):
    with freeze_time("2026-03-01 12:00:00.250000"):
        issued = issuer.issue_access("42")
        claims = jwt.decode(issued.token, ACCESS, algorithms=["HS256"])

    assert issued.expires_at == datetime(2026, 3, 1, 12, 15, 0, 250000, tzinfo=UTC)
    assert claims["exp"] == issued.expires_at.timestamp()


def test_consecutive_access_credentials_expire_in_issue_order(issuer):
    with freeze_time("2026-03-01 12:00:00.100000") as frozen:
        first = issuer.issue_access("42")
        frozen.tick(timedelta(milliseconds=1))
        second = issuer.issue_access("42")
    assert second.expires_at > first.expires_at
