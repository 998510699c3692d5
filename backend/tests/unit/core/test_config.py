from __future__ import annotations

from datetime import timedelta

import pytest

from sessionauth.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    get_config,
    parse_duration,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("15m", timedelta(minutes=15)),
        ("7d", timedelta(days=7)),
        ("12h", timedelta(hours=12)),
        ("30s", timedelta(seconds=30)),
        ("900", timedelta(seconds=900)),
        (" 2 H ", timedelta(hours=2)),
        (60, timedelta(seconds=60)),
        (timedelta(minutes=1), timedelta(minutes=1)),
    ],
)
def test_parse_duration_accepts_common_forms(raw, expected):
    assert parse_duration(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "15x", "-5m", "0", "1.5h"])
def test_parse_duration_rejects_garbage_and_non_positive(raw):
    with pytest.raises(ValueError):
        parse_duration(raw)


def test_env_bool(monkeypatch):
    monkeypatch.setenv("SA_FLAG", "Yes")
    assert env_bool("SA_FLAG") is True
    monkeypatch.setenv("SA_FLAG", "off")
    assert env_bool("SA_FLAG", True) is False
    monkeypatch.delenv("SA_FLAG")
    assert env_bool("SA_FLAG", True) is True


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ("testing", TestingConfig),
        ("production", ProductionConfig),
        ("DEVELOPMENT", DevelopmentConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_selects_class_from_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)
    assert get_config() is expected


def test_testing_config_has_distinct_secrets():
    assert TestingConfig.ACCESS_TOKEN_SECRET != TestingConfig.SESSION_TOKEN_SECRET
    assert TestingConfig.SESSION_HASH_ROUNDS == 4
