"""
tests/test_config.py -- Settings validation and environment mapping.

Each test builds Settings(_env_file=None) directly so a developer's local
.env file cannot leak into the assertions.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.config import Settings

GOOD_SECRET = "x" * 32


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("JWT_SECRET", "DEBUG", "PORT", "TOKEN_EXPIRE_SECONDS", "HOST", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)


def test_missing_secret_fails_in_production():
    with pytest.raises(ValidationError, match="JWT_SECRET is required"):
        Settings(_env_file=None)


def test_debug_generates_secret():
    settings = Settings(_env_file=None, debug=True)
    assert len(settings.jwt_secret) >= 32


def test_debug_secrets_differ_between_instances():
    assert Settings(_env_file=None, debug=True).jwt_secret != Settings(_env_file=None, debug=True).jwt_secret


def test_short_secret_rejected():
    with pytest.raises(ValidationError, match="at least 32"):
        Settings(_env_file=None, jwt_secret="short")


def test_env_vars_are_read(monkeypatch):
    monkeypatch.setenv("JWT_SECRET", GOOD_SECRET)
    monkeypatch.setenv("PORT", "8080")
    settings = Settings(_env_file=None)
    assert settings.jwt_secret == GOOD_SECRET
    assert settings.port == 8080


def test_defaults():
    settings = Settings(_env_file=None, jwt_secret=GOOD_SECRET)
    assert settings.port == 3000
    assert settings.token_expire_seconds == 3600
    assert settings.debug is False


@pytest.mark.parametrize("port", [0, 70000])
def test_port_out_of_range(port):
    with pytest.raises(ValidationError, match="PORT"):
        Settings(_env_file=None, jwt_secret=GOOD_SECRET, port=port)


def test_non_positive_ttl_rejected():
    with pytest.raises(ValidationError, match="TOKEN_EXPIRE_SECONDS"):
        Settings(_env_file=None, jwt_secret=GOOD_SECRET, token_expire_seconds=0)


def test_unknown_log_level_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, jwt_secret=GOOD_SECRET, log_level="bogus")


def test_log_level_case_insensitive(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    assert Settings(_env_file=None, jwt_secret=GOOD_SECRET).log_level == "DEBUG"
