"""
tests/conftest.py -- Shared test fixtures for AuthGate.

This module provides:
  - TEST_SECRET / test_settings: a fixed signing secret threaded into the app
  - identity_store: seed identity plus one extra identity
  - api_client: TestClient whose lifespan injects the above into app.state

Design: the real lifespan reads the environment; tests replace it so the
secret and the store are explicit, and so no test depends on JWT_SECRET
being set in the process environment.

DEBUG must be set before api.main is imported: the CORS middleware reads
get_settings() at import time, and outside debug mode a missing JWT_SECRET
is a hard failure.
"""

from __future__ import annotations

import os
from collections.abc import Generator
from contextlib import asynccontextmanager

# CRITICAL: Set DEBUG before any api/core import so get_settings() can
# auto-generate JWT_SECRET instead of raising.
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from api.main import app
from auth.models import Identity
from auth.store import SEED_PASSWORD, SEED_USER_ID, SEED_USERNAME, InMemoryIdentityStore
from auth.tokens import hash_password
from core.config import Settings

TEST_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
OTHER_SECRET = "other-secret-0123456789abcdef0123456789abcdef"

EXTRA_USER_ID = 2
EXTRA_USERNAME = "alice"
EXTRA_PASSWORD = "wonderland-42"


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return Settings(_env_file=None, jwt_secret=TEST_SECRET, token_expire_seconds=3600)


@pytest.fixture(scope="session")
def identity_store() -> InMemoryIdentityStore:
    """Seed identity plus one extra, built once per session (bcrypt is slow)."""
    return InMemoryIdentityStore(
        [
            Identity(id=SEED_USER_ID, username=SEED_USERNAME, hashed_password=hash_password(SEED_PASSWORD)),
            Identity(id=EXTRA_USER_ID, username=EXTRA_USERNAME, hashed_password=hash_password(EXTRA_PASSWORD)),
        ]
    )


def _patch_lifespan(settings: Settings, store: InMemoryIdentityStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.settings = settings
        app.state.identity_store = store
        yield

    return test_lifespan


@pytest.fixture(scope="module")
def api_client(test_settings, identity_store) -> Generator[TestClient, None, None]:
    """Yield a TestClient running the real app against the test secret and store."""
    app.router.lifespan_context = _patch_lifespan(test_settings, identity_store)
    with TestClient(app, raise_server_exceptions=True) as client:
        yield client
