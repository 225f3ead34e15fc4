"""
auth/store.py -- Identity lookup for the credential verifier.

Pattern: Repository. Route and dependency code depends on the IdentityStore
protocol (a lookup capability), never on a concrete store or a module-level
user list. InMemoryIdentityStore is the only implementation shipped; it is
read-only after construction, so no locking is needed when request threads
share it.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

from auth.models import Identity
from auth.tokens import hash_password

# Fixed seed identity, created at process start.
SEED_USER_ID = 1
SEED_USERNAME = "user1"
SEED_PASSWORD = "password123"  # noqa: S105 # nosec B105 -- demo seed credential


class IdentityStore(Protocol):
    """Lookup capability required by authenticate_user()."""

    def get_by_username(self, username: str) -> Identity | None: ...


class InMemoryIdentityStore:
    """Read-only identity store held in process memory.

    Usage:
        store = InMemoryIdentityStore.seeded()
        identity = store.get_by_username("user1")
    """

    def __init__(self, identities: Iterable[Identity] = ()) -> None:
        by_username: dict[str, Identity] = {}
        for identity in identities:
            if identity.username in by_username:
                raise ValueError(f"Duplicate username in identity store: {identity.username!r}")
            by_username[identity.username] = identity
        self._by_username = by_username

    @classmethod
    def seeded(cls) -> InMemoryIdentityStore:
        """Build the default store holding the single seed identity."""
        return cls(
            [
                Identity(
                    id=SEED_USER_ID,
                    username=SEED_USERNAME,
                    hashed_password=hash_password(SEED_PASSWORD),
                )
            ]
        )

    def get_by_username(self, username: str) -> Identity | None:
        """Exact, case-sensitive match. Returns None when absent."""
        return self._by_username.get(username)

    def __len__(self) -> int:
        return len(self._by_username)
