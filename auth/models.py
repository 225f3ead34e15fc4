"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). The store owns
lookup; auth/tokens.py owns hashing and signing.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Identity:
    """A registered user known to the identity store.

    Identities are created once at startup from a fixed seed and never
    mutated afterwards. hashed_password is a bcrypt hash; the plaintext is
    discarded as soon as the hash is computed.
    """

    id: int
    username: str
    hashed_password: str


@dataclass(frozen=True)
class TokenClaims:
    """Decoded view of a verified access token."""

    user_id: int
    username: str
    expires_at: datetime
    issued_at: datetime | None = None
