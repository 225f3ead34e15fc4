"""
auth/tokens.py -- Password hashing, credential verification, and JWT issue/verify.

Security design decisions:
  JWT: python-jose with HS256. Tokens carry the identity id, username, iat
       and exp claims. The signing secret is always passed in by the caller
       (the app threads it from Settings via app.state); nothing here reads
       the environment, so the core is testable without process setup.

  Passwords: bcrypt directly. The _DUMMY_HASH constant enables timing
       equalization in authenticate_user() so response time does not reveal
       whether a username exists.

  Failures: authenticate_user() raises InvalidCredentials and
       decode_access_token() raises MissingToken / TokenInvalid. The api/
       exception handler turns those into status codes.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import TYPE_CHECKING

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from auth.errors import InvalidCredentials, MissingToken, TokenInvalid
from auth.models import Identity, TokenClaims

if TYPE_CHECKING:
    from auth.store import IdentityStore

ALGORITHM = "HS256"
DEFAULT_EXPIRE_SECONDS = 3600

# ---------------------------------------------------------------------------
# Password hashing (bcrypt -- direct usage, no passlib wrapper)
# ---------------------------------------------------------------------------


def hash_password(plain: str) -> str:
    """Return a bcrypt hash of the given plaintext password.

    bcrypt only accepts up to 72 bytes of password input.
    """
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Return True if the plaintext password matches the bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed hash ("Invalid salt") or a password over 72 bytes.
        return False


# Timing equalization dummy hash. Computed once at module load so the first
# login attempt is not measurably slower than subsequent ones.
_DUMMY_HASH: str = hash_password("authgate_timing_dummy")


# ---------------------------------------------------------------------------
# Credential verification
# ---------------------------------------------------------------------------


def authenticate_user(store: IdentityStore, username: str, password: str) -> Identity:
    """Verify a username/password pair against the store.

    Always runs bcrypt exactly once, whether or not the username exists:
    - Unknown username: bcrypt runs against _DUMMY_HASH
    - Wrong password: bcrypt runs against the real hash

    Raises InvalidCredentials on any failure. No lockout, no side effects.
    """
    identity = store.get_by_username(username)
    if identity is None:
        verify_password(password, _DUMMY_HASH)
        raise InvalidCredentials("unknown username")
    if not verify_password(password, identity.hashed_password):
        raise InvalidCredentials("password mismatch")
    return identity


# ---------------------------------------------------------------------------
# JWT encode / decode
# ---------------------------------------------------------------------------


def create_access_token(
    identity: Identity,
    secret_key: str,
    expire_seconds: int = DEFAULT_EXPIRE_SECONDS,
    now: datetime | None = None,
) -> str:
    """Encode a signed JWT binding the identity to an expiry.

    Args:
        identity:       A verified identity (from authenticate_user()).
        secret_key:     HS256 signing secret.
        expire_seconds: Lifetime in seconds; one hour by default.
        now:            Issue time override. Tests pass a past time to mint
                        tokens that are already expired.
    """
    if not secret_key:
        raise ValueError("secret_key must not be empty")
    issued = now or datetime.now(timezone.utc)
    expire = issued + timedelta(seconds=expire_seconds)
    payload = {
        "id": identity.id,
        "username": identity.username,
        "iat": int(issued.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str | None, secret_key: str, now: datetime | None = None) -> TokenClaims:
    """Verify signature and expiry and return the embedded identity.

    A token is expired from the second its exp is reached (now >= exp).
    python-jose alone still accepts it during that second, so the check is
    repeated here. now overrides the clock for that check only.

    Raises:
        MissingToken: token is None or empty.
        TokenInvalid: bad signature, expired, malformed, or no usable id claim.
    """
    if not token:
        raise MissingToken()
    if not secret_key:
        raise ValueError("secret_key must not be empty")
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except ExpiredSignatureError as exc:
        raise TokenInvalid("token expired") from exc
    except JWTError as exc:
        raise TokenInvalid(f"token rejected: {exc}") from exc

    user_id = payload.get("id")
    # bool is an int subclass; a literal true/false id is not an identity.
    if not isinstance(user_id, int) or isinstance(user_id, bool):
        raise TokenInvalid("missing or non-integer id claim")
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        raise TokenInvalid("missing exp claim")
    current = (now or datetime.now(timezone.utc)).timestamp()
    if current >= exp:
        raise TokenInvalid("token expired")

    iat = payload.get("iat")
    return TokenClaims(
        user_id=user_id,
        username=str(payload.get("username", "")),
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        issued_at=datetime.fromtimestamp(iat, tz=timezone.utc) if isinstance(iat, (int, float)) else None,
    )
