"""
auth/errors.py -- Authentication failure kinds.

Every failure on the login and protected paths is one of the three
subclasses below. Each class carries the status code and client-facing
message it maps to, so the single exception handler in api/main.py can
render all of them without a lookup table.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations


class AuthError(Exception):
    """Base class for authentication failures surfaced at the request boundary."""

    code: str = "auth_error"
    message: str = "authentication error"
    status_code: int = 400

    def __init__(self, reason: str | None = None) -> None:
        # reason is for logs only; the client always sees `message`.
        self.reason = reason or self.message
        super().__init__(self.reason)


class InvalidCredentials(AuthError):
    """Unknown username or wrong password."""

    code = "invalid_credentials"
    message = "Invalid credentials"
    status_code = 401


class MissingToken(AuthError):
    """No token was presented on a protected call."""

    code = "no_token"
    message = "no token"
    status_code = 403


class TokenInvalid(AuthError):
    """Bad signature, expired, or malformed token."""

    code = "token_invalid"
    message = "failed to authenticate"
    status_code = 500
