"""
auth/dependencies.py -- FastAPI Depends() helpers for token-gated routes.

The token is read from the Authorization header. Both the raw form
(`Authorization: <token>`) and the conventional `Bearer <token>` form are
accepted.

Per request: no token -> MissingToken; token present -> verify signature
and expiry -> TokenClaims forwarded to the handler, or TokenInvalid. Nothing
is remembered between requests.

The signing secret comes from request.app.state.settings, which the app
lifespan populates; this module never reads the environment.

Layer rule: may import from fastapi (Request) because this module is part
of the FastAPI dependency injection system. No imports from api/.
"""

from __future__ import annotations

import logging

from fastapi import Request

from auth.errors import AuthError
from auth.models import TokenClaims
from auth.tokens import decode_access_token

logger = logging.getLogger("authgate.auth")

_BEARER_PREFIX = "bearer "


def extract_token(authorization: str | None) -> str | None:
    """Return the token carried by an Authorization header value, or None."""
    if not authorization:
        return None
    value = authorization.strip()
    if value.lower().startswith(_BEARER_PREFIX):
        value = value[len(_BEARER_PREFIX) :].strip()
    return value or None


def require_identity(request: Request) -> TokenClaims:
    """Require a valid access token. Raises MissingToken or TokenInvalid.

    Use as a FastAPI dependency:
        @router.get("/protected/data")
        def route(claims: TokenClaims = Depends(require_identity)): ...
    """
    token = extract_token(request.headers.get("Authorization"))
    secret_key: str = request.app.state.settings.jwt_secret
    try:
        return decode_access_token(token, secret_key)
    except AuthError as exc:
        logger.debug("Rejected %s %s (%s): %s", request.method, request.url.path, exc.code, exc.reason)
        raise
