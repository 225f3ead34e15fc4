"""
api/routes/auth.py -- Credential login endpoint.

Routes:
  POST /auth/login -- username/password login; returns {"token": "<jwt>"}

Security:
  authenticate_user() provides timing equalization -- use it, never inline
  get_by_username() + verify_password().
  Cache-Control: no-store on every login response, success or failure.
  Wrong username and wrong password produce the same 401 body.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.models import LoginRequest, LoginResponse
from auth.errors import InvalidCredentials
from auth.store import IdentityStore
from auth.tokens import authenticate_user, create_access_token
from core.config import Settings

logger = logging.getLogger("authgate.api")

router = APIRouter()


# Sync handler: bcrypt runs in the FastAPI threadpool, off the event loop.
@router.post("/auth/login", response_model=LoginResponse)
def login(request: Request, body: LoginRequest) -> JSONResponse:
    """Verify credentials and issue a signed access token.

    InvalidCredentials propagates to the AuthError handler in api/main.py,
    which renders 401 {"message": "Invalid credentials"}.
    """
    store: IdentityStore = request.app.state.identity_store
    settings: Settings = request.app.state.settings

    try:
        identity = authenticate_user(store, body.username, body.password)
    except InvalidCredentials as exc:
        logger.warning("Login failed for %r: %s", body.username, exc.reason)
        raise

    token = create_access_token(identity, settings.jwt_secret, expire_seconds=settings.token_expire_seconds)
    logger.info("Login succeeded for %r (id=%d)", identity.username, identity.id)

    resp = JSONResponse(status_code=200, content=LoginResponse(token=token).model_dump())
    resp.headers["Cache-Control"] = "no-store"
    return resp
