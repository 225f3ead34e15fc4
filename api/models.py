"""
API request and response models for AuthGate REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in auth/models.py, which
own the internal domain representation. Route handlers map between the two.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from auth.models import TokenClaims

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    """Request body for POST /auth/login.

    No whitespace stripping: usernames match exactly. No length caps either:
    any pair of strings goes through authenticate_user() and gets 200 or 401.
    """

    username: str
    password: str


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------


class LoginResponse(BaseModel):
    """Response for a successful POST /auth/login."""

    model_config = ConfigDict(frozen=True)

    token: str


class ProtectedDataResponse(BaseModel):
    """Response for GET /protected/data. Serialized with the camelCase alias."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str = "This is protected data"
    user_id: int = Field(alias="userId")

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "ProtectedDataResponse":
        return cls(user_id=claims.user_id)


class ErrorResponse(BaseModel):
    """Error envelope returned on 4xx/5xx responses: {"message": ...}."""

    model_config = ConfigDict(frozen=True)

    message: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
