"""
api/routes/protected.py -- Token-gated resource.

Routes:
  GET /protected/data -- requires Authorization: <token> (raw or Bearer)

Auth policy: require_identity resolves the token before the handler runs.
MissingToken (403) and TokenInvalid (500) propagate to the AuthError handler
in api/main.py; the handler body only runs for a valid token.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from api.models import ProtectedDataResponse
from auth.dependencies import require_identity
from auth.models import TokenClaims

router = APIRouter()


@router.get("/protected/data", response_model=ProtectedDataResponse)
async def get_protected_data(claims: TokenClaims = Depends(require_identity)) -> ProtectedDataResponse:
    """Return the protected payload along with the caller's identity id."""
    return ProtectedDataResponse.from_claims(claims)
