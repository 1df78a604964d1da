"""Identity endpoint for callers holding a verified token."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from jwkgate.api.deps import require_token
from jwkgate.verifier.auth0_client import Auth0Token

router = APIRouter(prefix="/auth")


class WhoAmIResponse(BaseModel):
    """Claims echoed back to the token holder."""

    sub: str | None = None
    email: str
    permissions: list[str]
    user_id_hash: str | None = None


@router.get("/whoami")
async def whoami(
    token: Annotated[Auth0Token, Depends(require_token)],
) -> WhoAmIResponse:
    """Return the caller's subject, email, permissions and hashed user id."""
    user_id = token.user_metadata.get("user_id")
    return WhoAmIResponse(
        sub=token.payload.get("sub"),
        email=token.user_metadata["email"],
        permissions=token.permissions,
        user_id_hash=token.user_id_hashed() if user_id else None,
    )
