"""FastAPI dependency injection for bearer token verification."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from jwkgate.core.errors import AuthError, KeyResolutionError, UnknownKeyError
from jwkgate.core.logging import get_logger
from jwkgate.verifier.auth0_client import Auth0JWTClient, Auth0Token

logger = get_logger(__name__)


def get_verifier(request: Request) -> Auth0JWTClient:
    """Return the verifier built by the application lifespan."""
    return request.app.state.verifier


def _to_http_error(exc: AuthError) -> HTTPException:
    # Provider side failures are not the caller's fault.
    if isinstance(exc, KeyResolutionError) and not isinstance(exc, UnknownKeyError):
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=exc.to_response().model_dump(),
        )
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=exc.to_response().model_dump(),
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_token(
    request: Request,
    verifier: Annotated[Auth0JWTClient, Depends(get_verifier)],
) -> Auth0Token:
    """Verify the request's bearer token or reject it."""
    try:
        return await verifier.verify_and_decode(request)
    except AuthError as exc:
        logger.info("token_rejected", code=exc.code, path=request.url.path)
        raise _to_http_error(exc) from exc
