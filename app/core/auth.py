"""
app/core/auth.py

Purpose: Bearer authentication for protected routes

- Parses the Authorization header
- Verifies the token through the TokenService
- BearerProtectedRoute rejects a request before its body is read
- Never touches the document store
"""

from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.routing import APIRoute

from app.core.exceptions import AuthenticationError
from app.core.logging import get_logger
from app.core.tokens import TokenService

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "
MISSING_TOKEN_MESSAGE = "Forbidden: No token provided or invalid token format"
INVALID_TOKEN_MESSAGE = "Forbidden: Invalid token"


def authenticate_header(header: Optional[str], token_service: TokenService) -> str:
    """
    Resolves an Authorization header value to an account id.

    Raises:
        AuthenticationError: header missing, wrong scheme, or token invalid
    """
    if not header or not header.startswith(BEARER_PREFIX):
        raise AuthenticationError(MISSING_TOKEN_MESSAGE)

    token = header[len(BEARER_PREFIX):].strip()
    account_id = token_service.verify(token)
    if account_id is None:
        raise AuthenticationError(INVALID_TOKEN_MESSAGE)

    return account_id


def authenticate_request(request: Request) -> str:
    try:
        return authenticate_header(
            request.headers.get("Authorization"),
            request.app.state.token_service,
        )
    except AuthenticationError as e:
        logger.warning(
            f"Rejected request: {e.message}",
            extra={"path": request.url.path, "method": request.method}
        )
        raise


class BearerProtectedRoute(APIRoute):
    """
    Route class for routers whose every endpoint needs a bearer token.
    The token is checked before FastAPI parses the body or resolves
    dependencies, so a rejected request gets 403 whatever its body holds.
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            request.state.account_id = authenticate_request(request)
            return await handler(request)

        return authenticated_handler


async def get_current_account_id(request: Request) -> str:
    """Account id of the authenticated caller."""
    account_id = getattr(request.state, "account_id", None)
    if account_id is None:
        account_id = authenticate_request(request)
    return account_id
