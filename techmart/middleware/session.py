"""Cart session cookie: scopes one cart to one browser."""
import re
import secrets
from collections.abc import Callable
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from techmart import config
from techmart.logging import get_logger, sanitize_id_for_logging

logger = get_logger(__name__)

_TOKEN_PATTERN = re.compile(r"^[A-Za-z0-9_-]{16,64}$")


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


class CartSessionMiddleware(BaseHTTPMiddleware):
    """
    Reads the cart session token from its cookie, issuing a new one when it
    is missing or malformed. The token is exposed as request.state.cart_session.
    """

    async def dispatch(self, request: Request, call_next: Callable[..., Any]) -> Response:
        token = request.cookies.get(config.CART_SESSION_COOKIE, "")
        issued = not _TOKEN_PATTERN.match(token)
        if issued:
            token = new_session_token()
            logger.debug(f"Issued cart session {sanitize_id_for_logging(token)}")

        request.state.cart_session = token
        response: Response = await call_next(request)

        if issued:
            response.set_cookie(
                config.CART_SESSION_COOKIE,
                token,
                max_age=config.CART_SESSION_MAX_AGE,
                httponly=True,
                samesite="lax",
            )
        return response
