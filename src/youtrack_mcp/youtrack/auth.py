"""Bearer authentication for YouTrack permanent tokens."""

import logging
from collections.abc import Callable

from requests import PreparedRequest
from requests.auth import AuthBase

logger = logging.getLogger("youtrack-mcp.youtrack")


class BearerTokenAuth(AuthBase):
    """Attach ``Authorization: Bearer <token>`` to every request.

    The token is read through ``token_provider`` on each request, so whatever
    owns the credential can rotate it without rebuilding the session.
    """

    def __init__(self, token_provider: Callable[[], str]) -> None:
        self.token_provider = token_provider

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        token = self.token_provider()
        if not token:
            logger.warning("No YouTrack token available; sending unauthenticated request")
            return request
        request.headers["Authorization"] = f"Bearer {token}"
        return request


def static_token(token: str) -> Callable[[], str]:
    """Token provider for a fixed permanent token."""
    return lambda: token
