"""Base client module for YouTrack API interactions."""

import logging
from collections.abc import Callable
from typing import Any

import requests
from requests.exceptions import HTTPError

from ..exceptions import (
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    YouTrackAPIError,
    YouTrackAuthenticationError,
)
from .auth import BearerTokenAuth, static_token
from .config import YouTrackConfig

logger = logging.getLogger("youtrack-mcp.youtrack")


class YouTrackClient:
    """Base client for YouTrack API interactions.

    Wraps a ``requests.Session`` rooted at ``<url>/api`` and normalizes every
    failure into the package's exception types, with the HTTP status embedded
    in the message.
    """

    def __init__(
        self,
        config: YouTrackConfig | None = None,
        token_provider: Callable[[], str] | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize the YouTrack client with a given configuration.

        Args:
            config: YouTrack configuration object. If None, will be loaded from
                environment variables.
            token_provider: Accessor for the bearer credential. Defaults to the
                configured permanent token.
            session: Pre-built session, mainly for tests.
        """
        if config is None:
            self.config = YouTrackConfig.from_env()
        else:
            self.config = config

        self.session = session or requests.Session()
        self.session.auth = BearerTokenAuth(
            token_provider or static_token(self.config.token)
        )
        self.session.verify = self.config.ssl_verify
        self.session.headers.update(
            {"Accept": "application/json", "Content-Type": "application/json"}
        )

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self._request("POST", path, params=params, json=json)

    def delete(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self._request("DELETE", path, params=params)

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Any:
        url = f"{self.config.api_url}/{path.lstrip('/')}"
        logger.debug(f"YouTrack API call: {method} {path} params={params}")

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                timeout=self.config.timeout,
            )
            response.raise_for_status()
        except HTTPError as http_err:
            raise self._normalize_http_error(http_err, method, path) from http_err
        except (requests.ConnectionError, requests.Timeout) as net_err:
            logger.error(f"Network error during {method} {path}: {net_err}")
            raise NetworkError(
                f"Cannot reach YouTrack at {self.config.url}: {net_err}"
            ) from net_err

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def _normalize_http_error(
        self, http_err: HTTPError, method: str, path: str
    ) -> Exception:
        response = http_err.response
        status = response.status_code if response is not None else None
        reason = response.reason if response is not None else ""
        detail = _error_detail(response)
        message = f"{status} {reason}: {detail}" if detail else f"{status} {reason}"

        if status == 401:
            error_msg = (
                "Authentication failed for YouTrack API (401). "
                "Token may be expired or invalid. Please verify credentials."
            )
            logger.error(error_msg)
            return YouTrackAuthenticationError(error_msg)

        logger.error(f"HTTP error during {method} {path}: {message}")
        if status == 403:
            return PermissionDeniedError(message, status_code=status)
        if status == 404:
            return NotFoundError(message, status_code=status)
        return YouTrackAPIError(message, status_code=status)


def _error_detail(response: requests.Response | None) -> str:
    """Pull the human readable part out of a YouTrack error body."""
    if response is None:
        return ""
    try:
        body = response.json()
    except ValueError:
        return (response.text or "").strip()[:500]
    if isinstance(body, dict):
        return str(body.get("error_description") or body.get("error") or "")
    return ""
