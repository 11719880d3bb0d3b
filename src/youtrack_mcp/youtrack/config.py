"""Configuration module for YouTrack API interactions."""

import os
from dataclasses import dataclass

from ..utils.env import is_env_enabled, is_env_extended_truthy, is_env_ssl_verify

DEFAULT_TIMEOUT = 30.0


@dataclass
class YouTrackConfig:
    """YouTrack API configuration.

    A configured ``project_id`` turns on single-project mode: every
    project-scoped call is pinned to it regardless of caller input.
    """

    url: str  # Base URL, without the /api suffix
    token: str  # Permanent token used as bearer credential
    project_id: str | None = None  # Enforced project scope
    enforce_strict_scope: bool = False  # Reject instead of substitute on mismatch
    ssl_verify: bool = True
    timeout: float = DEFAULT_TIMEOUT
    cleanup_orphaned_drafts: bool = True  # Delete the draft when submission fails

    def __post_init__(self) -> None:
        self.url = normalize_base_url(self.url)

    @property
    def api_url(self) -> str:
        return f"{self.url}/api"

    @classmethod
    def from_env(cls) -> "YouTrackConfig":
        """Create configuration from environment variables.

        Returns:
            YouTrackConfig with values from environment variables

        Raises:
            ValueError: If required environment variables are missing or invalid
        """
        url = os.getenv("YOUTRACK_URL")
        if not url:
            raise ValueError("Missing required YOUTRACK_URL environment variable")

        token = os.getenv("YOUTRACK_TOKEN")
        if not token:
            raise ValueError("Missing required YOUTRACK_TOKEN environment variable")

        timeout_env = os.getenv("YOUTRACK_TIMEOUT", str(DEFAULT_TIMEOUT))
        try:
            timeout = float(timeout_env)
        except ValueError as e:
            raise ValueError(
                f"YOUTRACK_TIMEOUT must be a number of seconds, got '{timeout_env}'"
            ) from e

        project_id = (os.getenv("PROJECT_ID") or "").strip() or None

        return cls(
            url=url,
            token=token,
            project_id=project_id,
            enforce_strict_scope=is_env_extended_truthy("YOUTRACK_STRICT_SCOPE"),
            ssl_verify=is_env_ssl_verify("YOUTRACK_SSL_VERIFY"),
            timeout=timeout,
            cleanup_orphaned_drafts=is_env_enabled("YOUTRACK_CLEANUP_DRAFTS"),
        )


def normalize_base_url(url: str) -> str:
    """Strip trailing slashes and a trailing ``/api`` segment."""
    base = (url or "").strip().rstrip("/")
    if base.endswith("/api"):
        base = base[: -len("/api")]
    return base
