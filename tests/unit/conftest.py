"""
Shared fixtures for YouTrack MCP unit tests.

Backend calls are never made: fetchers get a mocked ``requests.Session`` and
their ``get``/``post``/``delete`` helpers are replaced with MagicMocks, so
tests assert on the REST path and payload each operation produces.
"""

import os
from unittest.mock import MagicMock, patch

import pytest

from youtrack_mcp.youtrack import ScopeConfig, ScopeResolver, YouTrackConfig, YouTrackFetcher


@pytest.fixture
def youtrack_config_factory():
    """
    Factory for creating YouTrackConfig instances with customizable options.

    Returns:
        Callable: Function that creates YouTrackConfig instances
    """

    def _create_config(**overrides):
        defaults = {
            "url": "https://test.youtrack.cloud",
            "token": "perm:test-token",
        }
        return YouTrackConfig(**{**defaults, **overrides})

    return _create_config


@pytest.fixture
def youtrack_config(youtrack_config_factory):
    return youtrack_config_factory()


@pytest.fixture
def fetcher(youtrack_config):
    """A YouTrackFetcher whose HTTP helpers are mocks."""
    instance = YouTrackFetcher(config=youtrack_config, session=MagicMock())
    instance.get = MagicMock(return_value=None)
    instance.post = MagicMock(return_value=None)
    instance.delete = MagicMock(return_value=None)
    return instance


@pytest.fixture
def scope_resolver():
    """Resolver without an enforced project (multi-project mode)."""
    return ScopeResolver(ScopeConfig())


@pytest.fixture
def team_scope_resolver():
    """Resolver pinned to project TEAM, override mode."""
    return ScopeResolver(ScopeConfig(enforced_project_id="TEAM"))


@pytest.fixture
def clean_environment():
    """Run a test with none of the server's environment variables set."""
    keys = {
        "YOUTRACK_URL",
        "YOUTRACK_TOKEN",
        "PROJECT_ID",
        "YOUTRACK_STRICT_SCOPE",
        "YOUTRACK_SSL_VERIFY",
        "YOUTRACK_TIMEOUT",
        "YOUTRACK_CLEANUP_DRAFTS",
        "READ_ONLY_MODE",
        "ENABLED_TOOLS",
    }
    env = {key: value for key, value in os.environ.items() if key not in keys}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def anyio_backend():
    """Run ``@pytest.mark.anyio`` tests on asyncio, the loop fastmcp uses."""
    return "asyncio"
