"""Tests for the main MCP server implementation."""

import os
from unittest.mock import patch

import httpx
import pytest

from youtrack_mcp.servers.main import main_lifespan, main_mcp


@pytest.mark.anyio
async def test_run_server_stdio():
    """Test that main_mcp.run_async is called with stdio transport."""
    with patch.object(main_mcp, "run_async") as mock_run_async:
        mock_run_async.return_value = None
        await main_mcp.run_async(transport="stdio")
        mock_run_async.assert_called_once_with(transport="stdio")


@pytest.mark.anyio
async def test_run_server_invalid_transport():
    """Test that run_async raises ValueError for an invalid transport."""
    with pytest.raises(ValueError) as excinfo:
        await main_mcp.run_async(transport="invalid")  # type: ignore

    assert "invalid" in str(excinfo.value)


@pytest.mark.anyio
async def test_health_check_endpoint():
    """Test the health check endpoint returns 200 and correct JSON response."""
    app = main_mcp.http_app(transport="sse")
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


@pytest.mark.anyio
async def test_streamable_http_app_health_check_endpoint():
    app = main_mcp.http_app()
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/healthz")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestMainLifespan:
    @pytest.mark.anyio
    async def test_loads_configuration(self, clean_environment):
        env = {
            "YOUTRACK_URL": "https://test.youtrack.cloud/",
            "YOUTRACK_TOKEN": "perm:test",
            "PROJECT_ID": "TEAM",
            "YOUTRACK_STRICT_SCOPE": "true",
            "READ_ONLY_MODE": "true",
            "ENABLED_TOOLS": "issues,query",
        }
        with patch.dict(os.environ, env):
            async with main_lifespan(main_mcp) as state:
                app_context = state["app_lifespan_context"]

        assert app_context.youtrack_config.url == "https://test.youtrack.cloud"
        assert app_context.scope_config.enforced_project_id == "TEAM"
        assert app_context.scope_config.enforce_strict is True
        assert app_context.read_only is True
        assert app_context.enabled_tools == ["issues", "query"]

    @pytest.mark.anyio
    async def test_missing_configuration_is_not_fatal(self, clean_environment):
        async with main_lifespan(main_mcp) as state:
            app_context = state["app_lifespan_context"]

        assert app_context.youtrack_config is None
        assert app_context.scope_config is None
        assert app_context.read_only is False
        assert app_context.enabled_tools is None
