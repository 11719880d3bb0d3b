"""Unit tests for the YouTrack FastMCP tools."""

import json
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastmcp import Client, FastMCP
from fastmcp.client import FastMCPTransport
from fastmcp.exceptions import ToolError

from youtrack_mcp.models.youtrack import CommandResult
from youtrack_mcp.servers.context import MainAppContext
from youtrack_mcp.servers.main import YouTrackMCP
from youtrack_mcp.servers.youtrack import youtrack_mcp
from youtrack_mcp.youtrack import ScopeConfig, YouTrackConfig, YouTrackFetcher

ALL_TOOLS = {
    "projects",
    "issues",
    "query",
    "comments",
    "agile_boards",
    "knowledge_base",
    "analytics",
    "time_tracking",
    "users",
    "commands",
}


@pytest.fixture
def mock_youtrack_fetcher():
    """Create a mock YouTrackFetcher."""
    mock_fetcher = MagicMock(spec=YouTrackFetcher)
    mock_fetcher.config = YouTrackConfig(url="https://test.youtrack.cloud", token="perm:test")

    issue = MagicMock()
    issue.to_simplified_dict.return_value = {"id": "TEAM-1", "summary": "Fix login"}
    mock_fetcher.get_issue.return_value = issue
    mock_fetcher.search_issues.return_value = [issue]
    return mock_fetcher


def _build_server(app_context: MainAppContext) -> FastMCP:
    @asynccontextmanager
    async def test_lifespan(app: FastMCP) -> AsyncGenerator[dict, None]:
        yield {"app_lifespan_context": app_context}

    test_mcp = YouTrackMCP("TestYouTrack", instructions="Test YouTrack MCP Server", lifespan=test_lifespan)
    test_mcp.mount(youtrack_mcp)
    return test_mcp


def _context(**overrides) -> MainAppContext:
    defaults = {
        "youtrack_config": YouTrackConfig(url="https://test.youtrack.cloud", token="perm:test"),
        "scope_config": ScopeConfig(enforced_project_id="TEAM"),
        "read_only": False,
        "enabled_tools": None,
    }
    return MainAppContext(**{**defaults, **overrides})


@asynccontextmanager
async def _client(app_context: MainAppContext, fetcher):
    with patch(
        "youtrack_mcp.servers.dependencies.get_youtrack_fetcher",
        AsyncMock(return_value=fetcher),
    ):
        async with Client(transport=FastMCPTransport(_build_server(app_context))) as client:
            yield client


def _envelope(response) -> dict:
    return json.loads(response.content[0].text)


@pytest.mark.anyio
async def test_lists_all_tools():
    async with Client(transport=FastMCPTransport(_build_server(_context()))) as client:
        tools = await client.list_tools()

    assert {tool.name for tool in tools} == ALL_TOOLS


@pytest.mark.anyio
async def test_enabled_tools_filter():
    app_context = _context(enabled_tools=["issues", "query"])
    async with Client(transport=FastMCPTransport(_build_server(app_context))) as client:
        tools = await client.list_tools()

    assert {tool.name for tool in tools} == {"issues", "query"}


@pytest.mark.anyio
async def test_disabled_tool_is_unknown(mock_youtrack_fetcher):
    async with _client(_context(enabled_tools=["issues"]), mock_youtrack_fetcher) as client:
        with pytest.raises(ToolError, match="Unknown tool 'users'"):
            await client.call_tool("users", {"action": "current"})


@pytest.mark.anyio
async def test_unknown_tool_suggestion(mock_youtrack_fetcher):
    async with _client(_context(), mock_youtrack_fetcher) as client:
        with pytest.raises(ToolError, match="Did you mean 'issues'"):
            await client.call_tool("create_issue", {"summary": "X"})


@pytest.mark.anyio
async def test_get_issue(mock_youtrack_fetcher):
    async with _client(_context(), mock_youtrack_fetcher) as client:
        response = await client.call_tool("issues", {"action": "get", "issue_id": "TEAM-1"})

    envelope = _envelope(response)
    assert envelope["success"] is True
    assert envelope["data"]["summary"] == "Fix login"
    mock_youtrack_fetcher.get_issue.assert_called_once_with("TEAM-1")


@pytest.mark.anyio
async def test_query_is_scoped(mock_youtrack_fetcher):
    async with _client(_context(), mock_youtrack_fetcher) as client:
        response = await client.call_tool(
            "query", {"query": "project: OTHER State: Open", "limit": 5}
        )

    envelope = _envelope(response)
    assert envelope["metadata"]["query"] == "project: TEAM State: Open"
    mock_youtrack_fetcher.search_issues.assert_called_once_with(
        "project: TEAM State: Open", fields=None, limit=5, skip=0
    )


@pytest.mark.anyio
async def test_missing_scope_envelope(mock_youtrack_fetcher):
    app_context = _context(scope_config=ScopeConfig())
    async with _client(app_context, mock_youtrack_fetcher) as client:
        response = await client.call_tool("issues", {"action": "create", "summary": "X"})

    envelope = _envelope(response)
    assert envelope["success"] is False
    assert envelope["error"]["type"] == "missing_scope"
    mock_youtrack_fetcher.create_issue.assert_not_called()


@pytest.mark.anyio
async def test_read_only_refuses_writes(mock_youtrack_fetcher):
    async with _client(_context(read_only=True), mock_youtrack_fetcher) as client:
        response = await client.call_tool(
            "comments", {"action": "add", "issue_id": "TEAM-1", "text": "hi"}
        )

    envelope = _envelope(response)
    assert envelope["error"]["type"] == "read_only"
    mock_youtrack_fetcher.add_comment.assert_not_called()


@pytest.mark.anyio
async def test_apply_command(mock_youtrack_fetcher):
    mock_youtrack_fetcher.apply_command_to_issues.return_value = [
        CommandResult(command="State: Fixed", resource_id="TEAM-1", succeeded=True),
    ]
    async with _client(_context(), mock_youtrack_fetcher) as client:
        response = await client.call_tool(
            "commands",
            {"action": "apply", "query": "State: Fixed", "issue_ids": ["TEAM-1"], "silent": True},
        )

    envelope = _envelope(response)
    assert envelope["metadata"] == {"appliedCount": 1, "failedCount": 0}
    mock_youtrack_fetcher.apply_command_to_issues.assert_called_once_with(
        "State: Fixed", ["TEAM-1"], comment=None, silent=True
    )


@pytest.mark.anyio
async def test_invalid_action_rejected_by_schema(mock_youtrack_fetcher):
    async with _client(_context(), mock_youtrack_fetcher) as client:
        with pytest.raises(ToolError):
            await client.call_tool("issues", {"action": "explode", "issue_id": "TEAM-1"})

    assert not mock_youtrack_fetcher.method_calls


@pytest.mark.anyio
async def test_unconfigured_server():
    async with Client(
        transport=FastMCPTransport(_build_server(_context(youtrack_config=None)))
    ) as client:
        response = await client.call_tool("users", {"action": "current"})

    envelope = _envelope(response)
    assert envelope["success"] is False
    assert envelope["error"]["type"] == "generic_failure"
    assert "YOUTRACK_URL" in envelope["error"]["message"]
    assert envelope["context"] == {"tool": "users", "action": "current"}
