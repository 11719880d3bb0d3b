"""Main FastMCP server setup for YouTrack integration."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools import Tool as FastMCPTool
from mcp.types import Tool as MCPTool
from starlette.requests import Request
from starlette.responses import JSONResponse

from youtrack_mcp.utils.io import (
    get_enabled_tools,
    is_read_only_mode,
    should_include_tool,
)
from youtrack_mcp.utils.suggestions import describe_suggestions, suggest_tool_names
from youtrack_mcp.youtrack import ScopeConfig, YouTrackConfig

from .context import MainAppContext
from .youtrack import youtrack_mcp

logger = logging.getLogger("youtrack-mcp.servers.main")


async def health_check(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


@asynccontextmanager
async def main_lifespan(app: FastMCP[MainAppContext]) -> AsyncIterator[dict]:
    logger.info("Main YouTrack MCP server lifespan starting...")
    read_only = is_read_only_mode()
    enabled_tools = get_enabled_tools()

    loaded_config: YouTrackConfig | None = None
    scope_config: ScopeConfig | None = None
    try:
        loaded_config = YouTrackConfig.from_env()
        scope_config = ScopeConfig.from_config(loaded_config)
        logger.info(f"YouTrack configuration loaded for {loaded_config.url}")
    except ValueError as e:
        logger.error(f"Failed to load YouTrack configuration: {e}")

    if scope_config and scope_config.enforced_project_id:
        mode = "strict" if scope_config.enforce_strict else "override"
        logger.info(
            f"Single-project mode: {scope_config.enforced_project_id} ({mode})"
        )

    app_context = MainAppContext(
        youtrack_config=loaded_config,
        scope_config=scope_config,
        read_only=read_only,
        enabled_tools=enabled_tools,
    )
    logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
    logger.info(f"Enabled tools filter: {enabled_tools or 'All tools enabled'}")

    try:
        yield {"app_lifespan_context": app_context}
    except Exception as e:
        logger.error(f"Error during lifespan: {e}", exc_info=True)
        raise
    finally:
        logger.info("Main YouTrack MCP server lifespan shutdown complete.")


class YouTrackMCP(FastMCP[MainAppContext]):
    """Custom FastMCP server class for YouTrack integration with tool filtering."""

    def _app_context(self) -> MainAppContext | None:
        req_context = self._mcp_server.request_context
        if req_context is None or req_context.lifespan_context is None:
            return None
        lifespan_ctx_dict = req_context.lifespan_context
        return (
            lifespan_ctx_dict.get("app_lifespan_context")
            if isinstance(lifespan_ctx_dict, dict)
            else None
        )

    def _enabled_filter(self) -> list[str] | None:
        try:
            app_lifespan_state = self._app_context()
        except LookupError:
            return None
        return (
            getattr(app_lifespan_state, "enabled_tools", None)
            if app_lifespan_state
            else None
        )

    async def _mcp_list_tools(self) -> list[MCPTool]:
        enabled_tools_filter = self._enabled_filter()
        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        logger.debug(
            f"Aggregated {len(all_tools)} tools before filtering: {list(all_tools.keys())}"
        )

        filtered_tools: list[MCPTool] = []
        for registered_name, tool_obj in all_tools.items():
            if not should_include_tool(registered_name, enabled_tools_filter):
                logger.debug(f"Excluding tool '{registered_name}' (not enabled)")
                continue
            filtered_tools.append(tool_obj.to_mcp_tool(name=registered_name))

        logger.debug(f"Listing {len(filtered_tools)} enabled tools")
        return filtered_tools

    async def _mcp_call_tool(self, key: str, arguments: dict[str, Any]) -> Any:
        all_tools: dict[str, FastMCPTool] = await self.get_tools()
        enabled = [
            name
            for name in all_tools
            if should_include_tool(name, self._enabled_filter())
        ]
        if key not in enabled:
            message = f"Unknown tool '{key}'."
            suggestions = suggest_tool_names(key, enabled)
            if suggestions:
                message += f" {describe_suggestions(suggestions)}"
            logger.warning(message)
            raise ToolError(message)
        return await super()._mcp_call_tool(key, arguments)


main_mcp = YouTrackMCP(name="YouTrack MCP", lifespan=main_lifespan)
main_mcp.mount(youtrack_mcp)


@main_mcp.custom_route("/healthz", methods=["GET"], include_in_schema=False)
async def _health_check_route(request: Request) -> JSONResponse:
    return await health_check(request)


logger.info("Added /healthz endpoint for Kubernetes probes")
