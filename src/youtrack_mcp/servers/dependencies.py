"""Dependency providers for YouTrackFetcher and ToolRouter.

Provides get_youtrack_fetcher and get_tool_router for use in tool functions.
"""

from __future__ import annotations

import logging

from fastmcp import Context

from youtrack_mcp.servers.context import MainAppContext
from youtrack_mcp.servers.router import ToolRouter
from youtrack_mcp.youtrack import ScopeConfig, ScopeResolver, YouTrackFetcher

logger = logging.getLogger("youtrack-mcp.servers.dependencies")


def _get_app_context(ctx: Context) -> MainAppContext | None:
    lifespan_ctx_dict = ctx.request_context.lifespan_context  # type: ignore
    return (
        lifespan_ctx_dict.get("app_lifespan_context")
        if isinstance(lifespan_ctx_dict, dict)
        else None
    )


async def get_youtrack_fetcher(ctx: Context) -> YouTrackFetcher:
    """Returns a YouTrackFetcher built from the configuration loaded at startup.

    Raises:
        ValueError: If YouTrack is not configured.
    """
    app_lifespan_ctx = _get_app_context(ctx)
    if app_lifespan_ctx and app_lifespan_ctx.youtrack_config:
        logger.debug(
            f"get_youtrack_fetcher: Using global configuration for {app_lifespan_ctx.youtrack_config.url}"
        )
        return YouTrackFetcher(config=app_lifespan_ctx.youtrack_config)
    logger.error("YouTrack configuration could not be resolved.")
    raise ValueError(
        "YouTrack client (fetcher) not available. Set YOUTRACK_URL and YOUTRACK_TOKEN."
    )


async def get_tool_router(ctx: Context) -> ToolRouter:
    """Returns a ToolRouter for the current call.

    A new router is built per call; only the immutable startup configuration
    is shared between calls.
    """
    fetcher = await get_youtrack_fetcher(ctx)
    app_lifespan_ctx = _get_app_context(ctx)
    scope_config = (
        app_lifespan_ctx.scope_config
        if app_lifespan_ctx and app_lifespan_ctx.scope_config
        else ScopeConfig.from_config(fetcher.config)
    )
    read_only = bool(app_lifespan_ctx and app_lifespan_ctx.read_only)
    return ToolRouter(fetcher, ScopeResolver(scope_config), read_only=read_only)
