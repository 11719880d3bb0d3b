"""I/O utility functions for YouTrack MCP."""

import os

from .env import is_env_extended_truthy


def is_read_only_mode() -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode refuses every action that creates, updates or deletes
    backend data while allowing all read operations.

    Returns:
        True if read-only mode is enabled, False otherwise
    """
    return is_env_extended_truthy("READ_ONLY_MODE", "false")


def get_enabled_tools() -> list[str] | None:
    """Read the ENABLED_TOOLS filter.

    Returns:
        List of tool names, or None when every tool is enabled.
    """
    value = os.getenv("ENABLED_TOOLS", "")
    tools = [name.strip() for name in value.split(",") if name.strip()]
    return tools or None


def should_include_tool(tool_name: str, enabled_tools: list[str] | None) -> bool:
    """Check whether a tool passes the ENABLED_TOOLS filter."""
    if not enabled_tools:
        return True
    return tool_name in enabled_tools
