"""MCP server components for YouTrack."""

from .main import main_mcp

__all__ = ["main_mcp"]
