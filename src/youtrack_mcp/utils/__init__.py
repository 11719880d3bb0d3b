"""
Utility functions for the YouTrack MCP integration.
This package provides various utility functions used throughout the codebase.
"""

from .date import is_ymd, parse_date, today_millis, ymd_to_millis
from .env import is_env_extended_truthy, is_env_ssl_verify, is_env_truthy
from .io import get_enabled_tools, is_read_only_mode, should_include_tool
from .suggestions import fuzzy_match, suggest_tool_names

__all__ = [
    "fuzzy_match",
    "get_enabled_tools",
    "is_env_extended_truthy",
    "is_env_ssl_verify",
    "is_env_truthy",
    "is_read_only_mode",
    "is_ymd",
    "parse_date",
    "should_include_tool",
    "suggest_tool_names",
    "today_millis",
    "ymd_to_millis",
]
