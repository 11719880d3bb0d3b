"""Tests for the I/O utilities module."""

import os
from unittest.mock import patch

import pytest

from youtrack_mcp.utils.io import get_enabled_tools, is_read_only_mode, should_include_tool


def test_is_read_only_mode_default():
    """Test that is_read_only_mode returns False by default."""
    with patch.dict(os.environ, clear=True):
        assert is_read_only_mode() is False


@pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "y", "on"])
def test_is_read_only_mode_truthy(value):
    with patch.dict(os.environ, {"READ_ONLY_MODE": value}):
        assert is_read_only_mode() is True


@pytest.mark.parametrize("value", ["false", "0", "no", "off", ""])
def test_is_read_only_mode_falsy(value):
    with patch.dict(os.environ, {"READ_ONLY_MODE": value}):
        assert is_read_only_mode() is False


def test_get_enabled_tools_unset():
    with patch.dict(os.environ, clear=True):
        assert get_enabled_tools() is None


def test_get_enabled_tools_parses_list():
    with patch.dict(os.environ, {"ENABLED_TOOLS": " issues, query ,,comments "}):
        assert get_enabled_tools() == ["issues", "query", "comments"]


def test_get_enabled_tools_blank_means_all():
    with patch.dict(os.environ, {"ENABLED_TOOLS": " , "}):
        assert get_enabled_tools() is None


def test_should_include_tool():
    assert should_include_tool("issues", None) is True
    assert should_include_tool("issues", []) is True
    assert should_include_tool("issues", ["issues", "query"]) is True
    assert should_include_tool("users", ["issues", "query"]) is False
