from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from youtrack_mcp.youtrack.config import YouTrackConfig
    from youtrack_mcp.youtrack.scope import ScopeConfig


@dataclass(frozen=True)
class MainAppContext:
    """Context holding the base config and server settings (no fetchers)."""

    youtrack_config: YouTrackConfig | None = None
    scope_config: ScopeConfig | None = None
    read_only: bool = False
    enabled_tools: list[str] | None = None
