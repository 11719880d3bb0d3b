"""YouTrack API integration module.

This module provides access to YouTrack issues, projects, boards, time
tracking and the knowledge base through the Model Context Protocol.
"""

from .agile import AgileMixin
from .articles import ArticlesMixin
from .client import YouTrackClient
from .config import YouTrackConfig
from .issues import IssuesMixin
from .reports import ReportsMixin
from .scope import ScopeConfig, ScopeResolver
from .users import UsersMixin
from .watchers import WatchersMixin


class YouTrackFetcher(
    IssuesMixin,
    WatchersMixin,
    AgileMixin,
    ArticlesMixin,
    ReportsMixin,
    UsersMixin,
):
    """Main entry point for YouTrack operations.

    Combines every domain mixin over one shared ``YouTrackClient`` session.
    """

    pass


__all__ = [
    "ScopeConfig",
    "ScopeResolver",
    "YouTrackClient",
    "YouTrackConfig",
    "YouTrackFetcher",
]
