"""Module for YouTrack issue search operations."""

import logging

from ..models.youtrack import YouTrackIssue
from .client import YouTrackClient
from .constants import ISSUE_SEARCH_FIELDS

logger = logging.getLogger("youtrack-mcp.youtrack")

MAX_SEARCH_RESULTS = 1000


class SearchMixin(YouTrackClient):
    """Mixin for YouTrack search operations."""

    def search_issues(
        self,
        query: str,
        fields: str | None = None,
        limit: int = 50,
        skip: int = 0,
    ) -> list[YouTrackIssue]:
        """
        Search for issues using YouTrack query syntax.

        Scoping is the caller's responsibility; the query is sent as is.

        Args:
            query: YouTrack search expression
            fields: Comma-separated field projection, defaults to search fields
            limit: Maximum number of issues to return (capped at 1000)
            skip: Number of issues to skip

        Returns:
            Matching issues
        """
        params = {
            "query": query,
            "fields": fields or ISSUE_SEARCH_FIELDS,
            "$top": max(1, min(limit, MAX_SEARCH_RESULTS)),
            "$skip": max(0, skip),
        }
        issues = self.get("issues", params=params)
        return YouTrackIssue.from_api_list(issues)

    def count_issues(self, query: str) -> int:
        """
        Count issues matching a query.

        Returns:
            The count reported by YouTrack. ``-1`` means the backend has not
            finished counting yet.
        """
        response = self.post("issuesGetter/count", json={"query": query}, params={"fields": "count"})
        if not isinstance(response, dict):
            return 0
        return int(response.get("count") or 0)
