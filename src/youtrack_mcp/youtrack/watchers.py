"""Module for YouTrack issue watcher and star operations."""

import logging
from typing import Any

from ..models.youtrack import YouTrackUser
from .client import YouTrackClient
from .constants import WATCHER_FIELDS

logger = logging.getLogger("youtrack-mcp.youtrack")


class WatchersMixin(YouTrackClient):
    """Mixin for YouTrack watcher operations."""

    def get_issue_watchers(self, issue_id: str) -> dict[str, Any]:
        """
        Get the watchers of an issue and whether the current user starred it.

        Returns:
            ``{"issueId", "hasStar", "watchers": [...], "watcherCount"}``
        """
        result = self.get(f"issues/{issue_id}/watchers", params={"fields": WATCHER_FIELDS}) or {}
        watchers = [
            YouTrackUser.from_api_response(w.get("user") or {}).to_simplified_dict()
            for w in result.get("issueWatchers") or []
        ]
        return {
            "issueId": issue_id,
            "hasStar": bool(result.get("hasStar", False)),
            "watchers": watchers,
            "watcherCount": len(watchers),
        }

    def add_watcher(self, issue_id: str, user_id: str) -> dict[str, Any]:
        self.post(
            f"issues/{issue_id}/watchers",
            json={"issueWatchers": [{"user": {"id": user_id}}]},
        )
        return {"issueId": issue_id, "userId": user_id, "watching": True}

    def remove_watcher(self, issue_id: str, user_id: str) -> dict[str, Any]:
        self.delete(f"issues/{issue_id}/watchers/{user_id}")
        return {"issueId": issue_id, "userId": user_id, "watching": False}

    def toggle_star(self, issue_id: str) -> dict[str, Any]:
        """
        Flip the current user's star on an issue.

        Returns:
            The issue id and the new star state
        """
        current = self.get(f"issues/{issue_id}/watchers", params={"fields": "hasStar"}) or {}
        has_star = not bool(current.get("hasStar", False))
        self.post(f"issues/{issue_id}/watchers", json={"hasStar": has_star})
        logger.debug(f"Star on {issue_id} set to {has_star}")
        return {"issueId": issue_id, "hasStar": has_star}
