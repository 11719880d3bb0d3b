"""Module for YouTrack comment operations."""

import logging

from ..models.youtrack import YouTrackComment
from ..preprocessing import sanitize_comment
from .client import YouTrackClient
from .constants import COMMENT_FIELDS

logger = logging.getLogger("youtrack-mcp.youtrack")


class CommentsMixin(YouTrackClient):
    """Mixin for YouTrack comment operations."""

    def get_issue_comments(self, issue_id: str) -> list[YouTrackComment]:
        """
        Get comments for a specific issue.

        Args:
            issue_id: The issue id (e.g. 'PROJ-123')

        Returns:
            List of comments, oldest first
        """
        comments = self.get(f"issues/{issue_id}/comments", params={"fields": COMMENT_FIELDS})
        return YouTrackComment.from_api_list(comments)

    def add_comment(self, issue_id: str, text: str) -> YouTrackComment:
        """
        Add a comment to an issue.

        Args:
            issue_id: The issue id (e.g. 'PROJ-123')
            text: Comment text in markdown

        Returns:
            The created comment
        """
        payload = {"$type": "IssueComment", "text": sanitize_comment(text)}
        result = self.post(
            f"issues/{issue_id}/comments", json=payload, params={"fields": COMMENT_FIELDS}
        )
        logger.debug(f"Added comment to {issue_id}")
        return YouTrackComment.from_api_response(result or {})

    def update_comment(self, issue_id: str, comment_id: str, text: str) -> YouTrackComment:
        payload = {"$type": "IssueComment", "text": sanitize_comment(text)}
        result = self.post(
            f"issues/{issue_id}/comments/{comment_id}",
            json=payload,
            params={"fields": COMMENT_FIELDS},
        )
        return YouTrackComment.from_api_response(result or {})

    def delete_comment(self, issue_id: str, comment_id: str) -> None:
        self.delete(f"issues/{issue_id}/comments/{comment_id}")
