"""
YouTrack comment models.
"""

from typing import Any

from ..base import EMPTY_STRING, ApiModel
from .common import YouTrackUser, format_timestamp


class YouTrackComment(ApiModel):
    """
    Model representing a YouTrack issue comment.
    """

    id: str = EMPTY_STRING
    text: str = EMPTY_STRING
    author: YouTrackUser | None = None
    created: str = EMPTY_STRING
    updated: str = EMPTY_STRING

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "YouTrackComment":
        if not data or not isinstance(data, dict):
            return cls()
        author = data.get("author")
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            text=data.get("text") or EMPTY_STRING,
            author=YouTrackUser.from_api_response(author) if author else None,
            created=format_timestamp(data.get("created")),
            updated=format_timestamp(data.get("updated")),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "text": self.text,
            "author": self.author.full_name if self.author else "Unknown",
            "created": self.created,
        }
        if self.updated:
            result["updated"] = self.updated
        return result
