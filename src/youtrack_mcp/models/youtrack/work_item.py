"""
YouTrack work item (time tracking) models.
"""

from typing import Any

from ...utils.date import parse_date
from ..base import EMPTY_STRING, ApiModel
from .common import YouTrackUser


class WorkItem(ApiModel):
    """
    Model representing time logged against an issue.
    """

    id: str = EMPTY_STRING
    issue_id: str | None = None
    author: YouTrackUser | None = None
    date: str = EMPTY_STRING
    minutes: int = 0
    presentation: str = EMPTY_STRING
    text: str | None = None
    work_type: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "WorkItem":
        if not data or not isinstance(data, dict):
            return cls()
        duration = data.get("duration") or {}
        author = data.get("author")
        issue = data.get("issue") or {}
        work_type = data.get("type") or {}
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            issue_id=issue.get("idReadable") or kwargs.get("issue_id"),
            author=YouTrackUser.from_api_response(author) if author else None,
            date=parse_date(data.get("date")),
            minutes=int(duration.get("minutes") or 0),
            presentation=duration.get("presentation") or EMPTY_STRING,
            text=data.get("text"),
            work_type=work_type.get("name"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "minutes": self.minutes,
            "duration": self.presentation or f"{self.minutes}m",
        }
        if self.issue_id:
            result["issueId"] = self.issue_id
        if self.author:
            result["author"] = self.author.login or self.author.full_name
        if self.text:
            result["description"] = self.text
        if self.work_type:
            result["workType"] = self.work_type
        return result
