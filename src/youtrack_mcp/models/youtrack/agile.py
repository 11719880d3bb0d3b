"""
YouTrack agile board and sprint models.
"""

from typing import Any

from ...utils.date import parse_date
from ..base import EMPTY_STRING, ApiModel


class Sprint(ApiModel):
    """
    Model representing a sprint on an agile board.
    """

    id: str = EMPTY_STRING
    name: str = EMPTY_STRING
    goal: str | None = None
    start: str | None = None
    finish: str | None = None
    archived: bool = False
    is_default: bool = False
    issue_count: int | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "Sprint":
        if not data or not isinstance(data, dict):
            return cls()
        issues = data.get("issues")
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("name") or EMPTY_STRING,
            goal=data.get("goal"),
            start=parse_date(data.get("start")) or None,
            finish=parse_date(data.get("finish")) or None,
            archived=bool(data.get("archived", False)),
            is_default=bool(data.get("isDefault", False)),
            issue_count=len(issues) if isinstance(issues, list) else None,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "start": self.start,
            "finish": self.finish,
            "archived": self.archived,
        }
        if self.goal:
            result["goal"] = self.goal
        if self.issue_count is not None:
            result["issueCount"] = self.issue_count
        return result


class AgileBoard(ApiModel):
    """
    Model representing a YouTrack agile board.
    """

    id: str = EMPTY_STRING
    name: str = EMPTY_STRING
    projects: list[str] = []
    sprints: list[Sprint] = []
    current_sprint: str | None = None
    columns: list[str] = []

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "AgileBoard":
        if not data or not isinstance(data, dict):
            return cls()
        current = data.get("currentSprint") or {}
        column_settings = data.get("columnSettings") or {}
        columns = []
        for column in column_settings.get("columns") or []:
            presentation = column.get("presentation")
            if presentation:
                columns.append(presentation)
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("name") or EMPTY_STRING,
            projects=[
                p.get("shortName") or p.get("name")
                for p in data.get("projects") or []
                if p.get("shortName") or p.get("name")
            ],
            sprints=Sprint.from_api_list(data.get("sprints")),
            current_sprint=current.get("name"),
            columns=columns,
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "projects": self.projects,
        }
        if self.current_sprint:
            result["currentSprint"] = self.current_sprint
        if self.sprints:
            result["sprints"] = [s.to_simplified_dict() for s in self.sprints]
        if self.columns:
            result["columns"] = self.columns
        return result
