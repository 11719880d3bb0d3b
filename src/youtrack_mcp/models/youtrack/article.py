"""
YouTrack knowledge base article models.
"""

from typing import Any

from ..base import EMPTY_STRING, ApiModel
from .common import format_timestamp


class Article(ApiModel):
    """
    Model representing a knowledge base article.
    """

    id: str = EMPTY_STRING
    id_readable: str = EMPTY_STRING
    title: str = EMPTY_STRING
    summary: str | None = None
    content: str | None = None
    project: str | None = None
    parent_id: str | None = None
    child_ids: list[str] = []
    updated: str = EMPTY_STRING

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "Article":
        if not data or not isinstance(data, dict):
            return cls()
        project = data.get("project") or {}
        parent = data.get("parentArticle") or {}
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            id_readable=data.get("idReadable") or str(data.get("id", EMPTY_STRING)),
            title=data.get("summary") or EMPTY_STRING,
            # YouTrack keeps the article body in "content" and its teaser in "description"
            summary=data.get("description"),
            content=data.get("content"),
            project=project.get("shortName") or project.get("name"),
            parent_id=parent.get("idReadable") or parent.get("id"),
            child_ids=[
                child.get("idReadable") or child.get("id")
                for child in data.get("childArticles") or []
            ],
            updated=format_timestamp(data.get("updated")),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id_readable or self.id,
            "title": self.title,
        }
        if self.summary:
            result["summary"] = self.summary
        if self.content is not None:
            result["content"] = self.content
        if self.project:
            result["project"] = self.project
        if self.parent_id:
            result["parentArticle"] = self.parent_id
        if self.child_ids:
            result["childArticles"] = self.child_ids
        if self.updated:
            result["updated"] = self.updated
        return result
