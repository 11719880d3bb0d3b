"""
YouTrack issue models.

This module provides Pydantic models for YouTrack issues and issue links.
"""

import logging
from typing import Any

from ..base import EMPTY_STRING, ApiModel
from .common import YouTrackUser, format_timestamp, value_to_text

logger = logging.getLogger(__name__)


class YouTrackIssue(ApiModel):
    """
    Model representing a YouTrack issue.

    Custom fields are flattened into a ``name -> value`` mapping; the
    commonly used ones (State, Priority, Type, Assignee) are also exposed as
    attributes.
    """

    id: str = EMPTY_STRING
    id_readable: str = EMPTY_STRING
    summary: str = EMPTY_STRING
    description: str | None = None
    project: str | None = None
    reporter: YouTrackUser | None = None
    created: str = EMPTY_STRING
    updated: str = EMPTY_STRING
    resolved: str | None = None
    tags: list[str] = []
    custom_fields: dict[str, Any] = {}

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "YouTrackIssue":
        """
        Create a YouTrackIssue from a YouTrack API response.

        Args:
            data: The issue data from the YouTrack API

        Returns:
            A YouTrackIssue instance
        """
        if not data or not isinstance(data, dict):
            logger.debug("Received empty or non-dictionary issue data")
            return cls()

        custom_fields: dict[str, Any] = {}
        for field in data.get("customFields") or []:
            name = field.get("name") or (field.get("projectCustomField") or {}).get(
                "field", {}
            ).get("name")
            if name:
                custom_fields[name] = value_to_text(field.get("value"))

        project = data.get("project") or {}
        reporter = data.get("reporter")

        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            id_readable=data.get("idReadable") or str(data.get("id", EMPTY_STRING)),
            summary=data.get("summary") or EMPTY_STRING,
            description=data.get("description"),
            project=project.get("shortName") or project.get("name"),
            reporter=YouTrackUser.from_api_response(reporter) if reporter else None,
            created=format_timestamp(data.get("created")),
            updated=format_timestamp(data.get("updated")),
            resolved=format_timestamp(data.get("resolved")) or None,
            tags=[tag.get("name") for tag in data.get("tags") or [] if tag.get("name")],
            custom_fields=custom_fields,
        )

    @property
    def state(self) -> Any:
        return self.custom_fields.get("State")

    @property
    def priority(self) -> Any:
        return self.custom_fields.get("Priority")

    @property
    def type(self) -> Any:
        return self.custom_fields.get("Type")

    @property
    def assignee(self) -> Any:
        return self.custom_fields.get("Assignee")

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id_readable or self.id,
            "internalId": self.id,
            "summary": self.summary,
        }
        if self.description:
            result["description"] = self.description
        if self.project:
            result["project"] = self.project
        for name in ("State", "Priority", "Type", "Assignee"):
            if self.custom_fields.get(name) is not None:
                result[name.lower()] = self.custom_fields[name]
        if self.reporter:
            result["reporter"] = self.reporter.to_simplified_dict()
        if self.created:
            result["created"] = self.created
        if self.updated:
            result["updated"] = self.updated
        if self.resolved:
            result["resolved"] = self.resolved
        if self.tags:
            result["tags"] = self.tags
        if self.custom_fields:
            result["customFields"] = self.custom_fields
        return result


class IssueLink(ApiModel):
    """
    Model representing one direction of YouTrack issue links.
    """

    id: str = EMPTY_STRING
    direction: str | None = None
    link_type: str = EMPTY_STRING
    issues: list[dict[str, Any]] = []

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "IssueLink":
        if not data or not isinstance(data, dict):
            return cls()
        link_type = data.get("linkType") or {}
        direction = data.get("direction")
        if direction == "OUTWARD":
            link_name = link_type.get("sourceToTarget") or link_type.get("name")
        elif direction == "INWARD":
            link_name = link_type.get("targetToSource") or link_type.get("name")
        else:
            link_name = link_type.get("name")
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            direction=direction,
            link_type=link_name or EMPTY_STRING,
            issues=[
                {
                    "id": issue.get("idReadable") or issue.get("id"),
                    "summary": issue.get("summary"),
                }
                for issue in data.get("issues") or []
            ],
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "direction": self.direction,
            "type": self.link_type,
            "issues": self.issues,
        }
