"""
YouTrack project and project field models.
"""

from typing import Any

from ..base import EMPTY_STRING, ApiModel


class YouTrackProject(ApiModel):
    """
    Model representing a YouTrack project.
    """

    id: str = EMPTY_STRING
    name: str = EMPTY_STRING
    short_name: str = EMPTY_STRING
    description: str | None = None
    archived: bool = False
    leader: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "YouTrackProject":
        if not data or not isinstance(data, dict):
            return cls()
        leader = data.get("leader") or {}
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=data.get("name") or EMPTY_STRING,
            short_name=data.get("shortName") or EMPTY_STRING,
            description=data.get("description"),
            archived=bool(data.get("archived", False)),
            leader=leader.get("login") or leader.get("fullName"),
        )

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "shortName": self.short_name,
            "name": self.name,
        }
        if self.description:
            result["description"] = self.description
        if self.archived:
            result["archived"] = True
        if self.leader:
            result["leader"] = self.leader
        return result


class FieldValue(ApiModel):
    """
    One allowed value of a bundle-backed project field.
    """

    name: str = EMPTY_STRING
    localized_name: str | None = None
    description: str | None = None
    ordinal: int | None = None
    is_resolved: bool | None = None
    color: dict[str, str] | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "FieldValue":
        if not data or not isinstance(data, dict):
            return cls()
        color = data.get("color")
        return cls(
            name=data.get("name") or EMPTY_STRING,
            localized_name=data.get("localizedName"),
            description=data.get("description"),
            ordinal=data.get("ordinal"),
            is_resolved=data.get("isResolved"),
            color=(
                {"background": color.get("background"), "foreground": color.get("foreground")}
                if isinstance(color, dict)
                else None
            ),
        )

    @property
    def display_name(self) -> str:
        return self.localized_name or self.name

    def to_simplified_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "localizedName": self.localized_name,
            "description": self.description,
            "ordinal": self.ordinal,
            "isResolved": self.is_resolved,
            "color": self.color,
        }


class ProjectField(ApiModel):
    """
    A custom field attached to a project, with its bundle values when the
    field is bundle-backed.
    """

    id: str = EMPTY_STRING
    name: str = EMPTY_STRING
    localized_name: str | None = None
    field_type: str | None = None
    bundle_type: str | None = None
    can_be_empty: bool | None = None
    values: list[FieldValue] = []

    @classmethod
    def from_api_response(cls, data: dict[str, Any], **kwargs: Any) -> "ProjectField":
        if not data or not isinstance(data, dict):
            return cls()
        field = data.get("field") or {}
        bundle = data.get("bundle") or {}
        values = FieldValue.from_api_list(bundle.get("values"))
        # Unordered values sort last
        values.sort(key=lambda v: v.ordinal if v.ordinal is not None else float("inf"))
        return cls(
            id=str(data.get("id", EMPTY_STRING)),
            name=field.get("name") or EMPTY_STRING,
            localized_name=field.get("localizedName"),
            field_type=(field.get("fieldType") or {}).get("valueType"),
            bundle_type=bundle.get("$type"),
            can_be_empty=data.get("canBeEmpty"),
            values=values,
        )

    @property
    def value_names(self) -> list[str]:
        return [v.display_name for v in self.values if v.display_name]

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id,
            "name": self.localized_name or self.name,
            "fieldType": self.field_type or self.bundle_type,
        }
        if self.can_be_empty is not None:
            result["canBeEmpty"] = self.can_be_empty
        if self.values:
            result["values"] = self.value_names
        return result
