"""Module for YouTrack project operations."""

import logging
import re
from typing import Any

from ..exceptions import NotFoundError, YouTrackMCPError
from ..models.youtrack import ProjectField, YouTrackProject
from .command_builder import query_value
from .constants import INTERNAL_PROJECT_ID_PATTERN, PROJECT_CUSTOM_FIELDS, PROJECT_FIELDS
from .search import SearchMixin

logger = logging.getLogger("youtrack-mcp.youtrack")


def is_internal_project_id(project_id: str) -> bool:
    """Internal ids look like ``0-12``; short names like ``PROJ``."""
    return bool(re.match(INTERNAL_PROJECT_ID_PATTERN, project_id or ""))


class ProjectsMixin(SearchMixin):
    """Mixin for YouTrack project operations."""

    def list_projects(self, fields: str | None = None) -> list[YouTrackProject]:
        projects = self.get("admin/projects", params={"fields": fields or PROJECT_FIELDS})
        return YouTrackProject.from_api_list(projects)

    def get_project(self, project_id: str) -> YouTrackProject:
        """
        Get a project by short name or internal id.

        Raises:
            NotFoundError: If the project does not exist
        """
        project = self.get(f"admin/projects/{project_id}", params={"fields": PROJECT_FIELDS})
        return YouTrackProject.from_api_response(project or {})

    def validate_project(self, project_id: str) -> dict[str, Any]:
        """
        Check whether the project exists and is visible to the token.

        Returns:
            ``{"valid": True, "project": {...}}`` or ``{"valid": False, "reason": ...}``
        """
        try:
            project = self.get_project(project_id)
        except NotFoundError:
            return {
                "valid": False,
                "projectId": project_id,
                "reason": f"Project {project_id} not found or not accessible",
            }
        return {"valid": True, "projectId": project_id, "project": project.to_simplified_dict()}

    def resolve_internal_project_id(self, project_id: str) -> str:
        """
        Translate a project short name into YouTrack's internal id.

        Internal ids pass through untouched. Lookup failures fall back to the
        given value; creation endpoints then report the real problem.
        """
        if is_internal_project_id(project_id):
            return project_id
        try:
            project = self.get(f"admin/projects/{project_id}", params={"fields": "id"})
        except YouTrackMCPError as e:
            logger.debug(f"Could not resolve internal id for project {project_id}: {e}")
            return project_id
        if isinstance(project, dict) and project.get("id"):
            return str(project["id"])
        return project_id

    def get_project_fields(self, project_id: str) -> list[ProjectField]:
        fields = self.get(
            f"admin/projects/{project_id}/customFields",
            params={"fields": PROJECT_CUSTOM_FIELDS},
        )
        return ProjectField.from_api_list(fields)

    def get_project_field_values(
        self, project_id: str, field_name: str = "Type"
    ) -> dict[str, Any]:
        """
        List the allowed values of a bundle-backed project field.

        Values are ordered by their ordinal; localized names are preferred in
        ``valueNames``.

        Raises:
            NotFoundError: If the project has no field with that name, or the
                field has no values configured
        """
        fields = self.get_project_fields(project_id)
        target = next((f for f in fields if f.name == field_name), None)
        if target is None:
            available = ", ".join(f.name for f in fields if f.name)
            raise NotFoundError(
                f"Field \"{field_name}\" not found in project {project_id}. "
                f"Available fields: {available}"
            )
        if not target.values:
            raise NotFoundError(
                f"Field \"{field_name}\" has no available values configured in "
                f"project {project_id}"
            )
        return {
            "projectId": project_id,
            "fieldName": target.localized_name or target.name,
            "fieldType": target.field_type or target.bundle_type,
            "bundleType": target.bundle_type,
            "values": [v.to_simplified_dict() for v in target.values],
            "valueCount": len(target.values),
            "valueNames": target.value_names,
        }

    def get_allowed_values(self, project_id: str, field_name: str) -> list[str]:
        """Allowed value names of a field, or an empty list when unavailable."""
        try:
            return self.get_project_field_values(project_id, field_name)["valueNames"]
        except YouTrackMCPError as e:
            logger.debug(f"Could not fetch values for {field_name} in {project_id}: {e}")
            return []

    def get_project_statistics(self, project_id: str) -> dict[str, Any]:
        """
        Summarize issue counts of a project.

        Returns:
            Total, unresolved and resolved counts, plus counts per State value
            when the project has a State field.
        """
        base = f"project: {query_value(project_id)}"
        stats: dict[str, Any] = {
            "projectId": project_id,
            "total": self.count_issues(base),
            "unresolved": self.count_issues(f"{base} #Unresolved"),
            "resolved": self.count_issues(f"{base} #Resolved"),
        }
        states = self.get_allowed_values(project_id, "State")
        if states:
            stats["byState"] = {
                state: self.count_issues(f"{base} State: {query_value(state)}")
                for state in states
            }
        return stats
