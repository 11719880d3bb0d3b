"""Module for YouTrack issue operations."""

import logging
from typing import Any

from ..exceptions import NotFoundError, YouTrackMCPError
from ..models.youtrack import CommandResult, IssueLink, YouTrackIssue
from ..preprocessing import sanitize_description
from .command_builder import (
    CreateIssueRequest,
    IssueUpdate,
    link_command,
    state_command,
    synthesize_update_commands,
)
from .commands import CommandsMixin
from .comments import CommentsMixin
from .constants import (
    COMPLETE_STATE,
    IN_PROGRESS_STATE,
    ISSUE_DETAIL_FIELDS,
    ISSUE_REFRESH_FIELDS,
    LINK_FIELDS,
    MOVED_ISSUE_FIELDS,
)
from .projects import ProjectsMixin, is_internal_project_id
from .workflow import CreationOutcome, CreationWorkflow

logger = logging.getLogger("youtrack-mcp.youtrack")

# Fields whose rejected values are worth explaining with the project's options
ENRICHED_FIELDS = ("Type", "Priority")


class IssueUpdateResult:
    """Outcome of an update: the refreshed issue plus every per-command result."""

    def __init__(
        self,
        issue_id: str,
        issue: YouTrackIssue | None,
        command_results: list[CommandResult],
        errors: list[str],
    ):
        self.issue_id = issue_id
        self.issue = issue
        self.command_results = command_results
        self.errors = errors

    @property
    def applied_commands(self) -> int:
        return len(self.command_results)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    def metadata(self) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "appliedCommands": self.applied_commands,
            "commandErrorsCount": len(self.errors),
        }
        if self.errors:
            meta["commandErrors"] = self.errors
        return meta

    def to_simplified_dict(self) -> dict[str, Any]:
        if self.issue is not None:
            return self.issue.to_simplified_dict()
        return {"id": self.issue_id}


class IssuesMixin(ProjectsMixin, CommandsMixin, CommentsMixin):
    """Mixin for YouTrack issue operations."""

    def create_issue(
        self, project_id: str, request: CreateIssueRequest
    ) -> CreationOutcome:
        """
        Create an issue through the draft workflow.

        Args:
            project_id: Already scope-resolved project id or short name
            request: Summary, description and field values

        Returns:
            The creation outcome, including field application errors

        Raises:
            WorkflowError: If the draft could not be created or submitted
        """
        workflow = CreationWorkflow(
            self,
            project_id,
            request,
            cleanup_orphaned_drafts=self.config.cleanup_orphaned_drafts,
        )
        return workflow.run()

    def get_issue(self, issue_id: str, fields: str | None = None) -> YouTrackIssue:
        """
        Get a single issue with details.

        Raises:
            NotFoundError: If the issue does not exist
        """
        issue = self.get(f"issues/{issue_id}", params={"fields": fields or ISSUE_DETAIL_FIELDS})
        return YouTrackIssue.from_api_response(issue or {})

    def update_issue(self, issue_id: str, update: IssueUpdate) -> IssueUpdateResult:
        """
        Update an issue, isolating every field change.

        Custom fields are changed with one command per field so that one
        rejected value does not block the others. Summary, description and
        tags are written directly, and their failures are collected too.

        Args:
            issue_id: Readable issue id (e.g. 'PROJ-123')
            update: The fields to change

        Returns:
            The refreshed issue with per-command results and error texts
        """
        commands = synthesize_update_commands(update)
        results = self.apply_commands_isolated(issue_id, commands)
        errors = [
            self._explain_command_error(issue_id, result)
            for result in results
            if not result.succeeded
        ]

        basic = update.basic_fields()
        if "description" in basic:
            basic["description"] = sanitize_description(basic["description"])
        if basic:
            try:
                self.post(f"issues/{issue_id}", json={"$type": "Issue", **basic})
            except YouTrackMCPError as e:
                logger.error(f"Failed to update basic fields for issue {issue_id}: {e}")
                errors.append(f"Basic fields: {e}")

        if update.tags:
            try:
                self.post(
                    f"issues/{issue_id}",
                    json={"tags": [{"name": tag} for tag in update.tags]},
                )
            except YouTrackMCPError as e:
                logger.warning(f"Failed to update tags for issue {issue_id}: {e}")
                errors.append(f"Tags: {e}")

        refreshed: YouTrackIssue | None = None
        try:
            refreshed = self.get_issue(issue_id, fields=ISSUE_REFRESH_FIELDS)
        except YouTrackMCPError as e:
            logger.warning(f"Could not fetch refreshed issue {issue_id}: {e}")

        return IssueUpdateResult(issue_id, refreshed, results, errors)

    def _explain_command_error(self, issue_id: str, result: CommandResult) -> str:
        text = result.to_error_text()
        field_name = next(
            (name for name in ENRICHED_FIELDS if result.command.startswith(f"{name}:")),
            None,
        )
        if field_name is None:
            return text

        project_id = self._project_of(issue_id)
        allowed = self.get_allowed_values(project_id, field_name) if project_id else []
        if allowed:
            text += f". Available {field_name} values: {', '.join(allowed)}"
        return text

    def _project_of(self, issue_id: str) -> str | None:
        try:
            issue = self.get(f"issues/{issue_id}", params={"fields": "id,project(id,shortName)"})
        except YouTrackMCPError as e:
            logger.debug(f"Could not determine project of {issue_id}: {e}")
            return None
        project = (issue or {}).get("project") or {}
        return project.get("shortName") or project.get("id")

    def delete_issue(self, issue_id: str) -> None:
        self.delete(f"issues/{issue_id}")

    def change_issue_state(
        self, issue_id: str, state: str, comment: str | None = None
    ) -> dict[str, Any]:
        """
        Move an issue to a new state, optionally leaving a comment.

        A failing comment does not undo the state change; it is reported in
        the result instead.
        """
        self.apply_command(issue_id, state_command(state))
        result: dict[str, Any] = {"id": issue_id, "state": state}
        if comment:
            try:
                self.add_comment(issue_id, comment)
                result["commentAdded"] = True
            except YouTrackMCPError as e:
                logger.warning(f"State changed but failed to add comment: {e}")
                result["commentAdded"] = False
        return result

    def complete_issue(self, issue_id: str, comment: str | None = None) -> dict[str, Any]:
        return self.change_issue_state(issue_id, COMPLETE_STATE, comment)

    def start_issue(self, issue_id: str, comment: str | None = None) -> dict[str, Any]:
        return self.change_issue_state(issue_id, IN_PROGRESS_STATE, comment)

    def link_issues(
        self, issue_id: str, target_issue_id: str, link_type: str | None = None
    ) -> dict[str, Any]:
        """
        Link two issues with a command such as ``relates to PROJ-2``.

        Returns:
            Source, target and the command that was applied
        """
        command = link_command(target_issue_id, link_type)
        self.apply_command(issue_id, command)
        return {
            "sourceIssue": issue_id,
            "targetIssue": command.target,
            "linkType": command.verb,
            "command": command.to_text(),
        }

    def get_issue_links(self, issue_id: str) -> list[IssueLink]:
        links = self.get(f"issues/{issue_id}/links", params={"fields": LINK_FIELDS})
        # Link types with no linked issues are noise
        return [link for link in IssueLink.from_api_list(links) if link.issues]

    def move_issue(
        self, issue_id: str, target_project_id: str, comment: str | None = None
    ) -> dict[str, Any]:
        """
        Move an issue to another project.

        Args:
            issue_id: Issue to move
            target_project_id: Internal id (``0-12``) or short name
            comment: Optional note added after the move

        Returns:
            The moved issue as returned by YouTrack
        """
        project_ref: dict[str, Any] = {"$type": "Project"}
        if is_internal_project_id(target_project_id):
            project_ref["id"] = target_project_id
        else:
            project_ref["shortName"] = target_project_id

        moved = self.post(
            f"issues/{issue_id}/project",
            json=project_ref,
            params={"fields": MOVED_ISSUE_FIELDS},
        )
        if comment:
            try:
                self.add_comment(issue_id, f"Moved to project {target_project_id}. {comment}")
            except YouTrackMCPError as e:
                logger.warning(f"Failed to add comment after moving issue {issue_id}: {e}")

        issue = YouTrackIssue.from_api_response(moved or {})
        result = issue.to_simplified_dict() if moved else {"id": issue_id}
        result["targetProject"] = target_project_id
        return result

    def get_issue_states(self, issue_id: str) -> dict[str, Any]:
        """
        List the states available for an issue in its project.

        Raises:
            NotFoundError: If the issue's project or its State field cannot
                be found
        """
        issue = self.get(
            f"issues/{issue_id}",
            params={"fields": "id,project(shortName),customFields(name,value(name))"},
        ) or {}
        project_id = (issue.get("project") or {}).get("shortName")
        if not project_id:
            raise NotFoundError(f"Could not determine project for issue {issue_id}")
        current = YouTrackIssue.from_api_response(issue).state

        fields = self.get_project_fields(project_id)
        state_field = next((f for f in fields if f.name == "State"), None)
        if state_field is None or not state_field.values:
            raise NotFoundError(f"No State field found for project {project_id}")

        states = [
            {
                "name": value.name,
                "isResolved": bool(value.is_resolved),
                "isCurrent": value.name == current,
            }
            for value in state_field.values
        ]
        return {
            "issueId": issue_id,
            "projectId": project_id,
            "currentState": current,
            "availableStates": states,
            "stateCount": len(states),
        }
