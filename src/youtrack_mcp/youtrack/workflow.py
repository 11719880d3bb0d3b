"""
Issue creation workflow.

YouTrack workflows validate required fields at creation time, so an issue
cannot be created and configured in one atomic write. Creation goes through a
draft instead: the draft is created, fields are set on it with a command,
the draft is submitted, and the business process is set afterwards because the
command grammar cannot express it.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any, NoReturn

from ..exceptions import CommandApplicationError, WorkflowError, YouTrackMCPError
from ..logging_config import log_operation
from ..preprocessing import sanitize_description
from .command_builder import (
    BUSINESS_PROCESS_FIELD,
    CreateIssueRequest,
    business_process_command,
    serialize_commands,
    synthesize_creation_commands,
)
from .constants import ISSUE_CREATED_FIELDS, ISSUE_CUSTOM_FIELD_IDS

if TYPE_CHECKING:
    from . import YouTrackFetcher

logger = logging.getLogger("youtrack-mcp.youtrack.workflow")


class WorkflowState(Enum):
    """States of one creation run."""

    INIT = "Init"
    DRAFT_CREATED = "DraftCreated"
    FIELDS_APPLIED = "FieldsApplied"
    FIELD_APPLICATION_FAILED = "FieldApplicationFailed"
    SUBMITTED = "Submitted"
    BUSINESS_PROC_SET = "BusinessProcSet"
    COMPLETE = "Complete"
    DRAFT_CREATION_FAILED = "DraftCreationFailed"
    SUBMISSION_FAILED = "SubmissionFailed"


class CreationOutcome:
    """
    Result of a creation run.

    Carries the created issue together with the recoverable sub-failures, so
    a caller can retry the step that went wrong instead of recreating the
    issue.
    """

    def __init__(self, project_id: str, summary: str):
        self.project_id = project_id
        self.summary = summary
        self.draft_id: str | None = None
        self.issue_id: str | None = None
        self.id_readable: str | None = None
        self.command: str = ""
        self.field_errors: list[str] = []
        self.business_proc: str | None = None
        self.business_proc_set: bool | None = None
        self.history: list[WorkflowState] = [WorkflowState.INIT]

    @property
    def state(self) -> WorkflowState:
        return self.history[-1]

    @property
    def fields_applied(self) -> bool:
        return WorkflowState.FIELD_APPLICATION_FAILED not in self.history

    def advance(self, state: WorkflowState) -> None:
        logger.debug(f"Creation workflow for '{self.summary}': {self.state.value} -> {state.value}")
        self.history.append(state)

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "id": self.id_readable or self.issue_id,
            "internalId": self.issue_id,
            "summary": self.summary,
            "project": self.project_id,
            "state": self.state.value,
        }
        if self.command:
            result["appliedCommand"] = self.command
        if self.field_errors:
            result["fieldErrors"] = self.field_errors
        if self.business_proc:
            result["businessProcSet"] = bool(self.business_proc_set)
        return result


class CreationWorkflow:
    """
    Drives one issue creation from draft to submitted issue.

    One instance per creation call; nothing is shared between runs.
    """

    def __init__(
        self,
        fetcher: "YouTrackFetcher",
        project_id: str,
        request: CreateIssueRequest,
        cleanup_orphaned_drafts: bool = True,
    ):
        self.fetcher = fetcher
        self.project_id = project_id
        self.request = request
        self.cleanup_orphaned_drafts = cleanup_orphaned_drafts
        self.outcome = CreationOutcome(project_id, request.summary)

    def run(self) -> CreationOutcome:
        """
        Execute the workflow.

        Returns:
            The outcome, in state Complete

        Raises:
            WorkflowError: If the draft could not be created or submitted
        """
        with log_operation(logger, "create_issue", project=self.project_id):
            self._create_draft()
            self._apply_fields()
            self._submit()
            if self.request.business_proc:
                self._set_business_process(self.request.business_proc)
            self.outcome.advance(WorkflowState.COMPLETE)
        return self.outcome

    def _create_draft(self) -> None:
        internal_project_id = self.fetcher.resolve_internal_project_id(self.project_id)
        payload: dict[str, Any] = {
            "project": {"id": internal_project_id},
            "summary": self.request.summary,
            "description": sanitize_description(self.request.description),
            "usesMarkdown": True,
        }
        if self.request.tags:
            payload["tags"] = [{"name": tag} for tag in self.request.tags]

        try:
            draft = self.fetcher.post("users/me/drafts", json=payload)
        except YouTrackMCPError as e:
            self.outcome.advance(WorkflowState.DRAFT_CREATION_FAILED)
            raise WorkflowError(
                WorkflowState.DRAFT_CREATION_FAILED.value,
                f"Failed to create draft issue in project {self.project_id}: {e}",
                {"projectId": self.project_id},
            ) from e

        draft_id = draft.get("id") if isinstance(draft, dict) else None
        if not draft_id:
            self.outcome.advance(WorkflowState.DRAFT_CREATION_FAILED)
            raise WorkflowError(
                WorkflowState.DRAFT_CREATION_FAILED.value,
                "Failed to create draft issue: no draft id returned",
                {"projectId": self.project_id},
            )

        self.outcome.draft_id = str(draft_id)
        self.outcome.advance(WorkflowState.DRAFT_CREATED)

    def _apply_fields(self) -> None:
        commands = synthesize_creation_commands(self.request)
        if not commands:
            self.outcome.advance(WorkflowState.FIELDS_APPLIED)
            return

        text = serialize_commands(commands)
        self.outcome.command = text
        try:
            self.fetcher.apply_command(self.outcome.draft_id, text, internal_id=True)
        except YouTrackMCPError as e:
            # The draft is still submitted; a partially configured issue beats losing it
            cause = e.cause if isinstance(e, CommandApplicationError) else str(e)
            logger.warning(
                f"Field application failed on draft {self.outcome.draft_id}, "
                f"submitting anyway. Command: '{text}', error: {cause}"
            )
            self.outcome.field_errors.append(f"{text}: {cause}")
            self.outcome.advance(WorkflowState.FIELD_APPLICATION_FAILED)
        else:
            self.outcome.advance(WorkflowState.FIELDS_APPLIED)

    def _submit(self) -> None:
        draft_id = self.outcome.draft_id
        try:
            issue = self.fetcher.post(
                "issues",
                json={},
                params={"draftId": draft_id, "fields": ISSUE_CREATED_FIELDS},
            )
        except YouTrackMCPError as e:
            self._fail_submission(f"Failed to submit draft {draft_id}: {e}", e)

        if not isinstance(issue, dict) or not issue.get("id"):
            self._fail_submission(f"Failed to submit draft {draft_id}: no issue id returned")

        self.outcome.issue_id = str(issue["id"])
        self.outcome.id_readable = issue.get("idReadable") or self.outcome.issue_id
        self.outcome.advance(WorkflowState.SUBMITTED)
        logger.info(f"Created issue {self.outcome.id_readable} in project {self.project_id}")

    def _fail_submission(self, message: str, cause: Exception | None = None) -> NoReturn:
        self.outcome.advance(WorkflowState.SUBMISSION_FAILED)
        context: dict[str, Any] = {
            "projectId": self.project_id,
            "draftId": self.outcome.draft_id,
            "draftDeleted": self._delete_draft() if self.cleanup_orphaned_drafts else False,
        }
        if self.outcome.field_errors:
            context["fieldErrors"] = self.outcome.field_errors
        raise WorkflowError(WorkflowState.SUBMISSION_FAILED.value, message, context) from cause

    def _delete_draft(self) -> bool:
        """Best-effort removal of the draft left behind by a failed submission."""
        draft_id = self.outcome.draft_id
        try:
            self.fetcher.delete(f"users/me/drafts/{draft_id}")
        except YouTrackMCPError as e:
            logger.warning(f"Could not delete orphaned draft {draft_id}: {e}")
            return False
        logger.info(f"Deleted orphaned draft {draft_id}")
        return True

    def _set_business_process(self, value: str) -> None:
        self.outcome.business_proc = value
        issue_id = self.outcome.id_readable
        try:
            self.fetcher.apply_command(issue_id, business_process_command(value))
        except YouTrackMCPError as e:
            logger.warning(
                f"Business process command failed for {issue_id}, "
                f"trying direct field update: {e}"
            )
        else:
            self.outcome.business_proc_set = True
            self.outcome.advance(WorkflowState.BUSINESS_PROC_SET)
            return

        try:
            self.outcome.business_proc_set = self._set_business_process_field(value)
        except YouTrackMCPError as e:
            logger.warning(f"Failed to set business process on {issue_id}: {e}")
            self.outcome.business_proc_set = False

        if self.outcome.business_proc_set:
            self.outcome.advance(WorkflowState.BUSINESS_PROC_SET)
        else:
            logger.warning(f"Business process '{value}' was not set on {issue_id}")

    def _set_business_process_field(self, value: str) -> bool:
        issue_id = self.outcome.issue_id
        issue = self.fetcher.get(f"issues/{issue_id}", params={"fields": ISSUE_CUSTOM_FIELD_IDS})
        fields = (issue or {}).get("customFields") or []
        field = next((f for f in fields if f.get("name") == BUSINESS_PROCESS_FIELD), None)
        if field is None:
            logger.warning(f"Issue {issue_id} has no {BUSINESS_PROCESS_FIELD} field")
            return False

        field_id = (field.get("projectCustomField") or {}).get("id") or field.get("id")
        self.fetcher.post(
            f"issues/{issue_id}/customFields/{field_id}",
            json={"value": {"name": value}},
        )
        return True
