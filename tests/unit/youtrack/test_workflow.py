"""Tests for the draft-based issue creation workflow."""

import pytest

from youtrack_mcp.exceptions import NetworkError, WorkflowError, YouTrackAPIError
from youtrack_mcp.youtrack.command_builder import CreateIssueRequest
from youtrack_mcp.youtrack.workflow import CreationWorkflow, WorkflowState


class FakeBackend:
    """Routes mocked POST calls by path and records them."""

    def __init__(self, failures=None, draft=None, issue=None):
        self.failures = failures or {}
        self.draft = {"id": "2-99"} if draft is None else draft
        self.issue = {"id": "2-100", "idReadable": "PROJ-42"} if issue is None else issue
        self.calls = []

    def post(self, path, json=None, params=None):
        self.calls.append((path, json, params))
        key = path
        if path == "commands":
            key = f"commands:{json['query']}"
        if key in self.failures:
            raise self.failures[key]
        if path == "users/me/drafts":
            return self.draft
        if path == "issues":
            return self.issue
        return None

    def paths(self):
        return [path for path, _, _ in self.calls]


@pytest.fixture
def backend(fetcher):
    fake = FakeBackend()
    fetcher.post.side_effect = fake.post
    fetcher.get.return_value = {"id": "0-5"}
    return fake


class TestCreationWorkflow:
    def test_task_with_dev_team_end_to_end(self, fetcher, backend):
        request = CreateIssueRequest(summary="X", type="Task", dev_team="Backend")

        outcome = CreationWorkflow(fetcher, "PROJ", request).run()

        assert backend.paths() == ["users/me/drafts", "commands", "issues"]
        draft_payload = backend.calls[0][1]
        assert draft_payload["project"] == {"id": "0-5"}
        assert draft_payload["summary"] == "X"

        command = backend.calls[1][1]
        assert command["issues"] == [{"id": "2-99"}]
        assert "Type: Task" in command["query"]
        assert "Priority: Normal" in command["query"]
        assert "Dev_Team: Backend" in command["query"]
        assert "Sorting:" not in command["query"]

        assert backend.calls[2][2]["draftId"] == "2-99"
        assert outcome.id_readable == "PROJ-42"
        assert outcome.state is WorkflowState.COMPLETE
        assert outcome.history == [
            WorkflowState.INIT,
            WorkflowState.DRAFT_CREATED,
            WorkflowState.FIELDS_APPLIED,
            WorkflowState.SUBMITTED,
            WorkflowState.COMPLETE,
        ]
        assert outcome.to_simplified_dict()["id"] == "PROJ-42"

    def test_field_failure_still_submits(self, fetcher, backend):
        backend.failures["commands:Type: Nope Priority: Normal"] = YouTrackAPIError(
            "400 Bad Request: Unknown Type", 400
        )

        outcome = CreationWorkflow(fetcher, "PROJ", CreateIssueRequest(summary="X", type="Nope")).run()

        assert "issues" in backend.paths()
        assert outcome.id_readable == "PROJ-42"
        assert not outcome.fields_applied
        assert WorkflowState.FIELD_APPLICATION_FAILED in outcome.history
        assert outcome.field_errors == [
            "Type: Nope Priority: Normal: 400 Bad Request: Unknown Type"
        ]

    def test_draft_creation_failure(self, fetcher, backend):
        backend.failures["users/me/drafts"] = NetworkError("Cannot reach YouTrack")

        with pytest.raises(WorkflowError) as excinfo:
            CreationWorkflow(fetcher, "PROJ", CreateIssueRequest(summary="X")).run()

        assert excinfo.value.state == "DraftCreationFailed"
        assert backend.paths() == ["users/me/drafts"]

    def test_missing_draft_id(self, fetcher):
        fake = FakeBackend(draft={})
        fetcher.post.side_effect = fake.post

        with pytest.raises(WorkflowError, match="no draft id"):
            CreationWorkflow(fetcher, "0-5", CreateIssueRequest(summary="X")).run()

    def test_submission_failure_deletes_draft(self, fetcher, backend):
        backend.failures["issues"] = YouTrackAPIError("400 Bad Request: required field", 400)

        with pytest.raises(WorkflowError) as excinfo:
            CreationWorkflow(fetcher, "PROJ", CreateIssueRequest(summary="X")).run()

        error = excinfo.value
        assert error.state == "SubmissionFailed"
        assert error.context["draftId"] == "2-99"
        assert error.context["draftDeleted"] is True
        fetcher.delete.assert_called_once_with("users/me/drafts/2-99")

    def test_submission_failure_keeps_draft_when_cleanup_disabled(self, fetcher, backend):
        backend.failures["issues"] = YouTrackAPIError("500 Server Error", 500)

        with pytest.raises(WorkflowError) as excinfo:
            CreationWorkflow(
                fetcher, "PROJ", CreateIssueRequest(summary="X"), cleanup_orphaned_drafts=False
            ).run()

        assert excinfo.value.context["draftDeleted"] is False
        fetcher.delete.assert_not_called()

    def test_failed_cleanup_does_not_mask_submission_error(self, fetcher, backend):
        backend.failures["issues"] = YouTrackAPIError("500 Server Error", 500)
        fetcher.delete.side_effect = NetworkError("Cannot reach YouTrack")

        with pytest.raises(WorkflowError, match="500 Server Error") as excinfo:
            CreationWorkflow(fetcher, "PROJ", CreateIssueRequest(summary="X")).run()

        assert excinfo.value.context["draftDeleted"] is False

    def test_business_process_set_after_submission(self, fetcher, backend):
        request = CreateIssueRequest(summary="X", type="Task", business_proc="Discovery")

        outcome = CreationWorkflow(fetcher, "PROJ", request).run()

        assert backend.paths() == ["users/me/drafts", "commands", "issues", "commands"]
        last = backend.calls[-1][1]
        assert last == {"query": "Business_proc Discovery", "issues": [{"idReadable": "PROJ-42"}]}
        assert outcome.business_proc_set is True
        assert WorkflowState.BUSINESS_PROC_SET in outcome.history

    def test_business_process_falls_back_to_field_update(self, fetcher, backend):
        backend.failures["commands:Business_proc Discovery"] = YouTrackAPIError(
            "400 Bad Request: Unknown command", 400
        )
        fetcher.get.side_effect = [
            {"id": "0-5"},
            {
                "id": "2-100",
                "customFields": [
                    {"id": "f-1", "name": "Priority"},
                    {"id": "f-2", "name": "Business_proc", "projectCustomField": {"id": "92-7"}},
                ],
            },
        ]

        outcome = CreationWorkflow(
            fetcher, "PROJ", CreateIssueRequest(summary="X", business_proc="Discovery")
        ).run()

        assert backend.calls[-1][0] == "issues/2-100/customFields/92-7"
        assert backend.calls[-1][1] == {"value": {"name": "Discovery"}}
        assert outcome.business_proc_set is True
        assert outcome.state is WorkflowState.COMPLETE

    def test_business_process_failure_is_not_fatal(self, fetcher, backend):
        backend.failures["commands:Business_proc Discovery"] = YouTrackAPIError("400", 400)
        fetcher.get.side_effect = [{"id": "0-5"}, {"id": "2-100", "customFields": []}]

        outcome = CreationWorkflow(
            fetcher, "PROJ", CreateIssueRequest(summary="X", business_proc="Discovery")
        ).run()

        assert outcome.business_proc_set is False
        assert outcome.to_simplified_dict()["businessProcSet"] is False
        assert outcome.state is WorkflowState.COMPLETE
