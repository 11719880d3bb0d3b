"""Tests for command synthesis and field eligibility rules."""

import pytest

from youtrack_mcp.youtrack.command_builder import (
    CreateIssueRequest,
    FieldAssignment,
    IssueUpdate,
    LinkClause,
    accepts_dev_team,
    accepts_sorting,
    business_process_command,
    format_estimation,
    link_command,
    query_value,
    serialize_commands,
    sprint_command,
    synthesize_creation_commands,
    synthesize_update_commands,
)


def _fields(commands):
    return [c.field for c in commands if isinstance(c, FieldAssignment)]


class TestSortingEligibility:
    @pytest.mark.parametrize("issue_type", ["Task", "bug", "DevOps"])
    def test_no_sorting_for_work_types(self, issue_type):
        commands = synthesize_creation_commands(
            CreateIssueRequest(summary="X", type=issue_type, sorting=5)
        )
        assert "Sorting" not in _fields(commands)
        assert "Sorting:" not in serialize_commands(commands)

    @pytest.mark.parametrize("issue_type", ["Epic", "user story", "FEATURE", None])
    def test_exactly_one_sorting_with_default(self, issue_type):
        commands = synthesize_creation_commands(CreateIssueRequest(summary="X", type=issue_type))
        sorting = [c for c in commands if isinstance(c, FieldAssignment) and c.field == "Sorting"]
        assert sorting == [FieldAssignment("Sorting", "0")]

    def test_supplied_sorting_value(self):
        commands = synthesize_creation_commands(
            CreateIssueRequest(summary="X", type="Epic", sorting=7)
        )
        assert serialize_commands(commands).count("Sorting:") == 1
        assert "Sorting: 7" in serialize_commands(commands)

    def test_accepts_sorting(self):
        assert accepts_sorting(None)
        assert accepts_sorting(" User Story ")
        assert not accepts_sorting("Task")


class TestDevTeamEligibility:
    @pytest.mark.parametrize("issue_type", ["Task", "feature", "Bug", "devops"])
    def test_dev_team_for_eligible_types(self, issue_type):
        commands = synthesize_creation_commands(
            CreateIssueRequest(summary="X", type=issue_type, dev_team="Backend")
        )
        assert FieldAssignment("Dev_Team", "Backend") in commands

    @pytest.mark.parametrize("issue_type", ["Epic", "User Story", None])
    def test_no_dev_team_for_other_types(self, issue_type):
        commands = synthesize_creation_commands(
            CreateIssueRequest(summary="X", type=issue_type, dev_team="Backend")
        )
        assert "Dev_Team" not in _fields(commands)

    def test_no_dev_team_without_value(self):
        commands = synthesize_creation_commands(CreateIssueRequest(summary="X", type="Task"))
        assert "Dev_Team" not in _fields(commands)

    def test_accepts_dev_team(self):
        assert accepts_dev_team("Task")
        assert not accepts_dev_team(None)


class TestCreationCommands:
    def test_task_with_team(self):
        commands = synthesize_creation_commands(
            CreateIssueRequest(summary="X", type="Task", dev_team="Backend")
        )
        text = serialize_commands(commands)
        assert text == "Type: Task Priority: Normal Dev_Team: Backend"

    def test_full_request_order(self):
        request = CreateIssueRequest(
            summary="X",
            type="Feature",
            priority="Critical",
            assignee="jane",
            due_date="2026-11-01",
            parent_id="PROJ-12",
            dev_team="Frontend",
            sorting=3,
        )
        commands = synthesize_creation_commands(request)
        assert commands == [
            LinkClause("subtask of", "PROJ-12"),
            FieldAssignment("Type", "Feature"),
            FieldAssignment("Priority", "Critical"),
            FieldAssignment("Sorting", "3"),
            FieldAssignment("Dev_Team", "Frontend"),
            FieldAssignment("Assignee", "jane"),
            FieldAssignment("Due Date", "2026-11-01"),
        ]

    def test_priority_defaults_to_normal(self):
        commands = synthesize_creation_commands(CreateIssueRequest(summary="X"))
        assert FieldAssignment("Priority", "Normal") in commands

    def test_business_process_never_in_creation_commands(self):
        commands = synthesize_creation_commands(
            CreateIssueRequest(summary="X", type="Task", business_proc="Discovery")
        )
        assert "Business_proc" not in serialize_commands(commands)


class TestEstimation:
    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [(90, "Estimation 1h 30m"), (45, "Estimation 45m"), (0, "Estimation 0m"), (120, "Estimation 2h")],
    )
    def test_estimation_command(self, minutes, expected):
        commands = synthesize_update_commands(IssueUpdate(estimation=minutes))
        assert serialize_commands(commands) == expected

    def test_negative_minutes_clamped(self):
        assert format_estimation(-5) == "0m"


class TestUpdateCommands:
    def test_one_command_per_field_without_defaults(self):
        commands = synthesize_update_commands(
            IssueUpdate(state="In Progress", assignee="jane", subsystem="API")
        )
        assert [c.to_text() for c in commands] == [
            "State: In Progress",
            "Assignee: jane",
            "Subsystem: API",
        ]

    def test_basic_fields_are_not_commands(self):
        update = IssueUpdate(summary="New", description="Body")
        assert synthesize_update_commands(update) == []
        assert update.basic_fields() == {"summary": "New", "description": "Body"}


class TestOtherCommands:
    def test_link_command_default_verb(self):
        assert link_command("PROJ-2").to_text() == "relates to PROJ-2"

    def test_link_command_collapses_whitespace(self):
        command = link_command(" PROJ-2 ", "depends   on")
        assert command.verb == "depends on"
        assert command.to_text() == "depends on PROJ-2"

    def test_business_process_command(self):
        assert business_process_command("Discovery").to_text() == "Business_proc Discovery"

    def test_sprint_command(self):
        assert sprint_command("Main", "S4").to_text() == "add Board Main S4"
        assert sprint_command("Main", "S4", remove=True).to_text() == "remove Board Main S4"

    def test_sprint_command_braces_spaced_names(self):
        command = sprint_command("Main Board", "Sprint 1")
        assert command.to_text() == "add Board {Main Board} {Sprint 1}"

    def test_query_value(self):
        assert query_value("In Progress") == "{In Progress}"
        assert query_value("Open") == "Open"
