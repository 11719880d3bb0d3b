"""Tests for analytics reports."""

from unittest.mock import patch

from youtrack_mcp.models.youtrack import YouTrackIssue


def _issue(readable_id, assignee=None, priority=None):
    fields = []
    if assignee:
        fields.append({"name": "Assignee", "value": {"fullName": assignee}})
    if priority:
        fields.append({"name": "Priority", "value": {"name": priority}})
    return YouTrackIssue.from_api_response({"idReadable": readable_id, "customFields": fields})


def test_resource_allocation(fetcher):
    issues = [
        _issue("PROJ-1", "Jane", "Major"),
        _issue("PROJ-2", "Jane", "Minor"),
        _issue("PROJ-3", "Bob", "Major"),
        _issue("PROJ-4"),
    ]
    with patch.object(fetcher, "search_issues", return_value=issues) as search:
        report = fetcher.resource_allocation_report("PROJ")

    search.assert_called_once_with("project: PROJ #Unresolved", limit=1000)
    assert report["openIssues"] == 4
    first = report["assignees"][0]
    assert first["assignee"] == "Jane"
    assert first["openIssues"] == 2
    assert first["byPriority"] == {"Major": 1, "Minor": 1}
    assert {"assignee": "Unassigned", "openIssues": 1, "byPriority": {"None": 1}, "issues": ["PROJ-4"]} in (
        report["assignees"]
    )


def test_project_stats_adds_priorities(fetcher):
    with (
        patch.object(fetcher, "get_project_statistics", return_value={"projectId": "PROJ"}),
        patch.object(fetcher, "get_allowed_values", return_value=["Major", "Show-stopper"]),
        patch.object(fetcher, "count_issues", side_effect=[3, 1]) as count,
    ):
        report = fetcher.project_stats_report("PROJ")

    assert report["byPriority"] == {"Major": 3, "Show-stopper": 1}
    assert count.call_args_list[0].args[0] == "project: PROJ #Unresolved Priority: Major"


def test_time_tracking_report_delegates(fetcher):
    with patch.object(fetcher, "time_report", return_value={"totalTime": "0m"}) as time_report:
        fetcher.time_tracking_report("2026-01-01", "2026-01-31", "jane", "PROJ")

    time_report.assert_called_once_with("PROJ", "2026-01-01", "2026-01-31", "jane")
