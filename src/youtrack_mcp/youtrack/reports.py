"""Module for YouTrack analytics reports."""

import logging
from typing import Any

from .projects import ProjectsMixin, query_value
from .search import MAX_SEARCH_RESULTS
from .work_items import WorkItemsMixin

logger = logging.getLogger("youtrack-mcp.youtrack")

UNASSIGNED = "Unassigned"


class ReportsMixin(ProjectsMixin, WorkItemsMixin):
    """Mixin for project level analytics."""

    def project_stats_report(self, project_id: str) -> dict[str, Any]:
        """
        Issue counts for a project by state and by priority.

        Args:
            project_id: Scope-resolved project short name

        Returns:
            Totals plus ``byState`` and ``byPriority`` breakdowns
        """
        stats = self.get_project_statistics(project_id)
        base = f"project: {query_value(project_id)}"
        priorities = self.get_allowed_values(project_id, "Priority")
        if priorities:
            stats["byPriority"] = {
                priority: self.count_issues(f"{base} #Unresolved Priority: {query_value(priority)}")
                for priority in priorities
            }
        return stats

    def time_tracking_report(
        self,
        start_date: str | None = None,
        end_date: str | None = None,
        user_id: str | None = None,
        project_id: str | None = None,
    ) -> dict[str, Any]:
        return self.time_report(project_id, start_date, end_date, user_id)

    def resource_allocation_report(self, project_id: str) -> dict[str, Any]:
        """
        Group the open issues of a project by assignee.

        Returns:
            One entry per assignee with the number of open issues and their
            split by priority, busiest first
        """
        issues = self.search_issues(
            f"project: {query_value(project_id)} #Unresolved",
            limit=MAX_SEARCH_RESULTS,
        )
        allocation: dict[str, dict[str, Any]] = {}
        for issue in issues:
            assignee = issue.assignee or UNASSIGNED
            if isinstance(assignee, list):
                assignee = ", ".join(str(a) for a in assignee) or UNASSIGNED
            entry = allocation.setdefault(
                str(assignee), {"assignee": str(assignee), "openIssues": 0, "byPriority": {}, "issues": []}
            )
            entry["openIssues"] += 1
            priority = str(issue.priority or "None")
            entry["byPriority"][priority] = entry["byPriority"].get(priority, 0) + 1
            entry["issues"].append(issue.id_readable)

        return {
            "projectId": project_id,
            "openIssues": len(issues),
            "assignees": sorted(allocation.values(), key=lambda e: -e["openIssues"]),
        }
