"""Module for YouTrack time tracking operations."""

import logging
import re
from typing import Any

from ..models.youtrack import WorkItem
from ..preprocessing import sanitize_text
from ..utils.date import today_millis, ymd_to_millis
from .client import YouTrackClient
from .command_builder import format_estimation
from .constants import WORK_ITEM_FIELDS

logger = logging.getLogger("youtrack-mcp.youtrack")

# One working day
MINUTES_PER_DAY = 8 * 60
DURATION_TOKEN = re.compile(r"(\d+(?:\.\d+)?)\s*([dhm])", re.IGNORECASE)
UNIT_MINUTES = {"d": MINUTES_PER_DAY, "h": 60, "m": 1}


def parse_duration(duration: str | int | float) -> int:
    """
    Convert a duration expression to minutes.

    Accepts ``2h 30m``, ``1d`` (eight hours), ``45m``, ``1.5h`` and bare
    numbers, which are read as minutes. The result is rounded and never
    below one minute.

    Raises:
        ValueError: If the expression contains no recognizable duration
    """
    if isinstance(duration, (int, float)):
        return max(1, round(duration))

    text = (duration or "").strip().lower()
    if re.fullmatch(r"\d+(?:\.\d+)?", text):
        return max(1, round(float(text)))

    tokens = DURATION_TOKEN.findall(text)
    if not tokens or DURATION_TOKEN.sub("", text).strip():
        raise ValueError(
            f"Invalid duration '{duration}'. Use formats like '2h 30m', '1d', '45m' or '1.5h'."
        )
    minutes = sum(float(amount) * UNIT_MINUTES[unit] for amount, unit in tokens)
    return max(1, round(minutes))


def _work_item_payload(
    duration: str | None = None,
    description: str | None = None,
    date: str | None = None,
    work_type: str | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {}
    if duration is not None:
        payload["duration"] = {"minutes": parse_duration(duration)}
    if description is not None:
        payload["text"] = sanitize_text(description)
    if date:
        payload["date"] = ymd_to_millis(date)
    if work_type:
        payload["type"] = {"name": work_type}
    return payload


def summarize_work_items(items: list[WorkItem]) -> dict[str, Any]:
    """Aggregate work items by author and by issue."""
    by_author: dict[str, int] = {}
    by_issue: dict[str, int] = {}
    for item in items:
        author = (item.author.login or item.author.full_name) if item.author else "unknown"
        by_author[author] = by_author.get(author, 0) + item.minutes
        issue = item.issue_id or "unknown"
        by_issue[issue] = by_issue.get(issue, 0) + item.minutes

    total = sum(item.minutes for item in items)
    return {
        "totalMinutes": total,
        "totalTime": format_estimation(total),
        "entryCount": len(items),
        "byAuthor": [
            {"author": name, "minutes": minutes, "time": format_estimation(minutes)}
            for name, minutes in sorted(by_author.items(), key=lambda kv: -kv[1])
        ],
        "byIssue": [
            {"issueId": issue, "minutes": minutes, "time": format_estimation(minutes)}
            for issue, minutes in sorted(by_issue.items(), key=lambda kv: -kv[1])
        ],
    }


class WorkItemsMixin(YouTrackClient):
    """Mixin for YouTrack work item operations."""

    def log_time(
        self,
        issue_id: str,
        duration: str,
        description: str | None = None,
        date: str | None = None,
        work_type: str | None = None,
    ) -> WorkItem:
        """
        Log time spent on an issue.

        Args:
            issue_id: The issue id (e.g. 'PROJ-123')
            duration: Duration expression such as '2h 30m'
            description: Optional work description
            date: Optional YYYY-MM-DD date, defaults to today
            work_type: Optional work item type name

        Returns:
            The created work item

        Raises:
            ValueError: If the duration or date is malformed
        """
        payload = _work_item_payload(duration, description, date, work_type)
        payload.setdefault("date", today_millis())
        item = self.post(
            f"issues/{issue_id}/timeTracking/workItems",
            json=payload,
            params={"fields": WORK_ITEM_FIELDS},
        )
        logger.info(f"Logged {payload['duration']['minutes']}m on {issue_id}")
        return WorkItem.from_api_response(item or {}, issue_id=issue_id)

    def get_work_items(self, issue_id: str) -> list[WorkItem]:
        items = self.get(
            f"issues/{issue_id}/timeTracking/workItems", params={"fields": WORK_ITEM_FIELDS}
        )
        return WorkItem.from_api_list(items, issue_id=issue_id)

    def update_work_item(
        self,
        issue_id: str,
        work_item_id: str,
        duration: str | None = None,
        description: str | None = None,
        date: str | None = None,
        work_type: str | None = None,
    ) -> WorkItem:
        item = self.post(
            f"issues/{issue_id}/timeTracking/workItems/{work_item_id}",
            json=_work_item_payload(duration, description, date, work_type),
            params={"fields": WORK_ITEM_FIELDS},
        )
        return WorkItem.from_api_response(item or {}, issue_id=issue_id)

    def delete_work_item(self, issue_id: str, work_item_id: str) -> None:
        self.delete(f"issues/{issue_id}/timeTracking/workItems/{work_item_id}")

    def search_work_items(
        self,
        project_id: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        user_id: str | None = None,
    ) -> list[WorkItem]:
        """
        Find work items across issues.

        Args:
            project_id: Only work on issues of this project
            start_date: Inclusive YYYY-MM-DD lower bound
            end_date: Inclusive YYYY-MM-DD upper bound
            user_id: Only work by this author (login or id)
        """
        params: dict[str, Any] = {"fields": WORK_ITEM_FIELDS, "$top": 1000}
        if project_id:
            params["query"] = f"project: {project_id}"
        if start_date:
            params["startDate"] = start_date
        if end_date:
            params["endDate"] = end_date
        if user_id:
            params["author"] = user_id
        return WorkItem.from_api_list(self.get("workItems", params=params))

    def time_report(
        self,
        project_id: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        user_id: str | None = None,
    ) -> dict[str, Any]:
        """Aggregate logged time by author and by issue."""
        items = self.search_work_items(project_id, start_date, end_date, user_id)
        report = summarize_work_items(items)
        report["filters"] = {
            key: value
            for key, value in {
                "projectId": project_id,
                "startDate": start_date,
                "endDate": end_date,
                "userId": user_id,
            }.items()
            if value
        }
        return report
