"""Module for YouTrack agile board and sprint operations."""

import logging
from typing import Any

from ..models.youtrack import AgileBoard, CommandResult, Sprint, YouTrackIssue
from ..utils.date import ymd_to_millis
from .command_builder import sprint_command
from .commands import CommandsMixin
from .constants import (
    BOARD_DETAIL_FIELDS,
    BOARD_FIELDS,
    ISSUE_SEARCH_FIELDS,
    SPRINT_DETAIL_FIELDS,
    SPRINT_FIELDS,
)

logger = logging.getLogger("youtrack-mcp.youtrack")


def _sprint_payload(
    name: str | None = None,
    goal: str | None = None,
    start: str | None = None,
    finish: str | None = None,
) -> dict[str, Any]:
    """Build a sprint body; dates are ``YYYY-MM-DD`` and sent as epoch millis."""
    payload: dict[str, Any] = {}
    if name:
        payload["name"] = name
    if goal is not None:
        payload["goal"] = goal
    if start:
        payload["start"] = ymd_to_millis(start)
    if finish:
        payload["finish"] = ymd_to_millis(finish)
    return payload


class AgileMixin(CommandsMixin):
    """Mixin for YouTrack agile board operations."""

    def list_boards(self, project_id: str | None = None) -> list[AgileBoard]:
        """
        List agile boards, optionally only those covering a project.

        Args:
            project_id: Project short name to filter by

        Returns:
            Matching boards
        """
        boards = AgileBoard.from_api_list(self.get("agiles", params={"fields": BOARD_FIELDS}))
        if project_id:
            boards = [b for b in boards if project_id in b.projects]
        return boards

    def get_board(self, board_id: str) -> AgileBoard:
        board = self.get(f"agiles/{board_id}", params={"fields": BOARD_DETAIL_FIELDS})
        return AgileBoard.from_api_response(board or {})

    def list_sprints(self, board_id: str, include_archived: bool = False) -> list[Sprint]:
        sprints = Sprint.from_api_list(
            self.get(f"agiles/{board_id}/sprints", params={"fields": SPRINT_FIELDS})
        )
        if not include_archived:
            sprints = [s for s in sprints if not s.archived]
        return sprints

    def get_sprint(self, board_id: str, sprint_id: str) -> Sprint:
        sprint = self.get(
            f"agiles/{board_id}/sprints/{sprint_id}",
            params={"fields": SPRINT_DETAIL_FIELDS},
        )
        return Sprint.from_api_response(sprint or {})

    def create_sprint(
        self,
        board_id: str,
        name: str,
        start: str | None = None,
        finish: str | None = None,
        goal: str | None = None,
    ) -> Sprint:
        """
        Create a sprint on a board.

        Raises:
            ValueError: If a date is not ``YYYY-MM-DD``
        """
        sprint = self.post(
            f"agiles/{board_id}/sprints",
            json=_sprint_payload(name, goal, start, finish),
            params={"fields": SPRINT_FIELDS},
        )
        logger.info(f"Created sprint '{name}' on board {board_id}")
        return Sprint.from_api_response(sprint or {})

    def update_sprint(
        self,
        board_id: str,
        sprint_id: str,
        name: str | None = None,
        start: str | None = None,
        finish: str | None = None,
        goal: str | None = None,
    ) -> Sprint:
        sprint = self.post(
            f"agiles/{board_id}/sprints/{sprint_id}",
            json=_sprint_payload(name, goal, start, finish),
            params={"fields": SPRINT_FIELDS},
        )
        return Sprint.from_api_response(sprint or {})

    def archive_sprint(self, board_id: str, sprint_id: str) -> Sprint:
        sprint = self.post(
            f"agiles/{board_id}/sprints/{sprint_id}",
            json={"archived": True},
            params={"fields": SPRINT_FIELDS},
        )
        return Sprint.from_api_response(sprint or {})

    def delete_sprint(self, board_id: str, sprint_id: str) -> None:
        self.delete(f"agiles/{board_id}/sprints/{sprint_id}")

    def get_sprint_issues(self, board_id: str, sprint_id: str) -> list[YouTrackIssue]:
        sprint = self.get(
            f"agiles/{board_id}/sprints/{sprint_id}",
            params={"fields": f"id,name,issues({ISSUE_SEARCH_FIELDS})"},
        )
        return YouTrackIssue.from_api_list((sprint or {}).get("issues"))

    def assign_issues_to_sprint(
        self,
        board_id: str,
        sprint_id: str,
        issue_ids: list[str],
        remove: bool = False,
    ) -> list[CommandResult]:
        """
        Add issues to (or remove them from) a sprint with board commands.

        Each issue gets its own command so one failure does not stop the rest.

        Returns:
            One result per issue
        """
        board = self.get(f"agiles/{board_id}", params={"fields": "id,name"}) or {}
        sprint = self.get(
            f"agiles/{board_id}/sprints/{sprint_id}", params={"fields": "id,name"}
        ) or {}
        command = sprint_command(
            board.get("name") or board_id, sprint.get("name") or sprint_id, remove=remove
        )
        return self.apply_command_to_issues(command.to_text(), issue_ids)
