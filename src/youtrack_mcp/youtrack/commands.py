"""Module for applying YouTrack commands."""

import logging
from typing import Any

from ..exceptions import (
    CommandApplicationError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
    YouTrackAPIError,
    YouTrackMCPError,
)
from ..models.youtrack import CommandResult
from .client import YouTrackClient
from .command_builder import Command
from .constants import COMMAND_SUGGESTION_FIELDS

logger = logging.getLogger("youtrack-mcp.youtrack.commands")


def command_text(command: Command | str) -> str:
    text = command if isinstance(command, str) else command.to_text()
    if "\n" in text or "\r" in text:
        raise ValidationError("query", "Commands must be a single line of text")
    return text.strip()


class CommandsMixin(YouTrackClient):
    """Mixin for YouTrack command operations."""

    def apply_command(
        self,
        resource_id: str,
        command: Command | str,
        comment: str | None = None,
        silent: bool = False,
        internal_id: bool = False,
    ) -> Any:
        """
        Apply a single command to one issue or draft.

        Args:
            resource_id: Readable issue id (``PROJ-12``), or the internal id
                of a draft when ``internal_id`` is set.
            command: Command token or raw command text.
            comment: Optional comment posted together with the command.
            silent: Suppress notifications for this change.
            internal_id: Address the resource by internal id.

        Returns:
            The backend's command response.

        Raises:
            CommandApplicationError: The backend rejected the command.
            NotFoundError: The issue does not exist.
            PermissionDeniedError: The token may not change the issue.
            NetworkError: The backend could not be reached.
        """
        text = command_text(command)
        reference = {"id": resource_id} if internal_id else {"idReadable": resource_id}
        payload: dict[str, Any] = {"query": text, "issues": [reference]}
        if comment:
            payload["comment"] = comment
        if silent:
            payload["silent"] = True

        try:
            return self.post("commands", json=payload)
        except (NotFoundError, PermissionDeniedError):
            raise
        except YouTrackAPIError as e:
            raise CommandApplicationError(text, str(e)) from e

    def apply_commands_isolated(
        self, issue_id: str, commands: list[Command]
    ) -> list[CommandResult]:
        """
        Apply commands one call at a time so that one rejected value does not
        block the others.

        Args:
            issue_id: Readable issue id.
            commands: Commands in application order.

        Returns:
            One result per command, in the same order.
        """
        results: list[CommandResult] = []
        for command in commands:
            text = command.to_text()
            try:
                self.apply_command(issue_id, command)
            except YouTrackMCPError as e:
                cause = e.cause if isinstance(e, CommandApplicationError) else str(e)
                logger.warning(
                    f"Failed to apply command to issue {issue_id}: {text} -> {cause}"
                )
                results.append(
                    CommandResult(
                        command=text, resource_id=issue_id, succeeded=False, error=cause
                    )
                )
            else:
                results.append(
                    CommandResult(command=text, resource_id=issue_id, succeeded=True)
                )
        return results

    def apply_command_to_issues(
        self,
        query: str,
        issue_ids: list[str],
        comment: str | None = None,
        silent: bool = False,
    ) -> list[CommandResult]:
        """
        Apply the same command to several issues, one request per issue.

        Args:
            query: Command text, e.g. ``State: In Progress``.
            issue_ids: Readable issue ids.
            comment: Optional comment added with the command.
            silent: Suppress notifications.

        Returns:
            One result per issue, in the given order.
        """
        text = command_text(query)
        results: list[CommandResult] = []
        for issue_id in issue_ids:
            try:
                self.apply_command(issue_id, text, comment=comment, silent=silent)
            except YouTrackMCPError as e:
                cause = e.cause if isinstance(e, CommandApplicationError) else str(e)
                logger.warning(f"Command '{text}' failed for {issue_id}: {cause}")
                results.append(
                    CommandResult(
                        command=text, resource_id=issue_id, succeeded=False, error=cause
                    )
                )
            else:
                results.append(
                    CommandResult(command=text, resource_id=issue_id, succeeded=True)
                )
        return results

    def suggest_commands(
        self,
        query: str,
        caret: int | None = None,
        issue_ids: list[str] | None = None,
    ) -> dict[str, Any]:
        """
        Ask the backend how a partial command could be completed.

        Returns:
            Dict with ``suggestions`` (option/description pairs) and any
            parse errors the backend reported for the command.
        """
        payload: dict[str, Any] = {
            "query": query,
            "caret": len(query) if caret is None else caret,
        }
        if issue_ids:
            payload["issues"] = [{"idReadable": issue_id} for issue_id in issue_ids]

        response = self.post(
            "commands/assist", json=payload, params={"fields": COMMAND_SUGGESTION_FIELDS}
        )
        response = response or {}
        return {
            "query": query,
            "suggestions": [
                {
                    "option": s.get("option"),
                    "description": s.get("description"),
                }
                for s in response.get("suggestions") or []
            ],
            "commands": [
                {"description": c.get("description"), "error": c.get("error")}
                for c in response.get("commands") or []
            ],
        }
