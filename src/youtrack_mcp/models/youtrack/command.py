"""
Results of applying commands to YouTrack resources.
"""

from typing import Any

from ..base import ApiModel


class CommandResult(ApiModel):
    """
    Outcome of one command applied to one resource.

    Results are kept in application order and always reported back to the
    caller, successes included.
    """

    command: str
    resource_id: str
    succeeded: bool
    error: str | None = None

    def to_error_text(self) -> str:
        return f"{self.command}: {self.error}"

    def to_simplified_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "command": self.command,
            "issueId": self.resource_id,
            "succeeded": self.succeeded,
        }
        if self.error:
            result["error"] = self.error
        return result
