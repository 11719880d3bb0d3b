from typing import Any


class YouTrackMCPError(Exception):
    """Base exception for YouTrack MCP errors."""

    pass


class YouTrackAuthenticationError(YouTrackMCPError):
    """Raised when YouTrack rejects the bearer token (401)."""

    pass


class ReadOnlyModeError(YouTrackMCPError):
    """Raised when a write action is attempted in read-only mode."""

    pass


class ValidationError(YouTrackMCPError):
    """Raised when caller input is missing or malformed.

    Always raised before any request reaches the backend.
    """

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


class MissingScopeError(YouTrackMCPError):
    """Raised when no project id is configured or supplied for a scoped call."""

    pass


class ScopeViolationError(YouTrackMCPError):
    """Raised in strict scope mode when a caller targets a foreign project."""

    def __init__(self, enforced_project_id: str, attempted_project_id: str) -> None:
        self.enforced_project_id = enforced_project_id
        self.attempted_project_id = attempted_project_id
        super().__init__(
            f"Project '{attempted_project_id}' is outside the configured scope "
            f"'{enforced_project_id}'."
        )


class YouTrackAPIError(YouTrackMCPError):
    """Raised when the YouTrack REST API returns an error status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class NotFoundError(YouTrackAPIError):
    """Raised when the backend reports the resource is absent (404)."""

    pass


class PermissionDeniedError(YouTrackAPIError):
    """Raised when the backend reports insufficient rights (403)."""

    pass


class NetworkError(YouTrackMCPError):
    """Raised when the backend cannot be reached (DNS, timeout, refused)."""

    pass


class CommandApplicationError(YouTrackMCPError):
    """Raised when the backend rejects a single synthesized command."""

    def __init__(self, command: str, cause: str) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"{command}: {cause}")


class WorkflowError(YouTrackMCPError):
    """Raised when a creation workflow step fails beyond recovery."""

    def __init__(
        self, state: str, message: str, context: dict[str, Any] | None = None
    ) -> None:
        self.state = state
        self.context = context or {}
        super().__init__(message)
