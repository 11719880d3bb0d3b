"""Project scope enforcement.

Every project-scoped call goes through :class:`ScopeResolver`. When the
server is started with a configured project, that project is authoritative:
caller supplied ids are replaced and logged, or rejected in strict mode.
"""

import logging
import re
from dataclasses import dataclass

from ..exceptions import MissingScopeError, ScopeViolationError
from .config import YouTrackConfig

logger = logging.getLogger("youtrack-mcp.youtrack.scope")

_PROJECT_VALUE = r"(?:\{[^}]*\}|[^\s,{}]+)"
# project: A, {B C} and its in: shorthand
PROJECT_CLAUSE = re.compile(
    rf"\b(?:project|in):\s*{_PROJECT_VALUE}(?:\s*,\s*{_PROJECT_VALUE})*", re.IGNORECASE
)

MISSING_SCOPE_MESSAGE = (
    "Project ID is required. Either:\n"
    "1. Set PROJECT_ID in environment/config for single-project mode (recommended)\n"
    "2. Provide projectId parameter in each request for multi-project access"
)


@dataclass(frozen=True)
class ScopeConfig:
    """Process-wide project scope, fixed at startup."""

    enforced_project_id: str | None = None
    enforce_strict: bool = False

    @classmethod
    def from_config(cls, config: YouTrackConfig) -> "ScopeConfig":
        return cls(
            enforced_project_id=config.project_id,
            enforce_strict=config.enforce_strict_scope,
        )


class ScopeResolver:
    """Decides which project identifier is authoritative for a call."""

    def __init__(self, scope: ScopeConfig) -> None:
        self.scope = scope

    @property
    def enforced_project_id(self) -> str | None:
        return self.scope.enforced_project_id

    def resolve(self, provided_id: str | None, allow_override: bool = False) -> str:
        """Return the project id a scoped operation must use.

        Args:
            provided_id: Project id supplied by the caller, if any.
            allow_override: Accept a differing caller id without complaint.

        Returns:
            The enforced project id when one is configured, otherwise the
            caller supplied id.

        Raises:
            MissingScopeError: No project is configured and none was supplied.
            ScopeViolationError: Strict mode and the caller targeted another
                project.
        """
        enforced = self.scope.enforced_project_id
        provided = (provided_id or "").strip() or None

        if enforced:
            if provided and provided != enforced and not allow_override:
                if self.scope.enforce_strict:
                    logger.warning(
                        f"Rejected project override: configured={enforced} "
                        f"attempted={provided}"
                    )
                    raise ScopeViolationError(enforced, provided)
                logger.warning(
                    f"Project ID override attempt blocked: configured={enforced} "
                    f"attempted={provided}. Using configured project ID to enforce "
                    "data isolation."
                )
            return enforced

        if not provided:
            raise MissingScopeError(MISSING_SCOPE_MESSAGE)
        return provided

    def resolve_optional(self, provided_id: str | None) -> str | None:
        """Like :meth:`resolve`, but an absent scope is allowed."""
        try:
            return self.resolve(provided_id)
        except MissingScopeError:
            return None

    def scope_query(self, query: str, provided_id: str | None = None) -> str:
        """Merge the resolved project into a free-text search query.

        A query without a ``project:`` clause gets one prepended. A query
        that already names a project keeps it unless an enforced project is
        configured, in which case every project clause is rewritten, including
        value lists and the ``in:`` shorthand.

        Args:
            query: The caller's search expression.
            provided_id: Optional project id to scope by in multi-project mode.

        Returns:
            The query to send to the backend.
        """
        project_id = self.resolve_optional(provided_id)
        if not project_id:
            return query

        if not PROJECT_CLAUSE.search(query):
            return f"project: {project_id} {query}".rstrip()

        enforced = self.scope.enforced_project_id
        if enforced:
            foreign = [
                clause
                for clause in PROJECT_CLAUSE.findall(query)
                if clause.split(":", 1)[1].strip() != enforced
            ]
            if foreign:
                logger.warning(
                    f"Query contains project filter but PROJECT_ID is configured; "
                    f"enforcing {enforced}. Original query: {query}"
                )
            return PROJECT_CLAUSE.sub(f"project: {enforced}", query)
        return query
