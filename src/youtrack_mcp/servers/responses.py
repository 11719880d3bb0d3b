"""Uniform response envelope returned by every tool.

Success::

    {"success": true, "message": ..., "data": ..., "metadata": {...}}

Error::

    {"success": false, "message": ...,
     "error": {"type": ..., "message": ..., "hint": ..., "field": ...},
     "context": {...}}
"""

import json
import logging
from typing import Any

from youtrack_mcp.exceptions import (
    MissingScopeError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    ReadOnlyModeError,
    ScopeViolationError,
    ValidationError,
    WorkflowError,
    YouTrackAuthenticationError,
)
from youtrack_mcp.youtrack.constants import QUERY_EXAMPLES

logger = logging.getLogger("youtrack-mcp.servers.responses")

NOT_FOUND = "not_found"
PERMISSION_DENIED = "permission_denied"
NETWORK_UNREACHABLE = "network_unreachable"
INVALID_QUERY_SYNTAX = "invalid_query_syntax"
GENERIC_FAILURE = "generic_failure"
VALIDATION = "validation"
MISSING_SCOPE = "missing_scope"
SCOPE_VIOLATION = "scope_violation"
READ_ONLY = "read_only"

# Actions whose 400 responses mean the search expression is malformed
QUERY_ACTIONS = frozenset({"query", "search", "count"})

NETWORK_MARKERS = (
    "connection refused",
    "econnrefused",
    "timed out",
    "timeout",
    "name or service not known",
    "enotfound",
    "max retries exceeded",
    "circular structure",
    "cannot reach youtrack",
)

HINTS = {
    PERMISSION_DENIED: (
        "Check that the token's user has the required permissions in this project."
    ),
    NETWORK_UNREACHABLE: (
        "Check YOUTRACK_URL, your network or VPN connection, and that YouTrack is running."
    ),
    INVALID_QUERY_SYNTAX: QUERY_EXAMPLES,
    MISSING_SCOPE: "Set PROJECT_ID or pass project_id with the request.",
    READ_ONLY: "Unset READ_ONLY_MODE to allow changes.",
}


def classify_error(error: BaseException, action: str | None = None) -> str:
    """
    Map an exception to one of the error kinds reported to callers.

    Typed exceptions decide first; anything else is classified by the
    status codes and phrases embedded in its message.

    Args:
        error: The exception raised while handling a call
        action: The action being executed, used to spot query syntax errors

    Returns:
        The error kind
    """
    if isinstance(error, ValidationError):
        return VALIDATION
    if isinstance(error, MissingScopeError):
        return MISSING_SCOPE
    if isinstance(error, ScopeViolationError):
        return SCOPE_VIOLATION
    if isinstance(error, ReadOnlyModeError):
        return READ_ONLY
    if isinstance(error, NotFoundError):
        return NOT_FOUND
    if isinstance(error, PermissionDeniedError | YouTrackAuthenticationError):
        return PERMISSION_DENIED
    if isinstance(error, NetworkError):
        return NETWORK_UNREACHABLE

    message = str(error)
    lowered = message.lower()
    if "404" in message or "not found" in lowered:
        return NOT_FOUND
    if "403" in message or "forbidden" in lowered:
        return PERMISSION_DENIED
    if any(marker in lowered for marker in NETWORK_MARKERS):
        return NETWORK_UNREACHABLE
    if action in QUERY_ACTIONS and ("400" in message or "bad request" in lowered):
        return INVALID_QUERY_SYNTAX
    return GENERIC_FAILURE


def _hint_for(kind: str, context: dict[str, Any]) -> str | None:
    if kind == NOT_FOUND:
        if context.get("issue_id"):
            return "Use the query tool to list available issues."
        if context.get("project_id"):
            return "Use the projects tool with action 'list' to see available projects."
        return "Check that the identifier exists and is visible to the token's user."
    return HINTS.get(kind)


def success_response(
    message: str, data: Any = None, metadata: dict[str, Any] | None = None
) -> dict[str, Any]:
    response: dict[str, Any] = {"success": True, "message": message, "data": data}
    if metadata:
        response["metadata"] = metadata
    return response


def error_response(
    error: BaseException,
    context: dict[str, Any] | None = None,
    suggestions: list[str] | None = None,
) -> dict[str, Any]:
    """
    Build the error envelope for an exception.

    Args:
        error: The exception to report
        context: Identifiers of the call (tool, action, ids) for diagnostics
        suggestions: Corrections to offer, e.g. for unknown tool names

    Returns:
        The error envelope
    """
    context = dict(context or {})
    kind = classify_error(error, context.get("action"))
    message = str(error)

    detail: dict[str, Any] = {"type": kind, "message": message}
    hint = _hint_for(kind, context)
    if hint:
        detail["hint"] = hint
    if isinstance(error, ValidationError):
        detail["field"] = error.field
    if suggestions:
        detail["suggestions"] = suggestions
    if isinstance(error, WorkflowError):
        context["workflowState"] = error.state
        context.update(error.context)

    return {"success": False, "message": message, "error": detail, "context": context}


def to_json(envelope: dict[str, Any]) -> str:
    return json.dumps(envelope, indent=2, ensure_ascii=False, default=str)
