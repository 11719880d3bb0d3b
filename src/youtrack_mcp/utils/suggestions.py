"""Fuzzy matching and suggestion utilities for error recovery."""

import logging
from difflib import get_close_matches

logger = logging.getLogger(__name__)

# Names agents commonly guess, mapped to the tool that covers them
TOOL_NAME_ALIASES: dict[str, str] = {
    "create_issue": "issues",
    "update_issue": "issues",
    "get_issue": "issues",
    "delete_issue": "issues",
    "issue": "issues",
    "search_issues": "query",
    "query_issues": "query",
    "search": "query",
    "add_comment": "comments",
    "get_comments": "comments",
    "comment": "comments",
    "list_projects": "projects",
    "get_project": "projects",
    "project": "projects",
    "sprints": "agile_boards",
    "boards": "agile_boards",
    "agile": "agile_boards",
    "articles": "knowledge_base",
    "kb": "knowledge_base",
    "wiki": "knowledge_base",
    "reports": "analytics",
    "log_work": "time_tracking",
    "log_time": "time_tracking",
    "work_items": "time_tracking",
    "user": "users",
    "command": "commands",
    "apply_command": "commands",
}


def fuzzy_match(
    user_input: str,
    candidates: list[str],
    max_results: int = 3,
    cutoff: float = 0.5,
) -> list[str]:
    """Find candidates that fuzzy-match the user input.

    Uses case-insensitive difflib matching plus substring matching.

    Args:
        user_input: The string the user provided.
        candidates: Available valid strings to match against.
        max_results: Maximum number of suggestions to return.
        cutoff: Minimum similarity ratio (0.0-1.0) for difflib. Default 0.5.

    Returns:
        List of matching candidates (original case), best matches first.
    """
    if not user_input or not candidates:
        return []

    input_lower = user_input.lower()

    exact = [c for c in candidates if c.lower() == input_lower]
    if exact:
        return exact[:max_results]

    lower_to_original: dict[str, str] = {}
    for c in candidates:
        lower_to_original.setdefault(c.lower(), c)

    difflib_matches = get_close_matches(
        input_lower,
        list(lower_to_original.keys()),
        n=max_results,
        cutoff=cutoff,
    )
    results = [lower_to_original[m] for m in difflib_matches]

    if len(results) < max_results:
        for c in candidates:
            if input_lower in c.lower() and c not in results:
                results.append(c)
                if len(results) >= max_results:
                    break

    return results[:max_results]


def suggest_tool_names(tool_name: str, known_tools: list[str]) -> list[str]:
    """Suggest known tool names for an unrecognized one.

    A direct alias hit wins; otherwise fall back to fuzzy matching.

    Args:
        tool_name: The tool name the caller used.
        known_tools: Names of the tools the server exposes.

    Returns:
        Suggested tool names, best first. May be empty.
    """
    alias = TOOL_NAME_ALIASES.get((tool_name or "").lower())
    if alias and alias in known_tools:
        return [alias]
    return fuzzy_match(tool_name, known_tools)


def describe_suggestions(suggestions: list[str]) -> str:
    """Render suggestions as a short 'Did you mean' sentence."""
    if not suggestions:
        return ""
    quoted = ", ".join(f"'{s}'" for s in suggestions)
    return f"Did you mean {quoted}?"
