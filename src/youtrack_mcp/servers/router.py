"""Dispatch of tool calls to YouTrack operations.

Every tool call goes through :meth:`ToolRouter.dispatch`. The router checks
the tool and action names, validates the required arguments before anything
reaches the backend, refuses writes in read-only mode, pins project-scoped
calls through the :class:`ScopeResolver`, and turns every outcome into the
response envelope.
"""

import logging
from collections.abc import Callable
from typing import Any

from youtrack_mcp.exceptions import ReadOnlyModeError, ValidationError, YouTrackMCPError
from youtrack_mcp.servers.responses import error_response, success_response
from youtrack_mcp.utils.date import is_ymd
from youtrack_mcp.utils.suggestions import describe_suggestions, fuzzy_match, suggest_tool_names
from youtrack_mcp.youtrack import YouTrackFetcher
from youtrack_mcp.youtrack.articles import check_article_content
from youtrack_mcp.youtrack.command_builder import CreateIssueRequest, IssueUpdate
from youtrack_mcp.youtrack.scope import ScopeResolver
from youtrack_mcp.youtrack.search import MAX_SEARCH_RESULTS
from youtrack_mcp.youtrack.work_items import parse_duration

logger = logging.getLogger("youtrack-mcp.servers.router")

Envelope = dict[str, Any]

TOOL_ACTIONS: dict[str, tuple[str, ...]] = {
    "projects": ("list", "get", "validate", "fields", "status"),
    "issues": (
        "create",
        "update",
        "delete",
        "get",
        "query",
        "search",
        "count",
        "state",
        "complete",
        "start",
        "link",
        "links",
        "states",
        "move",
        "watchers",
        "add_watcher",
        "remove_watcher",
        "toggle_star",
        "get_field_values",
    ),
    "query": (),
    "comments": ("get", "add", "update", "delete"),
    "agile_boards": (
        "boards",
        "board_details",
        "sprints",
        "sprint_details",
        "create_sprint",
        "update_sprint",
        "delete_sprint",
        "archive_sprint",
        "sprint_issues",
        "assign_issues",
        "unassign_issues",
    ),
    "knowledge_base": (
        "list",
        "get",
        "create",
        "update",
        "delete",
        "search",
        "link_sub_article",
        "unlink_parent",
        "get_hierarchy",
    ),
    "analytics": ("project_stats", "time_tracking", "resource_allocation"),
    "time_tracking": (
        "log_time",
        "get_work_items",
        "update_work_item",
        "delete_work_item",
        "time_reports",
    ),
    "users": ("list", "search", "get", "current"),
    "commands": ("apply", "suggest"),
}

TOOL_NAMES = tuple(TOOL_ACTIONS)

# Name of the argument selecting the operation, per tool
ACTION_ARGUMENTS: dict[str, str] = {"analytics": "report_type"}

WRITE_ACTIONS: dict[str, frozenset[str]] = {
    "issues": frozenset(
        {
            "create",
            "update",
            "delete",
            "state",
            "complete",
            "start",
            "link",
            "move",
            "add_watcher",
            "remove_watcher",
            "toggle_star",
        }
    ),
    "comments": frozenset({"add", "update", "delete"}),
    "agile_boards": frozenset(
        {
            "create_sprint",
            "update_sprint",
            "delete_sprint",
            "archive_sprint",
            "assign_issues",
            "unassign_issues",
        }
    ),
    "knowledge_base": frozenset(
        {"create", "update", "delete", "link_sub_article", "unlink_parent"}
    ),
    "time_tracking": frozenset({"log_time", "update_work_item", "delete_work_item"}),
    "commands": frozenset({"apply"}),
}

# Arguments copied into the error context for diagnostics
CONTEXT_KEYS = (
    "project_id",
    "issue_id",
    "target_issue_id",
    "target_project_id",
    "comment_id",
    "board_id",
    "sprint_id",
    "article_id",
    "work_item_id",
    "user_id",
    "query",
)


def require(args: dict[str, Any], field: str, action: str) -> Any:
    """Return a required argument or raise a ValidationError naming it."""
    value = args.get(field)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(field, f"{field} is required for {action}")
    return value.strip() if isinstance(value, str) else value


def require_list(args: dict[str, Any], field: str, action: str) -> list[str]:
    value = args.get(field)
    if not isinstance(value, list) or not [v for v in value if str(v).strip()]:
        raise ValidationError(field, f"{field} must be a non-empty list of ids for {action}")
    return [str(v).strip() for v in value if str(v).strip()]


def check_dates(args: dict[str, Any], *fields: str) -> None:
    for field in fields:
        value = args.get(field)
        if value and not is_ymd(value):
            raise ValidationError(field, f"{field} must be a date in YYYY-MM-DD format, got '{value}'")


def dump(items: list[Any]) -> list[dict[str, Any]]:
    return [item.to_simplified_dict() for item in items]


class ToolRouter:
    """Routes one tool call to the fetcher and wraps the result."""

    def __init__(
        self,
        fetcher: YouTrackFetcher,
        resolver: ScopeResolver,
        read_only: bool = False,
    ) -> None:
        self.fetcher = fetcher
        self.resolver = resolver
        self.read_only = read_only
        self._handlers: dict[str, Callable[[str, dict[str, Any]], Envelope]] = {
            "projects": self._projects,
            "issues": self._issues,
            "query": self._query,
            "comments": self._comments,
            "agile_boards": self._agile_boards,
            "knowledge_base": self._knowledge_base,
            "analytics": self._analytics,
            "time_tracking": self._time_tracking,
            "users": self._users,
            "commands": self._commands,
        }

    def dispatch(self, tool_name: str, args: dict[str, Any] | None = None) -> Envelope:
        """
        Execute one tool call.

        Args:
            tool_name: Name of the tool being called
            args: Tool arguments; None values count as absent

        Returns:
            The success or error envelope. Exceptions never escape.
        """
        args = {key: value for key, value in (args or {}).items() if value is not None}
        action_arg = ACTION_ARGUMENTS.get(tool_name, "action")
        action = args.get(action_arg) or tool_name
        context: dict[str, Any] = {"tool": tool_name, "action": action}
        context.update({key: args[key] for key in CONTEXT_KEYS if key in args})

        handler = self._handlers.get(tool_name)
        if handler is None:
            suggestions = suggest_tool_names(tool_name, list(TOOL_NAMES))
            message = f"Unknown tool '{tool_name}'."
            if suggestions:
                message += f" {describe_suggestions(suggestions)}"
            logger.warning(message)
            return error_response(ValidationError("tool", message), context, suggestions)

        try:
            self._check_action(tool_name, action_arg, action)
            self._check_write_access(tool_name, action)
            return handler(action, args)
        except YouTrackMCPError as e:
            logger.warning(f"{tool_name}.{action} failed: {e}")
            suggestions = None
            if isinstance(e, ValidationError) and e.field == action_arg:
                suggestions = fuzzy_match(str(action), list(TOOL_ACTIONS[tool_name]))
            return error_response(e, context, suggestions)
        except Exception as e:
            logger.error(f"Unexpected error in {tool_name}.{action}: {e}", exc_info=True)
            return error_response(e, context)

    def _check_action(self, tool_name: str, action_arg: str, action: str) -> None:
        actions = TOOL_ACTIONS[tool_name]
        if not actions:
            return
        if action == tool_name:
            raise ValidationError(action_arg, f"{action_arg} is required for {tool_name}")
        if action not in actions:
            suggestions = fuzzy_match(action, list(actions))
            message = f"Unknown {tool_name} {action_arg} '{action}'."
            if suggestions:
                message += f" {describe_suggestions(suggestions)}"
            message += f" Available: {', '.join(actions)}"
            raise ValidationError(action_arg, message)

    def _check_write_access(self, tool_name: str, action: str) -> None:
        if self.read_only and action in WRITE_ACTIONS.get(tool_name, ()):
            logger.warning(f"Blocked write action {tool_name}.{action} in read-only mode")
            raise ReadOnlyModeError(
                f"Cannot perform '{action}' on {tool_name}: the server is in read-only mode."
            )

    # Tool handlers

    def _projects(self, action: str, args: dict[str, Any]) -> Envelope:
        if action == "list":
            projects = self.fetcher.list_projects()
            return success_response(f"Found {len(projects)} projects", dump(projects))

        project_id = self.resolver.resolve(args.get("project_id"))
        if action == "get":
            project = self.fetcher.get_project(project_id)
            return success_response(f"Retrieved project {project_id}", project.to_simplified_dict())
        if action == "validate":
            result = self.fetcher.validate_project(project_id)
            state = "valid" if result["valid"] else "not accessible"
            return success_response(f"Project {project_id} is {state}", result)
        if action == "fields":
            fields = self.fetcher.get_project_fields(project_id)
            return success_response(
                f"Found {len(fields)} custom fields in project {project_id}", dump(fields)
            )
        stats = self.fetcher.get_project_statistics(project_id)
        return success_response(f"Statistics for project {project_id}", stats)

    def _issues(self, action: str, args: dict[str, Any]) -> Envelope:
        if action == "create":
            return self._create_issue(args)
        if action == "get_field_values":
            project_id = self.resolver.resolve(args.get("project_id"))
            field_name = args.get("field_name") or "Type"
            values = self.fetcher.get_project_field_values(project_id, field_name)
            return success_response(
                f"Found {values['valueCount']} values for {field_name} in project {project_id}",
                values,
            )
        if action in ("query", "search", "count"):
            return self._search_issues(action, args)

        issue_id = require(args, "issue_id", action)
        if action == "get":
            issue = self.fetcher.get_issue(issue_id)
            return success_response(f"Retrieved issue {issue_id}", issue.to_simplified_dict())
        if action == "update":
            return self._update_issue(issue_id, args)
        if action == "delete":
            self.fetcher.delete_issue(issue_id)
            return success_response(f"Issue {issue_id} deleted", {"id": issue_id, "deleted": True})
        if action == "state":
            state = require(args, "state", action)
            result = self.fetcher.change_issue_state(issue_id, state, args.get("comment"))
            return success_response(f"Issue {issue_id} moved to {state}", result)
        if action == "complete":
            result = self.fetcher.complete_issue(issue_id, args.get("comment"))
            return success_response(f"Issue {issue_id} completed", result)
        if action == "start":
            result = self.fetcher.start_issue(issue_id, args.get("comment"))
            return success_response(f"Started work on issue {issue_id}", result)
        if action == "link":
            target = require(args, "target_issue_id", action)
            link_type = args.get("link_type")
            if link_type is not None and not str(link_type).strip():
                raise ValidationError("link_type", "link_type must not be blank")
            result = self.fetcher.link_issues(issue_id, target, link_type)
            return success_response(
                f"Linked {issue_id} {result['linkType']} {result['targetIssue']}", result
            )
        if action == "states":
            states = self.fetcher.get_issue_states(issue_id)
            return success_response(
                f"Found {states['stateCount']} states for {issue_id}", states
            )
        if action == "links":
            links = self.fetcher.get_issue_links(issue_id)
            return success_response(f"Found {len(links)} link groups for {issue_id}", dump(links))
        if action == "move":
            target_project = require(args, "target_project_id", action)
            result = self.fetcher.move_issue(issue_id, target_project, args.get("comment"))
            return success_response(f"Issue {issue_id} moved to project {target_project}", result)
        if action == "watchers":
            result = self.fetcher.get_issue_watchers(issue_id)
            return success_response(f"Retrieved watchers for issue {issue_id}", result)
        if action in ("add_watcher", "remove_watcher"):
            user_id = require(args, "user_id", action)
            if action == "add_watcher":
                result = self.fetcher.add_watcher(issue_id, user_id)
                return success_response(f"Added {user_id} as watcher of {issue_id}", result)
            result = self.fetcher.remove_watcher(issue_id, user_id)
            return success_response(f"Removed {user_id} from watchers of {issue_id}", result)
        result = self.fetcher.toggle_star(issue_id)
        verb = "Added star to" if result["hasStar"] else "Removed star from"
        return success_response(f"{verb} issue {issue_id}", result)

    def _create_issue(self, args: dict[str, Any]) -> Envelope:
        project_id = self.resolver.resolve(args.get("project_id"))
        summary = require(args, "summary", "create")
        sorting = args.get("sorting")
        request = CreateIssueRequest(
            summary=summary,
            description=args.get("description"),
            type=args.get("type"),
            priority=args.get("priority"),
            assignee=args.get("assignee"),
            due_date=args.get("due_date"),
            tags=list(args.get("tags") or []),
            parent_id=args.get("parent_id"),
            dev_team=args.get("dev_team"),
            business_proc=args.get("business_proc"),
            sorting=int(sorting) if sorting is not None else None,
        )
        outcome = self.fetcher.create_issue(project_id, request)
        metadata: dict[str, Any] = {"workflow": [state.value for state in outcome.history]}
        message = f"Issue {outcome.id_readable} created in project {project_id}"
        if outcome.field_errors:
            message += " with field errors"
            metadata["fieldErrors"] = outcome.field_errors
        if request.business_proc and not outcome.business_proc_set:
            metadata["businessProcSet"] = False
        return success_response(message, outcome.to_simplified_dict(), metadata)

    def _update_issue(self, issue_id: str, args: dict[str, Any]) -> Envelope:
        estimation = args.get("estimation")
        if estimation is not None:
            try:
                estimation = int(estimation)
            except (TypeError, ValueError) as e:
                raise ValidationError("estimation", "estimation must be a number of minutes") from e
            if estimation < 0:
                raise ValidationError("estimation", "estimation must not be negative")
        update = IssueUpdate(
            summary=args.get("summary"),
            description=args.get("description"),
            state=args.get("state"),
            priority=args.get("priority"),
            type=args.get("type"),
            assignee=args.get("assignee"),
            subsystem=args.get("subsystem"),
            estimation=estimation,
            tags=args.get("tags"),
        )
        result = self.fetcher.update_issue(issue_id, update)
        suffix = " with partial errors" if result.has_errors else " successfully"
        return success_response(
            f"Issue {issue_id} updated{suffix}", result.to_simplified_dict(), result.metadata()
        )

    def _search_issues(self, action: str, args: dict[str, Any]) -> Envelope:
        query = require(args, "query", action)
        if action == "search":
            self.resolver.resolve(args.get("project_id"))
        scoped = self.resolver.scope_query(query, args.get("project_id"))
        if action == "count":
            count = self.fetcher.count_issues(scoped)
            return success_response(
                f"Found {count} issues matching query", {"count": count, "query": scoped}
            )
        limit = self._limit(args)
        issues = self.fetcher.search_issues(
            scoped, fields=args.get("fields"), limit=limit, skip=int(args.get("skip") or 0)
        )
        return success_response(
            f"Found {len(issues)} issues",
            dump(issues),
            {"totalCount": len(issues), "query": scoped},
        )

    def _limit(self, args: dict[str, Any]) -> int:
        limit = args.get("limit", 50)
        try:
            limit = int(limit)
        except (TypeError, ValueError) as e:
            raise ValidationError("limit", "limit must be an integer") from e
        if not 1 <= limit <= MAX_SEARCH_RESULTS:
            raise ValidationError("limit", f"limit must be between 1 and {MAX_SEARCH_RESULTS}")
        return limit

    def _query(self, action: str, args: dict[str, Any]) -> Envelope:
        return self._search_issues("query", args)

    def _comments(self, action: str, args: dict[str, Any]) -> Envelope:
        issue_id = require(args, "issue_id", action)
        if action == "get":
            comments = self.fetcher.get_issue_comments(issue_id)
            return success_response(f"Found {len(comments)} comments on {issue_id}", dump(comments))
        if action == "add":
            text = require(args, "text", action)
            comment = self.fetcher.add_comment(issue_id, text)
            return success_response(f"Comment added to {issue_id}", comment.to_simplified_dict())

        comment_id = require(args, "comment_id", action)
        if action == "update":
            text = require(args, "text", action)
            comment = self.fetcher.update_comment(issue_id, comment_id, text)
            return success_response(f"Comment {comment_id} updated", comment.to_simplified_dict())
        self.fetcher.delete_comment(issue_id, comment_id)
        return success_response(
            f"Comment {comment_id} deleted", {"id": comment_id, "issueId": issue_id, "deleted": True}
        )

    def _agile_boards(self, action: str, args: dict[str, Any]) -> Envelope:
        if action == "boards":
            project_id = self.resolver.resolve_optional(args.get("project_id"))
            boards = self.fetcher.list_boards(project_id)
            return success_response(f"Found {len(boards)} agile boards", dump(boards))

        board_id = require(args, "board_id", action)
        if action == "board_details":
            board = self.fetcher.get_board(board_id)
            return success_response(f"Retrieved board {board.name or board_id}", board.to_simplified_dict())
        if action == "sprints":
            sprints = self.fetcher.list_sprints(board_id)
            return success_response(f"Found {len(sprints)} sprints", dump(sprints))
        if action == "create_sprint":
            name = require(args, "name", action)
            check_dates(args, "start", "finish")
            sprint = self.fetcher.create_sprint(
                board_id, name, args.get("start"), args.get("finish"), args.get("goal")
            )
            return success_response(f"Sprint '{name}' created", sprint.to_simplified_dict())

        sprint_id = require(args, "sprint_id", action)
        if action == "sprint_details":
            sprint = self.fetcher.get_sprint(board_id, sprint_id)
            return success_response(f"Retrieved sprint {sprint.name or sprint_id}", sprint.to_simplified_dict())
        if action == "update_sprint":
            check_dates(args, "start", "finish")
            sprint = self.fetcher.update_sprint(
                board_id,
                sprint_id,
                args.get("name"),
                args.get("start"),
                args.get("finish"),
                args.get("goal"),
            )
            return success_response(f"Sprint {sprint_id} updated", sprint.to_simplified_dict())
        if action == "delete_sprint":
            self.fetcher.delete_sprint(board_id, sprint_id)
            return success_response(f"Sprint {sprint_id} deleted", {"id": sprint_id, "deleted": True})
        if action == "archive_sprint":
            sprint = self.fetcher.archive_sprint(board_id, sprint_id)
            return success_response(f"Sprint {sprint_id} archived", sprint.to_simplified_dict())
        if action == "sprint_issues":
            issues = self.fetcher.get_sprint_issues(board_id, sprint_id)
            return success_response(f"Found {len(issues)} issues in sprint", dump(issues))

        issue_ids = require_list(args, "issue_ids", action)
        remove = action == "unassign_issues"
        results = self.fetcher.assign_issues_to_sprint(board_id, sprint_id, issue_ids, remove=remove)
        return self._command_results(
            results, f"{'Removed' if remove else 'Assigned'} issues {'from' if remove else 'to'} sprint {sprint_id}"
        )

    def _knowledge_base(self, action: str, args: dict[str, Any]) -> Envelope:
        if action == "list":
            project_id = self.resolver.resolve(args.get("project_id"))
            articles = self.fetcher.list_articles(project_id)
            return success_response(f"Found {len(articles)} articles", dump(articles))
        if action == "create":
            project_id = self.resolver.resolve(args.get("project_id"))
            title = require(args, "title", action)
            require(args, "content", action)
            check_article_content(args.get("content"))
            article = self.fetcher.create_article(
                project_id, title, args["content"], args.get("summary"), args.get("tags")
            )
            return success_response(f"Article '{title}' created", article.to_simplified_dict())
        if action == "search":
            term = require(args, "search_term", action)
            project_id = self.resolver.resolve_optional(args.get("project_id"))
            articles = self.fetcher.search_articles(term, project_id)
            return success_response(f"Found {len(articles)} articles matching '{term}'", dump(articles))
        if action == "link_sub_article":
            parent = require(args, "parent_article_id", action)
            child = require(args, "child_article_id", action)
            article = self.fetcher.link_sub_article(parent, child)
            return success_response(f"Linked {child} under {parent}", article.to_simplified_dict())

        article_id = require(args, "article_id", action)
        if action == "get":
            article = self.fetcher.get_article(article_id)
            return success_response(f"Retrieved article {article_id}", article.to_simplified_dict())
        if action == "update":
            check_article_content(args.get("content"))
            article = self.fetcher.update_article(
                article_id,
                args.get("title"),
                args.get("content"),
                args.get("summary"),
                args.get("tags"),
            )
            return success_response(f"Article {article_id} updated", article.to_simplified_dict())
        if action == "delete":
            self.fetcher.delete_article(article_id)
            return success_response(f"Article {article_id} deleted", {"id": article_id, "deleted": True})
        if action == "unlink_parent":
            article = self.fetcher.unlink_parent(article_id)
            return success_response(f"Article {article_id} unlinked from its parent", article.to_simplified_dict())
        hierarchy = self.fetcher.get_article_hierarchy(article_id)
        return success_response(f"Hierarchy of article {article_id}", hierarchy)

    def _analytics(self, report_type: str, args: dict[str, Any]) -> Envelope:
        check_dates(args, "start_date", "end_date")
        if report_type == "project_stats":
            project_id = self.resolver.resolve(args.get("project_id"))
            report = self.fetcher.project_stats_report(project_id)
            return success_response(f"Project statistics for {project_id}", report)
        if report_type == "resource_allocation":
            project_id = self.resolver.resolve(args.get("project_id"))
            report = self.fetcher.resource_allocation_report(project_id)
            return success_response(f"Resource allocation for {project_id}", report)
        report = self.fetcher.time_tracking_report(
            args.get("start_date"),
            args.get("end_date"),
            args.get("user_id"),
            self.resolver.resolve_optional(args.get("project_id")),
        )
        return success_response(f"Time tracking report: {report['totalTime']} logged", report)

    def _time_tracking(self, action: str, args: dict[str, Any]) -> Envelope:
        check_dates(args, "date", "start_date", "end_date")
        if action == "time_reports":
            report = self.fetcher.time_report(
                self.resolver.resolve_optional(args.get("project_id")),
                args.get("start_date"),
                args.get("end_date"),
                args.get("user_id"),
            )
            return success_response(f"Time report: {report['totalTime']} logged", report)

        issue_id = require(args, "issue_id", action)
        if action == "log_time":
            duration = require(args, "duration", action)
            try:
                parse_duration(duration)
            except ValueError as e:
                raise ValidationError("duration", str(e)) from e
            item = self.fetcher.log_time(
                issue_id, duration, args.get("description"), args.get("date"), args.get("work_type")
            )
            return success_response(f"Logged {item.minutes}m on {issue_id}", item.to_simplified_dict())
        if action == "get_work_items":
            items = self.fetcher.get_work_items(issue_id)
            return success_response(f"Found {len(items)} work items on {issue_id}", dump(items))

        work_item_id = require(args, "work_item_id", action)
        if action == "update_work_item":
            if args.get("duration") is not None:
                try:
                    parse_duration(args["duration"])
                except ValueError as e:
                    raise ValidationError("duration", str(e)) from e
            item = self.fetcher.update_work_item(
                issue_id,
                work_item_id,
                args.get("duration"),
                args.get("description"),
                args.get("date"),
                args.get("work_type"),
            )
            return success_response(f"Work item {work_item_id} updated", item.to_simplified_dict())
        self.fetcher.delete_work_item(issue_id, work_item_id)
        return success_response(
            f"Work item {work_item_id} deleted", {"id": work_item_id, "issueId": issue_id, "deleted": True}
        )

    def _users(self, action: str, args: dict[str, Any]) -> Envelope:
        if action == "list":
            users = self.fetcher.list_users(args.get("query"))
            return success_response(f"Found {len(users)} users", dump(users))
        if action == "search":
            query = require(args, "query", action)
            users = self.fetcher.search_users(query)
            return success_response(f"Found {len(users)} users matching '{query}'", dump(users))
        if action == "get":
            user_id = require(args, "user_id", action)
            user = self.fetcher.get_user(user_id)
            return success_response(f"Retrieved user {user_id}", user.to_simplified_dict())
        user = self.fetcher.get_current_user()
        return success_response("Retrieved current user", user.to_simplified_dict())

    def _commands(self, action: str, args: dict[str, Any]) -> Envelope:
        query = require(args, "query", action)
        if action == "suggest":
            caret = args.get("caret")
            result = self.fetcher.suggest_commands(
                query, int(caret) if caret is not None else None, args.get("issue_ids")
            )
            return success_response(
                f"Found {len(result['suggestions'])} suggestions for '{query}'", result
            )
        issue_ids = require_list(args, "issue_ids", action)
        results = self.fetcher.apply_command_to_issues(
            query, issue_ids, comment=args.get("comment"), silent=bool(args.get("silent"))
        )
        return self._command_results(results, f"Applied '{query}'")

    def _command_results(self, results: list[Any], message: str) -> Envelope:
        failed = [r for r in results if not r.succeeded]
        metadata: dict[str, Any] = {
            "appliedCount": len(results) - len(failed),
            "failedCount": len(failed),
        }
        if failed:
            metadata["errors"] = [r.to_error_text() for r in failed]
            metadata["hint"] = (
                "Use the commands tool with action 'suggest' to discover the values "
                "this YouTrack instance accepts."
            )
        return success_response(
            f"{message}: {metadata['appliedCount']} of {len(results)} issues succeeded",
            dump(results),
            metadata,
        )
