"""YouTrack FastMCP server instance and tool definitions."""

import logging
from typing import Annotated, Any, Literal

from fastmcp import Context, FastMCP
from pydantic import Field

from youtrack_mcp.servers.dependencies import get_tool_router
from youtrack_mcp.servers.responses import error_response, to_json

logger = logging.getLogger("youtrack-mcp.servers.youtrack")

youtrack_mcp = FastMCP(
    name="YouTrack MCP Service",
    instructions=(
        "Provides tools for working with JetBrains YouTrack: projects, issues, "
        "comments, agile boards, the knowledge base, time tracking and reports. "
        "Every tool returns a JSON envelope with a 'success' flag."
    ),
)

ProjectId = Annotated[
    str | None,
    Field(
        description=(
            "Project short name (e.g. 'PROJ') or internal id (e.g. '0-5'). "
            "Ignored in favour of the configured project when the server runs "
            "in single-project mode."
        ),
        default=None,
    ),
]
IssueId = Annotated[
    str | None,
    Field(description="Readable issue id, e.g. 'PROJ-123'.", default=None),
]
Comment = Annotated[
    str | None,
    Field(description="Optional comment added together with the change.", default=None),
]
YmdDate = Annotated[
    str | None,
    Field(description="Date in YYYY-MM-DD format.", default=None),
]
IdList = Annotated[
    list[str] | None,
    Field(description="Readable issue ids, e.g. ['PROJ-1', 'PROJ-2'].", default=None),
]


async def _dispatch(ctx: Context, tool_name: str, args: dict[str, Any]) -> str:
    try:
        router = await get_tool_router(ctx)
    except ValueError as e:
        logger.error(f"Cannot serve {tool_name}: {e}")
        return to_json(error_response(e, {"tool": tool_name, "action": args.get("action")}))
    return to_json(router.dispatch(tool_name, args))


@youtrack_mcp.tool(
    tags={"youtrack", "read"},
    annotations={"title": "Projects", "readOnlyHint": True},
)
async def projects(
    ctx: Context,
    action: Annotated[
        Literal["list", "get", "validate", "fields", "status"],
        Field(
            description=(
                "'list' all projects, 'get' one project, 'validate' access to it, "
                "list its custom 'fields', or report its issue 'status' counts."
            )
        ),
    ],
    project_id: ProjectId = None,
) -> str:
    """Discover YouTrack projects and their configuration.

    Args:
        ctx: The FastMCP context.
        action: The operation to perform.
        project_id: The project to inspect.

    Returns:
        JSON envelope with the project data.
    """
    return await _dispatch(ctx, "projects", {"action": action, "project_id": project_id})


@youtrack_mcp.tool(
    tags={"youtrack", "write"},
    annotations={"title": "Issues", "destructiveHint": True},
)
async def issues(
    ctx: Context,
    action: Annotated[
        Literal[
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
        ],
        Field(description="The issue operation to perform."),
    ],
    project_id: ProjectId = None,
    issue_id: IssueId = None,
    summary: Annotated[
        str | None, Field(description="Issue summary (title).", default=None)
    ] = None,
    description: Annotated[
        str | None, Field(description="Issue description in Markdown.", default=None)
    ] = None,
    type: Annotated[
        str | None,
        Field(description="Issue type, e.g. 'Task', 'Bug', 'Epic'.", default=None),
    ] = None,
    priority: Annotated[
        str | None,
        Field(description="Priority, e.g. 'Critical'. Defaults to 'Normal' on create.", default=None),
    ] = None,
    state: Annotated[
        str | None, Field(description="Workflow state, e.g. 'In Progress'.", default=None)
    ] = None,
    assignee: Annotated[
        str | None, Field(description="Assignee login.", default=None)
    ] = None,
    subsystem: Annotated[
        str | None, Field(description="Subsystem name (update only).", default=None)
    ] = None,
    estimation: Annotated[
        int | None, Field(description="Estimation in minutes (update only).", default=None)
    ] = None,
    due_date: YmdDate = None,
    tags: Annotated[
        list[str] | None, Field(description="Tag names.", default=None)
    ] = None,
    parent_id: Annotated[
        str | None,
        Field(description="Readable id of the parent issue (create only).", default=None),
    ] = None,
    dev_team: Annotated[
        str | None,
        Field(
            description="Development team; applied only to Task, Feature, Bug and DevOps issues.",
            default=None,
        ),
    ] = None,
    business_proc: Annotated[
        str | None,
        Field(description="Business process value set after submission.", default=None),
    ] = None,
    sorting: Annotated[
        int | None,
        Field(
            description="Sorting rank; applied only to Epic, User Story and Feature issues.",
            default=None,
        ),
    ] = None,
    query: Annotated[
        str | None,
        Field(description="YouTrack search query for query/search/count.", default=None),
    ] = None,
    limit: Annotated[
        int, Field(description="Maximum number of results (1-1000).", default=50)
    ] = 50,
    target_issue_id: Annotated[
        str | None, Field(description="Target issue for 'link'.", default=None)
    ] = None,
    link_type: Annotated[
        str | None,
        Field(description="Link verb, e.g. 'depends on'. Defaults to 'relates to'.", default=None),
    ] = None,
    target_project_id: Annotated[
        str | None, Field(description="Destination project for 'move'.", default=None)
    ] = None,
    user_id: Annotated[
        str | None, Field(description="User login or id for watcher actions.", default=None)
    ] = None,
    field_name: Annotated[
        str | None,
        Field(description="Custom field for 'get_field_values'. Defaults to 'Type'.", default=None),
    ] = None,
    comment: Comment = None,
) -> str:
    """Create, read, update and organize YouTrack issues.

    Creation runs the draft workflow: a draft is created, custom fields are
    applied in one command, the draft is submitted and the business process
    is set last.

    Returns:
        JSON envelope with the issue data.
    """
    return await _dispatch(
        ctx,
        "issues",
        {
            "action": action,
            "project_id": project_id,
            "issue_id": issue_id,
            "summary": summary,
            "description": description,
            "type": type,
            "priority": priority,
            "state": state,
            "assignee": assignee,
            "subsystem": subsystem,
            "estimation": estimation,
            "due_date": due_date,
            "tags": tags,
            "parent_id": parent_id,
            "dev_team": dev_team,
            "business_proc": business_proc,
            "sorting": sorting,
            "query": query,
            "limit": limit,
            "target_issue_id": target_issue_id,
            "link_type": link_type,
            "target_project_id": target_project_id,
            "user_id": user_id,
            "field_name": field_name,
            "comment": comment,
        },
    )


@youtrack_mcp.tool(
    tags={"youtrack", "read"},
    annotations={"title": "Query Issues", "readOnlyHint": True},
)
async def query(
    ctx: Context,
    query: Annotated[
        str,
        Field(
            description=(
                "YouTrack search query, e.g. 'State: Open', 'Assignee: me #Unresolved', "
                "'created: {Last week}'."
            )
        ),
    ],
    project_id: ProjectId = None,
    fields: Annotated[
        str | None, Field(description="Comma-separated API fields to return.", default=None)
    ] = None,
    limit: Annotated[
        int, Field(description="Maximum number of results (1-1000).", default=50)
    ] = 50,
    skip: Annotated[
        int, Field(description="Number of results to skip.", default=0, ge=0)
    ] = 0,
) -> str:
    """Run a YouTrack search query.

    In single-project mode the query is restricted to the configured project.
    """
    return await _dispatch(
        ctx,
        "query",
        {
            "query": query,
            "project_id": project_id,
            "fields": fields,
            "limit": limit,
            "skip": skip,
        },
    )


@youtrack_mcp.tool(
    tags={"youtrack", "write"},
    annotations={"title": "Comments", "destructiveHint": True},
)
async def comments(
    ctx: Context,
    action: Annotated[
        Literal["get", "add", "update", "delete"],
        Field(description="The comment operation to perform."),
    ],
    issue_id: Annotated[str, Field(description="Readable issue id, e.g. 'PROJ-123'.")],
    text: Annotated[
        str | None, Field(description="Comment text in Markdown.", default=None)
    ] = None,
    comment_id: Annotated[
        str | None, Field(description="Comment id for update/delete.", default=None)
    ] = None,
) -> str:
    """Read and manage comments on an issue."""
    return await _dispatch(
        ctx,
        "comments",
        {"action": action, "issue_id": issue_id, "text": text, "comment_id": comment_id},
    )


@youtrack_mcp.tool(
    tags={"youtrack", "write"},
    annotations={"title": "Agile Boards", "destructiveHint": True},
)
async def agile_boards(
    ctx: Context,
    action: Annotated[
        Literal[
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
        ],
        Field(description="The board or sprint operation to perform."),
    ],
    project_id: ProjectId = None,
    board_id: Annotated[
        str | None, Field(description="Agile board id.", default=None)
    ] = None,
    sprint_id: Annotated[
        str | None, Field(description="Sprint id.", default=None)
    ] = None,
    name: Annotated[
        str | None, Field(description="Sprint name.", default=None)
    ] = None,
    start: YmdDate = None,
    finish: YmdDate = None,
    goal: Annotated[
        str | None, Field(description="Sprint goal.", default=None)
    ] = None,
    issue_ids: IdList = None,
) -> str:
    """Work with agile boards and their sprints."""
    return await _dispatch(
        ctx,
        "agile_boards",
        {
            "action": action,
            "project_id": project_id,
            "board_id": board_id,
            "sprint_id": sprint_id,
            "name": name,
            "start": start,
            "finish": finish,
            "goal": goal,
            "issue_ids": issue_ids,
        },
    )


@youtrack_mcp.tool(
    tags={"youtrack", "write"},
    annotations={"title": "Knowledge Base", "destructiveHint": True},
)
async def knowledge_base(
    ctx: Context,
    action: Annotated[
        Literal[
            "list",
            "get",
            "create",
            "update",
            "delete",
            "search",
            "link_sub_article",
            "unlink_parent",
            "get_hierarchy",
        ],
        Field(description="The knowledge base operation to perform."),
    ],
    project_id: ProjectId = None,
    article_id: Annotated[
        str | None, Field(description="Article id, e.g. 'PROJ-A-12'.", default=None)
    ] = None,
    title: Annotated[
        str | None, Field(description="Article title.", default=None)
    ] = None,
    content: Annotated[
        str | None,
        Field(
            description=(
                "Article body in Markdown. Must not start with a '# ' heading; "
                "the title is rendered as the heading."
            ),
            default=None,
        ),
    ] = None,
    summary: Annotated[
        str | None, Field(description="Short article summary.", default=None)
    ] = None,
    tags: Annotated[
        list[str] | None, Field(description="Tag names.", default=None)
    ] = None,
    search_term: Annotated[
        str | None, Field(description="Text to search for.", default=None)
    ] = None,
    parent_article_id: Annotated[
        str | None, Field(description="Parent article for 'link_sub_article'.", default=None)
    ] = None,
    child_article_id: Annotated[
        str | None, Field(description="Child article for 'link_sub_article'.", default=None)
    ] = None,
) -> str:
    """Read and maintain knowledge base articles and their hierarchy."""
    return await _dispatch(
        ctx,
        "knowledge_base",
        {
            "action": action,
            "project_id": project_id,
            "article_id": article_id,
            "title": title,
            "content": content,
            "summary": summary,
            "tags": tags,
            "search_term": search_term,
            "parent_article_id": parent_article_id,
            "child_article_id": child_article_id,
        },
    )


@youtrack_mcp.tool(
    tags={"youtrack", "read"},
    annotations={"title": "Analytics", "readOnlyHint": True},
)
async def analytics(
    ctx: Context,
    report_type: Annotated[
        Literal["project_stats", "time_tracking", "resource_allocation"],
        Field(description="The report to build."),
    ],
    project_id: ProjectId = None,
    start_date: YmdDate = None,
    end_date: YmdDate = None,
    user_id: Annotated[
        str | None, Field(description="Restrict time reports to one user.", default=None)
    ] = None,
) -> str:
    """Build project reports."""
    return await _dispatch(
        ctx,
        "analytics",
        {
            "report_type": report_type,
            "project_id": project_id,
            "start_date": start_date,
            "end_date": end_date,
            "user_id": user_id,
        },
    )


@youtrack_mcp.tool(
    tags={"youtrack", "write"},
    annotations={"title": "Time Tracking", "destructiveHint": True},
)
async def time_tracking(
    ctx: Context,
    action: Annotated[
        Literal[
            "log_time",
            "get_work_items",
            "update_work_item",
            "delete_work_item",
            "time_reports",
        ],
        Field(description="The time tracking operation to perform."),
    ],
    issue_id: IssueId = None,
    project_id: ProjectId = None,
    work_item_id: Annotated[
        str | None, Field(description="Work item id.", default=None)
    ] = None,
    duration: Annotated[
        str | None,
        Field(description="Time spent, e.g. '2h 30m', '1d', or minutes as a number.", default=None),
    ] = None,
    description: Annotated[
        str | None, Field(description="What the time was spent on.", default=None)
    ] = None,
    date: YmdDate = None,
    work_type: Annotated[
        str | None, Field(description="Work item type, e.g. 'Development'.", default=None)
    ] = None,
    start_date: YmdDate = None,
    end_date: YmdDate = None,
    user_id: Annotated[
        str | None, Field(description="Restrict reports to one user.", default=None)
    ] = None,
) -> str:
    """Log and report time spent on issues."""
    return await _dispatch(
        ctx,
        "time_tracking",
        {
            "action": action,
            "issue_id": issue_id,
            "project_id": project_id,
            "work_item_id": work_item_id,
            "duration": duration,
            "description": description,
            "date": date,
            "work_type": work_type,
            "start_date": start_date,
            "end_date": end_date,
            "user_id": user_id,
        },
    )


@youtrack_mcp.tool(
    tags={"youtrack", "read"},
    annotations={"title": "Users", "readOnlyHint": True},
)
async def users(
    ctx: Context,
    action: Annotated[
        Literal["list", "search", "get", "current"],
        Field(description="The user operation to perform."),
    ],
    query: Annotated[
        str | None, Field(description="Login, name or email fragment.", default=None)
    ] = None,
    user_id: Annotated[
        str | None, Field(description="User login or id.", default=None)
    ] = None,
) -> str:
    """Look up YouTrack users."""
    return await _dispatch(
        ctx, "users", {"action": action, "query": query, "user_id": user_id}
    )


@youtrack_mcp.tool(
    tags={"youtrack", "write"},
    annotations={"title": "Commands", "destructiveHint": True},
)
async def commands(
    ctx: Context,
    action: Annotated[
        Literal["apply", "suggest"],
        Field(description="'apply' a command to issues or 'suggest' completions for it."),
    ],
    query: Annotated[
        str, Field(description="Command text, e.g. 'State: In Progress Priority: Major'.")
    ],
    issue_ids: IdList = None,
    comment: Comment = None,
    silent: Annotated[
        bool, Field(description="Suppress notifications.", default=False)
    ] = False,
    caret: Annotated[
        int | None,
        Field(description="Cursor position for 'suggest'. Defaults to the end.", default=None),
    ] = None,
) -> str:
    """Apply YouTrack commands or ask which commands are valid.

    Applying is done one issue at a time; one failing issue does not stop
    the others.
    """
    return await _dispatch(
        ctx,
        "commands",
        {
            "action": action,
            "query": query,
            "issue_ids": issue_ids,
            "comment": comment,
            "silent": silent,
            "caret": caret,
        },
    )
