"""Synthesis of YouTrack command strings.

Field changes are first expressed as a list of typed tokens and only turned
into command text at the boundary, via :func:`serialize_commands`. The
synthesis functions are pure: the same input always yields the same tokens in
the same order.
"""

from dataclasses import dataclass, field

DEFAULT_PRIORITY = "Normal"
DEFAULT_SORTING = 0
DEFAULT_LINK_TYPE = "relates to"

# Types whose workflow accepts a Sorting value
SORTING_ELIGIBLE_TYPES = frozenset({"epic", "user story", "feature"})
# Types whose workflow accepts a Dev_Team value
DEV_TEAM_ELIGIBLE_TYPES = frozenset({"task", "feature", "bug", "devops"})

BUSINESS_PROCESS_FIELD = "Business_proc"


def query_value(value: str) -> str:
    """Wrap a value in braces when it contains spaces."""
    return f"{{{value}}}" if " " in value else value


@dataclass(frozen=True)
class FieldAssignment:
    """``<field>: <value>`` or, for duration-style fields, ``<field> <value>``."""

    field: str
    value: str
    separator: str = ": "

    def to_text(self) -> str:
        return f"{self.field}{self.separator}{self.value}"


@dataclass(frozen=True)
class LinkClause:
    """``<verb> <target>``, e.g. ``subtask of PROJ-12``."""

    verb: str
    target: str

    def to_text(self) -> str:
        return f"{self.verb} {self.target}"


Command = FieldAssignment | LinkClause


@dataclass
class CreateIssueRequest:
    """Parameters accepted when creating an issue."""

    summary: str
    description: str | None = None
    type: str | None = None
    priority: str | None = None
    assignee: str | None = None
    due_date: str | None = None
    tags: list[str] = field(default_factory=list)
    parent_id: str | None = None
    dev_team: str | None = None
    business_proc: str | None = None
    sorting: int | None = None


@dataclass
class IssueUpdate:
    """Fields a caller may change on an existing issue.

    Only fields that are not None produce a change.
    """

    summary: str | None = None
    description: str | None = None
    state: str | None = None
    priority: str | None = None
    type: str | None = None
    assignee: str | None = None
    subsystem: str | None = None
    estimation: int | None = None  # minutes
    tags: list[str] | None = None

    def basic_fields(self) -> dict[str, str]:
        fields: dict[str, str] = {}
        if self.summary:
            fields["summary"] = self.summary
        if self.description:
            fields["description"] = self.description
        return fields


def _normalized_type(issue_type: str | None) -> str:
    return (issue_type or "").strip().lower()


def accepts_sorting(issue_type: str | None) -> bool:
    """Sorting is allowed for epics, user stories, features, or an unset type."""
    normalized = _normalized_type(issue_type)
    return not normalized or normalized in SORTING_ELIGIBLE_TYPES


def accepts_dev_team(issue_type: str | None) -> bool:
    return _normalized_type(issue_type) in DEV_TEAM_ELIGIBLE_TYPES


def format_estimation(minutes: int) -> str:
    """Render a minute count as YouTrack duration text.

    >>> format_estimation(90)
    '1h 30m'
    >>> format_estimation(0)
    '0m'
    """
    hours, remainder = divmod(max(int(minutes), 0), 60)
    parts = []
    if hours:
        parts.append(f"{hours}h")
    if remainder:
        parts.append(f"{remainder}m")
    return " ".join(parts) if parts else "0m"


def synthesize_creation_commands(request: CreateIssueRequest) -> list[Command]:
    """Build the field commands applied to a fresh draft.

    Order: parent link, type, priority (defaulted), sorting, dev team,
    assignee, due date. The business process is never included; the backend
    command grammar does not accept it.
    """
    commands: list[Command] = []

    if request.parent_id:
        commands.append(LinkClause("subtask of", request.parent_id))

    if request.type:
        commands.append(FieldAssignment("Type", request.type))

    commands.append(FieldAssignment("Priority", request.priority or DEFAULT_PRIORITY))

    if accepts_sorting(request.type):
        sorting = request.sorting if request.sorting is not None else DEFAULT_SORTING
        commands.append(FieldAssignment("Sorting", str(sorting)))

    if request.dev_team and accepts_dev_team(request.type):
        commands.append(FieldAssignment("Dev_Team", request.dev_team))

    if request.assignee:
        commands.append(FieldAssignment("Assignee", request.assignee))

    if request.due_date:
        commands.append(FieldAssignment("Due Date", request.due_date))

    return commands


def synthesize_update_commands(update: IssueUpdate) -> list[Command]:
    """Build one command per supplied custom field, without defaults."""
    commands: list[Command] = []

    if update.state:
        commands.append(FieldAssignment("State", update.state))
    if update.priority:
        commands.append(FieldAssignment("Priority", update.priority))
    if update.type:
        commands.append(FieldAssignment("Type", update.type))
    if update.assignee:
        commands.append(FieldAssignment("Assignee", update.assignee))
    if update.subsystem:
        commands.append(FieldAssignment("Subsystem", update.subsystem))
    if update.estimation is not None:
        commands.append(
            FieldAssignment("Estimation", format_estimation(update.estimation), " ")
        )

    return commands


def business_process_command(value: str) -> FieldAssignment:
    return FieldAssignment(BUSINESS_PROCESS_FIELD, value, " ")


def state_command(state: str) -> FieldAssignment:
    return FieldAssignment("State", state)


def link_command(target_issue_id: str, link_type: str | None = None) -> LinkClause:
    """Link phrase plus target, with whitespace collapsed."""
    verb = " ".join((link_type or DEFAULT_LINK_TYPE).split()) or DEFAULT_LINK_TYPE
    return LinkClause(verb, target_issue_id.strip())


def sprint_command(board_name: str, sprint_name: str, remove: bool = False) -> LinkClause:
    """``add Board <board> <sprint>`` or ``remove Board <board> <sprint>``.

    Multi-word names are braced so the command parser keeps them whole.
    """
    verb = "remove Board" if remove else "add Board"
    return LinkClause(verb, f"{query_value(board_name)} {query_value(sprint_name)}")


def serialize_commands(commands: list[Command]) -> str:
    """Join commands into the single-line text the command endpoint expects."""
    return " ".join(command.to_text() for command in commands)
