"""
Pydantic models for YouTrack API responses.
"""

from .base import ApiModel
from .youtrack import (
    AgileBoard,
    Article,
    CommandResult,
    FieldValue,
    IssueLink,
    ProjectField,
    Sprint,
    WorkItem,
    YouTrackComment,
    YouTrackIssue,
    YouTrackProject,
    YouTrackUser,
)

__all__ = [
    "AgileBoard",
    "ApiModel",
    "Article",
    "CommandResult",
    "FieldValue",
    "IssueLink",
    "ProjectField",
    "Sprint",
    "WorkItem",
    "YouTrackComment",
    "YouTrackIssue",
    "YouTrackProject",
    "YouTrackUser",
]
