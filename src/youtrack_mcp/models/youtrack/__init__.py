"""
YouTrack entity models.
"""

from .agile import AgileBoard, Sprint
from .article import Article
from .command import CommandResult
from .comment import YouTrackComment
from .common import YouTrackUser
from .issue import IssueLink, YouTrackIssue
from .project import FieldValue, ProjectField, YouTrackProject
from .work_item import WorkItem

__all__ = [
    "AgileBoard",
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
