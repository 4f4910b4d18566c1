from .code import CodeUnit, SourceFile, PullRequestFile, PullRequestData
from .request import RoastRequest
from .review import (
    Issue,
    IssueRecord,
    IssueType,
    ReviewRecord,
    ReviewStatus,
    ScoreResult,
    Severity,
    WidgetType,
)

__all__ = [
    "CodeUnit",
    "SourceFile",
    "PullRequestFile",
    "PullRequestData",
    "RoastRequest",
    "Issue",
    "IssueRecord",
    "IssueType",
    "ReviewRecord",
    "ReviewStatus",
    "ScoreResult",
    "Severity",
    "WidgetType",
]
