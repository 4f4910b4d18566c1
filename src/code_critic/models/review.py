from enum import Enum
from typing import Any
from pydantic import BaseModel, Field


class IssueType(str, Enum):
    SECURITY = "security"
    PERFORMANCE = "performance"
    COMPLEXITY = "complexity"
    LOGIC = "logic"
    STYLE = "style"


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WidgetType(str, Enum):
    SECURITY_BOMB = "SecurityBomb"
    SPAGHETTI_METER = "SpaghettiMeter"
    PERFORMANCE_TURTLE = "PerformanceTurtle"
    GENERIC_ROAST = "GenericRoast"


class ReviewStatus(str, Enum):
    ANALYZING = "analyzing"
    COMPLETE = "complete"


class Issue(BaseModel):
    issue_type: IssueType
    severity: Severity
    title: str = ""
    roast: str = ""
    explanation: str = ""
    line_number: int | None = None
    problematic_code: str = ""
    suggested_fix: str = ""
    widget_type: WidgetType = WidgetType.GENERIC_ROAST
    widget_config: dict[str, Any] = Field(default_factory=dict)
    impact_score: int | None = Field(default=None, ge=0, le=100)


class IssueRecord(Issue):
    """An issue as stored, attached to its review."""
    id: int | str | None = None
    review_id: int | str


class ScoreResult(BaseModel):
    security_score: int
    performance_score: int
    maintainability_score: int
    overall_score: int
    badge: str


class ReviewRecord(BaseModel):
    id: int | str
    session_id: str
    code_snippet: str
    repo_url: str = ""
    github_url: str | None = None
    language: str
    roast_level: str
    status: ReviewStatus
    overall_score: int | None = None
    security_score: int | None = None
    performance_score: int | None = None
    maintainability_score: int | None = None
    badge: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
