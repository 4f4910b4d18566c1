# src/code_critic/review/scoring.py
from collections.abc import Iterable
from code_critic.models.review import Issue, IssueType, ScoreResult


DEFAULT_PENALTY = 10

# Logic issues count towards no bucket.
BUCKETS = {
    IssueType.SECURITY: "security",
    IssueType.PERFORMANCE: "performance",
    IssueType.COMPLEXITY: "maintainability",
    IssueType.STYLE: "maintainability",
}

BADGES = [
    (90, "🏆 Code Master"),
    (70, "💪 Getting There"),
    (40, "🔥 Needs Work"),
]
LOWEST_BADGE = "💀 Please Refactor"


def assign_badge(score: int) -> str:
    for threshold, badge in BADGES:
        if score >= threshold:
            return badge
    return LOWEST_BADGE


def calculate_score(issues: Iterable[Issue]) -> ScoreResult:
    """Score security, performance and maintainability out of 100.

    Each bucket loses the impact_score of its issues (10 when unset) and
    bottoms out at 0. The overall score is the rounded mean of the three.
    """
    penalties = {"security": 0, "performance": 0, "maintainability": 0}
    for issue in issues:
        bucket = BUCKETS.get(issue.issue_type)
        if bucket is None:
            continue
        impact = issue.impact_score
        # Only a missing impact takes the default; an explicit 0 costs nothing.
        penalties[bucket] += DEFAULT_PENALTY if impact is None else impact

    security = max(0, 100 - penalties["security"])
    performance = max(0, 100 - penalties["performance"])
    maintainability = max(0, 100 - penalties["maintainability"])
    overall = round((security + performance + maintainability) / 3)

    return ScoreResult(
        security_score=security,
        performance_score=performance,
        maintainability_score=maintainability,
        overall_score=overall,
        badge=assign_badge(overall),
    )
