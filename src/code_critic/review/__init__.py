from .parser import parse_issues, fallback_issue
from .prompts import build_prompts, Prompts
from .resolver import resolve_input
from .scoring import calculate_score, assign_badge
from .engine import ReviewEngine, ReviewSummary, StoredReview

__all__ = [
    "parse_issues",
    "fallback_issue",
    "build_prompts",
    "Prompts",
    "resolve_input",
    "calculate_score",
    "assign_badge",
    "ReviewEngine",
    "ReviewSummary",
    "StoredReview",
]
