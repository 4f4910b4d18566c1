"""Review store interface.

The engine only talks to ReviewStore, so the Supabase and SQLite backends
are interchangeable. Writes are independent: there is no transaction
spanning the initial insert and the final update of a review.
"""

from abc import ABC, abstractmethod
from code_critic.models.review import Issue, IssueRecord, ReviewRecord, ScoreResult


class ReviewStore(ABC):
    @abstractmethod
    async def create_review(
        self,
        *,
        session_id: str,
        code_snippet: str,
        repo_url: str,
        github_url: str | None,
        language: str,
        roast_level: str,
    ) -> ReviewRecord:
        """Insert a review in status "analyzing" and return it with its id."""

    @abstractmethod
    async def add_issues(self, review_id: int | str, issues: list[Issue]) -> None:
        """Insert all issues of a review in one batch."""

    @abstractmethod
    async def complete_review(self, review_id: int | str, scores: ScoreResult) -> None:
        """Mark a review "complete" and store its scores and badge."""

    @abstractmethod
    async def get_review(self, review_id: int | str) -> ReviewRecord | None:
        pass

    @abstractmethod
    async def get_review_by_session(self, session_id: str) -> ReviewRecord | None:
        pass

    @abstractmethod
    async def list_issues(self, review_id: int | str) -> list[IssueRecord]:
        pass

    async def close(self) -> None:
        """Release connections or file handles. No-op by default."""


def issue_row(review_id: int | str, issue: Issue) -> dict:
    """Flatten an issue into a code_issues row."""
    row = issue.model_dump(mode="json")
    row["review_id"] = review_id
    if row["impact_score"] is None:
        row["impact_score"] = 0
    return row
