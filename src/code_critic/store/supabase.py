# src/code_critic/store/supabase.py
import logging
from typing import Any
import httpx
from .base import ReviewStore, issue_row
from code_critic.errors import ConfigurationError, StoreError
from code_critic.models.review import (
    Issue,
    IssueRecord,
    ReviewRecord,
    ReviewStatus,
    ScoreResult,
)


logger = logging.getLogger(__name__)

REVIEWS_TABLE = "code_reviews"
ISSUES_TABLE = "code_issues"


class SupabaseStore(ReviewStore):
    """Stores reviews in Supabase through its PostgREST endpoint."""

    def __init__(self, url: str | None, key: str | None):
        self.url = url.rstrip("/") if url else None
        self.key = key

    def _headers(self, prefer: str = "return=representation") -> dict[str, str]:
        return {
            "apikey": self.key,
            "Authorization": f"Bearer {self.key}",
            "Content-Type": "application/json",
            "Prefer": prefer,
        }

    async def _request(
        self,
        method: str,
        table: str,
        prefer: str = "return=representation",
        **kwargs: Any,
    ) -> Any:
        if not self.url or not self.key:
            raise ConfigurationError("Misconfigured: Missing Supabase URL or key")

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    method,
                    f"{self.url}/rest/v1/{table}",
                    headers=self._headers(prefer),
                    timeout=30.0,
                    **kwargs,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise StoreError(
                f"Supabase {method} {table} failed: {e.response.status_code} {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            raise StoreError(f"Supabase {method} {table} failed: {e}") from e

        if prefer == "return=minimal" or not response.content:
            return None
        return response.json()

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
        rows = await self._request(
            "POST",
            REVIEWS_TABLE,
            json={
                "session_id": session_id,
                "code_snippet": code_snippet,
                "repo_url": repo_url,
                "github_url": github_url,
                "language": language,
                "roast_level": roast_level,
                "status": ReviewStatus.ANALYZING.value,
            },
        )
        if not rows:
            raise StoreError(f"Supabase returned no row for review {session_id}")
        return ReviewRecord.model_validate(rows[0])

    async def add_issues(self, review_id: int | str, issues: list[Issue]) -> None:
        await self._request(
            "POST",
            ISSUES_TABLE,
            prefer="return=minimal",
            json=[issue_row(review_id, issue) for issue in issues],
        )

    async def complete_review(self, review_id: int | str, scores: ScoreResult) -> None:
        await self._request(
            "PATCH",
            REVIEWS_TABLE,
            prefer="return=minimal",
            params={"id": f"eq.{review_id}"},
            json={"status": ReviewStatus.COMPLETE.value, **scores.model_dump()},
        )

    async def _select_review(self, column: str, value: int | str) -> ReviewRecord | None:
        # Session ids can collide; the newest review wins.
        rows = await self._request(
            "GET",
            REVIEWS_TABLE,
            params={column: f"eq.{value}", "select": "*", "order": "id.desc", "limit": 1},
        )
        if not rows:
            return None
        return ReviewRecord.model_validate(rows[0])

    async def get_review(self, review_id: int | str) -> ReviewRecord | None:
        return await self._select_review("id", review_id)

    async def get_review_by_session(self, session_id: str) -> ReviewRecord | None:
        return await self._select_review("session_id", session_id)

    async def list_issues(self, review_id: int | str) -> list[IssueRecord]:
        rows = await self._request(
            "GET",
            ISSUES_TABLE,
            params={"review_id": f"eq.{review_id}", "select": "*", "order": "id.asc"},
        )
        return [IssueRecord.model_validate(row) for row in rows or []]
