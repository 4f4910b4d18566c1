# src/code_critic/review/engine.py
import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from code_critic.errors import ConfigurationError, ReviewTimeoutError
from code_critic.models.request import RoastRequest
from code_critic.models.review import IssueRecord, ReviewRecord, ReviewStatus
from code_critic.platforms.base import CodeHost
from code_critic.providers.base import LLMProvider
from code_critic.store.base import ReviewStore
from .parser import parse_issues
from .prompts import Prompts, build_prompts
from .resolver import resolve_input
from .scoring import calculate_score


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0


@dataclass
class ReviewSummary:
    """Result returned to the caller once a review is complete."""
    session_id: str
    status: str
    overall_score: int
    badge: str


@dataclass
class StoredReview:
    review: ReviewRecord
    issues: list[IssueRecord] = field(default_factory=list)


def generate_session_id() -> str:
    """Short lookup token for a review. Not guaranteed to be unique."""
    return uuid.uuid4().hex[:12]


class ReviewEngine:
    def __init__(
        self,
        provider: LLMProvider | None,
        host: CodeHost,
        store: ReviewStore,
        timeout: float = DEFAULT_TIMEOUT,
        log_dir: str | None = None,
    ):
        self.provider = provider
        self.host = host
        self.store = store
        self.timeout = timeout
        self.log_dir = Path(log_dir) if log_dir else None
        if self.log_dir:
            self.log_dir.mkdir(parents=True, exist_ok=True)

    async def run(self, request: RoastRequest) -> ReviewSummary:
        """Resolve, roast, score and persist one review."""
        if self.provider is None:
            raise ConfigurationError("Misconfigured: Missing Perplexity API Key")

        unit = await resolve_input(request, self.host)

        session_id = generate_session_id()
        review = await self.store.create_review(
            session_id=session_id,
            code_snippet=unit.code,
            repo_url=unit.origin_repo,
            github_url=request.github_url,
            language=unit.language,
            roast_level=request.roast_level,
        )
        logger.info(f"Review {session_id} created ({unit.language}, {len(unit.code)} chars)")

        prompts = build_prompts(unit, request.roast_level)
        self._save_prompt_log(session_id, prompts)

        raw_text = await self.provider.complete(prompts.system, prompts.user)
        issues = parse_issues(raw_text)
        scores = calculate_score(issues)

        if issues:
            await self.store.add_issues(review.id, issues)
        await self.store.complete_review(review.id, scores)

        logger.info(
            f"Review {session_id} complete: {len(issues)} issues, "
            f"overall={scores.overall_score} ({scores.badge})"
        )
        return ReviewSummary(
            session_id=session_id,
            status=ReviewStatus.COMPLETE.value,
            overall_score=scores.overall_score,
            badge=scores.badge,
        )

    async def run_with_timeout(self, request: RoastRequest) -> ReviewSummary:
        """Run a review bounded by the engine's wall-clock budget.

        On timeout the review task is cancelled; store writes that already
        happened are kept.
        """
        try:
            return await asyncio.wait_for(self.run(request), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            raise ReviewTimeoutError(f"Review timed out after {self.timeout:g}s") from e

    async def get_review(self, session_id: str) -> StoredReview | None:
        """Load a review and its issues by session id."""
        review = await self.store.get_review_by_session(session_id)
        if review is None:
            return None
        issues = await self.store.list_issues(review.id)
        return StoredReview(review=review, issues=issues)

    def _save_prompt_log(self, session_id: str, prompts: Prompts) -> None:
        """Save the prompts of one review, without the code body."""
        if not self.log_dir:
            return
        try:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_path = self.log_dir / f"{timestamp}_{session_id}.txt"

            user = prompts.user.split("```", 1)[0] + "[code omitted]"
            header = f"Review: session={session_id}\nTime: {timestamp}\n\n"
            log_path.write_text(
                f"{header}SYSTEM:\n{prompts.system}\n\nUSER:\n{user}\n",
                encoding="utf-8",
            )
            logger.info(f"Prompt log saved: {log_path}")
        except OSError as e:
            logger.warning(f"Failed to save prompt log: {e}")
