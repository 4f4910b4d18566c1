# tests/unit/test_engine.py
import asyncio
import json
import pytest
from unittest.mock import AsyncMock
from code_critic.errors import (
    ConfigurationError,
    EmptyInputError,
    ReviewTimeoutError,
    UpstreamServiceError,
)
from code_critic.models.code import PullRequestData, PullRequestFile
from code_critic.models.request import RoastRequest
from code_critic.models.review import ReviewStatus
from code_critic.review.engine import ReviewEngine, generate_session_id
from code_critic.store.sqlite import SQLiteStore


SECURITY_ISSUE = {
    "issue_type": "security",
    "severity": "critical",
    "title": "Eval on user input",
    "roast": "Running eval on user input? Bold strategy.",
    "explanation": "eval executes arbitrary code supplied by the caller.",
    "line_number": 1,
    "problematic_code": "eval(userInput)",
    "suggested_fix": "Use JSON.parse or a whitelist.",
    "widget_type": "SecurityBomb",
    "widget_config": {"severity_level": 9, "pulse_speed": "fast", "color": "#ff0000"},
    "impact_score": 40,
}

SCENARIO_A = {
    "input_type": "code",
    "code": "var x = eval(userInput);",
    "language": "javascript",
    "roastLevel": "savage",
}


@pytest.fixture
def store(tmp_path):
    return SQLiteStore(db_path=str(tmp_path / "reviews.db"))


@pytest.fixture
def mock_host():
    return AsyncMock()


@pytest.fixture
def mock_provider():
    provider = AsyncMock()
    provider.complete.return_value = f"```json\n{json.dumps([SECURITY_ISSUE])}\n```"
    return provider


def test_generate_session_id():
    session_id = generate_session_id()

    assert len(session_id) == 12
    assert int(session_id, 16) >= 0
    assert generate_session_id() != session_id


@pytest.mark.asyncio
async def test_engine_runs_review(store, mock_host, mock_provider):
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)

    summary = await engine.run(RoastRequest(**SCENARIO_A))

    assert summary.status == "complete"
    assert summary.overall_score == 87
    assert summary.badge == "💪 Getting There"

    system_prompt, user_prompt = mock_provider.complete.call_args.args
    assert "Full Gordon Ramsay mode" in system_prompt
    assert "var x = eval(userInput);" in user_prompt

    stored = await engine.get_review(summary.session_id)
    assert stored.review.status == ReviewStatus.COMPLETE
    assert stored.review.code_snippet == "var x = eval(userInput);"
    assert stored.review.roast_level == "savage"
    assert stored.review.security_score == 60
    assert stored.review.performance_score == 100
    assert stored.review.maintainability_score == 100
    assert stored.review.overall_score == 87
    assert len(stored.issues) == 1
    assert stored.issues[0].title == "Eval on user input"
    assert stored.issues[0].review_id == stored.review.id


@pytest.mark.asyncio
async def test_engine_writes_in_order(mock_host, mock_provider):
    store = AsyncMock()
    store.create_review.return_value.id = 7
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)

    await engine.run(RoastRequest(**SCENARIO_A))

    calls = [name for name, _, _ in store.mock_calls if not name.startswith("create_review().")]
    assert calls == ["create_review", "add_issues", "complete_review"]
    assert store.create_review.call_args.kwargs["language"] == "javascript"
    assert store.add_issues.call_args.args[0] == 7


@pytest.mark.asyncio
async def test_engine_persists_fallback_issue(store, mock_host, mock_provider):
    mock_provider.complete.return_value = "I refuse to output JSON."
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)

    summary = await engine.run(RoastRequest(code="x = 1"))

    stored = await engine.get_review(summary.session_id)
    assert summary.overall_score == 100
    assert [issue.title for issue in stored.issues] == ["AI Brain Freeze"]


@pytest.mark.asyncio
async def test_engine_skips_issue_insert_when_none(mock_host, mock_provider):
    mock_provider.complete.return_value = "[]"
    store = AsyncMock()
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)

    summary = await engine.run(RoastRequest(code="x = 1"))

    assert summary.overall_score == 100
    store.add_issues.assert_not_called()
    store.complete_review.assert_called_once()


@pytest.mark.asyncio
async def test_engine_reviews_pull_request(store, mock_host, mock_provider):
    mock_host.fetch_pr.return_value = PullRequestData(
        files=[
            PullRequestFile(filename="api/users.js", code="db.query(sql + id)"),
            PullRequestFile(filename="api/orders.js", code="for (;;) {}"),
        ],
        pr_number=7,
        title="Speed up lookups",
        repo="https://github.com/octo/shop",
    )
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)
    url = "https://github.com/octo/shop/pull/7"

    summary = await engine.run(RoastRequest(input_type="github_pr", github_url=url))

    stored = await engine.get_review(summary.session_id)
    assert stored.review.language == "multi-file"
    assert stored.review.repo_url == "https://github.com/octo/shop"
    assert stored.review.github_url == url
    snippet = stored.review.code_snippet
    assert snippet.index("// File: api/users.js") < snippet.index("// File: api/orders.js")
    assert "Context/File: PR #7: Speed up lookups" in mock_provider.complete.call_args.args[1]


@pytest.mark.asyncio
async def test_engine_without_provider_has_no_side_effects(mock_host):
    store = AsyncMock()
    engine = ReviewEngine(provider=None, host=mock_host, store=store)

    with pytest.raises(ConfigurationError, match="Misconfigured"):
        await engine.run(RoastRequest(code="x = 1"))

    assert store.mock_calls == []
    assert mock_host.mock_calls == []


@pytest.mark.asyncio
async def test_engine_empty_input_creates_no_record(mock_host, mock_provider):
    store = AsyncMock()
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)

    with pytest.raises(EmptyInputError):
        await engine.run(RoastRequest(code=""))

    store.create_review.assert_not_called()
    mock_provider.complete.assert_not_called()


@pytest.mark.asyncio
async def test_engine_failure_leaves_review_analyzing(store, mock_host, mock_provider):
    mock_provider.complete.side_effect = UpstreamServiceError(
        "Perplexity API Error: 503 overloaded", status_code=503, body="overloaded"
    )
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)

    with pytest.raises(UpstreamServiceError):
        await engine.run(RoastRequest(code="x = 1"))

    review = await store.get_review(1)
    assert review.status == ReviewStatus.ANALYZING
    assert review.overall_score is None
    assert await store.list_issues(review.id) == []


@pytest.mark.asyncio
async def test_engine_times_out(store, mock_host):
    async def slow_complete(system_prompt, user_prompt):
        await asyncio.sleep(5)
        return "[]"

    provider = AsyncMock()
    provider.complete.side_effect = slow_complete
    engine = ReviewEngine(provider=provider, host=mock_host, store=store, timeout=0.05)

    with pytest.raises(ReviewTimeoutError, match="timed out"):
        await engine.run_with_timeout(RoastRequest(code="x = 1"))

    review = await store.get_review(1)
    assert review.status == ReviewStatus.ANALYZING


@pytest.mark.asyncio
async def test_engine_saves_prompt_log(store, mock_host, mock_provider, tmp_path):
    log_dir = tmp_path / "logs"
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store, log_dir=str(log_dir))

    summary = await engine.run(RoastRequest(code="SECRET_CODE = 1", language="python"))

    logs = list(log_dir.iterdir())
    assert len(logs) == 1
    assert logs[0].name.endswith(f"_{summary.session_id}.txt")
    content = logs[0].read_text(encoding="utf-8")
    assert "Code Critic" in content
    assert "[code omitted]" in content
    assert "SECRET_CODE" not in content


@pytest.mark.asyncio
async def test_get_review_unknown_session(store, mock_host, mock_provider):
    engine = ReviewEngine(provider=mock_provider, host=mock_host, store=store)

    assert await engine.get_review("doesnotexist") is None
