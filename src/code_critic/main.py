# src/code_critic/main.py
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from code_critic.config import Settings
from code_critic.errors import ConfigurationError, EmptyInputError
from code_critic.models.request import RoastRequest
from code_critic.models.review import IssueRecord, ReviewRecord
from code_critic.platforms.github import GitHubClient
from code_critic.providers.base import LLMProvider
from code_critic.providers.perplexity import PerplexityProvider
from code_critic.review.engine import ReviewEngine
from code_critic.store import ReviewStore, create_store


logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    return Settings()


@lru_cache
def get_store() -> ReviewStore:
    return create_store(get_settings())


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.getLogger().setLevel(get_settings().log_level.upper())
    logger.info("Code Critic starting...")
    yield
    logger.info("Code Critic shutting down...")
    if get_store.cache_info().currsize:
        await get_store().close()


app = FastAPI(title="Code Critic", lifespan=lifespan)


class RoastResponse(BaseModel):
    success: bool
    session_id: str | None = None
    status: str | None = None
    overall_score: int | None = None
    badge: str | None = None
    error: str | None = None


class ReviewDetailResponse(BaseModel):
    success: bool
    review: ReviewRecord
    issues: list[IssueRecord]


def get_provider(settings: Settings) -> LLMProvider | None:
    """Get LLM provider based on settings."""
    if settings.perplexity_api_key:
        return PerplexityProvider(
            api_key=settings.perplexity_api_key,
            model=settings.perplexity_model,
            timeout=settings.review_timeout,
        )
    return None


def get_engine(settings: Settings) -> ReviewEngine:
    return ReviewEngine(
        provider=get_provider(settings),
        host=GitHubClient(token=settings.github_token, api_url=settings.github_api_url),
        store=get_store(),
        timeout=settings.review_timeout,
        log_dir=settings.log_dir,
    )


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=RoastResponse(success=False, error=message).model_dump(exclude_none=True),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
    )
    logger.warning(f"Rejected request to {request.url.path}: {details}")
    return _error(400, f"Invalid request: {details}")


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}


@app.post("/api/roast", response_model=RoastResponse, response_model_exclude_none=True)
async def roast(request: RoastRequest):
    """Review a snippet, a GitHub file or a GitHub pull request."""
    settings = get_settings()

    try:
        engine = get_engine(settings)
        summary = await engine.run_with_timeout(request)
    except EmptyInputError as e:
        return _error(400, str(e))
    except ConfigurationError as e:
        logger.error(f"Roast API misconfigured: {e}")
        return _error(500, str(e))
    except Exception as e:
        logger.exception(f"Roast API Error: {e}")
        return _error(500, str(e))

    return RoastResponse(
        success=True,
        session_id=summary.session_id,
        status=summary.status,
        overall_score=summary.overall_score,
        badge=summary.badge,
    )


@app.get("/api/roast/{session_id}", response_model=ReviewDetailResponse)
async def get_roast(session_id: str):
    """Fetch a stored review and its issues by session id."""
    settings = get_settings()

    try:
        stored = await get_engine(settings).get_review(session_id)
    except Exception as e:
        logger.exception(f"Review lookup failed for {session_id}: {e}")
        return _error(500, str(e))

    if stored is None:
        return _error(404, "Review not found")

    return ReviewDetailResponse(success=True, review=stored.review, issues=stored.issues)
