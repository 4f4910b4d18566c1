import fnmatch
import logging
import re
from pathlib import PurePosixPath
import httpx
from .base import CodeHost
from .diff import parse_diff
from code_critic.errors import UpstreamFetchError
from code_critic.models.code import PullRequestData, PullRequestFile, SourceFile


logger = logging.getLogger(__name__)

RAW_URL = "https://raw.githubusercontent.com"
MAX_PR_FILES = 20

EXCLUDE_PATTERNS = [
    "*.lock",
    "*.min.js",
    "*.min.css",
    "*.generated.*",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
]

LANGUAGE_BY_EXTENSION = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".ts": "typescript",
    ".tsx": "typescript",
    ".py": "python",
    ".rb": "ruby",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".kt": "kotlin",
    ".swift": "swift",
    ".c": "c",
    ".h": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".php": "php",
    ".sh": "bash",
    ".sql": "sql",
    ".html": "html",
    ".css": "css",
    ".scss": "scss",
    ".json": "json",
    ".yml": "yaml",
    ".yaml": "yaml",
    ".md": "markdown",
}


def parse_github_file_url(url: str) -> tuple[str, str, str, str]:
    """Parse GitHub blob URL -> (owner, repo, ref, path)."""
    match = re.match(r"https?://github\.com/([^/]+)/([^/]+)/blob/([^/]+)/([^?#]+)", url or "")
    if not match:
        raise ValueError(f"Invalid GitHub file URL: {url}")
    return match.group(1), match.group(2), match.group(3), match.group(4)


def parse_github_pr_url(url: str) -> tuple[str, str, int]:
    """Parse GitHub PR URL -> (owner, repo, pr_number)."""
    match = re.match(r"https?://github\.com/([^/]+)/([^/]+)/pull/(\d+)", url or "")
    if not match:
        raise ValueError(f"Invalid GitHub PR URL: {url}")
    return match.group(1), match.group(2), int(match.group(3))


def detect_language(filename: str) -> str:
    return LANGUAGE_BY_EXTENSION.get(PurePosixPath(filename).suffix.lower(), "text")


def _is_excluded(file_path: str) -> bool:
    name = PurePosixPath(file_path).name
    return any(
        fnmatch.fnmatch(file_path, pattern) or fnmatch.fnmatch(name, pattern)
        for pattern in EXCLUDE_PATTERNS
    )


class GitHubClient(CodeHost):
    def __init__(self, token: str | None = None, api_url: str = "https://api.github.com"):
        self.token = token
        self.api_url = api_url.rstrip("/")

    def _headers(self, accept: str = "application/vnd.github+json") -> dict[str, str]:
        headers = {"Accept": accept}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def fetch_file(self, url: str) -> SourceFile:
        try:
            owner, repo, ref, path = parse_github_file_url(url)
        except ValueError as e:
            raise UpstreamFetchError(str(e)) from e

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(
                    f"{RAW_URL}/{owner}/{repo}/{ref}/{path}",
                    headers=self._headers(accept="text/plain"),
                    timeout=30.0,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                f"GitHub returned {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamFetchError(f"Could not fetch {url}: {e}") from e

        filename = PurePosixPath(path).name
        logger.info(f"Fetched {owner}/{repo}/{path}@{ref} ({len(response.text)} chars)")
        return SourceFile(
            code=response.text,
            language=detect_language(filename),
            filename=filename,
        )

    async def fetch_pr(self, url: str) -> PullRequestData:
        try:
            owner, repo, pr_number = parse_github_pr_url(url)
        except ValueError as e:
            raise UpstreamFetchError(str(e)) from e

        pr_url = f"{self.api_url}/repos/{owner}/{repo}/pulls/{pr_number}"
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(pr_url, headers=self._headers(), timeout=30.0)
                response.raise_for_status()
                pr_info = response.json()

                response = await client.get(
                    pr_url,
                    headers=self._headers(accept="application/vnd.github.v3.diff"),
                    timeout=30.0,
                )
                response.raise_for_status()
                diff_text = response.text
        except httpx.HTTPStatusError as e:
            raise UpstreamFetchError(
                f"GitHub returned {e.response.status_code} for {url}"
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamFetchError(f"Could not fetch {url}: {e}") from e

        files = []
        for diff_file in parse_diff(diff_text):
            if diff_file.is_deleted or not diff_file.added_code:
                continue
            if _is_excluded(diff_file.path):
                continue
            files.append(PullRequestFile(filename=diff_file.path, code=diff_file.added_code))

        if len(files) > MAX_PR_FILES:
            logger.warning(f"PR #{pr_number} changes {len(files)} files, reviewing first {MAX_PR_FILES}")
            files = files[:MAX_PR_FILES]

        return PullRequestData(
            files=files,
            pr_number=pr_number,
            title=pr_info.get("title", "") or "",
            repo=f"https://github.com/{owner}/{repo}",
        )
