# src/code_critic/review/resolver.py
import logging
from code_critic.errors import EmptyInputError
from code_critic.models.code import CodeUnit
from code_critic.models.request import RoastRequest
from code_critic.platforms.base import CodeHost


logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "javascript"
DEFAULT_FILENAME = "snippet.js"
MULTI_FILE_LANGUAGE = "multi-file"


async def resolve_input(request: RoastRequest, host: CodeHost) -> CodeUnit:
    """Turn pasted code, a GitHub file or a GitHub PR into one CodeUnit."""
    if request.input_type == "github_file":
        file_data = await host.fetch_file(request.github_url)
        unit = CodeUnit(
            code=file_data.code,
            language=file_data.language,
            filename=file_data.filename,
        )
    elif request.input_type == "github_pr":
        pr_data = await host.fetch_pr(request.github_url)
        unit = CodeUnit(
            code="\n\n".join(f"// File: {f.filename}\n{f.code}" for f in pr_data.files),
            language=MULTI_FILE_LANGUAGE,
            filename=f"PR #{pr_data.pr_number}: {pr_data.title}",
            origin_repo=pr_data.repo,
        )
    else:
        if request.input_type != "code":
            logger.info(f"Unknown input_type {request.input_type!r}, treating as code")
        unit = CodeUnit(
            code=request.code or "",
            language=request.language or DEFAULT_LANGUAGE,
            filename=DEFAULT_FILENAME,
        )

    if not unit.code:
        raise EmptyInputError("No code to analyze found.")
    return unit
