from pydantic import BaseModel, Field


class CodeUnit(BaseModel):
    """Code to review, normalized from any input type."""
    code: str
    language: str
    filename: str
    origin_repo: str = ""


class SourceFile(BaseModel):
    code: str
    language: str
    filename: str


class PullRequestFile(BaseModel):
    filename: str
    code: str


class PullRequestData(BaseModel):
    files: list[PullRequestFile] = Field(default_factory=list)
    pr_number: int
    title: str
    repo: str
