# src/code_critic/errors.py


class CodeCriticError(Exception):
    """Base class for every failure raised by the review pipeline."""


class ConfigurationError(CodeCriticError):
    """Required configuration (e.g. the model credential) is missing."""


class EmptyInputError(CodeCriticError):
    """The request resolved to no code at all."""


class UpstreamFetchError(CodeCriticError):
    """A referenced GitHub file or pull request could not be retrieved."""


class UpstreamServiceError(CodeCriticError):
    """The language model call returned a non-success response."""

    def __init__(self, message: str, status_code: int | None = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class MalformedModelOutput(CodeCriticError):
    """The model response could not be decoded into an issue list."""


class StoreError(CodeCriticError):
    """A review store read or write failed."""


class ReviewTimeoutError(CodeCriticError):
    """The pipeline exceeded its wall-clock budget."""
