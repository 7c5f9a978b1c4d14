"""Exception hierarchy for the analysis service."""

from __future__ import annotations


class CodeQualityError(Exception):
    """Base class for all errors raised by cqtool."""


class MissingApiKeyError(CodeQualityError):
    """Raised at startup when no Groq API key is configured."""


class UpstreamUnavailableError(CodeQualityError):
    """The LLM provider could not produce a response (network, 5xx, timeout)."""


class RateLimitedError(CodeQualityError):
    """The LLM provider answered HTTP 429. Never retried."""

    def __init__(self, message: str, retry_after: float | None = None) -> None:
        super().__init__(message)
        self.retry_after = retry_after
