"""Async Groq chat-completions wrapper.

Groq exposes an OpenAI-compatible API, so this talks to it through the
OpenAI SDK with ``base_url`` pointed at Groq.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass
from typing import Any

from openai import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
    InternalServerError,
    RateLimitError,
)

from cqtool.errors import RateLimitedError, UpstreamUnavailableError
from cqtool.schemas.config import GROQ_BASE_URL, ServiceConfig

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 20.0  # seconds, per attempt
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_DELAY = 1.0  # seconds, fixed between attempts


def _parse_retry_after(exc: RateLimitError) -> float | None:
    """Extract the suggested retry delay from a rate limit error.

    Checks the ``Retry-After`` header first, then falls back to parsing
    the "Please try again in Xs / Xms" substring from the error message.
    Returns seconds as a float, or None if not found.
    """
    try:
        headers = exc.response.headers  # type: ignore[union-attr]
        if retry_after := headers.get("retry-after"):
            return float(retry_after)
    except (AttributeError, TypeError, ValueError):
        pass

    m = re.search(r"try again in (\d+(?:\.\d+)?)\s*(ms|s)\b", str(exc), re.IGNORECASE)
    if m:
        value = float(m.group(1))
        return value / 1000 if m.group(2).lower() == "ms" else value

    return None


@dataclass(frozen=True)
class TokenUsage:
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


@dataclass(frozen=True)
class ModelResponse:
    """Raw text returned by the model plus optional token accounting."""

    text: str
    model: str = ""
    usage: TokenUsage | None = None


class GroqClient:
    """Thin async wrapper around the OpenAI SDK, configured for Groq.

    One method, ``complete``: a single system + user exchange. Transient
    failures (connection errors, timeouts, 5xx) are retried with a fixed
    delay; 429 is raised straight away as ``RateLimitedError``; anything
    else ends in ``UpstreamUnavailableError``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        base_url: str = GROQ_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
    ) -> None:
        # Retries are ours, not the SDK's, so 429 is never retried silently.
        self._client = AsyncOpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay

    @classmethod
    def from_config(cls, config: ServiceConfig, api_key: str | None) -> "GroqClient":
        return cls(
            api_key,
            base_url=config.base_url,
            timeout=config.request_timeout,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )

    async def _call_with_retry(self, **kwargs: Any) -> Any:
        """Call chat.completions.create, retrying transient failures."""
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await asyncio.wait_for(
                    self._client.chat.completions.create(**kwargs),
                    timeout=self.timeout,
                )
            except RateLimitError as exc:
                retry_after = _parse_retry_after(exc)
                logger.warning("Rate limited by Groq (retry after %s s): %s", retry_after, exc)
                raise RateLimitedError(str(exc), retry_after=retry_after) from exc
            except (APIConnectionError, APITimeoutError, InternalServerError, asyncio.TimeoutError) as exc:
                if attempt == attempts:
                    raise UpstreamUnavailableError(
                        f"Groq unavailable after {attempts} attempt(s): {exc!r}"
                    ) from exc
                logger.warning(
                    "Transient Groq failure, retrying in %.1fs (attempt %d/%d): %r",
                    self.retry_delay, attempt, attempts, exc,
                )
                await asyncio.sleep(self.retry_delay)
            except APIStatusError as exc:
                logger.error("Groq rejected the request (%s): %s", exc.status_code, exc)
                raise UpstreamUnavailableError(f"Groq returned HTTP {exc.status_code}") from exc

    async def complete(
        self,
        *,
        system: str,
        user_message: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> ModelResponse:
        """Single request/response; returns the assistant text as-is."""
        response = await self._call_with_retry(
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user_message},
            ],
        )
        usage = getattr(response, "usage", None)
        token_usage = None
        if usage:
            token_usage = TokenUsage(
                prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
                total_tokens=getattr(usage, "total_tokens", 0) or 0,
            )
        text = ""
        if response.choices:
            text = response.choices[0].message.content or ""
        logger.debug("Groq %s returned %d chars", model, len(text))
        return ModelResponse(text=text, model=model, usage=token_usage)


# ======================================================================
# Dry-run mock client, zero API calls
# ======================================================================

_DRY_RUN_TEXT: dict[str, str] = {
    "comprehensive": json.dumps({
        "complexity": {"cyclomaticComplexity": 3, "timeComplexity": "O(n)", "spaceComplexity": "O(1)",
                       "maintainabilityIndex": 78, "readabilityScore": 82},
        "quality": {
            "overallScore": 74,
            "codeSmells": [{"type": "Magic number", "severity": "low", "description": "Literal 42 used inline",
                            "line": 3, "suggestion": "Extract a named constant"}],
            "violations": [],
        },
        "security": [],
        "performance": [],
        "recommendations": {"immediate": ["Name the magic number"], "shortTerm": [], "longTerm": []},
        "summary": {"strengths": ["Small and readable"], "weaknesses": ["No input validation"],
                    "priorityLevel": "low", "estimatedFixTime": "15 minutes"},
    }),
    "syntax": "Sure! Here is the analysis:\n```json\n" + json.dumps({
        "errors": [],
        "warnings": [{"line": 1, "column": 1, "message": "Missing module docstring", "severity": "warning",
                      "type": "style", "code": "W001", "quickFix": "Add a docstring"}],
        "suggestions": [],
    }, indent=2) + "\n```",
    "complexity": json.dumps({
        "timeComplexity": {"notation": "O(n)", "bestCase": "O(1)", "averageCase": "O(n)", "worstCase": "O(n)",
                           "explanation": "Single pass over the input", "factors": ["one loop"], "confidence": 85},
        "spaceComplexity": {"notation": "O(1)", "auxiliary": "O(1)", "total": "O(n)",
                            "explanation": "Constant extra memory", "factors": [], "confidence": 80},
        "algorithmType": "Linear scan",
        "dataStructures": ["Array"],
        "optimizationSuggestions": ["None needed for this input size"],
    }),
    "testgen": json.dumps([
        {"input": "2 3", "expectedOutput": "5", "executionDetails": "Happy path",
         "expectedExceptionType": None, "expectedExceptionMessage": None},
        {"input": "", "expectedOutput": "", "executionDetails": "Empty input",
         "expectedExceptionType": "ValueError", "expectedExceptionMessage": "not enough values to unpack"},
    ]),
    "improvement": json.dumps([
        {"type": "medium", "category": "Readability", "title": "Name constants",
         "description": "Replace literal values with named constants", "impact": "Easier maintenance"},
    ]),
    "execution-simulation": "hi",
    "judge": "```json\n" + json.dumps({
        "input": "", "expected_output": "hi", "actual_output": "hi", "actual_output_raw": "hi\n",
        "stderr": "", "exit_code": 0, "runtime_ms": 12, "memory_kb": 8192, "compare_mode": "exact",
        "normalize": {}, "tolerance": None, "status": "Pass", "verdict_message": "Output matches.",
    }, indent=2) + "\n```",
    "recommendation": (
        "1. Validate the inputs before using them.\n"
        "2. Replace the magic number with a named constant\n   so its meaning is clear.\n"
    ),
}


class DryRunClient:
    """Drop-in replacement for GroqClient that makes zero API calls.

    Returns canned text chosen from the system prompt, so the whole
    pipeline (extraction, repair, normalization) still runs.
    """

    def __init__(self) -> None:
        self.calls = 0

    async def complete(
        self,
        *,
        system: str,
        user_message: str,
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> ModelResponse:
        self.calls += 1
        key = self._detect_kind(system)
        logger.info("[dry-run] %s completion (%d chars of prompt)", key, len(user_message))
        return ModelResponse(text=_DRY_RUN_TEXT[key], model=model, usage=TokenUsage())

    @staticmethod
    def _detect_kind(system: str) -> str:
        """Guess the analysis kind from the system prompt."""
        lowered = system.lower()
        if "syntax checker" in lowered:
            return "syntax"
        if "computational complexity" in lowered:
            return "complexity"
        if "test case generation" in lowered:
            return "testgen"
        if "code quality assistant" in lowered:
            return "improvement"
        if "code simulator" in lowered:
            return "execution-simulation"
        if "judge agent" in lowered:
            return "judge"
        if "code reviewer assistant" in lowered:
            return "recommendation"
        return "comprehensive"
