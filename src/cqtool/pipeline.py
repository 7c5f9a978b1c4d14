"""Analysis service — cache, model call, parsing and fallbacks for one request."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cqtool.analyzers.registry import get_analyzer
from cqtool.errors import UpstreamUnavailableError
from cqtool.schemas.base import AnalysisOutput
from cqtool.schemas.config import ServiceConfig
from cqtool.schemas.request import AnalysisKind, AnalysisRequest
from cqtool.shared.cache import ResponseCache, make_cache_key
from cqtool.shared.groq_client import DryRunClient, GroqClient, TokenUsage

logger = logging.getLogger(__name__)


def _cache_extra(request: AnalysisRequest) -> str:
    """Request inputs besides the code that change the model's answer."""
    extra = f"{request.stdin}\x00{request.config.system_prompt or ''}"
    if request.kind is AnalysisKind.JUDGE:
        extra += f"\x00{request.expected_output}\x00{request.judge.model_dump_json()}"
    return extra


@dataclass
class AnalysisOutcome:
    """What the HTTP layer serializes for a finished request."""

    analysis: AnalysisOutput
    fallback: bool
    cached: bool
    model: str
    usage: TokenUsage | None = None


class AnalysisService:
    """Runs the pipeline for one ``AnalysisRequest`` at a time.

    ``RateLimitedError`` from the client propagates so the caller can tell
    the user to back off. Every other upstream failure, and any malformed
    model output, ends in a schema-valid result with ``fallback=True``.
    """

    def __init__(
        self,
        client: GroqClient | DryRunClient,
        cache: ResponseCache,
        config: ServiceConfig | None = None,
    ) -> None:
        self.client = client
        self.cache = cache
        self.config = config or ServiceConfig()

    async def analyze(self, request: AnalysisRequest) -> AnalysisOutcome:
        analyzer = get_analyzer(request.kind)
        settings = self.config.settings_for(request.kind)
        overrides = request.config
        model = overrides.model or settings.model
        temperature = settings.temperature if overrides.temperature is None else overrides.temperature
        max_tokens = overrides.max_tokens or settings.max_tokens

        key = make_cache_key(
            model,
            request.kind.value,
            request.language,
            request.source_code,
            extra=_cache_extra(request),
        )
        response = self.cache.get(key)
        cached = response is not None

        if response is None:
            try:
                response = await self.client.complete(
                    system=analyzer.system_prompt_for(request),
                    user_message=analyzer.build_prompt(request),
                    model=model,
                    temperature=temperature,
                    max_tokens=max_tokens,
                )
            except UpstreamUnavailableError as exc:
                logger.warning("%s: using static fallback: %s", analyzer.name, exc)
                return AnalysisOutcome(
                    analysis=analyzer.static_fallback(request, f"Analysis unavailable: {exc}"),
                    fallback=True,
                    cached=False,
                    model=model,
                )

        analysis = analyzer.parse_output(response.text, request)
        degraded = bool(analysis.diagnostics)
        if not cached and not degraded:
            # Unparseable answers are not cached so a retry gets a fresh attempt.
            self.cache.put(key, response)

        logger.info(
            "%s finished (model=%s, cached=%s, fallback=%s)", analyzer.name, model, cached, degraded,
        )
        return AnalysisOutcome(
            analysis=analysis,
            fallback=degraded,
            cached=cached,
            model=response.model or model,
            usage=response.usage,
        )
