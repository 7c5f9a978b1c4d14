"""FastAPI application — one POST endpoint per analysis kind."""

from __future__ import annotations

import logging
import math
import os
from dataclasses import asdict

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from cqtool.analyzers.registry import get_analyzer
from cqtool.config import get_api_key, load_config
from cqtool.errors import MissingApiKeyError, RateLimitedError
from cqtool.pipeline import AnalysisService
from cqtool.schemas.config import ServiceConfig
from cqtool.schemas.request import AnalysisKind, AnalyzeBody
from cqtool.shared.cache import ResponseCache
from cqtool.shared.groq_client import DryRunClient, GroqClient

logger = logging.getLogger(__name__)

# Per-function paths from the serverless deployment, still served for old clients.
LEGACY_PATHS: dict[AnalysisKind, str] = {
    AnalysisKind.COMPREHENSIVE: "/api/groq-comprehensive-analysis",
    AnalysisKind.SYNTAX: "/api/groq-syntax-checker",
    AnalysisKind.COMPLEXITY: "/api/groq-complexity",
    AnalysisKind.TESTGEN: "/api/groq-test-generator",
    AnalysisKind.IMPROVEMENT: "/api/groq-improvements",
    AnalysisKind.EXECUTION_SIMULATION: "/api/groq-execute-simulator",
    AnalysisKind.JUDGE: "/api/groq-judge",
    AnalysisKind.RECOMMENDATION: "/api/groq-recommendation",
}

# Environment variables read by ``app_from_env`` (set by ``cqt serve``).
CONFIG_ENV = "CQTOOL_CONFIG"
DRY_RUN_ENV = "CQTOOL_DRY_RUN"


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message, **extra})


async def _run_analysis(service: AnalysisService, kind: AnalysisKind, body: AnalyzeBody) -> JSONResponse:
    if not body.code.strip() or not body.language.strip():
        return _error(400, "Code and language are required")

    analyzer = get_analyzer(kind)
    try:
        outcome = await service.analyze(body.to_request(kind))
    except RateLimitedError as exc:
        headers: dict[str, str] = {}
        if exc.retry_after is not None:
            headers["Retry-After"] = str(math.ceil(exc.retry_after))
        return JSONResponse(
            status_code=429,
            content={
                "message": "Rate limit exceeded. Please try again later.",
                "error": "rate_limit_exceeded",
                "retryAfter": exc.retry_after,
            },
            headers=headers,
        )
    except Exception as exc:
        logger.exception("%s failed", analyzer.name)
        return _error(500, f"Failed to generate {analyzer.name.lower()}", error=str(exc))

    return JSONResponse(
        content={
            "analysis": outcome.analysis.model_dump(by_alias=True),
            "fallback": outcome.fallback,
            "cached": outcome.cached,
            "model": outcome.model,
            "usage": asdict(outcome.usage) if outcome.usage else None,
        },
    )


def _make_endpoint(kind: AnalysisKind):
    async def endpoint(body: AnalyzeBody, request: Request) -> JSONResponse:
        return await _run_analysis(request.app.state.service, kind, body)

    endpoint.__name__ = f"analyze_{kind.value.replace('-', '_')}"
    return endpoint


async def preflight() -> Response:
    # Browser preflights (Origin + Access-Control-Request-Method) are answered by CORSMiddleware.
    return Response(status_code=200, headers={"Allow": "POST, OPTIONS"})


def create_app(
    config: ServiceConfig | None = None,
    client: GroqClient | DryRunClient | None = None,
    cache: ResponseCache | None = None,
    *,
    dry_run: bool = False,
) -> FastAPI:
    """Build the application.

    Without an injected ``client`` a Groq client is created from
    ``GROQ_API_KEY``; a missing key raises ``MissingApiKeyError`` here,
    before any request is accepted.
    """
    config = config or ServiceConfig()
    if client is None:
        if dry_run:
            client = DryRunClient()
        else:
            api_key = get_api_key()
            if not api_key:
                raise MissingApiKeyError(
                    "GROQ_API_KEY environment variable is not defined. "
                    "Set it (or use a .env file) before starting the server."
                )
            client = GroqClient.from_config(config, api_key)
    cache = cache if cache is not None else ResponseCache(config.cache_capacity)

    app = FastAPI(
        title="Code Quality Tool API",
        description="LLM-backed code analysis, test generation, judging and review suggestions.",
    )
    app.state.service = AnalysisService(client=client, cache=cache, config=config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=False,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    @app.exception_handler(RequestValidationError)
    async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        errors = exc.errors()
        if any(err.get("type") == "json_invalid" for err in errors):
            return _error(400, "Request body must be valid JSON")
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = first.get("msg", "invalid value")
        return _error(400, f"Invalid request body: {location or 'body'}: {detail}")

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        response = _error(exc.status_code, str(exc.detail))
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    for kind in AnalysisKind:
        endpoint = _make_endpoint(kind)
        for path, public in ((f"/api/analyze/{kind.value}", True), (LEGACY_PATHS[kind], False)):
            app.add_api_route(path, endpoint, methods=["POST"], include_in_schema=public)
            app.add_api_route(path, preflight, methods=["OPTIONS"], include_in_schema=False)

    @app.get("/api/health")
    async def health(request: Request) -> dict:
        service: AnalysisService = request.app.state.service
        return {
            "status": "ok",
            "model": service.config.settings_for(AnalysisKind.COMPREHENSIVE).model,
            "cacheSize": len(service.cache),
            "dryRun": isinstance(service.client, DryRunClient),
        }

    return app


def app_from_env() -> FastAPI:
    """Factory for ``uvicorn --factory``: reads .env, config path and dry-run flag."""
    load_dotenv()
    config = load_config(os.environ.get(CONFIG_ENV) or None)
    dry_run = os.environ.get(DRY_RUN_ENV, "").lower() in ("1", "true", "yes")
    return create_app(config, dry_run=dry_run)
