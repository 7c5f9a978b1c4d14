"""Typer CLI — ``cqt serve``, ``cqt analyze`` and ``cqt validate`` commands."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown

from cqtool.config import get_api_key, load_config
from cqtool.errors import CodeQualityError
from cqtool.languages import detect_language, get_language, language_for_path
from cqtool.schemas.request import AnalysisKind, AnalysisRequest, ConfigOverrides, JudgeOptions

# Load .env file from the working directory (if it exists)
load_dotenv()

app = typer.Typer(
    name="cqt",
    help="Code Quality Tool — LLM-backed code analysis as a web service or one-off command.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to cqtool.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file without starting anything."""
    _setup_logging(verbose)

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Base URL:       {cfg.base_url}")
    console.print(f"  Cache capacity: {cfg.cache_capacity}")
    console.print(f"  Timeout:        {cfg.request_timeout}s, {cfg.max_retries} retries")
    console.print(f"  Listen:         {cfg.host}:{cfg.port}")
    console.print("  Kinds:")
    for kind, settings in cfg.kinds.items():
        console.print(
            f"    - {kind.value}: {settings.model} "
            f"(temperature {settings.temperature}, max tokens {settings.max_tokens})"
        )


@app.command()
def serve(
    config: Path = typer.Option(None, "--config", "-c", help="Path to cqtool.yml"),
    host: str = typer.Option(None, "--host", help="Override the configured host."),
    port: int = typer.Option(None, "--port", "-p", help="Override the configured port."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Serve canned responses (no API calls)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from cqtool.server.app import CONFIG_ENV, DRY_RUN_ENV

    _setup_logging(verbose)

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    if not dry_run and not get_api_key():
        console.print("[red]GROQ_API_KEY is not set.[/] Export it or add it to .env (or use --dry-run).")
        raise typer.Exit(code=1)

    # The app factory runs in uvicorn's process and reads these back.
    if config:
        os.environ[CONFIG_ENV] = str(config)
    if dry_run:
        os.environ[DRY_RUN_ENV] = "1"
        console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")

    uvicorn.run(
        "cqtool.server.app:app_from_env",
        factory=True,
        host=host or cfg.host,
        port=port or cfg.port,
        log_level="debug" if verbose else "info",
    )


@app.command()
def analyze(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Source file to analyze."),
    kind: AnalysisKind = typer.Option(AnalysisKind.COMPREHENSIVE, "--kind", "-k", help="Which analysis to run."),
    language: str = typer.Option(None, "--language", "-l", help="Language id; inferred from the file if omitted."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to cqtool.yml"),
    stdin: str = typer.Option("", "--input", "-i", help="Program input for execution-simulation and judge."),
    expected: str = typer.Option("", "--expected", "-e", help="Expected program output (judge)."),
    compare_mode: str = typer.Option("exact", "--compare-mode", help="Judge comparison mode."),
    tolerance: float = typer.Option(None, "--tolerance", help="Numeric tolerance for float_tolerance mode."),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope instead of Markdown."),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned responses (no API calls)."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run one analysis on a local file and print the result."""
    _setup_logging(verbose)

    try:
        cfg = load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {exc}")
        raise typer.Exit(code=1)

    code = file.read_text()
    language = _resolve_language(file, code, language)

    try:
        judge = JudgeOptions(compare_mode=compare_mode, tolerance=tolerance)
    except ValidationError as exc:
        console.print(f"[red]Invalid judge options:[/] {exc.errors()[0]['msg']}")
        raise typer.Exit(code=1)

    if dry_run:
        console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")
    elif not get_api_key():
        console.print("[red]GROQ_API_KEY is not set.[/] Export it or add it to .env (or use --dry-run).")
        raise typer.Exit(code=1)

    request = AnalysisRequest(
        source_code=code,
        language=language,
        kind=kind,
        config=ConfigOverrides(),
        stdin=stdin,
        expected_output=expected,
        judge=judge,
    )

    try:
        outcome = asyncio.run(_run_analysis(cfg, request, dry_run=dry_run))
    except CodeQualityError as exc:
        console.print(f"[red]Analysis failed:[/] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        import json

        typer.echo(json.dumps({
            "analysis": outcome.analysis.model_dump(by_alias=True),
            "fallback": outcome.fallback,
            "cached": outcome.cached,
            "model": outcome.model,
        }, indent=2))
        return

    from cqtool.output.markdown import render_markdown

    console.print(Markdown(render_markdown(kind, outcome.analysis, title=f"{file.name} — {kind.value}")))
    if outcome.fallback:
        console.print("\n[yellow]Result is a fallback; see the diagnostics above.[/]")


def _resolve_language(file: Path, code: str, language: str | None) -> str:
    """--language if given, else the file name, else the code itself."""
    if language:
        if get_language(language) is None:
            console.print(f"[yellow]Unknown language id {language!r}; generic analysis hints will be used.[/]")
        return language

    detected = language_for_path(file)
    if detected is not None:
        return detected.id

    detection = detect_language(code)
    if detection.language is None:
        console.print(f"[red]Cannot infer the language of {file.name}.[/] Pass --language.")
        raise typer.Exit(code=1)
    console.print(
        f"[dim]Detected {detection.language.name} from the code ({detection.confidence}% confidence).[/]"
    )
    return detection.language.id


async def _run_analysis(cfg: "ServiceConfig", request: AnalysisRequest, *, dry_run: bool = False):  # noqa: F821
    """Run the pipeline once with a fresh cache."""
    from cqtool.pipeline import AnalysisService
    from cqtool.shared.cache import ResponseCache

    if dry_run:
        from cqtool.shared.groq_client import DryRunClient
        client = DryRunClient()
    else:
        from cqtool.shared.groq_client import GroqClient
        client = GroqClient.from_config(cfg, get_api_key())

    service = AnalysisService(client=client, cache=ResponseCache(cfg.cache_capacity), config=cfg)
    return await service.analyze(request)
