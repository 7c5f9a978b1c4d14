"""Base analyzer ABC — defines the pattern every analysis kind follows."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from cqtool.parsing.extractor import Parsed, Shape, extract
from cqtool.parsing.repair import excerpt, recover
from cqtool.schemas.base import AnalysisOutput, Diagnostic
from cqtool.schemas.request import AnalysisKind, AnalysisRequest

logger = logging.getLogger(__name__)

GENERIC_HINT = "General syntax, correctness and style issues for this language."


def language_hint(hints: dict[str, str], language: str) -> str:
    """Look up the guidance block for ``language``; unknown languages get the generic one."""
    return hints.get(language.strip().lower(), GENERIC_HINT)


def fence(code: str, language: str) -> str:
    """Wrap source code in a fenced block tagged with its language."""
    return f"```{language.strip().lower()}\n{code}\n```"


class BaseAnalyzer(ABC):
    """Abstract base class for all analysis kinds.

    Subclasses implement:
    - ``kind`` / ``name`` — identity for routing and logs
    - ``output_model`` — the pydantic StructuredAnalysis class
    - ``get_system_prompt()`` — the default system prompt
    - ``build_prompt(request)`` — the user message (schema, hints, code)

    and may override ``expect`` (``"array"`` for list-shaped answers),
    ``to_payload`` and ``static_fallback``.
    """

    expect: Shape = "object"

    @property
    @abstractmethod
    def kind(self) -> AnalysisKind:
        """Which analysis this is."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for logs and the CLI."""

    @property
    @abstractmethod
    def output_model(self) -> type[AnalysisOutput]:
        """The StructuredAnalysis model this analyzer produces."""

    @abstractmethod
    def get_system_prompt(self, request: AnalysisRequest) -> str:
        """Return the default system prompt."""

    @abstractmethod
    def build_prompt(self, request: AnalysisRequest) -> str:
        """Return the user message. Pure; never fails."""

    def system_prompt_for(self, request: AnalysisRequest) -> str:
        """The request's override if it has one, else the default."""
        return request.config.system_prompt or self.get_system_prompt(request)

    def to_payload(self, value: Any) -> Any:
        """Shape the decoded JSON into what ``output_model`` validates."""
        return value

    def parse_output(self, raw_text: str, request: AnalysisRequest | None = None) -> AnalysisOutput:
        """Turn raw model text into a StructuredAnalysis. Never raises.

        1. Extract the JSON payload (direct, fenced, bracket span)
        2. If that fails, give it one repair pass
        3. Normalize through the lenient output model
        4. Anything still broken becomes a fallback with a diagnostic
        """
        result = recover(extract(raw_text, expect=self.expect))
        if not isinstance(result, Parsed):
            logger.warning("%s: unparseable model output (%s)", self.name, result.reason)
            return self.fallback(f"Could not parse model output: {result.reason}", raw_text)

        try:
            return self.output_model.model_validate(self.to_payload(result.value))
        except ValidationError as exc:
            logger.warning("%s: output did not fit schema: %s", self.name, exc.errors()[:3])
            return self.fallback(
                f"Model output did not match the expected schema ({exc.error_count()} errors)",
                raw_text,
                kind="schema-error",
            )

    def fallback(self, reason: str, raw_text: str = "", *, kind: str = "parse-error") -> AnalysisOutput:
        """A schema-valid result carrying one diagnostic entry."""
        message = reason
        if raw_text:
            message = f"{reason}. Model output excerpt: {excerpt(raw_text)}"
        return self.output_model(diagnostics=[Diagnostic(kind=kind, message=message)])

    def static_fallback(self, request: AnalysisRequest, reason: str) -> AnalysisOutput:
        """Result used when the model could not be reached at all.

        Neutral defaults unless a subclass can do better locally.
        """
        return self.output_model(diagnostics=[Diagnostic(kind="upstream-error", message=reason)])
