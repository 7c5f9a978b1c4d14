"""Review recommendations — a numbered plain-text list, no JSON."""

from __future__ import annotations

import re

from cqtool.analyzers.base import BaseAnalyzer
from cqtool.analyzers.recommendation.prompts import NO_SUGGESTIONS, SYSTEM_PROMPT_TEMPLATE
from cqtool.schemas.base import Diagnostic
from cqtool.schemas.recommendation import RecommendationOutput
from cqtool.schemas.request import AnalysisKind, AnalysisRequest

_WRAPPING_FENCE = re.compile(r"\A```[^\n]*\n(.*?)\n?```\Z", re.DOTALL)
_NUMBERED = re.compile(r"^\s*\d+[.)]\s+(.*)$")


def split_suggestions(text: str) -> list[str]:
    """Split a numbered list into items.

    Unnumbered lines continue the previous item. Text with no numbering at
    all gives one item per non-blank line.
    """
    items: list[str] = []
    numbered = False
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue
        match = _NUMBERED.match(line)
        if match:
            numbered = True
            items.append(match.group(1).strip())
        elif numbered and items:
            items[-1] = f"{items[-1]} {stripped}"
        else:
            items.append(stripped)
    return items


class RecommendationAnalyzer(BaseAnalyzer):
    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.RECOMMENDATION

    @property
    def name(self) -> str:
        return "Recommendations"

    @property
    def output_model(self) -> type[RecommendationOutput]:
        return RecommendationOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT_TEMPLATE.format(language=request.language)

    def build_prompt(self, request: AnalysisRequest) -> str:
        return request.source_code

    def parse_output(self, raw_text: str, request: AnalysisRequest | None = None) -> RecommendationOutput:
        text = (raw_text or "").strip()
        match = _WRAPPING_FENCE.match(text)
        if match:
            text = match.group(1).strip()
        if not text:
            return RecommendationOutput(
                text=NO_SUGGESTIONS,
                diagnostics=[Diagnostic(kind="parse-error", message="Model returned no suggestions")],
            )
        return RecommendationOutput(text=text, suggestions=split_suggestions(text))
