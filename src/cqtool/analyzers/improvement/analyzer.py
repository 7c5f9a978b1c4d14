"""Improvement suggestions — prioritized review comments."""

from __future__ import annotations

from cqtool.analyzers.base import BaseAnalyzer, fence, language_hint
from cqtool.analyzers.improvement.prompts import LANGUAGE_HINTS, PROMPT_TEMPLATE, SYSTEM_PROMPT
from cqtool.schemas.improvement import ImprovementOutput
from cqtool.schemas.request import AnalysisKind, AnalysisRequest

_SEVERITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}
SUGGESTION_COUNT = 5


class ImprovementAnalyzer(BaseAnalyzer):
    expect = "array"

    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.IMPROVEMENT

    @property
    def name(self) -> str:
        return "Improvement Suggestions"

    @property
    def output_model(self) -> type[ImprovementOutput]:
        return ImprovementOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT

    def build_prompt(self, request: AnalysisRequest) -> str:
        return PROMPT_TEMPLATE.format(
            language=request.language,
            count=SUGGESTION_COUNT,
            hint=language_hint(LANGUAGE_HINTS, request.language),
            code=fence(request.source_code, request.language),
        )

    def to_payload(self, value: object) -> object:
        if isinstance(value, list):
            return {"improvements": value}
        return value

    def parse_output(self, raw_text: str, request: AnalysisRequest | None = None) -> ImprovementOutput:
        result = super().parse_output(raw_text, request)
        # Stable sort: most severe first, model order otherwise.
        result.improvements.sort(key=lambda imp: _SEVERITY_ORDER.get(imp.type.lower(), len(_SEVERITY_ORDER)))
        return result
