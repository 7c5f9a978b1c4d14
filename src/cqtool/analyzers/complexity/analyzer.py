"""Complexity analysis — big-O for time and space, seeded with static metrics."""

from __future__ import annotations

from cqtool.analyzers.base import BaseAnalyzer, fence, language_hint
from cqtool.analyzers.complexity.prompts import LANGUAGE_HINTS, OUTPUT_SCHEMA, PROMPT_TEMPLATE, SYSTEM_PROMPT
from cqtool.schemas.complexity import ComplexityOutput
from cqtool.schemas.request import AnalysisKind, AnalysisRequest
from cqtool.static_analysis import analyze_source, estimate_complexity


class ComplexityAnalyzer(BaseAnalyzer):
    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.COMPLEXITY

    @property
    def name(self) -> str:
        return "Complexity Analysis"

    @property
    def output_model(self) -> type[ComplexityOutput]:
        return ComplexityOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT

    def build_prompt(self, request: AnalysisRequest) -> str:
        metrics = analyze_source(request.source_code, request.language)
        return PROMPT_TEMPLATE.format(
            language=request.language,
            code=fence(request.source_code, request.language),
            loops=metrics.loops,
            nested_loops=metrics.nested_loops,
            recursive_calls=metrics.recursive_calls,
            allocations=metrics.data_structure_allocations,
            schema=OUTPUT_SCHEMA,
            hint=language_hint(LANGUAGE_HINTS, request.language),
        )

    def parse_output(self, raw_text: str, request: AnalysisRequest | None = None) -> ComplexityOutput:
        result = super().parse_output(raw_text, request)
        if request is not None:
            # Our own counts, not whatever the model echoed back.
            result.static_analysis = analyze_source(request.source_code, request.language)
        return result

    def static_fallback(self, request: AnalysisRequest, reason: str) -> ComplexityOutput:
        return estimate_complexity(request.source_code, request.language, reason)
