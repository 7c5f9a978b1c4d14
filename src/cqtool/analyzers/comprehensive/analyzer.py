"""Comprehensive analysis — complexity, quality, security, performance in one pass."""

from __future__ import annotations

from cqtool.analyzers.base import BaseAnalyzer, fence, language_hint
from cqtool.analyzers.comprehensive.prompts import (
    LANGUAGE_HINTS,
    OUTPUT_SCHEMA,
    PROMPT_TEMPLATE,
    SYSTEM_PROMPT,
)
from cqtool.schemas.comprehensive import ComprehensiveOutput
from cqtool.schemas.request import AnalysisKind, AnalysisRequest


class ComprehensiveAnalyzer(BaseAnalyzer):
    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.COMPREHENSIVE

    @property
    def name(self) -> str:
        return "Comprehensive Analysis"

    @property
    def output_model(self) -> type[ComprehensiveOutput]:
        return ComprehensiveOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT

    def build_prompt(self, request: AnalysisRequest) -> str:
        return PROMPT_TEMPLATE.format(
            language=request.language,
            schema=OUTPUT_SCHEMA,
            code=fence(request.source_code, request.language),
            hint=language_hint(LANGUAGE_HINTS, request.language),
        )
