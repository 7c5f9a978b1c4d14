"""Syntax check — errors, warnings and suggestions with source positions."""

from __future__ import annotations

from cqtool.analyzers.base import BaseAnalyzer, fence, language_hint
from cqtool.analyzers.syntax.prompts import LANGUAGE_HINTS, OUTPUT_SCHEMA, PROMPT_TEMPLATE, SYSTEM_PROMPT
from cqtool.schemas.request import AnalysisKind, AnalysisRequest
from cqtool.schemas.syntax import SyntaxOutput


class SyntaxAnalyzer(BaseAnalyzer):
    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.SYNTAX

    @property
    def name(self) -> str:
        return "Syntax Check"

    @property
    def output_model(self) -> type[SyntaxOutput]:
        return SyntaxOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT

    def build_prompt(self, request: AnalysisRequest) -> str:
        return PROMPT_TEMPLATE.format(
            language=request.language,
            schema=OUTPUT_SCHEMA,
            hint=language_hint(LANGUAGE_HINTS, request.language),
            code=fence(request.source_code, request.language),
        )

    def to_payload(self, value: object) -> object:
        # Some models answer with the bare error list.
        if isinstance(value, list):
            return {"errors": value}
        return value
