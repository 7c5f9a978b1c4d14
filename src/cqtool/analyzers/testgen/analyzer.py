"""Test case generation — stdin/stdout pairs for the submitted program."""

from __future__ import annotations

from cqtool.analyzers.base import BaseAnalyzer, fence, language_hint
from cqtool.analyzers.testgen.prompts import EXAMPLE, LANGUAGE_HINTS, PROMPT_TEMPLATE, SYSTEM_PROMPT
from cqtool.schemas.request import AnalysisKind, AnalysisRequest
from cqtool.schemas.testgen import TestGenOutput

TEST_CASE_COUNT = 5


class TestGenAnalyzer(BaseAnalyzer):
    __test__ = False  # not a pytest class

    expect = "array"

    @property
    def kind(self) -> AnalysisKind:
        return AnalysisKind.TESTGEN

    @property
    def name(self) -> str:
        return "Test Generation"

    @property
    def output_model(self) -> type[TestGenOutput]:
        return TestGenOutput

    def get_system_prompt(self, request: AnalysisRequest) -> str:
        return SYSTEM_PROMPT

    def build_prompt(self, request: AnalysisRequest) -> str:
        return PROMPT_TEMPLATE.format(
            language=request.language,
            hint=language_hint(LANGUAGE_HINTS, request.language),
            count=TEST_CASE_COUNT,
            code=fence(request.source_code, request.language),
            example=EXAMPLE,
        )

    def to_payload(self, value: object) -> object:
        if isinstance(value, list):
            return {"testCases": value}
        if isinstance(value, dict) and "testCases" not in value and "test_cases" not in value:
            # A single test case object
            return {"testCases": [value]}
        return value
