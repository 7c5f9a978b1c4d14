"""Pydantic models for generated test cases."""

import json
from typing import Any

from pydantic import field_validator

from cqtool.schemas.base import AnalysisModel, AnalysisOutput


def _as_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value)


class TestCase(AnalysisModel):
    """One generated test case: stdin in, exact stdout expected."""

    __test__ = False  # not a pytest class

    input: str = ""
    expected_output: str = ""
    execution_details: str = "Test case execution"
    expected_exception_type: str | None = None
    expected_exception_message: str | None = None

    @field_validator(
        "input",
        "expected_output",
        "expected_exception_type",
        "expected_exception_message",
        mode="before",
    )
    @classmethod
    def stringify(cls, v: object) -> object:
        return _as_text(v)

    @field_validator("execution_details", mode="before")
    @classmethod
    def default_details(cls, v: object) -> object:
        return v or "Test case execution"


class TestGenOutput(AnalysisOutput):
    """Full output of test generation. The model answers with a bare array."""

    __test__ = False

    test_cases: list[TestCase] = []
